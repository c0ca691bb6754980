"""Shared fixtures: small .docx containers built on the fly."""

import io
import logging
import zipfile

import pytest
from PIL import Image

from word_parser.config import ParserConfig, SafetyConfig
from word_parser.handler import WordParser
from word_parser.safety import SafetyManager

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

CORE_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<cp:coreProperties xmlns:cp="http://schemas.openxmlformats.org/package/2006/metadata/core-properties"
    xmlns:dc="http://purl.org/dc/elements/1.1/"
    xmlns:dcterms="http://purl.org/dc/terms/"
    xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <dc:title>Quarterly Report</dc:title>
  <dc:subject>Finance</dc:subject>
  <dc:creator>Jordan Lee</dc:creator>
  <dcterms:created xsi:type="dcterms:W3CDTF">2024-03-01T09:30:00Z</dcterms:created>
  <dcterms:modified xsi:type="dcterms:W3CDTF">2024-03-02T10:00:00Z</dcterms:modified>
</cp:coreProperties>
"""

APP_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Properties xmlns="http://schemas.openxmlformats.org/officeDocument/2006/extended-properties">
  <Application>Microsoft Office Word</Application>
  <Pages>3</Pages>
  <Words>120</Words>
  <Characters>640</Characters>
</Properties>
"""


def document_xml(body: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
        f'<w:document xmlns:w="{W_NS}"><w:body>{body}'
        '<w:sectPr><w:pgSz w:w="12240" w:h="15840"/></w:sectPr>'
        "</w:body></w:document>"
    )


def paragraph(text: str) -> str:
    return (
        '<w:p><w:pPr><w:pStyle w:val="Normal"/></w:pPr>'
        f"<w:r><w:rPr><w:b/></w:rPr><w:t>{text}</w:t></w:r></w:p>"
    )


def png_bytes(color: str = "red") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_docx(tmp_path):
    """Write a container holding the given parts and return its path."""

    def _make(parts: dict, name: str = "sample.docx"):
        path = tmp_path / name
        with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as archive:
            archive.writestr("word/", "")
            for part_name, payload in parts.items():
                archive.writestr(part_name, payload)
        return path

    return _make


@pytest.fixture
def sample_docx(make_docx):
    body = paragraph("The first paragraph explains the plan.") + paragraph(
        "The second paragraph covers results."
    )
    return make_docx(
        {
            "[Content_Types].xml": "<Types/>",
            "word/document.xml": document_xml(body),
            "docProps/core.xml": CORE_XML,
            "docProps/app.xml": APP_XML,
            "word/media/image1.png": png_bytes(),
        }
    )


@pytest.fixture
def safety_manager(tmp_path):
    return SafetyManager(SafetyConfig(backup_dir=tmp_path / "backups"))


@pytest.fixture
def word_parser(safety_manager):
    return WordParser(config=ParserConfig(), safety_manager=safety_manager)


@pytest.fixture(autouse=True)
def restore_root_handlers():
    root = logging.getLogger()
    before = list(root.handlers)
    yield
    for handler in root.handlers[:]:
        if handler not in before:
            root.removeHandler(handler)
