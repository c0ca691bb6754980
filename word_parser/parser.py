"""High-level API for Word document parsing."""

from pathlib import Path
from typing import Optional, Union

from word_parser.config import OutputFormat, ParserConfig
from word_parser.handler import WordParser
from word_parser.models import DocumentMetadata, ProcessingResult
from word_parser.renderer import convert_to_format as _render


def parse_document(
    file_path: Union[str, Path],
    config: Optional[ParserConfig] = None,
) -> ProcessingResult:
    """Parse a Word document and extract its text content.

    Args:
        file_path: Path to the .docx file
        config: Processing options (optional, uses defaults if not provided)

    Returns:
        ProcessingResult; check ``success`` and ``errors`` to detect failure

    Examples:
        >>> result = parse_document("report.docx")
        >>> if result.success:
        ...     print(result.content)

        >>> config = ParserConfig(include_metadata=False, safety_checks=False)
        >>> result = parse_document("report.docx", config=config)
    """
    return WordParser(config=config).parse_document(file_path)


def convert_to_format(
    text: str,
    output_format: Union[str, OutputFormat] = OutputFormat.TEXT,
    metadata: Optional[DocumentMetadata] = None,
) -> str:
    """Render extracted text as text, markdown, html or json.

    Unknown format names return ``text`` unchanged.

    Examples:
        >>> result = parse_document("report.docx")
        >>> html = convert_to_format(result.content, "html", result.metadata)
    """
    return _render(text, output_format, metadata)
