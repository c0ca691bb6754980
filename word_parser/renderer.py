"""Rendering of extracted text into the supported output formats."""

import json
import re
from datetime import datetime, timezone
from typing import Optional, Union

from word_parser.config import OutputFormat
from word_parser.models import DocumentMetadata

HEADING_MAX_LENGTH = 50
PARAGRAPH_FLUSH_LENGTH = 200

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_HEADING_LIKE = re.compile(r"[A-Z][a-z]*\s*[A-Z]")

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)


def escape_html(text: str) -> str:
    return text.translate(_HTML_ESCAPES)


def _resolve_format(output_format: Union[str, OutputFormat]) -> OutputFormat:
    try:
        return OutputFormat.parse(output_format)
    except ValueError:
        return OutputFormat.TEXT


def convert_to_format(
    content: str,
    output_format: Union[str, OutputFormat],
    metadata: Optional[DocumentMetadata] = None,
) -> str:
    """Render extracted text in the requested format.

    Args:
        content: Extracted text
        output_format: ``text``, ``markdown``, ``html`` or ``json`` (case-insensitive);
            unknown names fall back to plain text
        metadata: Optional document metadata used for titles and the JSON payload

    Returns:
        Rendered document
    """
    fmt = _resolve_format(output_format)
    if fmt is OutputFormat.MARKDOWN:
        return to_markdown(content, metadata)
    if fmt is OutputFormat.HTML:
        return to_html(content, metadata)
    if fmt is OutputFormat.JSON:
        return to_json(content, metadata)
    return content


def to_json(content: str, metadata: Optional[DocumentMetadata] = None) -> str:
    now = datetime.now(timezone.utc)
    timestamp = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    payload = {
        "content": content,
        "metadata": metadata.to_dict() if metadata is not None else None,
        "format": OutputFormat.JSON.value,
        "timestamp": timestamp,
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def is_heading_like(sentence: str) -> bool:
    """Short sentences whose first two words are capitalised read as headings."""
    if len(sentence) >= HEADING_MAX_LENGTH:
        return False
    return _HEADING_LIKE.match(sentence) is not None


def to_markdown(content: str, metadata: Optional[DocumentMetadata] = None) -> str:
    blocks: list[str] = []

    if metadata is not None and metadata.title:
        blocks.append(f"# {metadata.title}")
    if metadata is not None and metadata.author:
        blocks.append(f"**Author:** {metadata.author}")

    paragraph = ""
    for sentence in _SENTENCE_BOUNDARY.split(content):
        sentence = sentence.strip()
        if not sentence:
            continue

        if is_heading_like(sentence):
            if paragraph:
                blocks.append(paragraph.strip())
                paragraph = ""
            blocks.append(f"## {sentence}")
            continue

        paragraph += sentence + " "
        if len(paragraph) > PARAGRAPH_FLUSH_LENGTH:
            blocks.append(paragraph.strip())
            paragraph = ""

    if paragraph.strip():
        blocks.append(paragraph.strip())

    return "\n\n".join(blocks)


def to_html(content: str, metadata: Optional[DocumentMetadata] = None) -> str:
    title = metadata.title if metadata is not None else None

    lines = ["<!DOCTYPE html>", "<html>", "<head>", '<meta charset="utf-8">']
    if title:
        lines.append(f"<title>{escape_html(title)}</title>")
    lines.extend(["</head>", "<body>"])
    if title:
        lines.append(f"<h1>{escape_html(title)}</h1>")

    for paragraph in content.split("\n"):
        if paragraph.strip():
            lines.append(f"<p>{escape_html(paragraph)}</p>")

    lines.extend(["</body>", "</html>"])
    return "\n".join(lines)
