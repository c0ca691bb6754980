"""Metadata extraction from the core and application property parts."""

import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from word_parser.container import APP_PROPERTIES_PART, CORE_PROPERTIES_PART
from word_parser.exceptions import MetadataFieldError, WordParserError, XmlParseError
from word_parser.logger import get_logger
from word_parser.models import DocumentMetadata, StageResult
from word_parser.xml_tree import TEXT_KEY, ParsedNode, parse_xml

logger = get_logger(__name__)

CORE_ROOT = "cp:coreProperties"
APP_ROOT = "Properties"

TEXT_FIELDS = (
    ("title", "dc:title"),
    ("author", "dc:creator"),
    ("subject", "dc:subject"),
)
DATE_FIELDS = (
    ("created", "dcterms:created"),
    ("modified", "dcterms:modified"),
)
COUNT_FIELDS = (
    ("pages", "Pages"),
    ("words", "Words"),
    ("characters", "Characters"),
)

_INTEGER = re.compile(r"\s*[+-]?\d+\s*")


def _field_text(value: Any) -> Optional[str]:
    """Return the text of a simple property element, or None when empty."""
    if isinstance(value, dict):
        value = value.get(TEXT_KEY)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def parse_timestamp(field: str, value: str) -> datetime:
    """Parse a W3CDTF timestamp such as ``2024-03-01T09:30:00Z``.

    Raises:
        MetadataFieldError: If the value is not an ISO 8601 date
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise MetadataFieldError(field, value) from exc


def parse_count(field: str, value: str) -> int:
    """Parse a statistics counter such as ``Pages``.

    Raises:
        MetadataFieldError: If the value is not an integer
    """
    if not _INTEGER.fullmatch(value):
        raise MetadataFieldError(field, value)
    return int(value)


def _properties(tree: Optional[ParsedNode], root: str) -> dict:
    if not isinstance(tree, dict):
        return {}
    props = tree.get(root)
    return props if isinstance(props, dict) else {}


def extract_metadata(
    core_properties: Optional[ParsedNode] = None,
    app_properties: Optional[ParsedNode] = None,
) -> DocumentMetadata:
    """Build DocumentMetadata from the two parsed property parts.

    Either part may be absent. Malformed fields are dropped and never raise.
    """
    values: dict[str, Any] = {}

    core = _properties(core_properties, CORE_ROOT)
    for field, tag in TEXT_FIELDS:
        text = _field_text(core.get(tag))
        if text is not None:
            values[field] = text
    if "author" in values:
        values["creator"] = values["author"]

    for field, tag in DATE_FIELDS:
        text = _field_text(core.get(tag))
        if text is None:
            continue
        try:
            values[field] = parse_timestamp(field, text)
        except MetadataFieldError as exc:
            logger.debug(
                "Dropping malformed metadata field",
                extra_data={
                    "field": field,
                    "error": str(exc),
                },
            )

    app = _properties(app_properties, APP_ROOT)
    for field, tag in COUNT_FIELDS:
        text = _field_text(app.get(tag))
        if text is None:
            continue
        try:
            values[field] = parse_count(field, text)
        except MetadataFieldError as exc:
            logger.debug(
                "Dropping malformed metadata field",
                extra_data={
                    "field": field,
                    "error": str(exc),
                },
            )

    return DocumentMetadata(**values)


def _parse_part(
    package: Mapping[str, bytes],
    part_name: str,
    problems: list[WordParserError],
) -> Optional[ParsedNode]:
    payload = package.get(part_name)
    if payload is None:
        return None
    try:
        return parse_xml(payload)
    except XmlParseError as exc:
        logger.warning(
            "Ignoring unreadable metadata part",
            extra_data={
                "part_name": part_name,
                "error": str(exc),
            },
        )
        problems.append(XmlParseError(f"Could not parse {part_name}: {exc}"))
        return None


def read_metadata(package: Mapping[str, bytes]) -> StageResult[DocumentMetadata]:
    """Parse the property parts of a container and extract metadata.

    Unparseable parts are reported as problems and leave their fields absent.
    """
    problems: list[WordParserError] = []
    core = _parse_part(package, CORE_PROPERTIES_PART, problems)
    app = _parse_part(package, APP_PROPERTIES_PART, problems)

    metadata = extract_metadata(core, app)
    logger.debug(
        "Metadata extraction completed",
        extra_data={
            "fields": ",".join(metadata.to_dict()) or "none",
        },
    )
    return StageResult(value=metadata, problems=tuple(problems))
