"""Data models for word parser."""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from word_parser.exceptions import WordParserError

T = TypeVar("T")


@dataclass(frozen=True)
class DocumentMetadata:
    """Document properties read from docProps/core.xml and docProps/app.xml.

    Every field is independently optional; None means the source did not
    carry the value.
    """

    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    creator: Optional[str] = None
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    pages: Optional[int] = None
    words: Optional[int] = None
    characters: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        """Return present fields only, with dates as ISO 8601 strings."""
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            data[f.name] = value.isoformat() if isinstance(value, datetime) else value
        return data

    def is_empty(self) -> bool:
        return not self.to_dict()


@dataclass(frozen=True)
class SafetyResult:
    """Outcome of SafetyManager.validate."""

    is_safe: bool
    issues: tuple[str, ...]
    hash: str
    file_size: int


@dataclass(frozen=True)
class ExtractionResult:
    """Text produced by TextExtractor and whether the fallback scan supplied it."""

    text: str
    fallback_used: bool = False


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Outcome of an optional processing stage.

    ``value`` is None when the stage produced nothing usable; ``problems``
    lists the non-fatal errors met on the way.
    """

    value: Optional[T] = None
    problems: tuple[WordParserError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.problems

    def unwrap_or(self, default: Optional[T] = None) -> Optional[T]:
        return default if self.value is None else self.value


@dataclass(frozen=True)
class ProcessingResult:
    """Result of WordParser.parse_document."""

    success: bool
    content: Optional[str] = None
    metadata: Optional[DocumentMetadata] = None
    images: Optional[tuple[bytes, ...]] = None
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    processing_time_ms: int = 0

    def __post_init__(self):
        if self.success and self.content is None:
            raise ValueError("A successful result must carry content")
        if self.success and self.errors:
            raise ValueError("A successful result cannot carry errors")

    @classmethod
    def failure(
        cls,
        errors: list[str],
        warnings: Optional[list[str]] = None,
        processing_time_ms: int = 0,
    ) -> "ProcessingResult":
        return cls(
            success=False,
            warnings=tuple(warnings or ()),
            errors=tuple(errors),
            processing_time_ms=processing_time_ms,
        )
