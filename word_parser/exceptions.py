"""Custom exceptions for word parser."""

from typing import Optional


class WordParserError(Exception):
    """Base exception for word parser errors."""

    pass


class SafetyViolationError(WordParserError):
    """Raised when a file fails the safety validation."""

    def __init__(self, issues: list[str]):
        self.issues = list(issues)
        super().__init__("; ".join(self.issues) or "File failed safety validation")


class ContainerError(WordParserError):
    """Raised when the document container cannot be opened or enumerated."""

    pass


class MissingPartError(WordParserError):
    """Raised when a required part is absent from the container."""

    def __init__(self, part_name: str, message: Optional[str] = None):
        self.part_name = part_name
        super().__init__(message or f"Missing part: {part_name}")


class XmlParseError(WordParserError):
    """Raised when an XML part contains malformed markup."""

    pass


class MetadataFieldError(WordParserError):
    """Raised when a single metadata field cannot be converted."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid value for metadata field '{field}': {value!r}")


class ImageDecodeError(WordParserError):
    """Raised when an embedded image payload cannot be decoded."""

    def __init__(self, part_name: str, reason: str):
        self.part_name = part_name
        super().__init__(f"Failed to decode image {part_name}: {reason}")


class BackupError(WordParserError):
    """Raised when a backup copy cannot be created or cleaned up."""

    pass
