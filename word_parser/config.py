"""Configuration classes for word parser."""

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Union


class OutputFormat(str, Enum):
    """Output encodings supported by the format renderer."""

    TEXT = "text"
    MARKDOWN = "markdown"
    HTML = "html"
    JSON = "json"

    @classmethod
    def parse(cls, value: Union[str, "OutputFormat"]) -> "OutputFormat":
        """Resolve a format name case-insensitively.

        Raises:
            ValueError: If the name is not a known format
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            known = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unknown output format: {value!r} (expected one of: {known})"
            )


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for a WordParser instance.

    The record is immutable; build a new one (or use
    ``WordParser.with_config``) to change options.

    Examples:
        >>> config = ParserConfig()
        >>> config = ParserConfig(output_format="markdown", extract_images=True)
        >>> config = ParserConfig.from_mapping({"safety_checks": False})
    """

    extract_images: bool = False
    """Collect embedded media payloads (png, jpg, jpeg, gif, bmp)."""

    preserve_formatting: bool = True
    """Advisory only. Extraction always discards run formatting."""

    include_metadata: bool = True
    """Read docProps/core.xml and docProps/app.xml into DocumentMetadata."""

    output_format: OutputFormat = OutputFormat.TEXT
    """Default encoding used by WordParser.convert_to_format."""

    safety_checks: bool = True
    """Validate the input file before opening the container."""

    def __post_init__(self):
        object.__setattr__(
            self, "output_format", OutputFormat.parse(self.output_format)
        )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "ParserConfig":
        """Build a config from a plain mapping of option names.

        Raises:
            ValueError: If the mapping contains an unknown option
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ValueError(f"Unknown configuration option(s): {', '.join(unknown)}")
        return cls(**dict(options))


DEFAULT_ALLOWED_EXTENSIONS = frozenset({".docx", ".doc", ".rtf", ".odt"})

DEFAULT_SUSPICIOUS_PATTERNS = (
    "eval(",
    "exec(",
    "system(",
    "shell_exec(",
    "base64_decode(",
    "javascript:",
    "<script",
    "vbscript:",
)


@dataclass(frozen=True)
class SafetyConfig:
    """Limits applied by the SafetyManager."""

    max_file_size: int = 100 * 1024 * 1024
    """Largest accepted input file, in bytes. Default: 100 MiB."""

    allowed_extensions: frozenset[str] = DEFAULT_ALLOWED_EXTENSIONS
    """Lower-case extensions (with leading dot) accepted as input.

    Only ``.docx`` content is actually parsed; the others pass validation
    and then fail at the container stage.
    """

    backup_dir: Path = field(
        default_factory=lambda: Path.cwd() / ".word-parser-backups"
    )
    """Directory that receives backup copies."""

    scan_bytes: int = 10_000
    """Number of leading bytes searched for suspicious patterns."""

    suspicious_patterns: tuple[str, ...] = DEFAULT_SUSPICIOUS_PATTERNS
    """Case-insensitive substrings flagged as a potential security risk."""

    def __post_init__(self):
        object.__setattr__(
            self,
            "allowed_extensions",
            frozenset(ext.lower() for ext in self.allowed_extensions),
        )
        object.__setattr__(self, "backup_dir", Path(self.backup_dir))
