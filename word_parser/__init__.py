"""Word document text and metadata extraction library."""

from word_parser.config import OutputFormat, ParserConfig, SafetyConfig
from word_parser.exceptions import (
    BackupError,
    ContainerError,
    ImageDecodeError,
    MetadataFieldError,
    MissingPartError,
    SafetyViolationError,
    WordParserError,
    XmlParseError,
)
from word_parser.extractor import TextExtractor
from word_parser.handler import WordParser
from word_parser.models import (
    DocumentMetadata,
    ExtractionResult,
    ProcessingResult,
    SafetyResult,
    StageResult,
)
from word_parser.parser import convert_to_format, parse_document
from word_parser.safety import SafetyManager

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "parse_document",
    "convert_to_format",
    # Core classes
    "WordParser",
    "TextExtractor",
    "SafetyManager",
    # Data models
    "ProcessingResult",
    "DocumentMetadata",
    "SafetyResult",
    "StageResult",
    "ExtractionResult",
    # Configuration
    "ParserConfig",
    "SafetyConfig",
    "OutputFormat",
    # Exceptions
    "WordParserError",
    "SafetyViolationError",
    "ContainerError",
    "MissingPartError",
    "XmlParseError",
    "MetadataFieldError",
    "ImageDecodeError",
    "BackupError",
]
