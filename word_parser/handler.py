"""Document processing orchestration."""

import contextvars
import dataclasses
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Union

from word_parser.config import OutputFormat, ParserConfig
from word_parser.container import DOCUMENT_PART, read_all
from word_parser.exceptions import (
    MissingPartError,
    SafetyViolationError,
    WordParserError,
    XmlParseError,
)
from word_parser.extractor import TextExtractor
from word_parser.images import extract_images
from word_parser.logger import Timer, get_logger, set_document_id
from word_parser.metadata import read_metadata
from word_parser.models import DocumentMetadata, ProcessingResult, StageResult
from word_parser.renderer import convert_to_format
from word_parser.safety import SafetyManager
from word_parser.xml_tree import parse_xml

logger = get_logger(__name__)


class WordParser:
    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        safety_manager: Optional[SafetyManager] = None,
        extractor: Optional[TextExtractor] = None,
    ) -> None:
        """Initialize the parser.

        Args:
            config: Processing options. If None, uses defaults.
            safety_manager: File validator. If None, creates default.
            extractor: Text extraction engine. If None, creates default.
        """
        self.config = config or ParserConfig()
        self.safety_manager = safety_manager or SafetyManager()
        self.extractor = extractor or TextExtractor()

    def with_config(self, **changes) -> "WordParser":
        """Return a parser sharing collaborators but using an updated config."""
        return WordParser(
            config=dataclasses.replace(self.config, **changes),
            safety_manager=self.safety_manager,
            extractor=self.extractor,
        )

    def parse_document(self, file_path: Union[str, Path]) -> ProcessingResult:
        """Extract text, metadata and images from a Word document.

        Never raises for document problems: failures are reported through
        ``success=False`` and ``errors``; non-fatal problems through ``warnings``.

        Args:
            file_path: Path to the .docx file

        Returns:
            ProcessingResult
        """
        set_document_id()
        warnings: list[str] = []

        with Timer("parse_document") as total_timer:
            try:
                return self._process(Path(file_path), warnings, total_timer)
            except SafetyViolationError as exc:
                logger.warning(
                    "Document rejected by safety checks",
                    extra_data={
                        "file_path": str(file_path),
                        "issues": exc.issues,
                    },
                )
                return ProcessingResult.failure(
                    exc.issues or [str(exc)],
                    warnings,
                    total_timer.get_elapsed_ms(),
                )
            except WordParserError as exc:
                logger.error(
                    "Document processing failed",
                    extra_data={
                        "file_path": str(file_path),
                        "error_type": type(exc).__name__,
                        "error": str(exc),
                    },
                )
                return ProcessingResult.failure(
                    [str(exc)], warnings, total_timer.get_elapsed_ms()
                )
            except Exception as exc:
                logger.error(
                    "Unexpected failure while parsing document",
                    extra_data={
                        "file_path": str(file_path),
                        "error_type": type(exc).__name__,
                        "error": str(exc),
                    },
                    exc_info=True,
                )
                return ProcessingResult.failure(
                    [f"Parsing failed: {exc}"],
                    warnings,
                    total_timer.get_elapsed_ms(),
                )

    def _process(
        self, path: Path, warnings: list[str], total_timer: Timer
    ) -> ProcessingResult:
        if self.config.safety_checks:
            safety = self.safety_manager.validate(path)
            if not safety.is_safe:
                raise SafetyViolationError(list(safety.issues))

        package = read_all(path)

        document_xml = package.get(DOCUMENT_PART)
        if document_xml is None:
            raise MissingPartError(
                DOCUMENT_PART, f"Invalid DOCX: Missing {DOCUMENT_PART}"
            )

        try:
            document_tree = parse_xml(document_xml)
        except XmlParseError as exc:
            raise XmlParseError(
                f"Invalid DOCX: cannot parse {DOCUMENT_PART}: {exc}"
            ) from exc

        metadata: Optional[DocumentMetadata] = None
        images: Optional[tuple[bytes, ...]] = None

        with ThreadPoolExecutor(max_workers=2) as executor:
            # Each worker runs in its own copy of the caller's context so
            # that the document id reaches the worker's log records
            metadata_future = None
            if self.config.include_metadata:
                metadata_future = executor.submit(
                    contextvars.copy_context().run, read_metadata, package
                )
            images_future = None
            if self.config.extract_images:
                images_future = executor.submit(
                    contextvars.copy_context().run, extract_images, package
                )

            with Timer("text_extraction") as extract_timer:
                extraction = self.extractor.extract_with_details(document_tree)
            content = extraction.text

            if metadata_future is not None:
                metadata = self._unwrap(metadata_future.result(), warnings)
            if images_future is not None:
                extracted = self._unwrap(images_future.result(), warnings)
                images = tuple(extracted) if extracted is not None else None

        if not content:
            warnings.append("No text content extracted from document")
            logger.warning(
                "No text content extracted from document",
                extra_data={
                    "file_path": str(path),
                    "part_count": len(package),
                },
            )

        logger.info(
            "Successfully extracted text from document",
            extra_data={
                "file_path": str(path),
                "character_count": len(content),
                "fallback_used": extraction.fallback_used,
                "image_count": len(images) if images is not None else 0,
                "warning_count": len(warnings),
                "extraction_time_ms": extract_timer.get_elapsed_ms(),
            },
        )

        return ProcessingResult(
            success=True,
            content=content,
            metadata=metadata,
            images=images,
            warnings=tuple(warnings),
            processing_time_ms=total_timer.get_elapsed_ms(),
        )

    @staticmethod
    def _unwrap(stage: StageResult, warnings: list[str]):
        warnings.extend(str(problem) for problem in stage.problems)
        return stage.unwrap_or(None)

    def convert_to_format(
        self,
        content: str,
        output_format: Union[str, OutputFormat, None] = None,
        metadata: Optional[DocumentMetadata] = None,
    ) -> str:
        """Render content, defaulting to the configured output format."""
        return convert_to_format(
            content, output_format or self.config.output_format, metadata
        )
