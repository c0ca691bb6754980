"""Command-line interface for word-parser."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from word_parser.config import OutputFormat, ParserConfig
from word_parser.handler import WordParser
from word_parser.logger import setup_logging
from word_parser.models import ProcessingResult

FORMAT_CHOICES = [fmt.value for fmt in OutputFormat]


def _report_errors(result: ProcessingResult, heading: str) -> int:
    print(heading, file=sys.stderr)
    for error in result.errors:
        print(f"  - {error}", file=sys.stderr)
    return 1


def _write_output(output: str, destination: Optional[str]) -> None:
    if destination:
        Path(destination).write_text(output, encoding="utf-8")
        print(f"Content written to {destination}", file=sys.stderr)
    else:
        print(output)


def cmd_extract(args: argparse.Namespace) -> int:
    config = ParserConfig(
        include_metadata=args.metadata,
        extract_images=args.images,
        safety_checks=args.safety,
        output_format=args.format,
    )
    parser = WordParser(config=config)
    result = parser.parse_document(args.input)
    if not result.success:
        return _report_errors(result, "Extraction failed")

    output = parser.convert_to_format(result.content, metadata=result.metadata)
    _write_output(output, args.output)

    if result.metadata is not None and config.output_format is not OutputFormat.JSON:
        info = result.metadata
        lines = [
            f"  {label}: {value}"
            for label, value in (
                ("Title", info.title),
                ("Author", info.author),
                ("Pages", info.pages),
                ("Words", info.words),
            )
            if value is not None
        ]
        if lines:
            print("\nDocument Information:", file=sys.stderr)
            print("\n".join(lines), file=sys.stderr)

    print(f"\nProcessed in {result.processing_time_ms}ms", file=sys.stderr)
    return 0


def cmd_convert(args: argparse.Namespace) -> int:
    config = ParserConfig(
        preserve_formatting=args.preserve_formatting,
        extract_images=args.images,
        output_format=args.format,
    )
    parser = WordParser(config=config)
    result = parser.parse_document(args.input)
    if not result.success:
        return _report_errors(result, "Conversion failed")

    output = parser.convert_to_format(result.content, metadata=result.metadata)
    _write_output(output, args.output)
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    parser = WordParser(config=ParserConfig(include_metadata=True))
    result = parser.parse_document(args.input)
    if not result.success:
        return _report_errors(result, "Failed to read document")

    print(Path(args.input).name)
    print("-" * 50)

    if result.metadata is not None:
        for key, value in result.metadata.to_dict().items():
            if key == "creator":
                continue
            print(f"{key.capitalize()}: {value}")

    if args.detailed:
        paragraphs = [line for line in result.content.split("\n") if line.strip()]
        print("\nContent Analysis:")
        print(f"  Content Length: {len(result.content)} characters")
        print(f"  Paragraphs: {len(paragraphs)}")

    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    parser = WordParser(config=ParserConfig(safety_checks=True))
    result = parser.parse_document(args.input)
    if not result.success:
        print("Document validation failed")
        for error in result.errors:
            print(f"  - {error}")
        return 1

    print("Document validation passed")
    if result.warnings:
        print("\nWarnings:")
        for warning in result.warnings:
            print(f"  - {warning}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="word-parser",
        description="Extract text and metadata from Word documents.",
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (default: WARNING)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser(
        "extract", help="Extract text from a Word document"
    )
    extract.add_argument("input", help="Input Word document path")
    extract.add_argument("-o", "--output", help="Output file path")
    extract.add_argument(
        "-f",
        "--format",
        choices=FORMAT_CHOICES,
        default="text",
        help="Output format",
    )
    extract.add_argument(
        "--no-metadata",
        dest="metadata",
        action="store_false",
        help="Skip metadata extraction",
    )
    extract.add_argument("--images", action="store_true", help="Extract images")
    extract.add_argument(
        "--no-safety",
        dest="safety",
        action="store_false",
        help="Skip safety checks",
    )
    extract.set_defaults(handler=cmd_extract)

    convert = subparsers.add_parser(
        "convert", help="Convert a Word document to another format"
    )
    convert.add_argument("input", help="Input Word document path")
    convert.add_argument("output", help="Output file path")
    convert.add_argument(
        "-f",
        "--format",
        choices=FORMAT_CHOICES,
        default="markdown",
        help="Output format",
    )
    convert.add_argument(
        "--preserve-formatting",
        action="store_true",
        help="Preserve text formatting",
    )
    convert.add_argument("--images", action="store_true", help="Extract images")
    convert.set_defaults(handler=cmd_convert)

    info = subparsers.add_parser("info", help="Display Word document information")
    info.add_argument("input", help="Input Word document path")
    info.add_argument(
        "--detailed", action="store_true", help="Show content statistics"
    )
    info.set_defaults(handler=cmd_info)

    validate = subparsers.add_parser(
        "validate", help="Validate Word document safety and integrity"
    )
    validate.add_argument("input", help="Input Word document path")
    validate.set_defaults(handler=cmd_validate)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
