"""Text extraction from a parsed WordprocessingML document tree."""

import re
from typing import Any

from word_parser.logger import Timer, get_logger
from word_parser.models import ExtractionResult
from word_parser.xml_tree import TEXT_KEY, ParsedNode

logger = get_logger(__name__)

MARKUP_PREFIX = "w:"
DOCUMENT_TAG = "w:document"
BODY_TAG = "w:body"
PARAGRAPH_TAG = "w:p"
RUN_TAG = "w:r"
TEXT_TAG = "w:t"
TAB_TAG = "w:tab"
BREAK_TAG = "w:br"
SPACE_ATTRIBUTE = "xml:space"

NAMESPACE_MARKER = "http://schemas"
PARAGRAPH_BREAK = "\n\n"

# Closed list. A tag containing any of these names a property, style, font
# or settings subtree and is never walked generically.
EXCLUDED_TAG_SUBSTRINGS = ("Pr", "Style", "Properties", "Fonts", "Settings")

MIN_PRIMARY_LENGTH = 10
MIN_FALLBACK_TOKEN_LENGTH = 3

_NORMALIZATION_STEPS = (
    (re.compile(r"\n{3,}"), "\n\n"),
    (re.compile(r"[ \t]+"), " "),
    (re.compile(r"\n "), "\n"),
    (re.compile(r"([a-z])([A-Z])"), r"\1 \2"),
    (re.compile(r"([A-Z])([A-Z][a-z])"), r"\1 \2"),
    (re.compile(r"([0-9])([A-Z])"), r"\1 \2"),
    (re.compile(r"([a-z])([0-9])"), r"\1 \2"),
    (re.compile(r"[0-9A-F]{8,}"), ""),
)
_WHITESPACE_RUN = re.compile(r"\s+")
_DIGITS_ONLY = re.compile(r"[0-9]+")


def is_excluded_tag(tag: str) -> bool:
    """Return True when generic recursion must skip ``tag``.

    A tag matching several substrings is still a single exclusion.
    """
    return any(part in tag for part in EXCLUDED_TAG_SUBSTRINGS)


def is_namespace_text(text: str) -> bool:
    return NAMESPACE_MARKER in text


def _as_sequence(value: Any) -> list:
    return value if isinstance(value, list) else [value]


def _collapse_whitespace(match: re.Match) -> str:
    newlines = match.group(0).count("\n")
    if newlines == 0:
        return " "
    return "\n" if newlines == 1 else PARAGRAPH_BREAK


def normalize_text(raw: str) -> str:
    """Clean the joined fragments into the final text.

    Paragraph breaks survive as exactly two newlines and line breaks as
    one; every other whitespace run becomes a single space.
    """
    text = raw
    for pattern, replacement in _NORMALIZATION_STEPS:
        text = pattern.sub(replacement, text)
    return _WHITESPACE_RUN.sub(_collapse_whitespace, text).strip()


class TextExtractor:
    """Reconstructs readable prose from a WordprocessingML tree.

    The primary walk recognises a fixed tag vocabulary (document, body,
    paragraph, run, text, tab, break) and ignores formatting subtrees. When
    it yields fewer than ``min_length`` characters a permissive scan of every
    string leaf is tried and kept if it is longer.
    """

    def __init__(self, min_length: int = MIN_PRIMARY_LENGTH):
        self.min_length = min_length

    def extract(self, tree: ParsedNode) -> str:
        """Extract normalized text from the parsed document part.

        Args:
            tree: Parsed ``word/document.xml``

        Returns:
            Extracted text, possibly empty
        """
        return self.extract_with_details(tree).text

    def extract_with_details(self, tree: ParsedNode) -> ExtractionResult:
        """Like ``extract`` but also report whether the fallback scan won."""
        with Timer("text_walk") as timer:
            fragments: list[str] = []
            self._walk(tree, fragments)
            text = normalize_text(" ".join(fragments))

        logger.debug(
            "Primary text walk completed",
            extra_data={
                "fragment_count": len(fragments),
                "characters_extracted": len(text),
                "walk_time_ms": timer.get_elapsed_ms(),
            },
        )

        if len(text) < self.min_length:
            fallback = self.extract_fallback(tree)
            logger.info(
                "Primary walk yielded too little text, ran fallback scan",
                extra_data={
                    "primary_characters": len(text),
                    "fallback_characters": len(fallback),
                },
            )
            if len(fallback) > len(text):
                return ExtractionResult(fallback, fallback_used=True)

        return ExtractionResult(text)

    def extract_fallback(self, tree: ParsedNode) -> str:
        """Collect every meaningful string leaf regardless of its tag."""
        leaves: list[str] = []
        self._collect_leaves(tree, leaves)

        tokens = [
            leaf
            for leaf in leaves
            if len(leaf) >= MIN_FALLBACK_TOKEN_LENGTH
            and not _DIGITS_ONLY.fullmatch(leaf)
        ]
        return _WHITESPACE_RUN.sub(" ", " ".join(tokens)).strip()

    def _collect_leaves(self, node: Any, leaves: list[str]) -> None:
        if isinstance(node, str):
            text = node.strip()
            if text and not is_namespace_text(text):
                leaves.append(text)
        elif isinstance(node, list):
            for item in node:
                self._collect_leaves(item, leaves)
        elif isinstance(node, dict):
            for value in node.values():
                self._collect_leaves(value, leaves)

    def _walk(self, node: Any, fragments: list[str]) -> None:
        if isinstance(node, str):
            text = node.strip()
            if text and not is_namespace_text(text):
                fragments.append(text)
            return

        if isinstance(node, list):
            for item in node:
                self._walk(item, fragments)
            return

        if not isinstance(node, dict):
            return

        if TEXT_TAG in node:
            for value in _as_sequence(node[TEXT_TAG]):
                text = self._literal_text(value)
                if text.strip() and not is_namespace_text(text):
                    fragments.append(text)
            return

        if PARAGRAPH_TAG in node:
            for paragraph in _as_sequence(node[PARAGRAPH_TAG]):
                if fragments and not fragments[-1].endswith("\n"):
                    fragments.append(PARAGRAPH_BREAK)
                self._walk(paragraph, fragments)
            return

        if RUN_TAG in node:
            self._walk(node[RUN_TAG], fragments)
            return

        if TAB_TAG in node:
            fragments.append("\t")
            return

        if BREAK_TAG in node:
            fragments.append("\n")
            return

        if DOCUMENT_TAG in node:
            self._walk(node[DOCUMENT_TAG], fragments)
            return

        if BODY_TAG in node:
            self._walk(node[BODY_TAG], fragments)
            return

        for tag, value in node.items():
            if tag.startswith(MARKUP_PREFIX) and not is_excluded_tag(tag):
                self._walk(value, fragments)

    @staticmethod
    def _literal_text(value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, dict) and value.get(SPACE_ATTRIBUTE) == "preserve":
            text = value.get(TEXT_KEY, "")
            return text if isinstance(text, str) else ""
        return ""
