"""Reading named parts out of a ZIP-structured document container."""

import zipfile
from collections.abc import Iterator
from pathlib import Path
from typing import Union

from word_parser.exceptions import ContainerError
from word_parser.logger import Timer, get_logger

logger = get_logger(__name__)

DOCUMENT_PART = "word/document.xml"
CORE_PROPERTIES_PART = "docProps/core.xml"
APP_PROPERTIES_PART = "docProps/app.xml"
MEDIA_PREFIX = "word/media/"


def iter_parts(path: Union[str, Path]) -> Iterator[tuple[str, bytes]]:
    """Yield ``(part_name, payload)`` for every file entry in archive order.

    The archive is closed when iteration finishes, when the consumer stops
    early, and when a read fails part-way through.

    Raises:
        ContainerError: If the file cannot be opened or an entry cannot be read
    """
    try:
        archive = zipfile.ZipFile(path)
    except (zipfile.BadZipFile, OSError) as exc:
        raise ContainerError(
            f"Cannot open document container {path}: {exc}"
        ) from exc

    with archive:
        for info in archive.infolist():
            if info.is_dir():
                continue
            try:
                payload = archive.read(info)
            except (zipfile.BadZipFile, OSError, RuntimeError, ValueError) as exc:
                # RuntimeError covers encrypted entries
                raise ContainerError(
                    f"Cannot read part {info.filename}: {exc}"
                ) from exc
            yield info.filename, payload


def read_all(path: Union[str, Path]) -> dict[str, bytes]:
    """Read every part of the container into memory.

    Raises:
        ContainerError: If the container cannot be opened or fully read
    """
    with Timer("container_read") as timer:
        parts = dict(iter_parts(path))

    logger.debug(
        "Document container read",
        extra_data={
            "path": str(path),
            "part_count": len(parts),
            "total_bytes": sum(len(payload) for payload in parts.values()),
            "read_time_ms": timer.get_elapsed_ms(),
        },
    )
    return parts
