"""Best-effort collection of embedded media payloads."""

import io
from collections.abc import Mapping
from pathlib import PurePosixPath

from PIL import Image

from word_parser.container import MEDIA_PREFIX
from word_parser.exceptions import ImageDecodeError, WordParserError
from word_parser.logger import get_logger
from word_parser.models import StageResult

logger = get_logger(__name__)

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp"})


def is_image_part(part_name: str) -> bool:
    if not part_name.startswith(MEDIA_PREFIX):
        return False
    return PurePosixPath(part_name).suffix.lower() in IMAGE_EXTENSIONS


def verify_image(part_name: str, payload: bytes) -> None:
    """Check that a payload decodes as an image.

    Raises:
        ImageDecodeError: If Pillow cannot identify or verify the payload
    """
    try:
        with Image.open(io.BytesIO(payload)) as image:
            image.verify()
    except Exception as exc:
        raise ImageDecodeError(part_name, str(exc) or type(exc).__name__) from exc


def extract_images(package: Mapping[str, bytes]) -> StageResult[list[bytes]]:
    """Collect decodable media payloads in part-name order."""
    images: list[bytes] = []
    problems: list[WordParserError] = []

    for part_name in sorted(name for name in package if is_image_part(name)):
        payload = package[part_name]
        try:
            verify_image(part_name, payload)
        except ImageDecodeError as exc:
            logger.warning(
                "Skipping undecodable image",
                extra_data={
                    "part_name": part_name,
                    "error": str(exc),
                },
            )
            problems.append(exc)
            continue
        images.append(payload)

    logger.debug(
        "Image extraction completed",
        extra_data={
            "image_count": len(images),
            "skipped": len(problems),
        },
    )
    return StageResult(value=images, problems=tuple(problems))
