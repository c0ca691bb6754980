"""File safety validation and backup management."""

import hashlib
import shutil
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from word_parser.config import SafetyConfig
from word_parser.exceptions import BackupError
from word_parser.logger import Timer, get_logger
from word_parser.models import SafetyResult

logger = get_logger(__name__)

HASH_CHUNK_SIZE = 1024 * 1024


class SafetyManager:
    """Validates input files before they are opened and keeps backups."""

    def __init__(self, config: Optional[SafetyConfig] = None):
        self.config = config or SafetyConfig()

    def validate(self, file_path: Union[str, Path]) -> SafetyResult:
        """Run every safety check against a file.

        Args:
            file_path: Path of the input document

        Returns:
            SafetyResult; ``is_safe`` is True only when no issue was found
        """
        path = Path(file_path)
        issues: list[str] = []

        try:
            if not path.is_file():
                issues.append("File does not exist")
                return SafetyResult(
                    is_safe=False, issues=tuple(issues), hash="", file_size=0
                )

            extension = path.suffix.lower()
            if extension not in self.config.allowed_extensions:
                issues.append(f"Unsupported file extension: {extension}")

            file_size = path.stat().st_size
            if file_size > self.config.max_file_size:
                issues.append(
                    f"File too large: {file_size} bytes "
                    f"(max: {self.config.max_file_size})"
                )

            with Timer("safety_scan") as timer:
                digest, head = self._hash_and_head(path)

            if self._has_suspicious_content(head):
                issues.append("Potential security risk detected")

        except OSError as exc:
            issues.append(f"Validation error: {exc}")
            logger.error(
                "File validation failed",
                extra_data={
                    "file_path": str(path),
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            return SafetyResult(
                is_safe=False, issues=tuple(issues), hash="", file_size=0
            )

        result = SafetyResult(
            is_safe=not issues,
            issues=tuple(issues),
            hash=digest,
            file_size=file_size,
        )
        log = logger.info if result.is_safe else logger.warning
        log(
            "File validation completed",
            extra_data={
                "file_path": str(path),
                "is_safe": result.is_safe,
                "issue_count": len(issues),
                "file_size_bytes": file_size,
                "scan_time_ms": timer.get_elapsed_ms(),
            },
        )
        return result

    def _hash_and_head(self, path: Path) -> tuple[str, bytes]:
        sha256 = hashlib.sha256()
        head = b""
        with open(path, "rb") as f:
            while True:
                chunk = f.read(HASH_CHUNK_SIZE)
                if not chunk:
                    break
                if len(head) < self.config.scan_bytes:
                    head += chunk[: self.config.scan_bytes - len(head)]
                sha256.update(chunk)
        return sha256.hexdigest(), head

    def _has_suspicious_content(self, head: bytes) -> bool:
        text = head.decode("utf-8", errors="ignore").lower()
        patterns = self.config.suspicious_patterns
        return any(pattern.lower() in text for pattern in patterns)

    def create_backup(self, file_path: Union[str, Path]) -> Path:
        """Copy a file into the backup directory.

        Returns:
            Path of the backup copy

        Raises:
            BackupError: If the copy cannot be made
        """
        source = Path(file_path)
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%fZ")
        target = self.config.backup_dir / f"{timestamp}-{source.name}"

        try:
            self.config.backup_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
        except OSError as exc:
            raise BackupError(f"Backup failed: {exc}") from exc

        logger.info(
            "Backup created",
            extra_data={
                "source": str(source),
                "backup_path": str(target),
            },
        )
        return target

    def cleanup_backups(self, max_age_days: float = 7) -> int:
        """Delete backups older than ``max_age_days``.

        Returns:
            Number of files deleted

        Raises:
            BackupError: If the backup directory cannot be cleaned
        """
        backup_dir = self.config.backup_dir
        if not backup_dir.exists():
            return 0

        cutoff = time.time() - max_age_days * 24 * 60 * 60
        deleted = 0
        try:
            for entry in backup_dir.iterdir():
                if entry.is_file() and entry.stat().st_mtime < cutoff:
                    entry.unlink()
                    deleted += 1
        except OSError as exc:
            raise BackupError(f"Cleanup failed: {exc}") from exc

        logger.info(
            "Old backups removed",
            extra_data={
                "backup_dir": str(backup_dir),
                "deleted": deleted,
            },
        )
        return deleted
