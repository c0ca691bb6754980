"""Tests for the safety manager."""

import hashlib
import os
import time

import pytest

from word_parser.config import SafetyConfig
from word_parser.exceptions import BackupError
from word_parser.safety import SafetyManager


class TestValidate:
    """File validation checks"""

    def test_safe_file(self, sample_docx, safety_manager):
        result = safety_manager.validate(sample_docx)
        assert result.is_safe
        assert result.issues == ()
        assert result.file_size == sample_docx.stat().st_size
        assert result.hash == hashlib.sha256(sample_docx.read_bytes()).hexdigest()

    def test_missing_file(self, tmp_path, safety_manager):
        result = safety_manager.validate(tmp_path / "nope.docx")
        assert not result.is_safe
        assert result.issues == ("File does not exist",)
        assert result.hash == ""

    def test_unsupported_extension(self, tmp_path, safety_manager):
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        result = safety_manager.validate(path)
        assert not result.is_safe
        assert result.issues == ("Unsupported file extension: .txt",)

    @pytest.mark.parametrize("extension", [".docx", ".DOC", ".rtf", ".odt"])
    def test_accepted_extensions(self, tmp_path, safety_manager, extension):
        path = tmp_path / f"file{extension}"
        path.write_bytes(b"PK\x03\x04 payload")
        assert safety_manager.validate(path).is_safe

    def test_file_too_large(self, tmp_path):
        manager = SafetyManager(SafetyConfig(max_file_size=10, backup_dir=tmp_path))
        path = tmp_path / "big.docx"
        path.write_bytes(b"x" * 11)
        result = manager.validate(path)
        assert result.issues == ("File too large: 11 bytes (max: 10)",)

    def test_suspicious_pattern(self, tmp_path, safety_manager):
        path = tmp_path / "evil.docx"
        path.write_bytes(b"header <SCRIPT>alert(1)</script>")
        result = safety_manager.validate(path)
        assert result.issues == ("Potential security risk detected",)

    def test_pattern_beyond_scan_window_ignored(self, tmp_path):
        manager = SafetyManager(SafetyConfig(scan_bytes=16, backup_dir=tmp_path))
        path = tmp_path / "late.docx"
        path.write_bytes(b"a" * 32 + b"javascript:")
        assert manager.validate(path).is_safe

    def test_multiple_issues_accumulate(self, tmp_path):
        manager = SafetyManager(SafetyConfig(max_file_size=4, backup_dir=tmp_path))
        path = tmp_path / "bad.exe"
        path.write_bytes(b"eval(payload)")
        result = manager.validate(path)
        assert len(result.issues) == 3

    def test_unreadable_file(self, sample_docx, safety_manager, monkeypatch):
        def denied(*args, **kwargs):
            raise PermissionError("denied")

        monkeypatch.setattr("word_parser.safety.open", denied, raising=False)
        result = safety_manager.validate(sample_docx)

        assert not result.is_safe
        assert result.issues == ("Validation error: denied",)
        assert result.hash == ""
        assert result.file_size == 0


class TestBackups:
    """Backup creation and cleanup"""

    def test_create_backup(self, sample_docx, safety_manager):
        backup = safety_manager.create_backup(sample_docx)
        assert backup.parent == safety_manager.config.backup_dir
        assert backup.name.endswith("-sample.docx")
        assert backup.read_bytes() == sample_docx.read_bytes()

    def test_create_backup_missing_source(self, tmp_path, safety_manager):
        with pytest.raises(BackupError):
            safety_manager.create_backup(tmp_path / "absent.docx")

    def test_cleanup_removes_old_backups(self, sample_docx, safety_manager):
        old = safety_manager.create_backup(sample_docx)
        week_ago = time.time() - 8 * 24 * 60 * 60
        os.utime(old, (week_ago, week_ago))
        fresh = safety_manager.create_backup(sample_docx)

        assert safety_manager.cleanup_backups(max_age_days=7) == 1
        assert not old.exists()
        assert fresh.exists()

    def test_cleanup_without_directory(self, safety_manager):
        assert safety_manager.cleanup_backups() == 0
