"""
test_files.py - 원자적 파일 쓰기 테스트

DoD:
- temp → rename, 실패 시 원본 보존 + temp 정리
- fsync 실패는 경고만 남기고 계속 진행
"""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from src.core import files
from src.core.files import _fsync_dir, atomic_write_bytes, atomic_write_json

# =============================================================================
# atomic_write_bytes 테스트
# =============================================================================


class TestAtomicWriteBytes:
    """atomic_write_bytes 함수 테스트."""

    def test_writes_bytes(self, tmp_path: Path):
        """바이트 정상 작성."""
        file_path = tmp_path / "out.xlsx"

        result = atomic_write_bytes(file_path, b"PK\x03\x04data")

        assert result == file_path
        assert file_path.read_bytes() == b"PK\x03\x04data"

    def test_creates_parent_directories(self, tmp_path: Path):
        """부모 디렉터리 자동 생성."""
        file_path = tmp_path / "nested" / "dir" / "out.xlsx"

        atomic_write_bytes(file_path, b"x")

        assert file_path.exists()

    def test_no_temp_file_left_on_success(self, tmp_path: Path):
        """성공 시 temp 파일 남지 않음."""
        atomic_write_bytes(tmp_path / "out.xlsx", b"x")

        assert list(tmp_path.glob("*.tmp")) == []

    def test_preserves_original_on_failure(self, tmp_path: Path):
        """rename 실패 시 원본 보존 + temp 정리."""
        file_path = tmp_path / "out.xlsx"
        file_path.write_bytes(b"original")

        with patch("os.replace", side_effect=OSError("rename failed")):
            with pytest.raises(OSError, match="rename failed"):
                atomic_write_bytes(file_path, b"new")

        assert file_path.read_bytes() == b"original"
        assert list(tmp_path.glob("*.tmp")) == []


# =============================================================================
# atomic_write_json 테스트
# =============================================================================


class TestAtomicWriteJson:
    """atomic_write_json 함수 테스트."""

    def test_writes_json_correctly(self, tmp_path: Path):
        """JSON 파일 정상 작성 (한글 그대로)."""
        file_path = tmp_path / "test.json"
        data = {"key": "value", "number": 42, "한글": "테스트"}

        atomic_write_json(file_path, data)

        text = file_path.read_text(encoding="utf-8")
        assert "테스트" in text
        assert json.loads(text) == data

    def test_non_json_values_stringified(self, tmp_path: Path):
        """datetime 등은 str로 직렬화."""
        from datetime import datetime

        file_path = tmp_path / "test.json"

        atomic_write_json(file_path, {"when": datetime(2024, 1, 15, 9, 30)})

        loaded = json.loads(file_path.read_text(encoding="utf-8"))
        assert loaded == {"when": "2024-01-15 09:30:00"}


# =============================================================================
# fsync 실패 테스트
# =============================================================================


class TestFsyncFailure:
    """fsync 실패 시 warning 로그 테스트."""

    def test_fsync_failure_logs_warning(self, tmp_path: Path, caplog):
        """파일 fsync 실패 → warning, 파일은 정상 작성."""
        file_path = tmp_path / "important.json"
        caplog.set_level(logging.WARNING, logger="src.core.files")

        with patch("os.fsync", side_effect=OSError("I/O error")):
            atomic_write_json(file_path, {"key": "value"})

        assert json.loads(file_path.read_text(encoding="utf-8")) == {"key": "value"}
        warning_logs = [r.message for r in caplog.records if r.levelname == "WARNING"]
        assert any("fsync failed" in message for message in warning_logs)
        assert str(file_path) in warning_logs[0]

    def test_dir_fsync_failure_logs_warning(self, tmp_path: Path, caplog):
        caplog.set_level(logging.WARNING, logger="src.core.files")

        with patch("os.open", side_effect=OSError("Operation not permitted")):
            _fsync_dir(tmp_path)

        assert any(
            "Directory fsync failed" in record.message for record in caplog.records
        )

    def test_fsync_success_no_warning(self, tmp_path: Path, caplog):
        caplog.set_level(logging.WARNING, logger="src.core.files")

        atomic_write_bytes(tmp_path / "out.xlsx", b"x")

        assert [r for r in caplog.records if "fsync" in r.message] == []

    def test_atomic_write_calls_dir_fsync(self, tmp_path: Path, monkeypatch):
        """rename 후 디렉토리 fsync 호출."""
        called = []
        monkeypatch.setattr(files, "_fsync_dir", called.append)

        atomic_write_bytes(tmp_path / "out.xlsx", b"x")

        assert called == [tmp_path]
