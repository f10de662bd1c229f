"""
test_io.py - ByteSource / ByteSink 테스트
"""

from pathlib import Path

import pytest

from src.convert.io import FileSink, MemorySink, PathSource
from src.domain.constants import XLSX_MIME_TYPE


class TestPathSource:
    """로컬 파일 입력."""

    @pytest.mark.asyncio
    async def test_read(self, tmp_path: Path):
        path = tmp_path / "input.xlsx"
        path.write_bytes(b"payload")

        assert await PathSource(path).read() == b"payload"

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            await PathSource(tmp_path / "missing.xlsx").read()


class TestFileSink:
    """디렉터리 저장."""

    def test_deliver_writes_file(self, tmp_path: Path):
        path = FileSink(tmp_path).deliver("report.xlsx", b"data", XLSX_MIME_TYPE)

        assert path == tmp_path / "report.xlsx"
        assert path.read_bytes() == b"data"

    def test_creates_directory(self, tmp_path: Path):
        out_dir = tmp_path / "nested" / "out"

        path = FileSink(out_dir).deliver("t.xlsx", b"x", XLSX_MIME_TYPE)

        assert path.parent == out_dir
        assert path.exists()

    def test_unicode_filename_kept(self, tmp_path: Path):
        path = FileSink(tmp_path).deliver("회원 목록.xlsx", b"x", XLSX_MIME_TYPE)

        assert path.name == "회원 목록.xlsx"

    def test_unsafe_characters_replaced(self, tmp_path: Path):
        path = FileSink(tmp_path).deliver("bad:name.xlsx", b"x", XLSX_MIME_TYPE)

        assert path.name == "bad_name.xlsx"

    def test_path_traversal_blocked(self, tmp_path: Path):
        path = FileSink(tmp_path).deliver("../escape.xlsx", b"x", XLSX_MIME_TYPE)

        assert path.parent == tmp_path

    def test_overwrites_existing(self, tmp_path: Path):
        sink = FileSink(tmp_path)
        sink.deliver("t.xlsx", b"old", XLSX_MIME_TYPE)

        path = sink.deliver("t.xlsx", b"new", XLSX_MIME_TYPE)

        assert path.read_bytes() == b"new"


class TestMemorySink:
    """메모리 보관."""

    def test_deliver(self):
        sink = MemorySink()

        result = sink.deliver("t.xlsx", b"data", XLSX_MIME_TYPE)

        assert result == "t.xlsx"
        assert sink.files == {"t.xlsx": (b"data", XLSX_MIME_TYPE)}
