"""
Byte source / sink: 변환 계층과 전달 방식(업로드, 다운로드, 디스크)의 경계.

- ByteSource: async read() -> bytes  (FastAPI UploadFile도 만족)
- ByteSink: deliver(filename, data, media_type)
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from src.core.files import atomic_write_bytes
from src.core.ids import sanitize_filename


class ByteSource(Protocol):
    """사용자 파일 등에서 전체 바이트를 비동기로 읽는 입력."""

    async def read(self) -> bytes: ...


class ByteSink(Protocol):
    """파일명 + 바이트를 사용자에게 전달하는 출력."""

    def deliver(self, filename: str, data: bytes, media_type: str) -> Any: ...


@dataclass
class PathSource:
    """로컬 파일 입력. 읽기는 worker thread에서 수행."""
    path: Path

    async def read(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


class FileSink:
    """
    디렉터리에 파일로 전달 (원자적 쓰기).

    Usage:
        sink = FileSink(Path("out"))
        path = deliver_table(job, sink)
    """

    def __init__(self, directory: Path):
        self.directory = directory

    def deliver(self, filename: str, data: bytes, media_type: str) -> Path:
        name = Path(filename)
        safe_name = f"{sanitize_filename(name.stem)}{name.suffix}"
        return atomic_write_bytes(self.directory / safe_name, data)


@dataclass
class MemorySink:
    """메모리에 보관 (테스트, 직접 스트리밍하는 호출자용)."""
    files: dict[str, tuple[bytes, str]] = field(default_factory=dict)

    def deliver(self, filename: str, data: bytes, media_type: str) -> str:
        self.files[filename] = (data, media_type)
        return filename
