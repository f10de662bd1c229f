"""
Core layer: 실행 로그, ID, 원자적 파일 쓰기.

변환 로직(src.convert)과 분리된 운영 보조 모듈.
"""

from .files import atomic_write_bytes, atomic_write_json
from .ids import generate_run_id, sanitize_filename
from .logging import (
    complete_run_log,
    create_run_log,
    emit_warning,
    list_run_logs,
    load_run_log,
    save_run_log,
)

__all__ = [
    # files
    "atomic_write_bytes",
    "atomic_write_json",
    # ids
    "generate_run_id",
    "sanitize_filename",
    # logging
    "create_run_log",
    "emit_warning",
    "complete_run_log",
    "save_run_log",
    "load_run_log",
    "list_run_logs",
]
