"""
ID 생성: run_id

run_id는 변환 호출(export/import) 한 번마다 새로 발급.
"""

import uuid
from datetime import UTC, datetime

from src.domain.constants import RUN_ID_PREFIX


def generate_run_id() -> str:
    """
    Run ID 생성.

    고유성 보장: UUID v4
    포맷: RUN-{timestamp}-{uuid[:8]}

    Returns:
        run_id 문자열
    """
    now = datetime.now(UTC)
    timestamp = now.strftime("%Y%m%d%H%M%S")
    unique = uuid.uuid4().hex[:8]

    return f"{RUN_ID_PREFIX}{timestamp}-{unique}"


def sanitize_filename(value: str, max_length: int = 100) -> str:
    """
    다운로드/저장용 파일명 정리 (확장자 제외 부분).

    - 경로 구분자, 제어문자, 따옴표 → 밑줄
    - 앞뒤 공백/점 제거
    - 최대 max_length자
    - 결과가 비면 "export"
    """
    sanitized = ""
    for c in value:
        if c in '/\\:*?"<>|' or ord(c) < 32:
            sanitized += "_"
        else:
            sanitized += c

    sanitized = sanitized.strip().strip(".")
    return sanitized[:max_length] if sanitized else "export"
