"""
Run logging: 변환 실행 로그 (export/import 호출 단위)

규칙:
- 경고 필수 컨텍스트: level, code, sheet, message, rows
- 성공/실패 모두 기록 (실패 시 error_code, error_context)
- 저장은 원자적 쓰기 (logs_dir/run_<run_id>.json)
"""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from src.core.files import atomic_write_json
from src.core.ids import generate_run_id
from src.domain.constants import RUN_LOG_GLOB
from src.domain.schemas import RunLog, WarningLog

# =============================================================================
# Run Log Management
# =============================================================================


def create_run_log(kind: str, filename: str | None = None) -> RunLog:
    """
    새 RunLog 생성.

    Args:
        kind: "export" 또는 "import"
        filename: 대상 파일명 (있으면)

    Returns:
        초기화된 RunLog
    """
    now = datetime.now(UTC).isoformat()

    return RunLog(
        run_id=generate_run_id(),
        kind=kind,
        started_at=now,
        result="pending",
        filename=filename,
    )


def emit_warning(
    run_log: RunLog,
    code: str,
    sheet: str,
    message: str,
    rows: list[int] | None = None,
) -> None:
    """
    경고 이벤트 기록.

    Args:
        run_log: RunLog 인스턴스
        code: 경고 코드 (예: ROW_KEYS_DIVERGE)
        sheet: 시트 이름
        message: 경고 메시지
        rows: 관련 행 번호
    """
    run_log.warnings.append(
        WarningLog(
            level="warning",
            code=code,
            sheet=sheet,
            message=message,
            rows=list(rows or []),
        )
    )


def complete_run_log(
    run_log: RunLog,
    success: bool,
    sheet_count: int = 0,
    row_count: int = 0,
    error_code: str | None = None,
    error_context: dict[str, Any] | None = None,
) -> None:
    """
    RunLog 완료 처리.

    Args:
        run_log: RunLog 인스턴스
        success: 성공 여부
        sheet_count: 처리한 시트 수
        row_count: 처리한 데이터 행 수
        error_code: 에러 코드 (실패 시)
        error_context: 에러 컨텍스트 (실패 시)
    """
    run_log.finished_at = datetime.now(UTC).isoformat()
    run_log.result = "success" if success else "failed"
    run_log.sheet_count = sheet_count
    run_log.row_count = row_count

    if not success:
        run_log.error_code = error_code
        run_log.error_context = error_context


def save_run_log(run_log: RunLog, logs_dir: Path) -> Path:
    """
    RunLog를 파일로 저장.

    Returns:
        저장된 파일 경로
    """
    log_path = logs_dir / f"run_{run_log.run_id}.json"
    return atomic_write_json(log_path, run_log.to_dict())


def load_run_log(log_path: Path) -> dict[str, Any]:
    """RunLog 파일 로드."""
    data: dict[str, Any] = json.loads(log_path.read_text(encoding="utf-8"))
    return data


def list_run_logs(logs_dir: Path) -> list[Path]:
    """
    logs 디렉터리의 모든 run log 파일 목록.

    Returns:
        로그 파일 경로 목록 (최신순)
    """
    if not logs_dir.exists():
        return []

    logs = list(logs_dir.glob(RUN_LOG_GLOB))
    logs.sort(key=lambda p: p.stat().st_mtime, reverse=True)
    return logs
