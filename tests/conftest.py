"""
Pytest fixtures for the conversion tests.

테스트 구성:
- Record/Export Job 샘플 (데모 페이지와 같은 JSON 형식)
- 테스트용 XLSX 바이트 생성 헬퍼
"""

from collections.abc import Callable
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Any

import pytest
import yaml
from openpyxl import Workbook

from src.domain.schemas import ExportJob

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


@pytest.fixture
def default_config(default_config_path: Path) -> dict:
    """기본 설정 로드."""
    with open(default_config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


# =============================================================================
# Record / Job Fixtures
# =============================================================================

@pytest.fixture
def sample_rows() -> list[dict[str, Any]]:
    """같은 키 집합을 가진 레코드 (round-trip 가능)."""
    return [
        {"id": 1, "name": "홍길동", "score": 91.5, "active": True,
         "joined": datetime(2024, 1, 15, 9, 30)},
        {"id": 2, "name": "Alice", "score": 78.0, "active": False,
         "joined": datetime(2023, 11, 2, 18, 0)},
    ]


@pytest.fixture
def sample_job_dict(sample_rows: list[dict[str, Any]]) -> dict:
    """데모 페이지 형식의 Export Job."""
    return {
        "filename": "members",
        "data": {
            "Members": {
                "json": sample_rows,
                "headerCells": {"font": {"bold": True}},
            },
        },
    }


@pytest.fixture
def sample_job(sample_job_dict: dict) -> ExportJob:
    return ExportJob.from_dict(sample_job_dict)


@pytest.fixture
def scenario_job() -> ExportJob:
    """{filename:"t", sheets:{"S1":{json:[{a:1,b:2},{a:3,b:4}]}}}"""
    return ExportJob.from_dict({
        "filename": "t",
        "sheets": {"S1": {"json": [{"a": 1, "b": 2}, {"a": 3, "b": 4}]}},
    })


# =============================================================================
# XLSX Helpers
# =============================================================================

@pytest.fixture
def make_xlsx() -> Callable[..., bytes]:
    """
    행 목록으로 XLSX 바이트 생성.

    Usage:
        data = make_xlsx([["x", "x"], ["v1", "v2"]])
        data = make_xlsx([["a"]], [["other"]])  # 두 번째 시트
    """
    def _make(*sheets: list[list[Any]]) -> bytes:
        wb = Workbook()
        wb.remove(wb.active)
        for index, rows in enumerate(sheets, start=1):
            ws = wb.create_sheet(title=f"Sheet{index}")
            for row in rows:
                ws.append(row)
        buffer = BytesIO()
        wb.save(buffer)
        return buffer.getvalue()

    return _make
