"""
Data schemas for the conversion layer.

규칙:
- Record = {필드명: 셀 값}. 시트의 첫 번째 Record 키 순서 = 열 순서/헤더
- 셀 값은 닫힌 타입 집합: str, int, float, Decimal, bool, datetime, date, time, None
- Export Job / Imported Table 모두 요청 단위의 일시적 값 (영속화 없음)
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from src.domain.constants import (
    DEFAULT_COLUMN_PADDING,
    DEFAULT_MIN_COLUMN_WIDTH,
    XLSX_EXTENSION,
)
from src.domain.errors import InvalidJobError
from src.domain.styles import StyleSpec

# =============================================================================
# Cell Value / Record
# =============================================================================

CellValue = str | int | float | Decimal | bool | datetime | date | time | None
Record = dict[str, CellValue]

# JSON 키 별칭: 브라우저 클라이언트(headerCells/dataCells/cells)와 명시적 이름 모두 허용
_ROWS_KEYS = ("json", "rows")
_HEADER_STYLE_KEYS = ("headerCells", "headerStyle", "header_style")
_ROW_STYLE_KEYS = ("dataCells", "rowStyle", "row_style")
_ALL_STYLE_KEYS = ("cells", "allStyle", "all_style")


def _first_present(data: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _optional_style(data: dict[str, Any], keys: tuple[str, ...]) -> StyleSpec | None:
    raw = _first_present(data, keys)
    if raw is None:
        return None
    style = StyleSpec.from_dict(raw)
    # {} 는 "스타일 없음"과 같다 (적용 단계 건너뜀)
    return None if style.is_empty() else style


# =============================================================================
# Sheet Spec
# =============================================================================

@dataclass
class SheetSpec:
    """
    내보낼 시트 하나.

    스타일 적용 순서: header_style → row_style → all_style (나중 것이 우선)
    """
    name: str
    rows: list[Record] = field(default_factory=list)
    header_style: StyleSpec | None = None
    row_style: StyleSpec | None = None
    all_style: StyleSpec | None = None

    @property
    def headers(self) -> list[str]:
        """첫 번째 Record의 키 순서. rows가 비어 있으면 빈 리스트."""
        if not self.rows:
            return []
        return list(self.rows[0].keys())

    def diverging_rows(self) -> list[int]:
        """
        첫 행과 키 집합(순서 포함)이 다른 행 번호 목록 (0-based, rows 기준).

        값은 위치 기반으로 기록되므로 이런 행은 열이 어긋날 수 있다.
        """
        headers = self.headers
        return [
            index
            for index, record in enumerate(self.rows)
            if list(record.keys()) != headers
        ]

    @classmethod
    def from_dict(cls, name: str, data: Any) -> "SheetSpec":
        """
        JSON 매핑 → SheetSpec.

        Raises:
            InvalidJobError: rows 형식 오류
            InvalidStyleError: 스타일 형식 오류
        """
        if not isinstance(data, dict):
            raise InvalidJobError(sheet=name, error="sheet spec must be a mapping")

        rows = _first_present(data, _ROWS_KEYS)
        if rows is None:
            rows = []
        if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
            raise InvalidJobError(sheet=name, error="rows must be a list of mappings")

        known = set(_ROWS_KEYS + _HEADER_STYLE_KEYS + _ROW_STYLE_KEYS + _ALL_STYLE_KEYS)
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidJobError(sheet=name, keys=unknown, error="unknown sheet keys")

        return cls(
            name=name,
            rows=rows,
            header_style=_optional_style(data, _HEADER_STYLE_KEYS),
            row_style=_optional_style(data, _ROW_STYLE_KEYS),
            all_style=_optional_style(data, _ALL_STYLE_KEYS),
        )


# =============================================================================
# Export Job
# =============================================================================

@dataclass
class ExportJob:
    """
    내보내기 작업.

    sheets는 시트명 → SheetSpec (dict 키이므로 시트명 유일).
    filename은 확장자 없이 지정; output_filename이 .xlsx를 붙인다.
    """
    filename: str
    sheets: dict[str, SheetSpec] = field(default_factory=dict)

    @property
    def output_filename(self) -> str:
        return f"{self.filename}{XLSX_EXTENSION}"

    @property
    def row_count(self) -> int:
        return sum(len(sheet.rows) for sheet in self.sheets.values())

    @classmethod
    def from_dict(cls, data: Any) -> "ExportJob":
        """
        JSON 매핑 → ExportJob.

        형식:
            {"filename": "report", "data": {"Sheet1": {"json": [...], ...}}}
            ("data" 대신 "sheets"도 허용)
        """
        if not isinstance(data, dict):
            raise InvalidJobError(error="export job must be a mapping")

        filename = data.get("filename")
        if not isinstance(filename, str) or not filename.strip():
            raise InvalidJobError(field="filename", error="filename is required")

        sheets = data.get("data", data.get("sheets"))
        if not isinstance(sheets, dict) or not sheets:
            raise InvalidJobError(field="data", error="at least one sheet is required")

        return cls(
            filename=filename.strip(),
            sheets={
                str(name): SheetSpec.from_dict(str(name), spec)
                for name, spec in sheets.items()
            },
        )


# =============================================================================
# Export Options
# =============================================================================

@dataclass
class ExportOptions:
    """
    내보내기 옵션 (default.yaml의 export 섹션).

    열 너비: 최장 길이 < min_column_width → min_column_width,
             아니면 최장 길이 + column_padding
    """
    min_column_width: int = DEFAULT_MIN_COLUMN_WIDTH
    column_padding: int = DEFAULT_COLUMN_PADDING

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> "ExportOptions":
        section = (config or {}).get("export") or {}
        return cls(
            min_column_width=int(section.get("min_column_width", DEFAULT_MIN_COLUMN_WIDTH)),
            column_padding=int(section.get("column_padding", DEFAULT_COLUMN_PADDING)),
        )

    def column_width(self, longest: int) -> int:
        if longest < self.min_column_width:
            return self.min_column_width
        return longest + self.column_padding


# =============================================================================
# Run Log Schemas
# =============================================================================

@dataclass
class WarningLog:
    """
    경고 로그.

    경고 필수 컨텍스트: level, code, sheet, message, rows
    """
    level: str = "warning"
    code: str = ""
    sheet: str = ""
    message: str = ""
    rows: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "code": self.code,
            "sheet": self.sheet,
            "message": self.message,
            "rows": self.rows,
        }


@dataclass
class RunLog:
    """
    변환 실행 로그.

    export/import 호출 한 번 = RunLog 하나.
    """
    run_id: str
    kind: str  # export, import
    started_at: str  # ISO 8601
    finished_at: str | None = None
    result: str = "pending"  # pending, success, failed

    filename: str | None = None
    sheet_count: int = 0
    row_count: int = 0

    warnings: list[WarningLog] = field(default_factory=list)

    # Error (if failed)
    error_code: str | None = None
    error_context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "kind": self.kind,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "result": self.result,
            "filename": self.filename,
            "sheet_count": self.sheet_count,
            "row_count": self.row_count,
            "warnings": [w.to_dict() for w in self.warnings],
            "error_code": self.error_code,
            "error_context": self.error_context,
        }
