"""
셀 값 변환: Record 값 ⇄ openpyxl 셀 값.

셀 값은 닫힌 타입 집합으로만 주고받는다:
    str | int | float | Decimal | bool | datetime | date | time | None

규칙:
- bool은 int보다 먼저 판별 (bool은 int의 하위 타입)
- Decimal → float (Excel은 Decimal을 직접 지원하지 않음)
- NaN/Inf → 항상 reject
- timezone 있는 datetime → UTC 기준 naive datetime (Excel은 timezone 미지원)
- 가져오기: 위 타입 외의 디코딩 결과(rich text, timedelta 등)는 str로 변환
"""

import math
from datetime import UTC, date, datetime, time
from decimal import Decimal
from typing import Any

from src.domain.errors import UnsupportedValueError
from src.domain.schemas import CellValue


def to_cell_value(value: Any, **context: Any) -> CellValue:
    """
    Record 값 → 셀에 쓸 값.

    Args:
        value: Record의 값
        **context: 에러 컨텍스트 (sheet, row, column 등)

    Raises:
        UnsupportedValueError: 지원하지 않는 타입, NaN/Inf
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, str)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnsupportedValueError(value=repr(value), error="NaN/Inf", **context)
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise UnsupportedValueError(value=str(value), error="NaN/Inf", **context)
        return float(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(UTC).replace(tzinfo=None)
        return value
    if isinstance(value, (date, time)):
        return value
    raise UnsupportedValueError(type=type(value).__name__, **context)


def from_cell_value(value: Any) -> CellValue:
    """셀에서 읽은 값 → Record 값."""
    if value is None:
        return None
    if isinstance(value, (bool, int, float, str, datetime, date, time)):
        return value
    return str(value)


def rendered_length(value: Any) -> int:
    """열 너비 계산용 문자열 길이 (None은 0)."""
    if value is None:
        return 0
    return len(str(value))
