"""
Error definitions for the conversion layer.

규칙:
- 조용한 실패 금지 → ConversionError 계열로 명시적 실패
- 하위 라이브러리(openpyxl) 예외는 `raise ... from e`로 원인 보존
- 예외: 헤더 중복(마지막 열 우선), 행 키 불일치(위치 기반 기록)는 에러 아님
"""

from typing import Any


class ConversionError(Exception):
    """
    변환(내보내기/가져오기) 실패 시 발생하는 에러의 기반 클래스.

    하위 클래스는 고정된 code를 가진다. 호출자는 code로 분기하거나
    하위 클래스 타입으로 except 하면 된다.

    Usage:
        raise DecodeError(size=len(data), error=str(e))
    """

    default_code = "CONVERSION_ERROR"

    def __init__(self, code: str | None = None, **context: Any) -> None:
        self.code = code or self.default_code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Import ===
    NO_FILE = "NO_FILE"
    DECODE_FAILED = "DECODE_FAILED"
    NO_SHEET = "NO_SHEET"
    UPLOAD_TOO_LARGE = "UPLOAD_TOO_LARGE"  # HTTP 경계 전용

    # === Export ===
    EMPTY_SHEET = "EMPTY_SHEET"
    EXPORT_FAILED = "EXPORT_FAILED"

    # === Input validation ===
    INVALID_STYLE = "INVALID_STYLE"
    UNSUPPORTED_VALUE = "UNSUPPORTED_VALUE"
    INVALID_JOB = "INVALID_JOB"

    # === Warnings (run log only, not raised) ===
    ROW_KEYS_DIVERGE = "ROW_KEYS_DIVERGE"


# =============================================================================
# Concrete errors
# =============================================================================

class NoFileError(ConversionError):
    """가져오기 입력(파일/바이트)이 없음. 읽기 시도 전에 발생."""

    default_code = ErrorCodes.NO_FILE


class DecodeError(ConversionError):
    """입력 바이트가 읽을 수 있는 XLSX 문서가 아님."""

    default_code = ErrorCodes.DECODE_FAILED


class NoSheetError(ConversionError):
    """문서에 워크시트가 하나도 없음."""

    default_code = ErrorCodes.NO_SHEET


class EmptySheetError(ConversionError):
    """내보낼 시트의 rows가 비어 있어 헤더를 만들 수 없음."""

    default_code = ErrorCodes.EMPTY_SHEET


class ExportFailedError(ConversionError):
    """워크북 생성/직렬화 중 openpyxl 에러."""

    default_code = ErrorCodes.EXPORT_FAILED


class InvalidStyleError(ConversionError):
    """알 수 없는 스타일 aspect/속성 또는 잘못된 속성 값."""

    default_code = ErrorCodes.INVALID_STYLE


class UnsupportedValueError(ConversionError):
    """레코드 값이 셀 값 타입(str/number/date/bool/None)에 속하지 않음."""

    default_code = ErrorCodes.UNSUPPORTED_VALUE


class InvalidJobError(ConversionError):
    """Export Job 매핑 형식 오류."""

    default_code = ErrorCodes.INVALID_JOB
