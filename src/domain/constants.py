"""
Domain Constants: 변환 계층 전역 상수.

파일 확장자, MIME 타입, 열 너비 기본값 등.
"""

# =============================================================================
# Output Format
# =============================================================================

XLSX_EXTENSION = ".xlsx"
XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# =============================================================================
# Column Width (열 너비 자동 맞춤)
# =============================================================================
# 최장 값 길이 < MIN 이면 MIN, 아니면 최장 값 길이 + PADDING

DEFAULT_MIN_COLUMN_WIDTH = 10
DEFAULT_COLUMN_PADDING = 2

# =============================================================================
# Import
# =============================================================================

HEADER_ROW = 1
DEFAULT_MAX_UPLOAD_MB = 20

# =============================================================================
# Run Log
# =============================================================================

RUN_ID_PREFIX = "RUN-"
RUN_LOG_GLOB = "run_*.json"
