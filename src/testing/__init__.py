"""
Testing helpers: XLSX 내용 검사 (바이너리 비교 대신 의미 단위 비교).
"""

from .xlsx_inspect import XlsxContent, XlsxInspector, inspect_xlsx, summarize_style

__all__ = [
    "XlsxContent",
    "XlsxInspector",
    "inspect_xlsx",
    "summarize_style",
]
