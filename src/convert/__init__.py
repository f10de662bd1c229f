"""
Convert layer: 표 데이터 ⇄ 스타일 적용 XLSX.

역할:
- Exporter: Export Job → XLSX 바이트
- Importer: XLSX 바이트 → Record 목록
- openpyxl이 XLSX 코덱 담당 (재구현 없음)
"""

from .exporter import TableExporter, deliver_table, export_table, export_table_async
from .importer import import_table, read_table, sheet_to_records
from .io import ByteSink, ByteSource, FileSink, MemorySink, PathSource

__all__ = [
    "TableExporter",
    "export_table",
    "export_table_async",
    "deliver_table",
    "import_table",
    "read_table",
    "sheet_to_records",
    "ByteSource",
    "ByteSink",
    "PathSource",
    "FileSink",
    "MemorySink",
]
