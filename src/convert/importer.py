"""
Importer: XLSX 바이트 → Record 목록 (첫 번째 워크시트만).

처리 순서:
1. source가 None → NoFileError (읽기 시도 없음)
2. ByteSource면 read()로 바이트 확보 (읽기 에러는 그대로 전파)
3. openpyxl 디코딩 (data_only=True: 수식은 캐시된 결과값) → 실패 시 DecodeError
4. 첫 번째 워크시트 (없으면 NoSheetError)
5. 1행 = 헤더 라벨 (빈 셀 → "")
6. 2행부터: 값이 있는 셀마다 record[헤더[열]] = 값
   - 헤더 중복 시 마지막 열이 이김 (의도된 동작)
   - 값이 하나도 없는 행은 건너뜀
"""

import asyncio
import logging
from io import BytesIO

from openpyxl import load_workbook
from openpyxl.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from src.convert.io import ByteSource
from src.convert.values import from_cell_value
from src.domain.constants import HEADER_ROW
from src.domain.errors import DecodeError, NoFileError, NoSheetError
from src.domain.schemas import Record

logger = logging.getLogger(__name__)


def _load_workbook(data: bytes) -> Workbook:
    """바이트 → Workbook. 모든 디코딩 실패는 DecodeError."""
    try:
        return load_workbook(BytesIO(data), data_only=True)
    except Exception as e:
        logger.error(f"Failed to decode spreadsheet ({len(data)} bytes): {e}")
        raise DecodeError(size=len(data), error=str(e)) from e


def _read_headers(ws: Worksheet) -> dict[int, str]:
    """1행 → {열 번호: 헤더 라벨}."""
    headers: dict[int, str] = {}
    for row in ws.iter_rows(min_row=HEADER_ROW, max_row=HEADER_ROW):
        for cell in row:
            headers[cell.column] = "" if cell.value is None else str(cell.value)
    return headers


def sheet_to_records(ws: Worksheet) -> list[Record]:
    """
    워크시트 → Record 목록.

    헤더 행에 없는 열의 값은 키 ""로 들어간다.
    """
    headers = _read_headers(ws)
    records: list[Record] = []

    for row in ws.iter_rows(min_row=HEADER_ROW + 1):
        record: Record = {}
        for cell in row:
            if cell.value is None:
                continue
            record[headers.get(cell.column, "")] = from_cell_value(cell.value)
        if record:
            records.append(record)

    return records


def read_table(data: bytes) -> list[Record]:
    """
    XLSX 바이트 → Record 목록 (동기, 순수 함수).

    Raises:
        DecodeError: XLSX로 읽을 수 없음
        NoSheetError: 워크시트 없음
    """
    wb = _load_workbook(data)
    try:
        if not wb.worksheets:
            raise NoSheetError(size=len(data))

        ws = wb.worksheets[0]
        records = sheet_to_records(ws)
    finally:
        wb.close()

    logger.info(f"Imported {len(records)} row(s) from sheet '{ws.title}'")
    return records


async def import_table(source: bytes | ByteSource | None) -> list[Record]:
    """
    바이트 또는 ByteSource → Record 목록.

    읽기와 디코딩 동안 이벤트 루프를 막지 않는다.

    Args:
        source: XLSX 바이트, ByteSource(UploadFile, PathSource 등), 또는 None

    Raises:
        NoFileError: source가 None
        DecodeError: XLSX로 읽을 수 없음
        NoSheetError: 워크시트 없음
    """
    if source is None:
        raise NoFileError()

    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
    else:
        data = await source.read()

    return await asyncio.to_thread(read_table, data)
