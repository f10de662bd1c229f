"""
Exporter: Export Job → XLSX 바이트 (openpyxl 기반).

시트별 처리 순서 (job.sheets 키 순서):
1. 시트 생성 (이름 = 키)
2. 헤더 = 첫 번째 Record의 키 순서. rows가 비면 EmptySheetError (작업 전체 실패)
3. 헤더 행 + 데이터 행. 데이터 값은 각 Record 자신의 값 순서로 위치 기반 기록
   (키 집합이 다른 행은 열이 어긋날 수 있음 → 경고만 기록, 보정하지 않음)
4. header_style → 1행
5. row_style → 2행 이후
6. all_style → 전체 (마지막 적용 = 우선)
7. 열 너비 자동 맞춤

전달(다운로드, 디스크 저장)은 호출자 몫: deliver_table + ByteSink
"""

import asyncio
import logging
from collections.abc import Iterable
from io import BytesIO
from typing import Any

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from src.convert.io import ByteSink
from src.convert.values import rendered_length, to_cell_value
from src.core.logging import emit_warning
from src.domain.constants import HEADER_ROW, XLSX_MIME_TYPE
from src.domain.errors import (
    ConversionError,
    EmptySheetError,
    ErrorCodes,
    ExportFailedError,
    InvalidJobError,
)
from src.domain.schemas import ExportJob, ExportOptions, RunLog, SheetSpec
from src.domain.styles import StyleSpec

logger = logging.getLogger(__name__)


class TableExporter:
    """
    Export Job → XLSX 변환기.

    Usage:
        exporter = TableExporter(ExportOptions.from_config(config))
        data = exporter.export(job)
    """

    def __init__(self, options: ExportOptions | None = None):
        self.options = options or ExportOptions()

    def export(self, job: ExportJob, run_log: RunLog | None = None) -> bytes:
        """
        워크북 생성 후 XLSX 바이트로 직렬화.

        Args:
            job: 내보내기 작업
            run_log: 경고를 기록할 RunLog (선택)

        Returns:
            XLSX 바이트

        Raises:
            EmptySheetError: rows가 빈 시트
            InvalidJobError: 대소문자만 다른 시트 이름
            UnsupportedValueError: 지원하지 않는 셀 값
            InvalidStyleError: 적용할 수 없는 스타일 값
            ExportFailedError: openpyxl 생성/직렬화 실패
        """
        try:
            wb = self.build_workbook(job, run_log)

            buffer = BytesIO()
            wb.save(buffer)
            data = buffer.getvalue()

        except ConversionError:
            raise
        except Exception as e:
            logger.error(f"Export failed for {job.output_filename}: {e}", exc_info=True)
            raise ExportFailedError(
                filename=job.output_filename,
                error=str(e),
            ) from e

        logger.info(
            f"Exported {job.output_filename}: "
            f"{len(job.sheets)} sheet(s), {job.row_count} row(s), {len(data)} bytes"
        )
        return data

    def build_workbook(self, job: ExportJob, run_log: RunLog | None = None) -> Workbook:
        """Export Job → openpyxl Workbook (직렬화 전)."""
        # fail-fast: 시트를 만들기 전에 빈 시트부터 확인
        for name, sheet in job.sheets.items():
            if not sheet.rows:
                raise EmptySheetError(sheet=name, filename=job.output_filename)

        # Excel 시트 이름은 대소문자 구분 없음 (openpyxl은 중복 시 조용히 이름 변경)
        seen: dict[str, str] = {}
        for name in job.sheets:
            key = name.casefold()
            if key in seen:
                raise InvalidJobError(
                    sheets=[seen[key], name],
                    error="duplicate sheet names (case-insensitive)",
                )
            seen[key] = name

        wb = Workbook()
        wb.remove(wb.active)

        for name, sheet in job.sheets.items():
            ws = wb.create_sheet(title=name)
            if ws.title != name:
                raise ExportFailedError(
                    filename=job.output_filename,
                    sheet=name,
                    error=f"worksheet was created as '{ws.title}'",
                )
            self._build_sheet(ws, sheet, run_log)

        return wb

    def _build_sheet(
        self,
        ws: Worksheet,
        sheet: SheetSpec,
        run_log: RunLog | None,
    ) -> None:
        headers = sheet.headers

        diverging = sheet.diverging_rows()
        if diverging:
            message = (
                f"{len(diverging)} row(s) have keys different from the first row; "
                f"values are written by position"
            )
            logger.warning(f"Sheet '{sheet.name}': {message}")
            if run_log is not None:
                emit_warning(
                    run_log,
                    code=ErrorCodes.ROW_KEYS_DIVERGE,
                    sheet=sheet.name,
                    message=message,
                    rows=diverging,
                )

        self._write_row(ws, HEADER_ROW, headers, sheet=sheet.name)
        for offset, record in enumerate(sheet.rows, start=1):
            self._write_row(ws, HEADER_ROW + offset, record.values(), sheet=sheet.name)

        # 스타일: header → row → all (순서 고정)
        if sheet.header_style is not None:
            self._apply_style(
                ws.iter_rows(min_row=HEADER_ROW, max_row=HEADER_ROW),
                sheet.header_style,
            )
        if sheet.row_style is not None and ws.max_row > HEADER_ROW:
            self._apply_style(
                ws.iter_rows(min_row=HEADER_ROW + 1),
                sheet.row_style,
            )
        if sheet.all_style is not None:
            self._apply_style(ws.iter_rows(), sheet.all_style)

        self._fit_columns(ws, headers)

    def _write_row(
        self,
        ws: Worksheet,
        row_number: int,
        values: Iterable[Any],
        **context: Any,
    ) -> None:
        for column, raw in enumerate(values, start=1):
            value = to_cell_value(raw, row=row_number, column=column, **context)
            cell = ws.cell(row=row_number, column=column, value=value)
            if isinstance(value, str) and value.startswith("="):
                # 문자열로 보존 (수식 해석 금지)
                cell.data_type = "s"

    @staticmethod
    def _apply_style(rows: Iterable[tuple[Any, ...]], style: StyleSpec) -> None:
        for row in rows:
            for cell in row:
                style.apply(cell)

    def _fit_columns(self, ws: Worksheet, headers: list[str]) -> None:
        """
        열 너비 = 헤더/값 최장 길이 기준.

        최장 < min_column_width → min_column_width, 아니면 최장 + column_padding
        """
        for index, header in enumerate(headers, start=1):
            longest = rendered_length(header)
            for (value,) in ws.iter_rows(
                min_col=index, max_col=index, values_only=True,
            ):
                longest = max(longest, rendered_length(value))

            letter = get_column_letter(index)
            ws.column_dimensions[letter].width = self.options.column_width(longest)


# =============================================================================
# Convenience functions
# =============================================================================


def export_table(
    job: ExportJob,
    options: ExportOptions | None = None,
    run_log: RunLog | None = None,
) -> bytes:
    """
    Export Job → XLSX 바이트 (간편 함수, 순수 함수).

    Returns:
        XLSX 바이트 (MIME: XLSX_MIME_TYPE)
    """
    return TableExporter(options).export(job, run_log)


async def export_table_async(
    job: ExportJob,
    options: ExportOptions | None = None,
    run_log: RunLog | None = None,
) -> bytes:
    """export_table을 worker thread에서 실행 (이벤트 루프 비차단)."""
    return await asyncio.to_thread(export_table, job, options, run_log)


def deliver_table(
    job: ExportJob,
    sink: ByteSink,
    options: ExportOptions | None = None,
    run_log: RunLog | None = None,
) -> Any:
    """
    내보낸 뒤 sink에 전달.

    Args:
        job: 내보내기 작업
        sink: ByteSink (deliver(filename, data, media_type))

    Returns:
        sink.deliver의 반환값 (FileSink면 저장 경로)
    """
    data = export_table(job, options, run_log)
    return sink.deliver(job.output_filename, data, XLSX_MIME_TYPE)
