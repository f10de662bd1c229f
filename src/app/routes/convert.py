"""
Convert Routes: 데모 페이지 + 내보내기/가져오기 API.

- GET /                     → 데모 페이지 (HTML)
- POST /api/convert/export  → JSON Export Job → XLSX 다운로드
- POST /api/convert/import  → XLSX 업로드 → {"rows": [...], "count": n}

규칙:
- 변환 에러(ConversionError)는 라우트 경계에서 HTTPException으로 변환
- Run Log: logging.run_logs_dir 설정 시 요청마다 저장 (성공/실패 모두)
"""

import logging
from pathlib import Path
from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Body, File, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, Response

from src.convert.exporter import export_table_async
from src.convert.importer import import_table
from src.core.ids import sanitize_filename
from src.core.logging import complete_run_log, create_run_log, save_run_log
from src.domain.constants import DEFAULT_MAX_UPLOAD_MB, XLSX_EXTENSION, XLSX_MIME_TYPE
from src.domain.errors import ConversionError, ErrorCodes
from src.domain.schemas import ExportJob, ExportOptions, RunLog

logger = logging.getLogger(__name__)

# Routers
router = APIRouter()  # HTML pages
api_router = APIRouter()  # API endpoints

# 에러 코드 → HTTP 상태 (없으면 422)
ERROR_STATUS = {
    ErrorCodes.NO_FILE: 400,
    ErrorCodes.EXPORT_FAILED: 500,
}


def _http_error(error: ConversionError) -> HTTPException:
    return HTTPException(
        status_code=ERROR_STATUS.get(error.code, 422),
        detail=error.to_dict(),
    )


def _get_config(request: Request) -> dict:
    return getattr(request.app.state, "config", None) or {}


def _finish(
    request: Request,
    run_log: RunLog,
    error: ConversionError | None = None,
    sheet_count: int = 0,
    row_count: int = 0,
    detail: dict[str, Any] | None = None,
) -> None:
    """
    RunLog 완료 + (설정 시) 저장.

    실패는 error(ConversionError) 또는 detail(HTTP 경계 에러의 응답 본문)로 전달.
    """
    if error is not None:
        detail = error.to_dict()
    complete_run_log(
        run_log,
        success=detail is None,
        sheet_count=sheet_count,
        row_count=row_count,
        error_code=detail["code"] if detail else None,
        error_context=detail,
    )

    logs_dir: Path | None = getattr(request.app.state, "run_logs_dir", None)
    if logs_dir is not None:
        save_run_log(run_log, logs_dir)


def _content_disposition(filename: str) -> str:
    """ASCII fallback + RFC 5987 filename* (한글 파일명 지원)."""
    fallback = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


# =============================================================================
# Page Routes (HTML)
# =============================================================================

@router.get("/", response_class=HTMLResponse)
async def convert_page(request: Request) -> HTMLResponse:
    """데모 페이지: JSON → XLSX 내보내기, XLSX → JSON 가져오기."""
    return HTMLResponse(content="""
<!DOCTYPE html>
<html lang="ko">
<head>
    <meta charset="UTF-8">
    <title>Sheet Bridge</title>
</head>
<body>
    <div class="container">
        <header>
            <h1>📊 JSON ⇄ Excel</h1>
        </header>

        <section>
            <h2>내보내기</h2>
            <form id="export-form">
                <label>파일명 <input type="text" name="filename" value="table"></label>
                <textarea name="data" rows="12" cols="80">{
  "Sheet1": {
    "json": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}],
    "headerCells": {"font": {"bold": true}, "fill": {"fgColor": "FF0000FF"}},
    "cells": {"font": {"size": 12}}
  }
}</textarea>
                <button type="submit">Excel 다운로드</button>
            </form>
        </section>

        <section>
            <h2>가져오기</h2>
            <form id="import-form">
                <input type="file" name="file" accept=".xlsx">
                <button type="submit">JSON 변환</button>
            </form>
            <pre id="import-result"></pre>
        </section>
    </div>

    <script>
    document.getElementById("export-form").addEventListener("submit", async (e) => {
        e.preventDefault();
        const form = e.target;
        const response = await fetch("/api/convert/export", {
            method: "POST",
            headers: {"Content-Type": "application/json"},
            body: JSON.stringify({
                filename: form.filename.value,
                data: JSON.parse(form.data.value),
            }),
        });
        if (!response.ok) {
            alert(JSON.stringify(await response.json()));
            return;
        }
        const blob = await response.blob();
        const url = window.URL.createObjectURL(blob);
        const link = document.createElement("a");
        link.href = url;
        link.download = form.filename.value + ".xlsx";
        link.click();
        window.URL.revokeObjectURL(url);
    });

    document.getElementById("import-form").addEventListener("submit", async (e) => {
        e.preventDefault();
        const body = new FormData();
        const file = e.target.file.files[0];
        if (file) body.append("file", file);
        const response = await fetch("/api/convert/import", {method: "POST", body});
        const result = await response.json();
        console.log(result);
        document.getElementById("import-result").textContent = JSON.stringify(result, null, 2);
    });
    </script>
</body>
</html>
    """)


# =============================================================================
# API Routes
# =============================================================================

@api_router.post("/export")
async def export_xlsx(
    request: Request,
    payload: Any = Body(...),
) -> Response:
    """
    JSON Export Job → XLSX.

    Body:
        {"filename": "report", "data": {"Sheet1": {"json": [...], "headerCells": {...}}}}

    Returns:
        XLSX 첨부 파일 응답
    """
    run_log = create_run_log("export")

    try:
        job = ExportJob.from_dict(payload)
        run_log.filename = job.output_filename
        data = await export_table_async(
            job,
            ExportOptions.from_config(_get_config(request)),
            run_log,
        )
    except ConversionError as e:
        logger.warning(f"Export rejected: {e}")
        _finish(request, run_log, error=e)
        raise _http_error(e) from e

    _finish(request, run_log, sheet_count=len(job.sheets), row_count=job.row_count)

    filename = f"{sanitize_filename(job.filename)}{XLSX_EXTENSION}"
    return Response(
        content=data,
        media_type=XLSX_MIME_TYPE,
        headers={
            "Content-Disposition": _content_disposition(filename),
            "X-Run-Id": run_log.run_id,
        },
    )


@api_router.post("/import")
async def import_xlsx(
    request: Request,
    file: UploadFile | None = File(None),
) -> dict[str, Any]:
    """
    XLSX 업로드 → Record 목록 (첫 번째 시트).

    Returns:
        {"rows": [...], "count": n, "run_id": "..."}
    """
    run_log = create_run_log("import", filename=file.filename if file else None)

    import_config = _get_config(request).get("import") or {}
    max_bytes = int(import_config.get("max_upload_mb", DEFAULT_MAX_UPLOAD_MB)) * 1024 * 1024
    if file is not None and file.size is not None and file.size > max_bytes:
        detail = {
            "code": ErrorCodes.UPLOAD_TOO_LARGE,
            "size": file.size,
            "max_bytes": max_bytes,
        }
        logger.warning(f"Import rejected: {detail}")
        _finish(request, run_log, detail=detail)
        raise HTTPException(status_code=413, detail=detail)

    try:
        rows = await import_table(file)
    except ConversionError as e:
        logger.warning(f"Import rejected: {e}")
        _finish(request, run_log, error=e)
        raise _http_error(e) from e

    _finish(request, run_log, sheet_count=1, row_count=len(rows))

    return {
        "rows": rows,
        "count": len(rows),
        "run_id": run_log.run_id,
    }
