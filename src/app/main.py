"""
FastAPI 애플리케이션 진입점 (데모 페이지 + 변환 API).

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run uvicorn src.app.main:app
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from fastapi import FastAPI

from src.app.routes import convert

PROJECT_ROOT = Path(__file__).parent.parent.parent

# =============================================================================
# Configuration
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = PROJECT_ROOT / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


def configure_logging(config: dict) -> None:
    """logging.level 설정 적용 (기본 INFO)."""
    level_name = str((config.get("logging") or {}).get("level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def resolve_run_logs_dir(config: dict) -> Path | None:
    """logging.run_logs_dir (상대 경로는 프로젝트 루트 기준). 없으면 None."""
    raw = (config.get("logging") or {}).get("run_logs_dir")
    if not raw:
        return None
    path = Path(raw)
    return path if path.is_absolute() else PROJECT_ROOT / path


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 설정 로드, 로깅 설정
    """
    config = load_config()
    configure_logging(config)

    app.state.config = config
    app.state.run_logs_dir = resolve_run_logs_dir(config)

    yield


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="Sheet Bridge",
    description="JSON 표 데이터 ⇄ 스타일 적용 XLSX 변환",
    version="0.1.0",
    lifespan=lifespan,
)

# 페이지 라우트 (HTML)
app.include_router(convert.router, prefix="", tags=["Convert"])

# API 라우트
app.include_router(convert.api_router, prefix="/api/convert", tags=["Convert API"])


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
