#!/usr/bin/env python3
"""
sheet_convert.py - JSON ⇄ XLSX 변환 CLI

export: Export Job JSON 파일 → <filename>.xlsx
import: XLSX 파일 → Record 목록 JSON (첫 번째 시트)

사용법:
    # JSON → XLSX (out/ 디렉터리에 저장)
    uv run python scripts/sheet_convert.py export job.json --out-dir out

    # XLSX → JSON (stdout)
    uv run python scripts/sheet_convert.py import table.xlsx

    # XLSX → JSON 파일
    uv run python scripts/sheet_convert.py import table.xlsx --out rows.json

Export Job 형식:
    {"filename": "report", "data": {"Sheet1": {"json": [{"a": 1}], "headerCells": {...}}}}
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import yaml

# 프로젝트 루트를 import 경로에 추가 (src.* 패키지)
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.convert.exporter import deliver_table  # noqa: E402
from src.convert.importer import import_table  # noqa: E402
from src.convert.io import FileSink, PathSource  # noqa: E402
from src.core.files import atomic_write_json  # noqa: E402
from src.domain.errors import ConversionError  # noqa: E402
from src.domain.schemas import ExportJob, ExportOptions  # noqa: E402

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def load_options(config_path: Path) -> ExportOptions:
    """default.yaml의 export 섹션 → ExportOptions (파일 없으면 기본값)."""
    if not config_path.exists():
        return ExportOptions()
    with open(config_path, encoding="utf-8") as f:
        return ExportOptions.from_config(yaml.safe_load(f) or {})


def run_export(job_path: Path, out_dir: Path, options: ExportOptions) -> Path:
    """Export Job JSON → XLSX 파일."""
    payload = json.loads(job_path.read_text(encoding="utf-8"))
    job = ExportJob.from_dict(payload)
    path: Path = deliver_table(job, FileSink(out_dir), options)
    logger.info(f"저장 완료: {path}")
    return path


def run_import(xlsx_path: Path, out_path: Path | None) -> int:
    """XLSX → Record 목록 JSON. 반환값은 행 수."""
    rows = asyncio.run(import_table(PathSource(xlsx_path)))

    if out_path is None:
        print(json.dumps(rows, indent=2, ensure_ascii=False, default=str))
    else:
        atomic_write_json(out_path, {"rows": rows, "count": len(rows)})
        logger.info(f"저장 완료: {out_path} ({len(rows)} rows)")

    return len(rows)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="JSON ⇄ XLSX 변환",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=str,
        default=str(Path(__file__).parent.parent / "default.yaml"),
        help="설정 파일 경로 (기본: default.yaml)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    export_parser = sub.add_parser("export", help="Export Job JSON → XLSX")
    export_parser.add_argument("job", type=str, help="Export Job JSON 파일")
    export_parser.add_argument(
        "--out-dir",
        type=str,
        default=".",
        help="출력 디렉터리 (기본: 현재 디렉터리)",
    )

    import_parser = sub.add_parser("import", help="XLSX → JSON")
    import_parser.add_argument("xlsx", type=str, help="XLSX 파일")
    import_parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="출력 JSON 파일 (기본: stdout)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if args.command == "export":
            options = load_options(Path(args.config))
            run_export(Path(args.job), Path(args.out_dir), options)
        else:
            out_path = Path(args.out) if args.out else None
            run_import(Path(args.xlsx), out_path)
    except ConversionError as e:
        logger.error(f"변환 실패: {e}")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"입력 파일 오류: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
