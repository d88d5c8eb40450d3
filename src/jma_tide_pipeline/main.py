#!/usr/bin/env python3
"""JMA潮位パイプライン - エントリポイント"""

from __future__ import annotations

import argparse
import sqlite3
import sys
from datetime import date
from pathlib import Path
from typing import Sequence

import yaml
from requests.exceptions import RequestException

from jma_tide_pipeline.fetcher.tide_fetcher import TideFetcher
from jma_tide_pipeline.infrastructure.repositories.sqlite_repository import SqliteTideRepository
from jma_tide_pipeline.logger.app_logger import get_logger, setup_logging
from jma_tide_pipeline.pipeline import ingest_stations, ingest_tide_table
from jma_tide_pipeline.utils.config_loader import TideSettings, get_tide_settings, load_config
from jma_tide_pipeline.version import get_version_string

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    """コマンドライン引数のパーサーを構成する。"""
    parser = argparse.ArgumentParser(
        prog="jma-tide-pipeline",
        description="気象庁 潮位表データの取得・保存",
    )
    parser.add_argument("--version", action="version", version=get_version_string())
    parser.add_argument("--config", type=Path, default=None, help="設定ファイル（config.yml）のパス")
    sub = parser.add_subparsers(dest="command", required=True)

    stations = sub.add_parser("stations", help="潮位表掲載地点一覧を取り込む")
    stations.add_argument("--year", type=int, default=date.today().year, help="対象年")
    stations.add_argument("--db", type=Path, default=None, help="SQLiteファイルのパス")
    stations.add_argument(
        "--csv", nargs="?", const="", default=None,
        help="CSVの出力先（値を省略すると output.csv_dir/stations_<年>.csv）",
    )
    stations.add_argument("--no-db", action="store_true", help="データベースに保存しない")

    tides = sub.add_parser("tides", help="地点の潮位表（毎時潮位・満干潮）を取り込む")
    tides.add_argument("code", help="地点記号（例: TK）")
    tides.add_argument("--year", type=int, default=date.today().year, help="対象年")
    tides.add_argument("--file", type=Path, default=None, help="取得せずにローカルの潮位表テキストを読む")
    tides.add_argument("--db", type=Path, default=None, help="SQLiteファイルのパス")
    tides.add_argument(
        "--csv", nargs="?", const="", default=None,
        help="CSVの出力先（値を省略すると output.csv_dir/<地点記号>_<年>.csv）",
    )
    tides.add_argument("--no-db", action="store_true", help="データベースに保存しない")
    return parser


def _open_repository(args: argparse.Namespace, settings: TideSettings) -> SqliteTideRepository | None:
    if args.no_db:
        return None
    return SqliteTideRepository(args.db or settings.db_path)


def _csv_path(args: argparse.Namespace, settings: TideSettings, default_name: str) -> Path | None:
    if args.csv is None:
        return None
    if args.csv == "":
        return settings.csv_dir / default_name
    return Path(args.csv)


def _build_fetcher(settings: TideSettings) -> TideFetcher:
    return TideFetcher(
        settings.base_url,
        timeout=settings.timeout,
        encoding=settings.encoding,
        min_interval=settings.min_interval,
    )


def _run_stations(args: argparse.Namespace, settings: TideSettings) -> int:
    fetcher = _build_fetcher(settings)
    repository = _open_repository(args, settings)
    try:
        csv_path = _csv_path(args, settings, f"stations_{args.year}.csv")
        result = ingest_stations(fetcher, args.year, repository=repository, csv_path=csv_path)
    finally:
        if repository is not None:
            repository.close()

    print(f"{len(result.stations)} 地点を取り込みました（除外 {len(result.failures)} 行）")
    return 0


def _run_tides(args: argparse.Namespace, settings: TideSettings) -> int:
    code = args.code.strip().upper()
    if args.file is not None:
        table = args.file.read_text(encoding=settings.encoding)
    else:
        fetcher = _build_fetcher(settings)
        table = fetcher.fetch_tide_table(code, args.year)

    repository = _open_repository(args, settings)
    try:
        csv_path = _csv_path(args, settings, f"{code}_{args.year}.csv")
        result = ingest_tide_table(table, settings, repository=repository, csv_path=csv_path)
    finally:
        if repository is not None:
            repository.close()

    summary = result.get_summary()
    print(
        f"{code}: 毎時潮位 {summary['hourly_count']} 件, 満干潮 {summary['extrema_count']} 件"
        f"（除外 {summary['failure_count']} 行）"
    )
    return 0


def run(argv: Sequence[str] | None = None) -> int:
    """CLI入口。"""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        setup_logging(config)
        settings = get_tide_settings(config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("設定の読み込みに失敗しました: %s", exc)
        print(f"設定エラー: {exc}", file=sys.stderr)
        return 1

    handlers = {"stations": _run_stations, "tides": _run_tides}
    try:
        return handlers[args.command](args, settings)
    except RequestException as exc:
        logger.error("データ取得に失敗しました: %s", exc)
        print(f"エラー: {exc}", file=sys.stderr)
        return 1
    except (LookupError, OSError, sqlite3.Error) as exc:
        logger.error("保存処理に失敗しました: %s", exc)
        print(f"エラー: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        # 地点一覧のテーブルが見つからない場合など
        logger.error("デコードに失敗しました: %s", exc)
        print(f"エラー: {exc}", file=sys.stderr)
        return 1


def main() -> None:
    """スクリプトのエントリポイント。"""
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
