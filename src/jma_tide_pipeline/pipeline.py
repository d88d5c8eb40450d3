"""取得・デコード・保存の組み立て

フェッチャーとリポジトリは引数で受け取り、ここではデコーダーとの受け渡しのみを行う。
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jma_tide_pipeline.domain.models import StationDirectoryResult, TideTableResult
from jma_tide_pipeline.exporter.csv_exporter import events_to_dataframe, export_csv, stations_to_dataframe
from jma_tide_pipeline.fetcher.tide_fetcher import TideFetcher
from jma_tide_pipeline.infrastructure.repositories.data_interfaces import ITideRepository
from jma_tide_pipeline.logger.app_logger import get_logger
from jma_tide_pipeline.parser.station_table_parser import StationTableParser
from jma_tide_pipeline.parser.tide_table_parser import TideTableParser
from jma_tide_pipeline.utils.config_loader import TideSettings

logger = get_logger(__name__)


def ingest_stations(
    fetcher: TideFetcher,
    year: int,
    *,
    repository: Optional[ITideRepository] = None,
    csv_path: Optional[Path] = None,
) -> StationDirectoryResult:
    """地点一覧を取得・デコードし、指定があれば保存・CSV出力する"""
    html = fetcher.fetch_station_directory(year)
    result = StationTableParser().parse(html)

    exported = result.stations
    if repository is not None:
        repository.create_tables()
        repository.insert_stations(result.stations)
        # 再取り込み時はDBに残る既存IDを出力する
        stored = {station.station_code: station for station in repository.get_stations()}
        exported = [stored.get(station.station_code, station) for station in result.stations]
    if csv_path is not None:
        export_csv(stations_to_dataframe(exported), csv_path)
    return result


def ingest_tide_table(
    table: str,
    settings: TideSettings,
    *,
    repository: Optional[ITideRepository] = None,
    csv_path: Optional[Path] = None,
) -> TideTableResult:
    """潮位表テキストをデコードし、指定があれば保存・CSV出力する"""
    result = TideTableParser(century=settings.century).parse(table)

    if repository is not None:
        repository.create_tables()
        repository.insert_tidal_events(result.events, settings.utc_offset_hours)
    if csv_path is not None:
        export_csv(events_to_dataframe(result.events, settings.utc_offset_hours), csv_path)

    summary = result.get_summary()
    if summary["failure_count"]:
        logger.warning("潮位表のうち %d 行をデコードできませんでした", summary["failure_count"])
    return result
