# jma_tide_pipeline/exporter/csv_exporter.py
from pathlib import Path
from typing import Iterable

import pandas as pd

from jma_tide_pipeline.domain.models import StationRecord, TidalEvent
from jma_tide_pipeline.logger.app_logger import get_logger
from jma_tide_pipeline.parser.date_utils import JST_OFFSET_HOURS, to_local_datetime, to_utc_datetime

logger = get_logger(__name__)

# data export columns
OUTPUT_COLUMNS = {
    'stations': [
        'id', 'jma_id', 'station_code', 'station_name',
        'latitude_degrees', 'latitude_minutes', 'longitude_degrees', 'longitude_minutes',
        'latitude', 'longitude',
    ],
    'events': [
        'station_code', 'type', 'local_date_time', 'utc_date_time', 'level',
    ],
}


def stations_to_dataframe(stations: Iterable[StationRecord]) -> pd.DataFrame:
    """観測地点をDataFrameに変換（十進度の緯度経度も付加）"""
    rows = [
        {
            'id': s.id,
            'jma_id': s.jma_id,
            'station_code': s.station_code,
            'station_name': s.station_name,
            'latitude_degrees': s.latitude.degrees,
            'latitude_minutes': s.latitude.minutes,
            'longitude_degrees': s.longitude.degrees,
            'longitude_minutes': s.longitude.minutes,
            'latitude': round(s.latitude.to_decimal(), 6),
            'longitude': round(s.longitude.to_decimal(), 6),
        }
        for s in stations
    ]
    # jma_id は先頭ゼロを保持するため文字列型のまま
    return pd.DataFrame(rows, columns=OUTPUT_COLUMNS['stations']).astype({'jma_id': 'string'})


def events_to_dataframe(events: Iterable[TidalEvent], utc_offset_hours: int = JST_OFFSET_HOURS) -> pd.DataFrame:
    """潮位イベントをDataFrameに変換"""
    rows = [
        {
            'station_code': e.station_code,
            'type': e.type.value,
            'local_date_time': to_local_datetime(e.local_date_time, utc_offset_hours).isoformat(),
            'utc_date_time': to_utc_datetime(e.local_date_time, utc_offset_hours).isoformat(),
            'level': e.level,
        }
        for e in events
    ]
    return pd.DataFrame(rows, columns=OUTPUT_COLUMNS['events'])


def export_csv(df: pd.DataFrame, output_path: str | Path) -> Path:
    """DataFrameをCSV（UTF-8 BOM付き、Excelで文字化けしない）で出力する"""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, encoding='utf-8-sig')
    logger.info(f"CSVを出力しました: {path} ({len(df)} rows)")
    return path
