"""
インフラ層のデータアクセス実装（SQLite）

このモジュールは、観測地点（tide_station）と潮位イベント（tidal_event）を
SQLiteファイルに保存するリポジトリを提供します。
"""

import sqlite3
import uuid
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from .data_interfaces import ITideRepository
from jma_tide_pipeline.domain.models import Coordinate, EventType, StationRecord, TidalEvent
from jma_tide_pipeline.logger.app_logger import get_logger
from jma_tide_pipeline.parser.date_utils import to_local_datetime, to_utc_datetime

logger = get_logger(__name__)

_CREATE_STATION_TABLE = """
CREATE TABLE IF NOT EXISTS tide_station (
    id TEXT PRIMARY KEY,
    jma_id TEXT,
    station_code TEXT NOT NULL UNIQUE,
    station_name TEXT,
    latitude_degrees INTEGER,
    latitude_minutes REAL,
    longitude_degrees INTEGER,
    longitude_minutes REAL
)
"""

_CREATE_EVENT_TABLE = """
CREATE TABLE IF NOT EXISTS tidal_event (
    id TEXT PRIMARY KEY,
    station_id TEXT NOT NULL,
    station_code TEXT NOT NULL,
    local_date_time TEXT NOT NULL,
    utc_date_time TEXT NOT NULL,
    level INTEGER NOT NULL,
    type TEXT NOT NULL,
    FOREIGN KEY (station_id) REFERENCES tide_station (id)
)
"""

_UPSERT_STATION = """
INSERT INTO tide_station (
    id, jma_id, station_code, station_name,
    latitude_degrees, latitude_minutes, longitude_degrees, longitude_minutes
) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
ON CONFLICT (station_code) DO UPDATE SET
    jma_id = excluded.jma_id,
    station_name = excluded.station_name,
    latitude_degrees = excluded.latitude_degrees,
    latitude_minutes = excluded.latitude_minutes,
    longitude_degrees = excluded.longitude_degrees,
    longitude_minutes = excluded.longitude_minutes
"""

_INSERT_EVENT = """
INSERT INTO tidal_event (id, station_id, station_code, local_date_time, utc_date_time, level, type)
VALUES (?, ?, ?, ?, ?, ?, ?)
"""


class SqliteTideRepository(ITideRepository):
    """SQLite実装の潮位データリポジトリ"""

    def __init__(self, db_path: str | Path, id_factory: Optional[Callable[[], str]] = None):
        self.db_path = Path(db_path)
        if str(db_path) != ":memory:":
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._conn = sqlite3.connect(str(db_path))
        self._conn.execute("PRAGMA foreign_keys = ON")

    def __enter__(self) -> "SqliteTideRepository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def create_tables(self) -> None:
        with self._conn:
            self._conn.execute(_CREATE_STATION_TABLE)
            self._conn.execute(_CREATE_EVENT_TABLE)

    def insert_stations(self, stations: Iterable[StationRecord]) -> int:
        rows = [
            (
                s.id,
                s.jma_id,
                s.station_code,
                s.station_name,
                s.latitude.degrees,
                s.latitude.minutes,
                s.longitude.degrees,
                s.longitude.minutes,
            )
            for s in stations
        ]
        with self._conn:
            self._conn.executemany(_UPSERT_STATION, rows)
        logger.info("tide_station に %d 件保存しました", len(rows))
        return len(rows)

    def get_stations(self) -> List[StationRecord]:
        cursor = self._conn.execute(
            "SELECT id, jma_id, station_code, station_name, latitude_degrees, latitude_minutes, "
            "longitude_degrees, longitude_minutes FROM tide_station ORDER BY rowid"
        )
        return [
            StationRecord(
                id=row[0],
                jma_id=row[1],
                station_code=row[2],
                station_name=row[3],
                latitude=Coordinate(degrees=row[4], minutes=row[5]),
                longitude=Coordinate(degrees=row[6], minutes=row[7]),
            )
            for row in cursor.fetchall()
        ]

    def _station_ids(self) -> Dict[str, str]:
        cursor = self._conn.execute("SELECT station_code, id FROM tide_station")
        return dict(cursor.fetchall())

    def insert_tidal_events(self, events: Iterable[TidalEvent], utc_offset_hours: int) -> int:
        """潮位イベントを保存する

        各イベントに新しいIDを割り当て、地点記号から tide_station.id を引いて外部キーとする。

        Raises:
            LookupError: 未登録の地点記号を含む場合（何も書き込まない）
        """
        station_ids = self._station_ids()
        rows = []
        for event in events:
            station_id = station_ids.get(event.station_code)
            if station_id is None:
                raise LookupError(f"未登録の地点記号です: {event.station_code}")
            rows.append(
                (
                    self._id_factory(),
                    station_id,
                    event.station_code,
                    to_local_datetime(event.local_date_time, utc_offset_hours).isoformat(),
                    to_utc_datetime(event.local_date_time, utc_offset_hours).isoformat(),
                    event.level,
                    event.type.value,
                )
            )
        with self._conn:
            self._conn.executemany(_INSERT_EVENT, rows)
        logger.info("tidal_event に %d 件保存しました", len(rows))
        return len(rows)

    def count_events(self, event_type: Optional[EventType] = None) -> int:
        if event_type is None:
            cursor = self._conn.execute("SELECT COUNT(*) FROM tidal_event")
        else:
            cursor = self._conn.execute("SELECT COUNT(*) FROM tidal_event WHERE type = ?", (event_type.value,))
        return cursor.fetchone()[0]
