"""
潮位データのドメインモデル

このモジュールは、観測地点一覧と潮位表のデコード結果を表すドメインモデルを定義します。
責務: デコード済みレコードの表現（生成後は変更しない）
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class EventType(Enum):
    """潮位イベント種別"""
    HOURLY = "hourly"  # 毎時潮位
    HIGH = "high"      # 満潮
    LOW = "low"        # 干潮


@dataclass(frozen=True)
class Coordinate:
    """度・分で表した緯度または経度"""
    degrees: int
    minutes: float

    def to_decimal(self) -> float:
        """十進度に変換"""
        return self.degrees + self.minutes / 60.0

    def to_dict(self) -> Dict[str, Any]:
        return {"degrees": self.degrees, "minutes": self.minutes}


@dataclass(frozen=True)
class StationRecord:
    """潮位観測地点

    jma_id は先頭ゼロを保持するため文字列のまま扱う。
    station_code は潮位表との結合キー。
    """
    id: str
    jma_id: str
    station_code: str
    station_name: str
    latitude: Coordinate
    longitude: Coordinate

    def to_dict(self) -> Dict[str, Any]:
        """観測地点情報を辞書形式に変換"""
        return {
            "id": self.id,
            "jma_id": self.jma_id,
            "station_code": self.station_code,
            "station_name": self.station_name,
            "latitude": self.latitude.to_dict(),
            "longitude": self.longitude.to_dict(),
        }


@dataclass(frozen=True)
class RowDate:
    """潮位表1行分の日付（UTC+9 の暦日）"""
    year: int
    month: int
    day: int


@dataclass(frozen=True)
class RowDateTime:
    """UTC+9 の現地日時（夏時間なし）"""
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0

    @classmethod
    def from_date(cls, row_date: RowDate, hour: int, minute: int = 0) -> "RowDateTime":
        return cls(row_date.year, row_date.month, row_date.day, hour, minute)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}T{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class Extremum:
    """満潮または干潮（時刻と潮位）"""
    hour: int
    minute: int
    level: int


@dataclass(frozen=True)
class TideRow:
    """潮位表1行（1地点1日）のデコード結果"""
    date: RowDate
    station_code: str
    hourly_levels: List[int]
    high_extrema: List[Extremum]
    low_extrema: List[Extremum]
    # 満干潮スロット単位で除外した理由（行全体は有効）
    slot_issues: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class TidalEvent:
    """潮位イベント（毎時潮位・満潮・干潮）"""
    local_date_time: RowDateTime
    station_code: str
    level: int
    type: EventType

    def to_dict(self) -> Dict[str, Any]:
        """イベントを辞書形式に変換"""
        return {
            "local_date_time": self.local_date_time.isoformat(),
            "station_code": self.station_code,
            "level": self.level,
            "type": self.type.value,
        }


@dataclass(frozen=True)
class RowFailure:
    """デコードできずに除外した行"""
    line_number: int
    kind: str
    message: str
    raw: Optional[str] = None


@dataclass
class StationDirectoryResult:
    """観測地点一覧のデコード結果"""
    stations: List[StationRecord] = field(default_factory=list)
    failures: List[RowFailure] = field(default_factory=list)

    def is_success(self) -> bool:
        return not self.failures


@dataclass
class TideTableResult:
    """潮位表のデコード結果"""
    hourly_levels: List[TidalEvent] = field(default_factory=list)
    extrema: List[TidalEvent] = field(default_factory=list)
    failures: List[RowFailure] = field(default_factory=list)
    row_count: int = 0

    def is_success(self) -> bool:
        return not self.failures

    @property
    def events(self) -> List[TidalEvent]:
        return self.hourly_levels + self.extrema

    def get_summary(self) -> Dict[str, Any]:
        """結果のサマリーを取得"""
        return {
            "row_count": self.row_count,
            "hourly_count": len(self.hourly_levels),
            "extrema_count": len(self.extrema),
            "failure_count": len(self.failures),
            "success": self.is_success(),
        }
