"""
インフラ層のデータアクセスインターフェース

このモジュールは、デコード結果の保存先（シンク）のインターフェースを定義します。
責務: 観測地点と潮位イベントの永続化。主キー・外部キーの割り当てはシンク側が行う。
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from jma_tide_pipeline.domain.models import EventType, StationRecord, TidalEvent


class ITideRepository(ABC):
    """潮位データリポジトリのインターフェース"""

    @abstractmethod
    def create_tables(self) -> None:
        """テーブルがなければ作成"""
        pass

    @abstractmethod
    def insert_stations(self, stations: Iterable[StationRecord]) -> int:
        """観測地点を保存し、件数を返す"""
        pass

    @abstractmethod
    def get_stations(self) -> List[StationRecord]:
        """保存済みの観測地点を取得"""
        pass

    @abstractmethod
    def insert_tidal_events(self, events: Iterable[TidalEvent], utc_offset_hours: int) -> int:
        """潮位イベントを保存し、件数を返す"""
        pass

    @abstractmethod
    def count_events(self, event_type: Optional[EventType] = None) -> int:
        """保存済みイベント数を取得"""
        pass

    @abstractmethod
    def close(self) -> None:
        """接続を閉じる"""
        pass
