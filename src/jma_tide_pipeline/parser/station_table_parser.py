"""潮位表掲載地点一覧（HTML）のパーサー"""

import uuid
from typing import Callable, List, Optional, Set

from bs4 import Tag

from jma_tide_pipeline.domain.errors import MalformedDirectoryRow, ParseError
from jma_tide_pipeline.domain.models import RowFailure, StationDirectoryResult, StationRecord
from jma_tide_pipeline.logger.app_logger import get_logger
from jma_tide_pipeline.parser.coordinate_parser import parse_coordinate
from jma_tide_pipeline.parser.table_parser import TableParser

logger = get_logger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class StationTableParser(TableParser):
    """観測地点一覧テーブルのパーサー

    1行目はヘッダーとして読み飛ばす。セルが2未満の行（区切り行など）は黙って無視し、
    それ以外で解釈できない行は failures に記録して除外する（他の行の処理は継続）。
    """

    TABLE_SELECTORS = ['table.data2_s', 'table.data', 'table']

    # セルのインデックス
    COLUMN_MAPPING = {
        0: 'jma_id',          # 番号
        1: 'station_code',    # 地点記号
        2: 'station_name',    # 地点名
        3: 'latitude',        # 緯度
        4: 'longitude',       # 経度
    }
    MIN_CELLS = 2
    REQUIRED_CELLS = len(COLUMN_MAPPING)
    STATION_CODE_LENGTH = (2, 4)

    def __init__(self, id_factory: Optional[Callable[[], str]] = None):
        self._id_factory = id_factory or _new_id

    def can_parse(self, table: Tag) -> bool:
        """行（tr）を持つテーブルか判定する。行ごとの妥当性は parse_table で扱う"""
        if not table:
            return False
        return table.find('tr') is not None

    def parse_table(self, table: Tag) -> StationDirectoryResult:
        """テーブルをパースして観測地点の一覧を返す

        Args:
            table: BeautifulSoupのテーブルオブジェクト

        Returns:
            StationDirectoryResult: 地点レコード（元の行順）と除外行
        """
        result = StationDirectoryResult()
        seen_codes = set()

        for index, row in enumerate(table.find_all('tr')):
            if index == 0:
                continue

            cells = row.find_all('td')
            if len(cells) < self.MIN_CELLS:
                continue

            texts = [cell.get_text(strip=True) for cell in cells]
            try:
                station = self._parse_row(texts, seen_codes)
            except ParseError as e:
                logger.warning(f"地点一覧の{index}行目を除外しました: {e}")
                result.failures.append(
                    RowFailure(line_number=index, kind=e.kind, message=str(e), raw='|'.join(texts))
                )
                continue

            seen_codes.add(station.station_code)
            result.stations.append(station)

        logger.info(
            f"Station table parsing completed. Parsed {len(result.stations)} stations, "
            f"skipped {len(result.failures)} rows."
        )
        return result

    def _parse_row(self, texts: List[str], seen_codes: Set[str]) -> StationRecord:
        if len(texts) < self.REQUIRED_CELLS:
            raise MalformedDirectoryRow(
                f"セル数が不足しています（{len(texts)} < {self.REQUIRED_CELLS}）"
            )

        jma_id, station_code, station_name, latitude_text, longitude_text = texts[:self.REQUIRED_CELLS]
        min_len, max_len = self.STATION_CODE_LENGTH
        if not min_len <= len(station_code) <= max_len:
            raise MalformedDirectoryRow(f"地点記号が不正です: {station_code!r}")
        if station_code in seen_codes:
            raise MalformedDirectoryRow(f"地点記号が重複しています: {station_code}")

        latitude = parse_coordinate(latitude_text)
        longitude = parse_coordinate(longitude_text)

        # IDは出力する行にだけ割り当てる
        return StationRecord(
            id=self._id_factory(),
            jma_id=jma_id,
            station_code=station_code,
            station_name=station_name,
            latitude=latitude,
            longitude=longitude,
        )


def parse_station_directory(html: str, id_factory: Optional[Callable[[], str]] = None) -> StationDirectoryResult:
    """地点一覧HTMLをパースするヘルパー関数"""
    return StationTableParser(id_factory=id_factory).parse(html)
