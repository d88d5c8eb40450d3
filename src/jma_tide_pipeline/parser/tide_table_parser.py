"""潮位表（1地点1年分のテキスト）のパーサー"""

from typing import List, Optional, Tuple

from jma_tide_pipeline.domain.errors import ParseError
from jma_tide_pipeline.domain.models import (
    EventType,
    RowDateTime,
    RowFailure,
    TidalEvent,
    TideRow,
    TideTableResult,
)
from jma_tide_pipeline.logger.app_logger import get_logger
from jma_tide_pipeline.parser.date_utils import DEFAULT_CENTURY
from jma_tide_pipeline.parser.tide_row_parser import TideRowParser

logger = get_logger(__name__)


def expand_row(row: TideRow) -> Tuple[List[TidalEvent], List[TidalEvent]]:
    """デコード済みの1行を潮位イベントに展開する

    Returns:
        (毎時潮位イベント 0時〜23時の昇順, 満潮→干潮の枠順に並んだ満干潮イベント)
    """
    hourly = [
        TidalEvent(
            local_date_time=RowDateTime.from_date(row.date, hour),
            station_code=row.station_code,
            level=level,
            type=EventType.HOURLY,
        )
        for hour, level in enumerate(row.hourly_levels)
    ]

    extrema = []
    for event_type, items in ((EventType.HIGH, row.high_extrema), (EventType.LOW, row.low_extrema)):
        for item in items:
            extrema.append(
                TidalEvent(
                    local_date_time=RowDateTime.from_date(row.date, item.hour, item.minute),
                    station_code=row.station_code,
                    level=item.level,
                    type=event_type,
                )
            )
    return hourly, extrema


class TideTableParser:
    """潮位表全体のデコーダー

    空行は読み飛ばす。デコードできない行はイベントを出さずに failures へ記録し、
    次の行の処理を続ける（1行の不備で表全体を中断しない）。
    """

    def __init__(self, row_parser: Optional[TideRowParser] = None, century: int = DEFAULT_CENTURY):
        self.row_parser = row_parser or TideRowParser(century=century)

    def parse(self, table: str) -> TideTableResult:
        result = TideTableResult()

        for line_number, line in enumerate(table.splitlines(), start=1):
            if not line.strip():
                continue
            result.row_count += 1

            try:
                row = self.row_parser.parse(line)
            except ParseError as e:
                logger.warning(f"潮位表の{line_number}行目を除外しました: {e}")
                result.failures.append(
                    RowFailure(line_number=line_number, kind=e.kind, message=str(e), raw=line)
                )
                continue

            for issue in row.slot_issues:
                logger.warning(f"潮位表の{line_number}行目の満干潮スロットを除外しました: {issue}")

            hourly, extrema = expand_row(row)
            result.hourly_levels.extend(hourly)
            result.extrema.extend(extrema)

        logger.info(
            f"Tide table parsing completed. rows={result.row_count}, "
            f"hourly={len(result.hourly_levels)}, extrema={len(result.extrema)}, "
            f"failures={len(result.failures)}"
        )
        return result


def parse_tide_table(table: str, century: int = DEFAULT_CENTURY) -> TideTableResult:
    """潮位表テキストをパースするヘルパー関数"""
    return TideTableParser(century=century).parse(table)
