"""潮位表テキスト（固定長フォーマット）1行分のパーサー

1行 = 1地点1日。各項目は行内の決まった位置・桁数を占める::

    [  0,  72)  毎時潮位 3桁 x 24（0時〜23時, cm）
    [ 72,  78)  年（下2桁）・月・日 各2桁
    [ 78,  80)  地点記号 2桁
    [ 80, 108)  満潮 7桁 x 4（時2桁・分2桁・潮位3桁）
    [108, 136)  干潮 7桁 x 4（同上）

満干潮が4回に満たない日は、残りの枠の時が 99 で埋められる。
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from jma_tide_pipeline.domain.errors import MalformedTideRow, ParseError
from jma_tide_pipeline.domain.models import Extremum, TideRow
from jma_tide_pipeline.parser.date_utils import DEFAULT_CENTURY, build_row_date, validate_century

MIN_ROW_LENGTH = 108
FULL_ROW_LENGTH = 136
HOURS_PER_DAY = 24
MISSING_HOUR = 99

# 右詰め・空白またはゼロ埋めの整数（ASCII数字と負号のみ）
_INTEGER_PATTERN = re.compile(r" *-?[0-9]+")
_STATION_CODE_PATTERN = re.compile(r"[0-9A-Z]{2}")


def parse_int_field(text: str) -> int:
    """固定長の数値欄を整数に変換する"""
    if not _INTEGER_PATTERN.fullmatch(text):
        raise MalformedTideRow(f"数値欄に数字以外が含まれています: {text!r}")
    return int(text)


def parse_station_code(text: str) -> str:
    if not _STATION_CODE_PATTERN.fullmatch(text):
        raise MalformedTideRow(f"地点記号が不正です: {text!r}")
    return text


@dataclass(frozen=True)
class FieldSpec:
    """固定長フォーマットの1項目（開始位置・桁数・変換関数）"""
    name: str
    offset: int
    length: int
    decode: Callable[[str], Any] = parse_int_field

    @property
    def end(self) -> int:
        return self.offset + self.length

    def extract(self, row: str) -> str:
        return row[self.offset:self.end]

    def read(self, row: str) -> Any:
        text = self.extract(row)
        if len(text) < self.length:
            raise MalformedTideRow(f"{self.name} が行末で途切れています（{self.offset}桁目〜）")
        try:
            return self.decode(text)
        except ParseError as e:
            raise type(e)(f"{self.name}: {e}") from e

    def shifted(self, base: int) -> "FieldSpec":
        """基準位置だけずらした項目を返す（満干潮スロット用）"""
        return FieldSpec(self.name, base + self.offset, self.length, self.decode)


HOURLY_FIELDS: Tuple[FieldSpec, ...] = tuple(
    FieldSpec(f"hourly_{hour:02d}", hour * 3, 3) for hour in range(HOURS_PER_DAY)
)
YEAR_FIELD = FieldSpec("year", 72, 2)
MONTH_FIELD = FieldSpec("month", 74, 2)
DAY_FIELD = FieldSpec("day", 76, 2)
STATION_CODE_FIELD = FieldSpec("station_code", 78, 2, parse_station_code)

HIGH_EXTREMA_OFFSET = 80
LOW_EXTREMA_OFFSET = 108
EXTREMA_SLOTS = 4
SLOT_WIDTH = 7
# スロット内の相対位置
SLOT_HOUR = FieldSpec("hour", 0, 2)
SLOT_MINUTE = FieldSpec("minute", 2, 2)
SLOT_LEVEL = FieldSpec("level", 4, 3)


class TideRowParser:
    """潮位表1行のデコーダー

    日付・地点記号・毎時潮位の欄が壊れている場合は行全体を MalformedTideRow
    （日付が暦にない場合は InvalidDate）として送出する。
    満干潮スロットの不備はそのスロットだけを除外し、理由を slot_issues に残す。
    """

    def __init__(self, century: int = DEFAULT_CENTURY):
        # 不正な世紀は行ごとではなく生成時に弾く
        self.century = validate_century(century)

    def parse(self, row: str) -> TideRow:
        row = row.rstrip("\r\n")
        if len(row) < MIN_ROW_LENGTH:
            raise MalformedTideRow(f"行の長さが不足しています（{len(row)} < {MIN_ROW_LENGTH}）")

        hourly_levels = [spec.read(row) for spec in HOURLY_FIELDS]
        row_date = build_row_date(
            YEAR_FIELD.read(row),
            MONTH_FIELD.read(row),
            DAY_FIELD.read(row),
            century=self.century,
        )
        station_code = STATION_CODE_FIELD.read(row)

        slot_issues: List[str] = []
        high_extrema = self._parse_extrema(row, HIGH_EXTREMA_OFFSET, "high", slot_issues)
        low_extrema = self._parse_extrema(row, LOW_EXTREMA_OFFSET, "low", slot_issues)

        return TideRow(
            date=row_date,
            station_code=station_code,
            hourly_levels=hourly_levels,
            high_extrema=high_extrema,
            low_extrema=low_extrema,
            slot_issues=slot_issues,
        )

    def _parse_extrema(self, row: str, start: int, label: str, issues: List[str]) -> List[Extremum]:
        extrema = []
        for slot in range(EXTREMA_SLOTS):
            base = start + slot * SLOT_WIDTH
            if base >= len(row):
                # 干潮欄を持たない短い行
                break
            try:
                extremum = self._parse_slot(row, base)
            except ParseError as e:
                issues.append(f"{label}[{slot}]: {e}")
                continue
            if extremum is not None:
                extrema.append(extremum)
        return extrema

    def _parse_slot(self, row: str, base: int) -> Optional[Extremum]:
        hour = SLOT_HOUR.shifted(base).read(row)
        if hour == MISSING_HOUR:
            return None
        minute = SLOT_MINUTE.shifted(base).read(row)
        level = SLOT_LEVEL.shifted(base).read(row)
        if not 0 <= hour <= 23 or not 0 <= minute <= 59:
            raise MalformedTideRow(f"時刻が範囲外です: {hour}:{minute}")
        return Extremum(hour=hour, minute=minute, level=level)


def parse_tide_row(row: str, century: int = DEFAULT_CENTURY) -> TideRow:
    """潮位表1行をパースするヘルパー関数"""
    return TideRowParser(century=century).parse(row)
