"""緯度・経度（度・分表記）のパーサー"""

import re

from jma_tide_pipeline.domain.errors import MalformedCoordinate
from jma_tide_pipeline.domain.models import Coordinate

# 度の区切り記号。地点一覧では「゜」が使われるが「°」「º」も受け付ける
DEGREE_SEPARATORS = ("゜", "°", "º")
# 分の記号
MINUTE_MARKS = ("'", "′", "’")

_DEGREES_PATTERN = re.compile(r"[0-9]+(?:\.0*)?")
_MINUTES_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?")


def parse_coordinate(text: str) -> Coordinate:
    """度・分表記の文字列を Coordinate に変換する

    Args:
        text: 例 "35゜30.1'"（前後の空白は任意）

    Returns:
        Coordinate: 度（整数）と分（実数）

    Raises:
        MalformedCoordinate: 区切り記号がない、値が空、数値でない、分が60以上の場合

    Examples:
        >>> parse_coordinate("35゜30'")
        Coordinate(degrees=35, minutes=30.0)
        >>> parse_coordinate(" 139゜ 45.5' ")
        Coordinate(degrees=139, minutes=45.5)
    """
    if text is None:
        raise MalformedCoordinate("座標文字列がありません")

    cleaned = text
    for mark in MINUTE_MARKS:
        cleaned = cleaned.replace(mark, "")

    separator = next((s for s in DEGREE_SEPARATORS if s in cleaned), None)
    if separator is None:
        raise MalformedCoordinate(f"度の区切り記号がありません: {text!r}")

    parts = [part.strip() for part in cleaned.split(separator)]
    if len(parts) != 2:
        raise MalformedCoordinate(f"度・分の2要素に分割できません: {text!r}")

    degrees_text, minutes_text = parts
    if not degrees_text or not minutes_text:
        raise MalformedCoordinate(f"度または分が空です: {text!r}")
    if not _DEGREES_PATTERN.fullmatch(degrees_text) or not _MINUTES_PATTERN.fullmatch(minutes_text):
        raise MalformedCoordinate(f"数値として解釈できません: {text!r}")

    minutes = float(minutes_text)
    if minutes >= 60:
        raise MalformedCoordinate(f"分が60以上です: {text!r}")

    return Coordinate(degrees=int(float(degrees_text)), minutes=minutes)
