# src/jma_tide_pipeline/parser/date_utils.py
from datetime import date, datetime, timedelta, timezone

from jma_tide_pipeline.domain.errors import InvalidDate
from jma_tide_pipeline.domain.models import RowDate, RowDateTime

DEFAULT_CENTURY = 2000
JST_OFFSET_HOURS = 9


def validate_century(century: int) -> int:
    """世紀の指定値を検証して返す（100の倍数のみ許可）"""
    if isinstance(century, bool) or not isinstance(century, int) or century % 100 != 0:
        raise ValueError(f"世紀は100の倍数で指定してください: {century!r}")
    return century


def resolve_year(two_digit_year: int, century: int = DEFAULT_CENTURY) -> int:
    """下2桁の年を西暦に変換する

    潮位表の年欄には世紀が含まれないため、呼び出し側が世紀を与える。

    Examples:
        >>> resolve_year(25)
        2025
        >>> resolve_year(99, century=1900)
        1999
    """
    if not 0 <= two_digit_year <= 99:
        raise InvalidDate(f"年（下2桁）が範囲外です: {two_digit_year}")
    validate_century(century)
    return century + two_digit_year


def build_row_date(two_digit_year: int, month: int, day: int, century: int = DEFAULT_CENTURY) -> RowDate:
    """年（下2桁）・月・日から RowDate を作成する

    Raises:
        InvalidDate: 月・日が暦の範囲外の場合
    """
    year = resolve_year(two_digit_year, century)
    try:
        date(year, month, day)
    except ValueError as e:
        raise InvalidDate(f"無効な日付です: {year}年{month}月{day}日") from e
    return RowDate(year=year, month=month, day=day)


def fixed_offset(utc_offset_hours: int = JST_OFFSET_HOURS) -> timezone:
    """固定オフセットのタイムゾーンを返す（ホストのローカルタイムゾーンは使わない）"""
    return timezone(timedelta(hours=utc_offset_hours))


def to_local_datetime(local: RowDateTime, utc_offset_hours: int = JST_OFFSET_HOURS) -> datetime:
    """現地日時をオフセット付きの datetime に変換する"""
    return datetime(
        local.year,
        local.month,
        local.day,
        local.hour,
        local.minute,
        tzinfo=fixed_offset(utc_offset_hours),
    )


def to_utc_datetime(local: RowDateTime, utc_offset_hours: int = JST_OFFSET_HOURS) -> datetime:
    """現地日時（UTC+offset）をUTCの datetime に変換する

    Examples:
        >>> to_utc_datetime(RowDateTime(2025, 1, 1, 3, 0)).isoformat()
        '2024-12-31T18:00:00+00:00'
    """
    return to_local_datetime(local, utc_offset_hours).astimezone(timezone.utc)
