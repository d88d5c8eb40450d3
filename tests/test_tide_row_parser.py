import pytest

from jma_tide_pipeline.domain.errors import InvalidDate, MalformedTideRow
from jma_tide_pipeline.domain.models import Extremum, RowDate
from jma_tide_pipeline.parser.tide_row_parser import (
    FULL_ROW_LENGTH,
    HOURLY_FIELDS,
    MIN_ROW_LENGTH,
    TideRowParser,
    parse_int_field,
    parse_station_code,
    parse_tide_row,
)


def test_parse_row_decodes_all_fields(row_factory):
    row = parse_tide_row(row_factory())

    assert row.date == RowDate(2025, 1, 1)
    assert row.station_code == "TK"
    assert row.hourly_levels == list(range(100, 124))
    assert row.high_extrema == [Extremum(5, 12, 180), Extremum(17, 40, 172)]
    assert row.low_extrema == [Extremum(11, 3, 20), Extremum(23, 55, -4)]
    assert row.slot_issues == []


# index i の値が i 時の潮位に対応する
def test_hourly_levels_map_to_clock_hours(row_factory):
    hourly = [h * 10 - 50 for h in range(24)]
    row = parse_tide_row(row_factory(hourly=hourly))

    assert len(row.hourly_levels) == 24
    for hour, level in enumerate(row.hourly_levels):
        assert level == hour * 10 - 50


def test_field_table_covers_hourly_range():
    assert len(HOURLY_FIELDS) == 24
    assert HOURLY_FIELDS[0].offset == 0
    assert HOURLY_FIELDS[-1].end == 72


def test_zero_padded_fields_are_accepted(row_factory):
    text = row_factory()
    # 0時の潮位を "007"、満潮1枠目を "0930105" に置き換える
    text = "007" + text[3:80] + "0930105" + text[87:]
    row = parse_tide_row(text)

    assert row.hourly_levels[0] == 7
    assert row.high_extrema[0] == Extremum(hour=9, minute=30, level=105)


def test_missing_slots_are_excluded(row_factory):
    row = parse_tide_row(row_factory(highs=[(3, 0, 150)], lows=[]))

    assert row.high_extrema == [Extremum(3, 0, 150)]
    assert row.low_extrema == []
    assert row.slot_issues == []


# 時が 99 の枠は分・潮位の内容に関わらず除外する
def test_sentinel_slot_ignores_other_fields(row_factory):
    text = row_factory(highs=[(3, 0, 150)])
    text = text[:87] + "99xx???" + text[94:]
    row = parse_tide_row(text)

    assert row.high_extrema == [Extremum(3, 0, 150)]
    assert row.slot_issues == []


def test_bad_slot_is_isolated(row_factory):
    text = row_factory()
    text = text[:80] + " 5ab180" + text[87:]
    row = parse_tide_row(text)

    assert row.high_extrema == [Extremum(17, 40, 172)]
    assert len(row.low_extrema) == 2
    assert len(row.slot_issues) == 1
    assert row.slot_issues[0].startswith("high[0]")


def test_out_of_range_slot_time_is_isolated(row_factory):
    row = parse_tide_row(row_factory(lows=[(25, 0, 10), (4, 61, 10), (6, 0, 10)]))

    assert row.low_extrema == [Extremum(6, 0, 10)]
    assert len(row.slot_issues) == 2


# 108桁（干潮欄なし）の行も有効
def test_row_without_low_extrema_columns(row_factory):
    text = row_factory()[:MIN_ROW_LENGTH]
    row = parse_tide_row(text)

    assert row.low_extrema == []
    assert len(row.high_extrema) == 2


def test_truncated_low_slot_is_reported(row_factory):
    text = row_factory()[:MIN_ROW_LENGTH + 3]
    row = parse_tide_row(text)

    assert row.low_extrema == []
    assert len(row.slot_issues) == 1


def test_trailing_newline_is_ignored(row_factory):
    text = row_factory() + "\r\n"
    assert len(text.rstrip("\r\n")) == FULL_ROW_LENGTH
    assert parse_tide_row(text).station_code == "TK"


def test_short_row_is_malformed(row_factory):
    with pytest.raises(MalformedTideRow):
        parse_tide_row(row_factory()[:MIN_ROW_LENGTH - 1])


@pytest.mark.parametrize(
    "start,replacement",
    [
        (0, " x1"),    # 毎時潮位
        (69, "1 2"),   # 23時の潮位（途中に空白）
        (72, "2a"),    # 年
        (74, "  "),    # 月が空
        (76, "+1"),    # 日
        (78, "t "),    # 地点記号
    ],
)
def test_shared_field_failure_invalidates_row(row_factory, start, replacement):
    text = row_factory()
    text = text[:start] + replacement + text[start + len(replacement):]
    with pytest.raises(MalformedTideRow):
        parse_tide_row(text)


@pytest.mark.parametrize("mm,dd", [(13, 1), (0, 1), (2, 30), (4, 31), (1, 0)])
def test_invalid_calendar_date(row_factory, mm, dd):
    with pytest.raises(InvalidDate):
        parse_tide_row(row_factory(mm=mm, dd=dd))


def test_century_is_supplied_by_caller(row_factory):
    row = TideRowParser(century=1900).parse(row_factory(yy=99, mm=12, dd=31))
    assert row.date == RowDate(1999, 12, 31)


# 不正な世紀は行のデコード前、生成時に ValueError になる
def test_bad_century_is_rejected_at_construction():
    with pytest.raises(ValueError):
        TideRowParser(century=1950)


@pytest.mark.parametrize("text,expected", [("  5", 5), ("-12", -12), ("007", 7), (" -4", -4)])
def test_parse_int_field(text, expected):
    assert parse_int_field(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "+12", "1_0", "1.5", "a12", "12\n", "\t12", "１２", "٣"])
def test_parse_int_field_rejects(text):
    with pytest.raises(MalformedTideRow):
        parse_int_field(text)


@pytest.mark.parametrize("text", ["tk", "T ", "ＴＫ", "T\n"])
def test_parse_station_code_rejects(text):
    with pytest.raises(MalformedTideRow):
        parse_station_code(text)


def test_full_width_digit_in_hourly_field_rejects_row(row_factory):
    text = row_factory()
    text = "１２３" + text[3:]

    with pytest.raises(MalformedTideRow):
        parse_tide_row(text)
