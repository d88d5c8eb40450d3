# jma_tide_pipeline/parser/__init__.py
from .coordinate_parser import parse_coordinate
from .date_utils import resolve_year, to_local_datetime, to_utc_datetime, validate_century
from .station_table_parser import StationTableParser, parse_station_directory
from .table_parser import TableParser
from .tide_row_parser import TideRowParser, parse_tide_row
from .tide_table_parser import TideTableParser, expand_row, parse_tide_table

__all__ = [
    "StationTableParser",
    "TableParser",
    "TideRowParser",
    "TideTableParser",
    "expand_row",
    "parse_coordinate",
    "parse_station_directory",
    "parse_tide_row",
    "parse_tide_table",
    "resolve_year",
    "to_local_datetime",
    "to_utc_datetime",
    "validate_century",
]
