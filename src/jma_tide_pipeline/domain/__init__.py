from .errors import (
    InvalidDate,
    MalformedCoordinate,
    MalformedDirectoryRow,
    MalformedTideRow,
    ParseError,
)
from .models import (
    Coordinate,
    EventType,
    Extremum,
    RowDate,
    RowDateTime,
    RowFailure,
    StationDirectoryResult,
    StationRecord,
    TidalEvent,
    TideRow,
    TideTableResult,
)

__all__ = [
    "Coordinate",
    "EventType",
    "Extremum",
    "InvalidDate",
    "MalformedCoordinate",
    "MalformedDirectoryRow",
    "MalformedTideRow",
    "ParseError",
    "RowDate",
    "RowDateTime",
    "RowFailure",
    "StationDirectoryResult",
    "StationRecord",
    "TidalEvent",
    "TideRow",
    "TideTableResult",
]
