from keen.core.errors import AmbiguousMatch, EmptyDataset, InvalidRequest, KeenError, NotFound, ReadFailure
from keen.core.normalize import normalize_key
from keen.core.series import Series, SeriesPoint
from keen.core.series_engine import SeriesQueryEngine, query

__all__ = [
    "AmbiguousMatch",
    "EmptyDataset",
    "InvalidRequest",
    "KeenError",
    "NotFound",
    "ReadFailure",
    "normalize_key",
    "Series",
    "SeriesPoint",
    "SeriesQueryEngine",
    "query",
]
