from .base.cursor import EasyCursor, FetchMode
from .base.session import EasySession
from .errors import (
    EasySQLError,
    EmptyStatement,
    ExecutionFailure,
    MalformedCondition,
    MissingWhereClause,
    MixedMarkers,
    UnreadableStatement,
    UnresolvedBinding,
    UnsupportedCommand,
    UnsupportedCondition,
    UnsupportedFetchMode,
)

__all__ = [
    "EasySession",
    "EasyCursor",
    "FetchMode",
    "EasySQLError",
    "EmptyStatement",
    "ExecutionFailure",
    "MalformedCondition",
    "MissingWhereClause",
    "MixedMarkers",
    "UnreadableStatement",
    "UnresolvedBinding",
    "UnsupportedCommand",
    "UnsupportedCondition",
    "UnsupportedFetchMode",
]

__version__ = '0.1.0'
