"""Exception types raised by wattwise."""

__all__ = [
    "WattwiseError",
    "MalformedInputError",
    "UsageDataError",
    "NoValidReadingsError",
    "InsufficientHistoryError",
    "NegativeUsageError",
    "ShortDateSpanError",
    "EmptyCatalogError",
]

from wattwise.exceptions.errors import (
    EmptyCatalogError,
    InsufficientHistoryError,
    MalformedInputError,
    NegativeUsageError,
    NoValidReadingsError,
    ShortDateSpanError,
    UsageDataError,
    WattwiseError,
)
