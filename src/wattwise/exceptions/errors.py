"""Error hierarchy for usage ingestion and plan recommendation.

Every error carries a stable ``error_code`` and a ``context`` dict holding the
values that triggered it (month, counts, thresholds), so callers can build
their own user-facing message without re-deriving anything.
"""

from typing import Any


class WattwiseError(Exception):
    """Base class for all wattwise errors."""

    error_code = "WATTWISE_ERROR"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable view of the error.

        Returns
        -------
        dict[str, Any]
            ``detail``, ``error_code`` and ``context`` keys
        """
        return {"detail": self.message, "error_code": self.error_code, "context": self.context}


class MalformedInputError(WattwiseError):
    """Usage feed is not parseable or lacks required structure."""

    error_code = "MALFORMED_INPUT"


class UsageDataError(WattwiseError):
    """Usage data was parsed but cannot support a recommendation."""

    error_code = "USAGE_DATA_ERROR"


class NoValidReadingsError(UsageDataError):
    """No interval reading survived filtering."""

    error_code = "NO_VALID_READINGS"

    def __init__(self, message: str = "No valid usage readings found in usage feed"):
        super().__init__(message)


class InsufficientHistoryError(UsageDataError):
    """Fewer months of history than required."""

    error_code = "INSUFFICIENT_HISTORY"

    def __init__(self, months_found: int, months_required: int = 6):
        super().__init__(
            f"Insufficient data: found {months_found} months, "
            f"but at least {months_required} months are required",
            months_found=months_found,
            months_required=months_required,
        )
        self.months_found = months_found
        self.months_required = months_required


class NegativeUsageError(UsageDataError):
    """A month reports a negative total."""

    error_code = "NEGATIVE_USAGE"

    def __init__(self, month: str, total_kwh: float):
        super().__init__(
            f"Negative usage detected for {month}: {total_kwh} kWh",
            month=month,
            total_kwh=total_kwh,
        )
        self.month = month
        self.total_kwh = total_kwh


class ShortDateSpanError(UsageDataError):
    """Usage history covers too few days."""

    error_code = "SHORT_DATE_SPAN"

    def __init__(self, days_found: int, days_required: int = 180):
        super().__init__(
            f"Date range must cover at least {days_required} days, found {days_found}",
            days_found=days_found,
            days_required=days_required,
        )
        self.days_found = days_found
        self.days_required = days_required


class EmptyCatalogError(WattwiseError):
    """No candidate plans were supplied."""

    error_code = "EMPTY_CATALOG"

    def __init__(self, message: str = "No plans available to compare"):
        super().__init__(message)
