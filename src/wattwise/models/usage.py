"""Usage data models produced by the interval parser."""

from datetime import date, datetime
from typing import Literal

from pydantic import Field, field_validator, model_validator

from wattwise.config.constants import MIN_MONTHS_OF_HISTORY
from wattwise.models.base import DomainModel

DataQuality = Literal["good", "fair", "poor"]


class IntervalReading(DomainModel):
    """Single interval reading.

    Attributes
    ----------
    timestamp : datetime
        Start of the interval (UTC)
    kwh : float
        Energy used during the interval
    """

    timestamp: datetime
    kwh: float


class MonthlyUsage(DomainModel):
    """Usage aggregated over one calendar month.

    Attributes
    ----------
    month : str
        Month key in ``YYYY-MM`` form
    total_kwh : float
        Total usage for the month
    days_with_data : int
        Distinct calendar days that contributed readings
    average_daily : float
        ``total_kwh / days_with_data``
    """

    month: str = Field(..., pattern=r"^\d{4}-(0[1-9]|1[0-2])$", description="YYYY-MM")
    total_kwh: float = Field(..., description="Total kWh for the month")
    days_with_data: int = Field(0, ge=0, description="Distinct days with readings")
    average_daily: float = Field(0.0, description="Average kWh per day with data")

    @property
    def calendar_month(self) -> int:
        """Calendar month number, 1-12."""
        return int(self.month[5:7])

    @property
    def year(self) -> int:
        return int(self.month[:4])


class DateRange(DomainModel):
    """Inclusive date range covered by the usage feed."""

    start: date
    end: date

    @property
    def span_days(self) -> int:
        """Number of days between start and end."""
        return (self.end - self.start).days


class ParsedUsageData(DomainModel):
    """Monthly usage history ready for validation and pricing.

    Attributes
    ----------
    monthly_totals : list[MonthlyUsage]
        Chronological, unique monthly aggregates
    data_quality : str
        Completeness tier (good, fair or poor)
    date_range : DateRange
        First and last reading dates
    """

    monthly_totals: list[MonthlyUsage]
    data_quality: DataQuality
    date_range: DateRange

    @field_validator("monthly_totals")
    @classmethod
    def check_months(cls, value: list[MonthlyUsage]) -> list[MonthlyUsage]:
        """Require enough months, in chronological order, without duplicates."""
        if len(value) < MIN_MONTHS_OF_HISTORY:
            raise ValueError(
                f"At least {MIN_MONTHS_OF_HISTORY} months of data are required, got {len(value)}"
            )
        keys = [m.month for m in value]
        if keys != sorted(set(keys)):
            raise ValueError("monthly_totals must be chronological with unique months")
        return value

    @model_validator(mode="after")
    def check_date_range(self) -> "ParsedUsageData":
        if self.date_range.end < self.date_range.start:
            raise ValueError("date_range end precedes start")
        return self

    @property
    def total_kwh(self) -> float:
        return sum(m.total_kwh for m in self.monthly_totals)
