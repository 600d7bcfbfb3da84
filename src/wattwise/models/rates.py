"""Rate structure variants.

``RateStructure`` is a discriminated union keyed on ``type``. All rates are in
cents per kWh.
"""

import re
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator

from wattwise.config.constants import SUMMER_MONTHS
from wattwise.models.base import DomainModel

_CLOCK_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class FixedRate(DomainModel):
    """Single rate for every kWh. Falls back to the plan's rate when unset."""

    type: Literal["fixed"] = "fixed"
    rate_per_kwh: float | None = Field(None, ge=0)


class Tier(DomainModel):
    """Usage band priced at its own rate.

    Attributes
    ----------
    min_kwh : float
        Lower bound of the band
    max_kwh : float | None
        Upper bound of the band, None for the open-ended final band
    rate_per_kwh : float
        Rate for usage within the band
    """

    min_kwh: float = Field(..., ge=0)
    max_kwh: float | None = None
    rate_per_kwh: float = Field(..., ge=0)

    @model_validator(mode="after")
    def check_bounds(self) -> "Tier":
        if self.max_kwh is not None and self.max_kwh <= self.min_kwh:
            raise ValueError(f"Tier max_kwh ({self.max_kwh}) must exceed min_kwh ({self.min_kwh})")
        return self


class TieredRate(DomainModel):
    """Ascending, non-overlapping usage bands."""

    type: Literal["tiered"] = "tiered"
    tiers: list[Tier] = Field(..., min_length=1)

    @field_validator("tiers")
    @classmethod
    def check_tiers(cls, tiers: list[Tier]) -> list[Tier]:
        for previous, current in zip(tiers, tiers[1:]):
            if previous.max_kwh is None:
                raise ValueError("Only the final tier may be open-ended")
            if current.min_kwh < previous.max_kwh:
                raise ValueError(
                    f"Tiers overlap: {current.min_kwh} starts below previous max {previous.max_kwh}"
                )
        return tiers


class PeakWindow(DomainModel):
    """Daily peak window, ``HH:MM`` clock times."""

    start: str
    end: str
    rate_per_kwh: float = Field(..., ge=0)

    @field_validator("start", "end")
    @classmethod
    def check_clock(cls, value: str) -> str:
        if not _CLOCK_PATTERN.match(value):
            raise ValueError(f"Invalid clock time: {value!r} (expected HH:MM)")
        return value


class TouRate(DomainModel):
    """Time-of-use pricing.

    Monthly usage carries no hourly shape, so pricing falls back to the
    plan's flat rate. The windows are kept for presentation.
    """

    type: Literal["tou"] = "tou"
    peak_window: PeakWindow
    off_peak_rate: float = Field(..., ge=0)
    super_off_peak_rate: float | None = Field(None, ge=0)


class SeasonalMultipliers(DomainModel):
    summer: float = Field(1.0, gt=0)
    winter: float = Field(1.0, gt=0)


class VariableRate(DomainModel):
    """Base rate scaled by a seasonal multiplier and clamped to caps."""

    type: Literal["variable"] = "variable"
    base_rate: float = Field(..., ge=0)
    cap_min: float = Field(..., ge=0)
    cap_max: float = Field(..., ge=0)
    seasonal_multipliers: SeasonalMultipliers | None = None

    @model_validator(mode="after")
    def check_caps(self) -> "VariableRate":
        if self.cap_min > self.cap_max:
            raise ValueError(f"cap_min ({self.cap_min}) exceeds cap_max ({self.cap_max})")
        return self


class SeasonalRate(DomainModel):
    """Summer and winter rates selected by calendar month (1-12)."""

    type: Literal["seasonal"] = "seasonal"
    summer_rate: float = Field(..., ge=0)
    winter_rate: float = Field(..., ge=0)
    summer_months: frozenset[int] = SUMMER_MONTHS

    @field_validator("summer_months")
    @classmethod
    def check_months(cls, months: frozenset[int]) -> frozenset[int]:
        invalid = sorted(m for m in months if not 1 <= m <= 12)
        if invalid:
            raise ValueError(f"Invalid calendar months: {invalid}")
        return months


RateStructure = Annotated[
    FixedRate | TieredRate | TouRate | VariableRate | SeasonalRate,
    Field(discriminator="type"),
]
