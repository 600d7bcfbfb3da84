"""Caller-supplied preferences and current contract details."""

from typing import Literal

from pydantic import Field, model_validator

from wattwise.config.constants import MAX_EARLY_TERMINATION_FEE
from wattwise.models.base import DomainModel

PRIORITY_TOTAL = 100.0
PRIORITY_TOLERANCE = 0.01


class UserPreferences(DomainModel):
    """How the customer weighs cost against renewable content.

    Attributes
    ----------
    cost_priority : float
        Weight of savings, 0-100
    renewable_priority : float
        Weight of renewable share, 0-100
    supplier_diversity : str | None
        ``prefer-best`` disables the diversity constraint
    price_stability : str | None
        Nudges scores towards or away from flat-priced plans
    plan_complexity : str | None
        Nudges scores towards or away from simple plans
    """

    cost_priority: float = Field(..., ge=0, le=100)
    renewable_priority: float = Field(..., ge=0, le=100)
    supplier_diversity: Literal["prefer-variety", "prefer-best", "no-preference"] | None = None
    price_stability: Literal["fixed-only", "variable-ok", "no-preference"] | None = None
    plan_complexity: Literal["simple-only", "complex-ok", "no-preference"] | None = None

    @model_validator(mode="after")
    def check_total(self) -> "UserPreferences":
        total = self.cost_priority + self.renewable_priority
        if abs(total - PRIORITY_TOTAL) > PRIORITY_TOLERANCE:
            raise ValueError(f"Cost and renewable priorities must sum to 100, got {total}")
        return self

    @property
    def cost_weight(self) -> float:
        return self.cost_priority / PRIORITY_TOTAL

    @property
    def renewable_weight(self) -> float:
        return self.renewable_priority / PRIORITY_TOTAL


class CurrentPlanData(DomainModel):
    """The customer's existing plan.

    ``rate`` is in cents/kWh; ``contract_end_date`` uses ``MM/YYYY`` and is
    kept as text, since an unparseable date only drops the wait scenario.
    """

    supplier: str = ""
    rate: float = Field(..., ge=0)
    contract_end_date: str | None = None
    contract_length: int | None = Field(None, ge=0)
    early_termination_fee: float | None = Field(None, ge=0, le=MAX_EARLY_TERMINATION_FEE)


class ContractTerms(DomainModel):
    """Terms that shape the switching scenarios."""

    early_termination_fee: float = Field(..., ge=0, le=MAX_EARLY_TERMINATION_FEE)
    contract_end_date: str | None = None
