"""Plan catalog models and their derived, per-request views."""

from typing import Literal

from pydantic import Field

from wattwise.config.constants import DEFAULT_SIGNUP_URL
from wattwise.models.base import DomainModel
from wattwise.models.rates import RateStructure

ScenarioType = Literal["stay-current", "switch-now", "wait-and-switch"]


class PlanFees(DomainModel):
    """Monthly fixed fees in dollars, charged regardless of usage."""

    delivery: float = Field(0.0, ge=0)
    admin: float = Field(0.0, ge=0)

    @property
    def monthly_total(self) -> float:
        return self.delivery + self.admin


class Plan(DomainModel):
    """Candidate energy plan.

    Attributes
    ----------
    id : str
        Plan identifier
    supplier_id : str
        Supplier identifier, used for rating lookup
    supplier_name : str
        Supplier display name
    name : str
        Plan display name
    rate : float
        Flat rate in cents/kWh, also the fallback for TOU plans
    renewable_percentage : float
        Renewable share, 0-100
    fees : PlanFees
        Monthly delivery and admin fees
    rate_structure : RateStructure | None
        Advanced pricing; flat pricing when absent
    """

    id: str
    supplier_id: str
    supplier_name: str
    name: str
    rate: float = Field(..., ge=0, description="Flat rate in cents/kWh")
    renewable_percentage: float = Field(0.0, ge=0, le=100)
    fees: PlanFees = PlanFees()
    rate_structure: RateStructure | None = None

    @property
    def is_flat(self) -> bool:
        """True when priced at a single rate for every kWh."""
        return self.rate_structure is None or self.rate_structure.type == "fixed"


class Supplier(DomainModel):
    """Supplier rating entry."""

    id: str
    name: str | None = None
    rating: float = Field(..., ge=0, le=5)
    signup_url: str = DEFAULT_SIGNUP_URL


class PlanWithCosts(Plan):
    """Plan priced against one usage history.

    Attributes
    ----------
    annual_cost : float
        Cost over the available months, dollars
    savings : float
        Annual savings versus the current plan (negative costs more)
    score : float
        Preference-weighted score used for ranking
    """

    annual_cost: float
    savings: float
    score: float = 0.0


class CostScenario(DomainModel):
    """One way of moving (or not) to a candidate plan."""

    type: ScenarioType
    description: str
    annual_cost: float
    net_savings: float


class PlanWithScenarios(PlanWithCosts):
    """Priced plan annotated with stay / switch / wait scenarios."""

    scenarios: list[CostScenario] = Field(..., min_length=2, max_length=3)
    recommended_scenario: CostScenario
