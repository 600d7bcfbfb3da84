"""Pydantic models for usage data, plans and recommendations."""

__all__ = [
    "IntervalReading",
    "MonthlyUsage",
    "DateRange",
    "ParsedUsageData",
    "FixedRate",
    "Tier",
    "TieredRate",
    "PeakWindow",
    "TouRate",
    "SeasonalMultipliers",
    "VariableRate",
    "SeasonalRate",
    "RateStructure",
    "PlanFees",
    "Plan",
    "Supplier",
    "PlanWithCosts",
    "CostScenario",
    "PlanWithScenarios",
    "UserPreferences",
    "CurrentPlanData",
    "ContractTerms",
    "Recommendation",
    "WarningAction",
    "ValidationResult",
    "CatalogSnapshot",
]

from wattwise.models.catalog import CatalogSnapshot
from wattwise.models.plan import (
    CostScenario,
    Plan,
    PlanFees,
    PlanWithCosts,
    PlanWithScenarios,
    Supplier,
)
from wattwise.models.preferences import ContractTerms, CurrentPlanData, UserPreferences
from wattwise.models.rates import (
    FixedRate,
    PeakWindow,
    RateStructure,
    SeasonalMultipliers,
    SeasonalRate,
    Tier,
    TieredRate,
    TouRate,
    VariableRate,
)
from wattwise.models.recommendation import Recommendation, ValidationResult, WarningAction
from wattwise.models.usage import DateRange, IntervalReading, MonthlyUsage, ParsedUsageData
