"""Energy cost calculation for every supported rate structure.

All rates are cents/kWh; returned costs are dollars. Monthly figures are left
unrounded and only the annual aggregate is rounded, so rounding error does
not compound across months.
"""

import logging
from typing import assert_never

from wattwise.config.constants import SUMMER_MONTHS
from wattwise.models.plan import Plan
from wattwise.models.rates import FixedRate, SeasonalRate, TieredRate, TouRate, VariableRate
from wattwise.models.usage import MonthlyUsage, ParsedUsageData
from wattwise.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

CENTS_PER_DOLLAR = 100.0


def _flat_cost(rate_cents: float, kwh: float) -> float:
    return rate_cents / CENTS_PER_DOLLAR * kwh


def tiered_energy_cost(structure: TieredRate, kwh: float) -> float:
    """Partition usage across ascending bands.

    Each band charges the usage between the previous band's upper bound and
    its own; the final band absorbs everything above.

    Parameters
    ----------
    structure : TieredRate
        Tier definition
    kwh : float
        Monthly usage

    Returns
    -------
    float
        Energy cost in dollars
    """
    cost = 0.0
    charged = 0.0
    last_index = len(structure.tiers) - 1

    for index, tier in enumerate(structure.tiers):
        if charged >= kwh:
            break
        upper = kwh if index == last_index or tier.max_kwh is None else min(kwh, tier.max_kwh)
        band_kwh = max(upper - charged, 0.0)
        cost += _flat_cost(tier.rate_per_kwh, band_kwh)
        charged += band_kwh

    return cost


def variable_rate_for_month(structure: VariableRate, calendar_month: int) -> float:
    """Effective cents/kWh for a variable plan in the given month (1-12)."""
    rate = structure.base_rate
    if structure.seasonal_multipliers is not None:
        multipliers = structure.seasonal_multipliers
        rate *= multipliers.summer if calendar_month in SUMMER_MONTHS else multipliers.winter
    return max(structure.cap_min, min(structure.cap_max, rate))


def seasonal_rate_for_month(structure: SeasonalRate, calendar_month: int) -> float:
    """Summer or winter cents/kWh for the given month (1-12)."""
    if calendar_month in structure.summer_months:
        return structure.summer_rate
    return structure.winter_rate


def calculate_monthly_energy_cost(plan: Plan, month: MonthlyUsage) -> float:
    """Energy cost for one month of usage, fees excluded.

    Parameters
    ----------
    plan : Plan
        Plan to price
    month : MonthlyUsage
        Usage for the month

    Returns
    -------
    float
        Unrounded energy cost in dollars
    """
    kwh = month.total_kwh
    structure = plan.rate_structure

    match structure:
        case None:
            return _flat_cost(plan.rate, kwh)
        case FixedRate():
            rate = plan.rate if structure.rate_per_kwh is None else structure.rate_per_kwh
            return _flat_cost(rate, kwh)
        case TieredRate():
            return tiered_energy_cost(structure, kwh)
        case TouRate():
            # No hourly shape at monthly granularity: bill at the flat rate
            return _flat_cost(plan.rate, kwh)
        case VariableRate():
            return _flat_cost(variable_rate_for_month(structure, month.calendar_month), kwh)
        case SeasonalRate():
            return _flat_cost(seasonal_rate_for_month(structure, month.calendar_month), kwh)
        case _:
            assert_never(structure)


def calculate_monthly_costs(plan: Plan, usage: ParsedUsageData) -> list[dict]:
    """Per-month cost breakdown.

    Parameters
    ----------
    plan : Plan
        Plan to price
    usage : ParsedUsageData
        Usage history

    Returns
    -------
    list[dict]
        One dict per month with ``month``, ``kwh``, ``energy_cost``,
        ``fees`` and ``total_cost`` keys (unrounded dollars)
    """
    fees = plan.fees.monthly_total
    breakdown = []
    for month in usage.monthly_totals:
        energy_cost = calculate_monthly_energy_cost(plan, month)
        breakdown.append(
            {
                "month": month.month,
                "kwh": month.total_kwh,
                "energy_cost": energy_cost,
                "fees": fees,
                "total_cost": energy_cost + fees,
            }
        )
    return breakdown


def calculate_annual_cost(plan: Plan, usage: ParsedUsageData) -> float:
    """Total cost over every available month, rounded to cents.

    Fees are charged once per month regardless of usage.

    Parameters
    ----------
    plan : Plan
        Plan to price
    usage : ParsedUsageData
        Usage history

    Returns
    -------
    float
        Annual cost in dollars, 2 decimal places
    """
    total = sum(row["total_cost"] for row in calculate_monthly_costs(plan, usage))
    annual_cost = round_half_up(total)
    logger.debug(f"Plan {plan.id}: annual cost ${annual_cost:.2f}")
    return annual_cost
