"""Stay / switch-now / wait-and-switch cost projections."""

import logging
import re
from datetime import date, datetime, timezone

from wattwise.models.plan import CostScenario, PlanWithCosts, PlanWithScenarios
from wattwise.models.preferences import ContractTerms
from wattwise.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12
MIN_CONTRACT_YEAR = 1900
MAX_CONTRACT_YEAR = 2100

_CONTRACT_DATE_PATTERN = re.compile(r"^\s*(\d{1,2})/(\d{4})\s*$")


def parse_contract_date(value: str | None) -> date | None:
    """Parse an ``MM/YYYY`` contract end date.

    Parameters
    ----------
    value : str | None
        Date text

    Returns
    -------
    date | None
        First day of the end month, or None if the text is not a valid date
    """
    if not value:
        return None

    match = _CONTRACT_DATE_PATTERN.match(value)
    if match is None:
        return None

    month, year = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or not MIN_CONTRACT_YEAR <= year <= MAX_CONTRACT_YEAR:
        return None
    return date(year, month, 1)


def calculate_months_remaining(contract_end: date, now: datetime | None = None) -> int:
    """Whole months left on the contract.

    The contract runs out at the start of its end month, so the count covers
    the months strictly between the current month and the end month.

    Parameters
    ----------
    contract_end : date
        Contract end month
    now : datetime | None, optional
        Reference time, by default the current UTC time

    Returns
    -------
    int
        Months remaining, never negative
    """
    now = now or datetime.now(timezone.utc)
    months = (contract_end.year - now.year) * MONTHS_PER_YEAR + (contract_end.month - now.month) - 1
    return max(0, months)


def calculate_cost_scenarios(
    plan: PlanWithCosts,
    baseline_cost: float,
    terms: ContractTerms,
    now: datetime | None = None,
) -> list[CostScenario]:
    """Project the cost of staying, switching now and waiting to switch.

    Parameters
    ----------
    plan : PlanWithCosts
        Candidate plan with its annual cost
    baseline_cost : float
        Annual cost of staying on the current plan
    terms : ContractTerms
        Early termination fee and optional contract end date
    now : datetime | None, optional
        Reference time for the months-remaining calculation

    Returns
    -------
    list[CostScenario]
        stay-current and switch-now, plus wait-and-switch when the contract
        end date parses
    """
    fee = terms.early_termination_fee
    scenarios = [
        CostScenario(
            type="stay-current",
            description="Continue with your current plan",
            annual_cost=baseline_cost,
            net_savings=0.0,
        )
    ]

    switch_now_cost = round_half_up(plan.annual_cost + fee)
    scenarios.append(
        CostScenario(
            type="switch-now",
            description=f"Switch now (+${fee:g} fee)",
            annual_cost=switch_now_cost,
            net_savings=round_half_up(baseline_cost - switch_now_cost),
        )
    )

    contract_end = parse_contract_date(terms.contract_end_date)
    if contract_end is None:
        if terms.contract_end_date:
            logger.info(f"Ignoring unparseable contract end date {terms.contract_end_date!r}")
        return scenarios

    months_on_contract = min(calculate_months_remaining(contract_end, now), MONTHS_PER_YEAR)
    wait_cost = round_half_up(
        baseline_cost / MONTHS_PER_YEAR * months_on_contract
        + plan.annual_cost / MONTHS_PER_YEAR * (MONTHS_PER_YEAR - months_on_contract)
    )
    scenarios.append(
        CostScenario(
            type="wait-and-switch",
            description=f"Wait until {terms.contract_end_date.strip()}, then switch",
            annual_cost=wait_cost,
            net_savings=round_half_up(baseline_cost - wait_cost),
        )
    )
    return scenarios


def create_plan_with_scenarios(
    plan: PlanWithCosts,
    baseline_cost: float,
    terms: ContractTerms,
    now: datetime | None = None,
) -> PlanWithScenarios:
    """Attach scenarios and the cheapest of them to a priced plan."""
    scenarios = calculate_cost_scenarios(plan, baseline_cost, terms, now)
    recommended = min(scenarios, key=lambda s: s.annual_cost)
    return PlanWithScenarios.model_validate(
        {**dict(plan), "scenarios": scenarios, "recommended_scenario": recommended}
    )
