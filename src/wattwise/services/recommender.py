"""Plan scoring, diversity-constrained selection and explanations."""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from wattwise.config.constants import (
    DEFAULT_EARLY_TERMINATION_FEE,
    DEFAULT_SIGNUP_URL,
    DEFAULT_SUPPLIER_RATING,
    DIVERSE_RATE_DELTA,
    DIVERSE_RENEWABLE_DELTA,
    MAX_SUPPLIER_RATING,
    RECOMMENDATION_COUNT,
    SAVINGS_NORMALIZATION,
    SUPPLIER_RATING_WEIGHT,
)
from wattwise.exceptions.errors import EmptyCatalogError
from wattwise.models.plan import Plan, PlanWithCosts, Supplier
from wattwise.models.preferences import ContractTerms, CurrentPlanData, UserPreferences
from wattwise.models.recommendation import Recommendation
from wattwise.models.usage import ParsedUsageData
from wattwise.services.calculator import calculate_annual_cost
from wattwise.services.scenarios import create_plan_with_scenarios
from wattwise.services.validation import calculate_data_quality_score, confidence_from_score
from wattwise.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

# Preference refinements: (normal weight, weight when cost dominates)
PRICE_STABILITY_WEIGHTS = (0.03, 0.005)
PLAN_COMPLEXITY_WEIGHTS = (0.02, 0.005)
COST_DOMINANT_WEIGHT = 0.8

RATE_STRUCTURE_CLAUSES = {
    "tiered": "Tiered pricing - lower rates for lower usage",
    "tou": "Time-of-use pricing - lower rates during off-peak hours",
    "variable": "Variable pricing - rates may change with market conditions",
    "seasonal": "Seasonal pricing - different rates for summer and winter",
}


def _current_plan_as(candidate: Plan, current_plan: CurrentPlanData) -> Plan:
    # The customer's real fees are unknown, so the candidate's fees stand in
    return candidate.model_copy(update={"rate": current_plan.rate, "rate_structure": None})


def calculate_baseline_cost(
    current_plan: CurrentPlanData, candidate: Plan, usage: ParsedUsageData
) -> float:
    """Annual cost of the current plan, priced with the candidate's fees."""
    return calculate_annual_cost(_current_plan_as(candidate, current_plan), usage)


def calculate_savings(
    current_plan: CurrentPlanData, candidate: Plan, usage: ParsedUsageData
) -> float:
    """Annual savings of ``candidate`` over the current plan.

    The current plan is modelled as a flat-rate plan at the customer's rate
    carrying the candidate's fee schedule. Positive means the candidate is
    cheaper.

    Parameters
    ----------
    current_plan : CurrentPlanData
        Customer's current plan
    candidate : Plan
        Plan being compared
    usage : ParsedUsageData
        Usage history

    Returns
    -------
    float
        Savings in dollars, 2 decimal places
    """
    baseline = calculate_baseline_cost(current_plan, candidate, usage)
    return round_half_up(baseline - calculate_annual_cost(candidate, usage))


def _find_supplier(supplier_id: str, suppliers: Iterable[Supplier]) -> Supplier | None:
    for supplier in suppliers:
        if supplier.id == supplier_id:
            return supplier
    return None


def _supplier_rating(supplier_id: str, suppliers: Iterable[Supplier]) -> float:
    supplier = _find_supplier(supplier_id, suppliers)
    return DEFAULT_SUPPLIER_RATING if supplier is None else supplier.rating


def supplier_signup_url(supplier_id: str, suppliers: Iterable[Supplier]) -> str:
    """Signup link for a supplier, or the generic comparison site when unrated."""
    supplier = _find_supplier(supplier_id, suppliers)
    return DEFAULT_SIGNUP_URL if supplier is None else supplier.signup_url


def _refinement_score(plan: Plan, preferences: UserPreferences) -> float:
    cost_dominant = preferences.cost_weight >= COST_DOMINANT_WEIGHT
    score = 0.0

    stability_weight = PRICE_STABILITY_WEIGHTS[cost_dominant]
    if preferences.price_stability == "fixed-only":
        score += stability_weight if plan.is_flat else -stability_weight
    elif preferences.price_stability == "variable-ok":
        score += stability_weight * 0.5

    complexity_weight = PLAN_COMPLEXITY_WEIGHTS[cost_dominant]
    if preferences.plan_complexity == "simple-only":
        score += complexity_weight if plan.is_flat else -complexity_weight
    elif preferences.plan_complexity == "complex-ok":
        score += complexity_weight * 0.5

    return score


def calculate_plan_score(
    plan: PlanWithCosts,
    preferences: UserPreferences,
    suppliers: Sequence[Supplier] = (),
) -> float:
    """Preference-weighted score for a priced plan.

    ``cost_weight * clamp(savings / 500, 0, 1)
    + renewable_weight * renewable / 100 + 0.1 * rating / 5``, with
    suppliers missing from ``suppliers`` rated 3.0. Optional preference
    refinements add small adjustments.

    Parameters
    ----------
    plan : PlanWithCosts
        Plan with savings already computed
    preferences : UserPreferences
        Customer priorities
    suppliers : Sequence[Supplier], optional
        Supplier ratings

    Returns
    -------
    float
        Score, higher is better
    """
    normalized_savings = min(max(plan.savings / SAVINGS_NORMALIZATION, 0.0), 1.0)
    normalized_renewable = plan.renewable_percentage / 100
    normalized_rating = _supplier_rating(plan.supplier_id, suppliers) / MAX_SUPPLIER_RATING

    return (
        preferences.cost_weight * normalized_savings
        + preferences.renewable_weight * normalized_renewable
        + SUPPLIER_RATING_WEIGHT * normalized_rating
        + _refinement_score(plan, preferences)
    )


def _is_diverse(plan: PlanWithCosts, selected: list[PlanWithCosts]) -> bool:
    if all(plan.supplier_id != s.supplier_id for s in selected):
        return True
    if all(abs(plan.rate - s.rate) > DIVERSE_RATE_DELTA for s in selected):
        return True
    return all(
        abs(plan.renewable_percentage - s.renewable_percentage) > DIVERSE_RENEWABLE_DELTA
        for s in selected
    )


def rank_plans(plans: Iterable[PlanWithCosts]) -> list[PlanWithCosts]:
    """Sort by score, highest first.

    Equal scores are ordered by supplier id, then plan id, so the result does
    not depend on catalog order.
    """
    return sorted(plans, key=lambda p: (-p.score, p.supplier_id, p.id))


def select_diverse_top(
    plans: Iterable[PlanWithCosts],
    limit: int = RECOMMENDATION_COUNT,
    diverse: bool = True,
) -> list[PlanWithCosts]:
    """Pick the top plans while avoiding near-duplicates.

    The best plan is always kept. Each further plan is admitted only if it
    comes from an unused supplier, or its rate differs from every selected
    rate by more than 1 cent, or its renewable share differs from every
    selected share by more than 20 points. Remaining slots are backfilled by
    score.

    Parameters
    ----------
    plans : Iterable[PlanWithCosts]
        Scored plans
    limit : int, optional
        Number of plans to return, by default 3
    diverse : bool, optional
        Apply the diversity constraint, by default True

    Returns
    -------
    list[PlanWithCosts]
        Up to ``limit`` plans in selection order
    """
    ranked = rank_plans(plans)
    if not diverse:
        return ranked[:limit]

    selected: list[PlanWithCosts] = ranked[:1]
    for plan in ranked[1:]:
        if len(selected) >= limit:
            break
        if _is_diverse(plan, selected):
            selected.append(plan)

    if len(selected) < limit:
        chosen = {id(p) for p in selected}
        for plan in ranked:
            if len(selected) >= limit:
                break
            if id(plan) not in chosen:
                selected.append(plan)
                logger.debug(f"Backfilled {plan.id} after diversity selection")

    return selected


def generate_explanation(plan: PlanWithCosts, preferences: UserPreferences) -> str:
    """Build the templated explanation for a recommended plan."""
    parts = []

    if plan.savings > 0:
        parts.append(f"Save ${plan.savings:.2f} per year")
    elif plan.savings < 0:
        parts.append(f"Costs ${abs(plan.savings):.2f} more per year")
    else:
        parts.append("Similar cost to your current plan")

    if plan.rate_structure is not None and plan.rate_structure.type in RATE_STRUCTURE_CLAUSES:
        parts.append(RATE_STRUCTURE_CLAUSES[plan.rate_structure.type])

    if plan.renewable_percentage == 100:
        parts.append("100% renewable energy")
    elif plan.renewable_percentage >= 50:
        parts.append(f"{plan.renewable_percentage:g}% renewable energy")

    if preferences.cost_priority > preferences.renewable_priority:
        parts.append("Great value for cost-conscious customers")
    elif preferences.renewable_priority > preferences.cost_priority:
        parts.append("A strong match for eco-conscious customers")
    else:
        parts.append("A balanced choice between cost and sustainability")

    return ". ".join(parts) + "."


def exclude_current_supplier(plans: Sequence[Plan], supplier_name: str) -> list[Plan]:
    """Drop plans from the customer's current supplier.

    Names are compared trimmed and case-insensitively. If nothing would be
    left, every plan is kept.
    """
    current = supplier_name.strip().lower()
    if not current:
        return list(plans)

    remaining = [p for p in plans if p.supplier_name.strip().lower() != current]
    return remaining or list(plans)


def price_plans(
    current_plan: CurrentPlanData,
    usage: ParsedUsageData,
    preferences: UserPreferences,
    plans: Iterable[Plan],
    suppliers: Sequence[Supplier] = (),
) -> list[PlanWithCosts]:
    """Compute annual cost, savings and score for every plan."""
    priced = []
    for plan in plans:
        with_costs = PlanWithCosts.model_validate(
            {
                **dict(plan),
                "annual_cost": calculate_annual_cost(plan, usage),
                "savings": calculate_savings(current_plan, plan, usage),
            }
        )
        score = calculate_plan_score(with_costs, preferences, suppliers)
        priced.append(with_costs.model_copy(update={"score": score}))
    return priced


def resolve_contract_terms(
    current_plan: CurrentPlanData,
    contract_terms: ContractTerms | None = None,
    default_fee: float = DEFAULT_EARLY_TERMINATION_FEE,
) -> ContractTerms | None:
    """Switching terms for scenario analysis.

    Explicit terms win. Otherwise terms are derived from a current plan that
    carries a contract end date or a termination fee, with ``default_fee``
    standing in for a missing fee.

    Parameters
    ----------
    current_plan : CurrentPlanData
        Customer's current plan
    contract_terms : ContractTerms | None, optional
        Terms supplied by the caller
    default_fee : float, optional
        Fee used when the current plan has an end date but no fee

    Returns
    -------
    ContractTerms | None
        Terms, or None when nothing is known about the contract
    """
    if contract_terms is not None:
        return contract_terms
    if current_plan.contract_end_date or current_plan.early_termination_fee is not None:
        fee = current_plan.early_termination_fee
        return ContractTerms(
            early_termination_fee=default_fee if fee is None else fee,
            contract_end_date=current_plan.contract_end_date,
        )
    return None


def generate_recommendations(
    current_plan: CurrentPlanData,
    usage: ParsedUsageData,
    preferences: UserPreferences,
    plans: Sequence[Plan],
    suppliers: Sequence[Supplier] = (),
    contract_terms: ContractTerms | None = None,
    now: datetime | None = None,
) -> list[Recommendation]:
    """Rank the catalog and return up to three explained recommendations.

    Parameters
    ----------
    current_plan : CurrentPlanData
        Customer's current plan
    usage : ParsedUsageData
        Validated usage history
    preferences : UserPreferences
        Customer priorities
    plans : Sequence[Plan]
        Catalog snapshot
    suppliers : Sequence[Supplier], optional
        Supplier ratings
    contract_terms : ContractTerms | None, optional
        Switching terms; when absent they are taken from ``current_plan``
        if it carries a contract end date or fee
    now : datetime | None, optional
        Reference time for contract scenarios

    Returns
    -------
    list[Recommendation]
        One to three recommendations, best first

    Raises
    ------
    EmptyCatalogError
        If ``plans`` is empty
    """
    if not plans:
        raise EmptyCatalogError()

    candidates = exclude_current_supplier(plans, current_plan.supplier)
    logger.info(f"Scoring {len(candidates)} of {len(plans)} catalog plans")

    priced = price_plans(current_plan, usage, preferences, candidates, suppliers)
    diverse = preferences.supplier_diversity != "prefer-best"
    top_plans = select_diverse_top(priced, diverse=diverse)

    confidence = confidence_from_score(calculate_data_quality_score(usage))
    terms = resolve_contract_terms(current_plan, contract_terms)

    recommendations = []
    for plan in top_plans:
        if terms is not None:
            baseline = calculate_baseline_cost(current_plan, plan, usage)
            plan = create_plan_with_scenarios(plan, baseline, terms, now)
        recommendations.append(
            Recommendation(
                plan=plan,
                explanation=generate_explanation(plan, preferences),
                confidence=confidence,
                signup_url=supplier_signup_url(plan.supplier_id, suppliers),
            )
        )

    logger.info(f"Recommended {[r.plan.id for r in recommendations]} (confidence={confidence})")
    return recommendations
