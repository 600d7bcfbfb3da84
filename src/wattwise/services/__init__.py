"""Usage ingestion, pricing and recommendation services."""

__all__ = [
    "parse_green_button_xml",
    "extract_interval_readings",
    "aggregate_monthly",
    "assess_data_quality",
    "validate_usage_data",
    "calculate_data_quality_score",
    "confidence_from_score",
    "get_warning_actions",
    "calculate_monthly_energy_cost",
    "calculate_monthly_costs",
    "calculate_annual_cost",
    "parse_contract_date",
    "calculate_months_remaining",
    "calculate_cost_scenarios",
    "create_plan_with_scenarios",
    "calculate_savings",
    "calculate_plan_score",
    "rank_plans",
    "select_diverse_top",
    "generate_explanation",
    "resolve_contract_terms",
    "supplier_signup_url",
    "generate_recommendations",
]

from wattwise.services.calculator import (
    calculate_annual_cost,
    calculate_monthly_costs,
    calculate_monthly_energy_cost,
)
from wattwise.services.parser import (
    aggregate_monthly,
    assess_data_quality,
    extract_interval_readings,
    parse_green_button_xml,
)
from wattwise.services.recommender import (
    calculate_plan_score,
    calculate_savings,
    generate_explanation,
    generate_recommendations,
    rank_plans,
    resolve_contract_terms,
    select_diverse_top,
    supplier_signup_url,
)
from wattwise.services.scenarios import (
    calculate_cost_scenarios,
    calculate_months_remaining,
    create_plan_with_scenarios,
    parse_contract_date,
)
from wattwise.services.validation import (
    calculate_data_quality_score,
    confidence_from_score,
    get_warning_actions,
    validate_usage_data,
)
