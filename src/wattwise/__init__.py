"""Energy plan recommendations from Green Button interval usage.

Typical use::

    from wattwise import parse_green_button_xml, validate_usage_data, generate_recommendations

    usage = parse_green_button_xml(xml_text)
    validate_usage_data(usage).raise_for_errors()
    recommendations = generate_recommendations(current_plan, usage, preferences, plans)
"""

__all__ = [
    "parse_green_button_xml",
    "validate_usage_data",
    "calculate_data_quality_score",
    "get_warning_actions",
    "calculate_annual_cost",
    "generate_recommendations",
]

from wattwise.services import (
    calculate_annual_cost,
    calculate_data_quality_score,
    generate_recommendations,
    get_warning_actions,
    parse_green_button_xml,
    validate_usage_data,
)
