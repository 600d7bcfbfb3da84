"""Usage data validation, quality scoring and warning remediation."""

import logging

from wattwise.config.constants import (
    FAIR_QUALITY_PENALTY,
    FULL_YEAR_MONTHS,
    HIGH_CONFIDENCE_SCORE,
    HIGH_USAGE_KWH,
    HIGH_VARIATION_FACTOR,
    INCOMPLETE_MONTH_DAYS,
    LOW_USAGE_KWH,
    LOW_VARIATION_FACTOR,
    MEDIUM_CONFIDENCE_SCORE,
    MIN_DATE_SPAN_DAYS,
    MIN_MONTHS_OF_HISTORY,
    MISSING_MONTH_PENALTY,
    PARTIAL_MONTH_PENALTY,
    POOR_QUALITY_PENALTY,
    WELL_COVERED_MONTH_DAYS,
)
from wattwise.exceptions.errors import (
    InsufficientHistoryError,
    NegativeUsageError,
    ShortDateSpanError,
)
from wattwise.models.recommendation import Confidence, ValidationResult, WarningAction
from wattwise.models.usage import ParsedUsageData

logger = logging.getLogger(__name__)

HIGH_VARIATION_WARNING = "Extreme variation detected: some months have unusually high usage"
LOW_VARIATION_WARNING = "Extreme variation detected: some months have unusually low usage"

# (substrings that must all appear, action, severity), first match wins
WARNING_ACTIONS = [
    (
        ("Unusually high usage",),
        "Verify this usage is correct. If you have a large home, pool, or EV charging, this "
        "may be normal. If unexpected, contact your utility to verify meter readings.",
        "warning",
    ),
    (
        ("Zero usage detected",),
        "Check if the property was vacant during this period. If not, contact your utility "
        "to verify meter readings or check for meter issues.",
        "important",
    ),
    (
        ("Very low usage",),
        "Verify this usage is correct. If you have solar panels or were away, this may be "
        "normal. If unexpected, contact your utility to verify.",
        "info",
    ),
    (
        ("Incomplete data",),
        "Try downloading a new usage file from your utility with complete data. More complete "
        "data will improve recommendation accuracy.",
        "important",
    ),
    (
        ("Extreme variation", "high"),
        "Review seasonal patterns (e.g., summer AC usage). If this matches your expected usage "
        "patterns, recommendations should still work. If unexpected, verify the data with your "
        "utility.",
        "warning",
    ),
    (
        ("Extreme variation", "low"),
        "Review seasonal patterns or periods when you were away. If this matches your expected "
        "usage patterns, recommendations should still work. If unexpected, verify the data "
        "with your utility.",
        "warning",
    ),
]
DEFAULT_WARNING_ACTION = (
    "Review your usage data and verify it matches your expected patterns. Contact your "
    "utility if you notice any discrepancies."
)


def validate_usage_data(usage: ParsedUsageData) -> ValidationResult:
    """Run structural checks and usage heuristics.

    Parameters
    ----------
    usage : ParsedUsageData
        Parsed usage history

    Returns
    -------
    ValidationResult
        Blocking errors and non-blocking warnings
    """
    result = ValidationResult()
    months = usage.monthly_totals

    if len(months) < MIN_MONTHS_OF_HISTORY:
        result.errors.append(InsufficientHistoryError(len(months), MIN_MONTHS_OF_HISTORY))

    for month in months:
        if month.total_kwh < 0:
            result.errors.append(NegativeUsageError(month.month, month.total_kwh))

        if month.total_kwh > HIGH_USAGE_KWH:
            result.warnings.append(f"Unusually high usage for {month.month}: {month.total_kwh} kWh")

        if month.total_kwh == 0:
            result.warnings.append(f"Zero usage detected for {month.month}")
        elif 0 < month.total_kwh < LOW_USAGE_KWH:
            result.warnings.append(f"Very low usage for {month.month}: {month.total_kwh} kWh")

        if month.days_with_data < INCOMPLETE_MONTH_DAYS:
            result.warnings.append(
                f"Incomplete data for {month.month}: only {month.days_with_data} days"
            )

    if months:
        totals = [m.total_kwh for m in months]
        mean = sum(totals) / len(totals)
        if max(totals) > mean * HIGH_VARIATION_FACTOR:
            result.warnings.append(HIGH_VARIATION_WARNING)
        if 0 < min(totals) < mean * LOW_VARIATION_FACTOR:
            result.warnings.append(LOW_VARIATION_WARNING)

    span_days = usage.date_range.span_days
    if span_days < MIN_DATE_SPAN_DAYS:
        result.errors.append(ShortDateSpanError(span_days, MIN_DATE_SPAN_DAYS))

    if result.errors:
        logger.warning(f"Usage validation failed: {[e.error_code for e in result.errors]}")
    logger.debug(f"Usage validation produced {len(result.warnings)} warnings")
    return result


def calculate_data_quality_score(usage: ParsedUsageData) -> int:
    """Score usage data from 0 to 100.

    Starts at 100 and deducts for the feed's quality tier, months with
    partial coverage and months missing from a full year.
    """
    score = 100

    if usage.data_quality == "poor":
        score -= POOR_QUALITY_PENALTY
    elif usage.data_quality == "fair":
        score -= FAIR_QUALITY_PENALTY

    partial_months = sum(1 for m in usage.monthly_totals if m.days_with_data < WELL_COVERED_MONTH_DAYS)
    score -= partial_months * PARTIAL_MONTH_PENALTY

    month_count = len(usage.monthly_totals)
    if month_count < FULL_YEAR_MONTHS:
        score -= (FULL_YEAR_MONTHS - month_count) * MISSING_MONTH_PENALTY

    return max(0, min(100, score))


def confidence_from_score(score: float) -> Confidence:
    if score >= HIGH_CONFIDENCE_SCORE:
        return "high"
    if score >= MEDIUM_CONFIDENCE_SCORE:
        return "medium"
    return "low"


def get_warning_actions(warnings: list[str]) -> list[WarningAction]:
    """Map warning texts to remediation advice.

    Parameters
    ----------
    warnings : list[str]
        Warnings from ``validate_usage_data``

    Returns
    -------
    list[WarningAction]
        One action per warning, in the same order
    """
    actions = []
    for warning in warnings:
        for needles, action, severity in WARNING_ACTIONS:
            if all(needle in warning for needle in needles):
                actions.append(WarningAction(warning=warning, action=action, severity=severity))
                break
        else:
            actions.append(
                WarningAction(warning=warning, action=DEFAULT_WARNING_ACTION, severity="info")
            )
    return actions
