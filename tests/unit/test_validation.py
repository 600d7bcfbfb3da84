"""Unit tests for usage validation, quality scoring and warning actions."""

import pytest

from wattwise.exceptions.errors import (
    InsufficientHistoryError,
    NegativeUsageError,
    ShortDateSpanError,
)
from wattwise.services.validation import (
    DEFAULT_WARNING_ACTION,
    HIGH_VARIATION_WARNING,
    LOW_VARIATION_WARNING,
    calculate_data_quality_score,
    confidence_from_score,
    get_warning_actions,
    validate_usage_data,
)


class TestValidateUsageData:
    """Tests for validate_usage_data."""

    def test_clean_history(self, example_usage):
        """Test typical usage passes without errors or warnings."""
        result = validate_usage_data(example_usage)

        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []
        result.raise_for_errors()

    def test_insufficient_history(self, usage_factory):
        """Test too few months is a blocking error."""
        usage = usage_factory([500, 500, 500])
        result = validate_usage_data(usage)

        assert not result.is_valid
        assert isinstance(result.errors[0], InsufficientHistoryError)
        assert result.errors[0].months_found == 3
        with pytest.raises(InsufficientHistoryError):
            result.raise_for_errors()

    def test_short_span_with_few_months(self, usage_factory):
        """Test three months also fails the date span check."""
        result = validate_usage_data(usage_factory([500, 500, 500]))

        spans = [e for e in result.errors if isinstance(e, ShortDateSpanError)]
        assert len(spans) == 1
        assert spans[0].days_found == 90

    def test_negative_month(self, usage_factory):
        """Test a negative monthly total is a blocking error."""
        usage = usage_factory([500, -12.5, 500, 500, 500, 500])
        result = validate_usage_data(usage)

        (error,) = result.errors
        assert isinstance(error, NegativeUsageError)
        assert error.context == {"month": "2024-02", "total_kwh": -12.5}

    def test_high_usage_warning(self, usage_factory):
        """Test months above 10,000 kWh are flagged."""
        usage = usage_factory([10500, 9000, 9500, 9800, 9900, 9700])
        result = validate_usage_data(usage)

        assert result.is_valid
        (warning,) = result.warnings
        assert warning.startswith("Unusually high usage for 2024-01: 10500")

    def test_zero_and_low_usage_warnings(self, usage_factory):
        """Test zero and sub-50 kWh months get distinct warnings."""
        usage = usage_factory([0, 40, 700, 700, 700, 700])
        result = validate_usage_data(usage)

        assert "Zero usage detected for 2024-01" in result.warnings
        assert any(w.startswith("Very low usage for 2024-02: 40") for w in result.warnings)
        assert not any("Very low usage for 2024-01" in w for w in result.warnings)

    def test_incomplete_month_warning(self, usage_factory):
        """Test months with fewer than 20 days of data are flagged."""
        usage = usage_factory([600] * 6, days=[31, 15, 31, 30, 31, 30])
        result = validate_usage_data(usage)

        assert result.warnings == ["Incomplete data for 2024-02: only 15 days"]

    def test_high_variation(self, usage_factory):
        """Test a month above three times the mean is flagged."""
        usage = usage_factory([300, 300, 300, 300, 300, 6000])
        result = validate_usage_data(usage)

        assert HIGH_VARIATION_WARNING in result.warnings

    def test_low_variation(self, usage_factory):
        """Test a positive month below a tenth of the mean is flagged."""
        usage = usage_factory([1000, 1000, 1000, 1000, 1000, 60])
        result = validate_usage_data(usage)

        assert LOW_VARIATION_WARNING in result.warnings
        assert HIGH_VARIATION_WARNING not in result.warnings

    def test_zero_month_not_low_variation(self, usage_factory):
        """Test a zero month does not trigger the low variation warning."""
        usage = usage_factory([1000, 1000, 1000, 1000, 1000, 0])
        result = validate_usage_data(usage)

        assert LOW_VARIATION_WARNING not in result.warnings


class TestDataQualityScore:
    """Tests for calculate_data_quality_score."""

    def test_six_good_months(self, example_usage):
        """Test six complete months lose three points per missing month."""
        assert calculate_data_quality_score(example_usage) == 82

    def test_full_year(self, usage_factory):
        """Test twelve complete months score 100."""
        assert calculate_data_quality_score(usage_factory([600] * 12)) == 100

    @pytest.mark.parametrize(
        "quality, expected",
        [("good", 82), ("fair", 67), ("poor", 52)],
    )
    def test_quality_tier_penalty(self, usage_factory, quality, expected):
        """Test fair and poor feeds are penalised."""
        usage = usage_factory([600] * 6, quality=quality)
        assert calculate_data_quality_score(usage) == expected

    def test_partial_months(self, usage_factory):
        """Test each month under 25 days costs five points."""
        usage = usage_factory([600] * 12, days=[31, 24, 31, 22, 31, 30, 31, 31, 30, 31, 30, 31])
        assert calculate_data_quality_score(usage) == 90

    def test_floor_at_zero(self, usage_factory):
        """Test the score never goes negative."""
        usage = usage_factory([600] * 15, days=10, quality="poor")
        assert calculate_data_quality_score(usage) == 0

    def test_combined_penalties(self, usage_factory):
        """Test tier, partial and missing month penalties add up."""
        usage = usage_factory([600] * 6, days=5, quality="poor")
        # 100 - 30 - 6 * 5 - 6 * 3
        assert calculate_data_quality_score(usage) == 22


class TestConfidence:
    """Tests for confidence_from_score."""

    @pytest.mark.parametrize(
        "score, expected",
        [(100, "high"), (80, "high"), (79, "medium"), (50, "medium"), (49, "low"), (0, "low")],
    )
    def test_thresholds(self, score, expected):
        """Test the 80 and 50 boundaries."""
        assert confidence_from_score(score) == expected


class TestWarningActions:
    """Tests for get_warning_actions."""

    def test_maps_known_warnings(self):
        """Test each warning family gets its severity."""
        warnings = [
            "Unusually high usage for 2024-01: 12000 kWh",
            "Zero usage detected for 2024-02",
            "Very low usage for 2024-03: 12 kWh",
            "Incomplete data for 2024-04: only 10 days",
            HIGH_VARIATION_WARNING,
            LOW_VARIATION_WARNING,
        ]
        actions = get_warning_actions(warnings)

        assert [a.warning for a in actions] == warnings
        assert [a.severity for a in actions] == [
            "warning",
            "important",
            "info",
            "important",
            "warning",
            "warning",
        ]
        assert "EV charging" in actions[0].action
        assert "vacant" in actions[1].action
        assert "solar panels" in actions[2].action
        assert "summer AC" in actions[4].action
        assert "away" in actions[5].action

    def test_unknown_warning_gets_default(self):
        """Test unrecognised text falls back to generic advice."""
        (action,) = get_warning_actions(["Something odd happened"])

        assert action.action == DEFAULT_WARNING_ACTION
        assert action.severity == "info"

    def test_empty(self):
        assert get_warning_actions([]) == []
