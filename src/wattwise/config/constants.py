"""Thresholds and defaults used by the parsing, validation and pricing code."""

# Usage history requirements
MIN_MONTHS_OF_HISTORY = 6
MIN_DATE_SPAN_DAYS = 180
FULL_YEAR_MONTHS = 12

# Hourly readings are assumed when estimating feed completeness
EXPECTED_READINGS_PER_DAY = 24
GOOD_COMPLETENESS_PCT = 80.0
FAIR_COMPLETENESS_PCT = 50.0

# Per-month heuristics (kWh / days)
HIGH_USAGE_KWH = 10_000
LOW_USAGE_KWH = 50
INCOMPLETE_MONTH_DAYS = 20
WELL_COVERED_MONTH_DAYS = 25
HIGH_VARIATION_FACTOR = 3.0
LOW_VARIATION_FACTOR = 0.1

# Quality score deductions
POOR_QUALITY_PENALTY = 30
FAIR_QUALITY_PENALTY = 15
PARTIAL_MONTH_PENALTY = 5
MISSING_MONTH_PENALTY = 3
HIGH_CONFIDENCE_SCORE = 80
MEDIUM_CONFIDENCE_SCORE = 50

# Calendar months are 1-12
SUMMER_MONTHS = frozenset({6, 7, 8, 9})

# Scoring
SAVINGS_NORMALIZATION = 500.0
SUPPLIER_RATING_WEIGHT = 0.1
DEFAULT_SUPPLIER_RATING = 3.0
MAX_SUPPLIER_RATING = 5.0
RECOMMENDATION_COUNT = 3

# Diversity thresholds: cents/kWh and percentage points
DIVERSE_RATE_DELTA = 1.0
DIVERSE_RENEWABLE_DELTA = 20.0

# Contracts
DEFAULT_EARLY_TERMINATION_FEE = 150.0
MAX_EARLY_TERMINATION_FEE = 2000.0

DEFAULT_SIGNUP_URL = "https://www.powertochoose.org/"
