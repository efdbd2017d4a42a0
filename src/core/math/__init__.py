"""
Core math modules

Чистые функции без состояния: календарная арифметика, проверка возраста,
проекция даты и описательная статистика.
"""

# Calendar Math
from src.core.math.calendar_math import (
    LEAP_DAY_FALLBACK,
    add_years,
    days_between,
    whole_years_between,
)

# Age Consistency
from src.core.math.age_consistency import (
    AGE_TOLERANCE_YEARS,
    InconsistentAgeError,
    expected_age,
    is_age_consistent,
    validate_age_consistency,
)

# Projection
from src.core.math.projection import (
    LIFE_EXPECTANCY_YEARS_DEFAULT,
    project,
)

# Age Statistics
from src.core.math.age_statistics import (
    AGE_BUCKETS,
    EMPTY_SAMPLE_MESSAGE,
    AgeBucket,
    bucket_label,
    compute_histogram,
    compute_mean,
    compute_median,
    compute_sample_std_dev,
    summarize,
)

__all__ = [
    # Calendar Math: Constants
    "LEAP_DAY_FALLBACK",
    # Calendar Math: Functions
    "add_years",
    "days_between",
    "whole_years_between",
    # Age Consistency: Constants
    "AGE_TOLERANCE_YEARS",
    # Age Consistency: Exceptions
    "InconsistentAgeError",
    # Age Consistency: Functions
    "expected_age",
    "is_age_consistent",
    "validate_age_consistency",
    # Projection: Constants
    "LIFE_EXPECTANCY_YEARS_DEFAULT",
    # Projection: Functions
    "project",
    # Age Statistics: Constants
    "AGE_BUCKETS",
    "EMPTY_SAMPLE_MESSAGE",
    # Age Statistics: Types
    "AgeBucket",
    # Age Statistics: Functions
    "bucket_label",
    "compute_histogram",
    "compute_mean",
    "compute_median",
    "compute_sample_std_dev",
    "summarize",
]
