"""
Domain models and value objects.

Contains customer records, their external views, batch results and the
derived StatisticsReport / Projection reports.
"""

from src.core.domain.customer import (
    AGE_MAX,
    AGE_MIN,
    NAME_PATTERN,
    BatchError,
    BatchResult,
    Customer,
    CustomerPage,
    CustomerRequest,
    CustomerView,
)
from src.core.domain.reports import Projection, StatisticsReport

__all__ = [
    # Customer module
    "AGE_MAX",
    "AGE_MIN",
    "NAME_PATTERN",
    "Customer",
    "CustomerRequest",
    "CustomerView",
    "CustomerPage",
    "BatchError",
    "BatchResult",
    # Reports module
    "Projection",
    "StatisticsReport",
]
