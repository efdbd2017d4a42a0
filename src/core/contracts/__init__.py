"""
Contract Validation Module

Модуль для валидации JSON контрактов системы учёта клиентов.
"""

from .validators import (
    BatchResultValidator,
    ContractValidator,
    CustomerRequestValidator,
    CustomerViewValidator,
    SchemaLoader,
    StatisticsReportValidator,
    validate_batch_result,
    validate_customer_request,
    validate_customer_view,
    validate_statistics_report,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CustomerRequestValidator",
    "CustomerViewValidator",
    "StatisticsReportValidator",
    "BatchResultValidator",
    # Functions
    "validate_customer_request",
    "validate_customer_view",
    "validate_statistics_report",
    "validate_batch_result",
]
