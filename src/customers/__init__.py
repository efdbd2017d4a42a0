"""Customers — сервис учёта клиентов поверх чистого ядра.

- CustomerService: CRUD, списки, статистика, пакетное создание
- CustomerCache: invalidate-all-on-write кэш списков и статистики
- EmailNotifier: асинхронные уведомления через пул потоков
- InMemoryCustomerRepository: хранилище в памяти с soft delete
"""

from .cache import CustomerCache
from .config import CustomerSettings, settings, setup_logging
from .errors import (
    CustomerNotFoundError,
    CustomerServiceError,
    DuplicateCustomerError,
    InvalidBirthDateError,
    InvalidPayloadError,
)
from .identity import IdentityProvider, StaticIdentity
from .notifier import EmailNotifier, LoggingMailTransport, MailDeliveryError, MailTransport
from .repository import CustomerRepository, InMemoryCustomerRepository
from .service import CustomerService

__all__ = [
    "CustomerService",
    "CustomerCache",
    "CustomerSettings",
    "settings",
    "setup_logging",
    "CustomerServiceError",
    "CustomerNotFoundError",
    "DuplicateCustomerError",
    "InvalidBirthDateError",
    "InvalidPayloadError",
    "IdentityProvider",
    "StaticIdentity",
    "EmailNotifier",
    "LoggingMailTransport",
    "MailDeliveryError",
    "MailTransport",
    "CustomerRepository",
    "InMemoryCustomerRepository",
]
