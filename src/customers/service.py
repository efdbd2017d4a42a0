"""
Customer Service — бизнес-операции над клиентами

Связывает чистое ядро (проверка возраста, проекция, статистика) с
коллабораторами: хранилище, кэш, уведомления, identity.

Порядок записи (create / update):
1. birth_date < today
2. Согласованность возраста (InconsistentAgeError пробрасывается как есть)
3. Проверка дубликатов (только create)
4. Сохранение → инвалидация всего кэша → уведомление (fire-and-forget)

Чтения (list / statistics) идут через кэш; любая запись очищает его целиком.
"""

import logging
import math
from concurrent.futures import Future
from datetime import date, datetime
from typing import Any, Callable, Hashable, Optional, Sequence, TypeVar

from pydantic import ValidationError

from src.core.contracts import CustomerRequestValidator
from src.core.domain import (
    BatchError,
    BatchResult,
    Customer,
    CustomerPage,
    CustomerRequest,
    CustomerView,
    StatisticsReport,
)
from src.core.math import (
    LIFE_EXPECTANCY_YEARS_DEFAULT,
    InconsistentAgeError,
    project,
    summarize,
    validate_age_consistency,
)

from .cache import CUSTOMERS_REGION, STATISTICS_REGION, CustomerCache
from .config import CustomerSettings
from .errors import (
    CustomerNotFoundError,
    CustomerServiceError,
    DuplicateCustomerError,
    InvalidBirthDateError,
    InvalidPayloadError,
)
from .identity import IdentityProvider, StaticIdentity
from .notifier import EmailNotifier, LoggingMailTransport, MailTransport
from .repository import CustomerRepository, InMemoryCustomerRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

STATISTICS_CACHE_KEY = "general"


class CustomerService:
    """
    Операции CRUD, списки, статистика и пакетное создание клиентов.

    Args:
        repository: Хранилище клиентов
        cache: Кэш списков и статистики (None — без кэширования)
        notifier: Уведомления (None — без уведомлений)
        identity: Источник текущего пользователя
        life_expectancy_years: Сдвиг для проекции даты
        default_page_size: Размер страницы по умолчанию
        max_page_size: Верхняя граница размера страницы
        today: Источник текущей даты
        now: Источник текущего момента времени
    """

    def __init__(
        self,
        repository: CustomerRepository,
        cache: Optional[CustomerCache] = None,
        notifier: Optional[EmailNotifier] = None,
        identity: Optional[IdentityProvider] = None,
        life_expectancy_years: int = LIFE_EXPECTANCY_YEARS_DEFAULT,
        default_page_size: int = 20,
        max_page_size: int = 100,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.repository = repository
        self.cache = cache
        self.notifier = notifier
        self.identity = identity or StaticIdentity()
        self.life_expectancy_years = life_expectancy_years
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self._today = today
        self._now = now
        self._request_validator = CustomerRequestValidator()

    @classmethod
    def from_settings(
        cls,
        config: CustomerSettings,
        repository: Optional[CustomerRepository] = None,
        transport: Optional[MailTransport] = None,
        identity: Optional[IdentityProvider] = None,
    ) -> "CustomerService":
        """Сборка сервиса со стандартными коллабораторами."""
        notifier = EmailNotifier(
            transport=transport or LoggingMailTransport(),
            admin_email=config.admin_email,
            max_workers=config.email_max_workers,
            enabled=config.notifications_enabled,
        )
        return cls(
            repository=repository or InMemoryCustomerRepository(),
            cache=CustomerCache(),
            notifier=notifier,
            identity=identity,
            life_expectancy_years=config.life_expectancy_years,
            default_page_size=config.default_page_size,
            max_page_size=config.max_page_size,
        )

    def close(self) -> None:
        """Дождаться отправки уведомлений и остановить пул."""
        if self.notifier is not None:
            self.notifier.shutdown(wait=True)

    # =========================================================================
    # CREATE
    # =========================================================================

    def create_customer(
        self, request: CustomerRequest, notify_email: Optional[str] = None
    ) -> CustomerView:
        """
        Создание клиента.

        Raises:
            InvalidBirthDateError: birth_date не в прошлом
            InconsistentAgeError: возраст не согласуется с датой рождения
            DuplicateCustomerError: клиент с теми же данными уже есть
        """
        creator = self.identity.current_subject()
        logger.info("User %s creating customer: %s", creator, request.full_name)

        today = self._today()
        try:
            customer = self._create_record(request, creator, today)
        except DuplicateCustomerError:
            logger.warning(
                "User %s attempted to create duplicate customer: %s",
                creator, request.full_name,
            )
            raise
        self._invalidate()
        logger.info("Customer created with id %d by user %s", customer.id, creator)

        view = self._to_view(customer, today)

        if self.notifier is not None:
            future = self.notifier.notify_customer_created(view)
            future.add_done_callback(_delivery_logger(view.id))
            if notify_email:
                self.notifier.notify_customer_created_to(
                    view, creator, notify_email, self._now()
                )

        return view

    def create_customer_from_payload(
        self, payload: dict[str, Any], notify_email: Optional[str] = None
    ) -> CustomerView:
        """
        Создание клиента из сырого документа (customer_request контракт).

        Raises:
            InvalidPayloadError: документ не соответствует контракту
        """
        messages = self._request_validator.error_messages(payload)
        if messages:
            raise InvalidPayloadError(messages)
        try:
            request = CustomerRequest.model_validate(payload)
        except ValidationError as e:
            raise InvalidPayloadError(
                [
                    ".".join(str(part) for part in err["loc"]) + ": " + err["msg"]
                    for err in e.errors()
                ]
            ) from e
        return self.create_customer(request, notify_email)

    # =========================================================================
    # READ
    # =========================================================================

    def get_customer(self, customer_id: int) -> CustomerView:
        logger.info("Looking up customer with id %d", customer_id)
        customer = self._require_active(customer_id)
        return self._to_view(customer, self._today())

    def list_customers(self, page: int = 0, size: Optional[int] = None) -> CustomerPage:
        """
        Страница активных клиентов с полями проекции.

        size ограничивается сверху max_page_size.
        """
        if size is None:
            size = self.default_page_size
        size = min(size, self.max_page_size)
        if page < 0:
            raise ValueError(f"page must be non-negative, got {page}")
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")

        logger.info("Listing customers - page: %d, size: %d", page, size)
        # Поля проекции зависят от даты: страница за вчера не переиспользуется
        today = self._today()
        return self._cached(
            CUSTOMERS_REGION, (today, page, size), lambda: self._load_page(page, size, today)
        )

    def list_all_customers(self) -> list[CustomerView]:
        """Все активные клиенты, новые первыми."""
        today = self._today()
        views = [self._to_view(c, today) for c in self.repository.find_all_active()]
        logger.info("Returning %d customers", len(views))
        return views

    # =========================================================================
    # UPDATE / DELETE
    # =========================================================================

    def update_customer(self, customer_id: int, request: CustomerRequest) -> CustomerView:
        """
        Обновление данных клиента.

        Raises:
            CustomerNotFoundError: нет активной записи
            InvalidBirthDateError: birth_date не в прошлом
            InconsistentAgeError: возраст не согласуется с датой рождения
        """
        logger.info("Updating customer with id %d", customer_id)
        customer = self._require_active(customer_id)

        today = self._today()
        self._check_request(request, today)

        updated = self.repository.save(customer.with_changes(request, self._now()))
        self._invalidate()
        logger.info("Customer %d updated", customer_id)
        return self._to_view(updated, today)

    def delete_customer(self, customer_id: int) -> None:
        """Soft delete: запись остаётся в хранилище с active=False."""
        logger.info("Deleting customer with id %d", customer_id)
        customer = self._require_active(customer_id)
        self.repository.save(customer.deactivated(self._now()))
        self._invalidate()
        logger.info("Customer %d deleted (soft delete)", customer_id)

    # =========================================================================
    # STATISTICS
    # =========================================================================

    def compute_statistics(self, notify_email: Optional[str] = None) -> StatisticsReport:
        """Сводная статистика по возрастам активных клиентов."""
        report = self._cached(STATISTICS_REGION, STATISTICS_CACHE_KEY, self._load_statistics)
        if notify_email and self.notifier is not None:
            self.notifier.notify_statistics(report, notify_email)
        return report

    # =========================================================================
    # BATCH
    # =========================================================================

    def create_customers_bulk(self, requests: Sequence[CustomerRequest]) -> BatchResult:
        """
        Пакетное создание.

        Каждая позиция обрабатывается независимо: ошибка одной позиции
        (бизнес-правило или сбой хранилища) попадает в errors и не прерывает
        пакет. Отправляется одно сводное уведомление; персональные уведомления
        о создании не отправляются.
        """
        logger.info("Starting bulk creation of %d customers", len(requests))
        creator = self.identity.current_subject()
        today = self._today()

        created: list[CustomerView] = []
        errors: list[BatchError] = []
        for index, request in enumerate(requests):
            try:
                customer = self._create_record(request, creator, today)
            except (CustomerServiceError, InconsistentAgeError) as e:
                errors.append(_batch_error(index, request, str(e)))
                logger.warning("Bulk item %d failed: %s", index, e)
                continue
            except Exception as e:
                # Сбой хранилища по одной позиции не отменяет уже созданные
                errors.append(_batch_error(index, request, f"Unexpected error: {e}"))
                logger.exception("Bulk item %d failed unexpectedly", index)
                continue
            created.append(self._to_view(customer, today))
            logger.debug("Bulk item %d created as customer %d", index, customer.id)

        if created:
            self._invalidate()

        result = BatchResult(
            total=len(requests),
            succeeded=len(created),
            failed=len(errors),
            processed_at=self._now(),
            created=created,
            errors=errors,
        )
        logger.info(
            "Bulk creation completed: %d succeeded, %d failed of %d total",
            result.succeeded, result.failed, result.total,
        )

        if self.notifier is not None:
            self.notifier.notify_batch_summary(result)
        return result

    def validate_batch(self, requests: Sequence[CustomerRequest]) -> list[str]:
        """Предварительная проверка пакета без записи. Пустой список — всё валидно."""
        today = self._today()
        problems: list[str] = []
        for index, request in enumerate(requests):
            prefix = f"Customer {index} ({request.full_name})"
            try:
                self._check_request(request, today)
            except (InvalidBirthDateError, InconsistentAgeError) as e:
                problems.append(f"{prefix}: {e}")
            if self._is_duplicate(request):
                problems.append(f"{prefix}: already exists in the system")
        return problems

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _check_request(self, request: CustomerRequest, today: date) -> None:
        if request.birth_date >= today:
            raise InvalidBirthDateError(
                f"Birth date {request.birth_date.isoformat()} must be in the past"
            )
        validate_age_consistency(request.age, request.birth_date, today)

    def _is_duplicate(self, request: CustomerRequest) -> bool:
        return self.repository.exists_by_name_and_birth_date(
            request.first_name, request.last_name, request.birth_date
        )

    def _create_record(
        self, request: CustomerRequest, creator: Optional[str], today: date
    ) -> Customer:
        self._check_request(request, today)
        customer = self.repository.create_if_absent(request, creator, self._now())
        if customer is None:
            raise DuplicateCustomerError(
                f"Customer {request.full_name} born on "
                f"{request.birth_date.isoformat()} already exists"
            )
        return customer

    def _require_active(self, customer_id: int) -> Customer:
        customer = self.repository.find_active_by_id(customer_id)
        if customer is None:
            logger.error("Customer not found with id %d", customer_id)
            raise CustomerNotFoundError(customer_id)
        return customer

    def _to_view(self, customer: Customer, today: date) -> CustomerView:
        projection = project(customer.birth_date, self.life_expectancy_years, today)
        return CustomerView.from_customer(customer, projection)

    def _load_page(self, page: int, size: int, today: date) -> CustomerPage:
        records, total = self.repository.find_active_page(page, size)
        return CustomerPage(
            items=[self._to_view(c, today) for c in records],
            page=page,
            size=size,
            total_elements=total,
            total_pages=math.ceil(total / size),
        )

    def _load_statistics(self) -> StatisticsReport:
        logger.info("Computing customer statistics")
        report = summarize(self.repository.active_ages())
        return report.model_copy(update={"computed_at": self._now()})

    def _cached(self, region: str, key: Hashable, compute: Callable[[], T]) -> T:
        if self.cache is None:
            return compute()
        return self.cache.get_or_compute(region, key, compute)

    def _invalidate(self) -> None:
        if self.cache is not None:
            self.cache.invalidate_all()


def _delivery_logger(customer_id: int) -> Callable[[Future], None]:
    def log_result(future: Future) -> None:
        if not future.cancelled() and future.exception() is None and future.result():
            logger.info("Notification sent for customer %d", customer_id)
        else:
            logger.warning("Could not send notification for customer %d", customer_id)

    return log_result


def _batch_error(index: int, request: CustomerRequest, message: str) -> BatchError:
    return BatchError(
        index=index,
        first_name=request.first_name,
        last_name=request.last_name,
        error=message,
    )
