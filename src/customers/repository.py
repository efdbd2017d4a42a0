"""
Customer Repository — хранилище записей клиентов

CustomerRepository задаёт контракт хранилища, которым пользуется сервис.
InMemoryCustomerRepository — потокобезопасная реализация в памяти.

Инварианты:
- Записи не удаляются физически: soft delete через active=False
- id назначаются монотонно, начиная с 1
- find_* возвращают только активные записи
- exists_by_name_and_birth_date учитывает и неактивные записи
"""

import itertools
import threading
from datetime import date, datetime
from typing import Optional, Protocol

from src.core.domain import Customer, CustomerRequest


class CustomerRepository(Protocol):
    """Контракт хранилища клиентов."""

    def create(
        self, request: CustomerRequest, created_by: Optional[str], now: datetime
    ) -> Customer: ...

    def create_if_absent(
        self, request: CustomerRequest, created_by: Optional[str], now: datetime
    ) -> Optional[Customer]: ...

    def save(self, customer: Customer) -> Customer: ...

    def find_active_by_id(self, customer_id: int) -> Optional[Customer]: ...

    def find_all_active(self) -> list[Customer]: ...

    def find_active_page(self, page: int, size: int) -> tuple[list[Customer], int]: ...

    def count_active(self) -> int: ...

    def exists_by_name_and_birth_date(
        self, first_name: str, last_name: str, birth_date: date
    ) -> bool: ...

    def active_ages(self) -> list[int]: ...


class InMemoryCustomerRepository:
    """
    Хранилище клиентов в памяти.

    Все операции выполняются под одним lock: чтения видят согласованный
    снапшот, запись атомарна на уровне одной записи.
    """

    def __init__(self):
        self._records: dict[int, Customer] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(
        self, request: CustomerRequest, created_by: Optional[str], now: datetime
    ) -> Customer:
        """Новая запись с назначенным id."""
        with self._lock:
            return self._insert(request, created_by, now)

    def create_if_absent(
        self, request: CustomerRequest, created_by: Optional[str], now: datetime
    ) -> Optional[Customer]:
        """
        Атомарная проверка дубликата и создание.

        Returns:
            Новая запись или None, если клиент с теми же именем, фамилией и
            датой рождения уже есть (включая неактивные записи)
        """
        with self._lock:
            if self._exists(request.first_name, request.last_name, request.birth_date):
                return None
            return self._insert(request, created_by, now)

    def save(self, customer: Customer) -> Customer:
        """Замена существующей записи новой версией."""
        with self._lock:
            if customer.id not in self._records:
                raise KeyError(f"Unknown customer id: {customer.id}")
            self._records[customer.id] = customer
            return customer

    def find_active_by_id(self, customer_id: int) -> Optional[Customer]:
        with self._lock:
            customer = self._records.get(customer_id)
        if customer is None or not customer.active:
            return None
        return customer

    def find_all_active(self) -> list[Customer]:
        """Активные записи, новые первыми."""
        with self._lock:
            active = [c for c in self._records.values() if c.active]
        return sorted(active, key=lambda c: (c.registered_at, c.id), reverse=True)

    def find_active_page(self, page: int, size: int) -> tuple[list[Customer], int]:
        """
        Страница активных записей в порядке id.

        Returns:
            (записи страницы, общее число активных записей)
        """
        if page < 0:
            raise ValueError(f"page must be non-negative, got {page}")
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")

        with self._lock:
            active = [c for _, c in sorted(self._records.items()) if c.active]
        start = page * size
        return active[start:start + size], len(active)

    def count_active(self) -> int:
        with self._lock:
            return sum(1 for c in self._records.values() if c.active)

    def exists_by_name_and_birth_date(
        self, first_name: str, last_name: str, birth_date: date
    ) -> bool:
        with self._lock:
            return self._exists(first_name, last_name, birth_date)

    def active_ages(self) -> list[int]:
        with self._lock:
            return [c.age for c in self._records.values() if c.active]

    # Вызываются только под self._lock

    def _exists(self, first_name: str, last_name: str, birth_date: date) -> bool:
        return any(
            c.first_name == first_name
            and c.last_name == last_name
            and c.birth_date == birth_date
            for c in self._records.values()
        )

    def _insert(
        self, request: CustomerRequest, created_by: Optional[str], now: datetime
    ) -> Customer:
        customer = Customer(
            id=next(self._ids),
            first_name=request.first_name,
            last_name=request.last_name,
            age=request.age,
            birth_date=request.birth_date,
            registered_at=now,
            updated_at=now,
            created_by=created_by,
        )
        self._records[customer.id] = customer
        return customer
