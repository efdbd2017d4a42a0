"""
Тесты для доменных моделей: CustomerRequest, Customer, CustomerView, BatchResult

Проверяет:
1. Создание и валидацию моделей Pydantic
2. Границы полей (имя, возраст)
3. Immutability (frozen=True) и копирование через with_changes / deactivated
4. Сериализацию/десериализацию JSON
"""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from src.core.domain import (
    BatchError,
    BatchResult,
    Customer,
    CustomerPage,
    CustomerRequest,
    CustomerView,
    Projection,
)


NOW = datetime(2024, 3, 20, 10, 30, 0)


# =============================================================================
# CUSTOMER REQUEST TESTS
# =============================================================================


class TestCustomerRequest:
    """Тесты для модели CustomerRequest"""

    def test_valid_request(self):
        request = CustomerRequest(
            first_name="Juan", last_name="Pérez", age=35, birth_date=date(1989, 3, 15)
        )
        assert request.full_name == "Juan Pérez"

    def test_accented_names_and_spaces(self):
        request = CustomerRequest(
            first_name="María José", last_name="Núñez Ibáñez", age=30, birth_date=date(1994, 1, 1)
        )
        assert request.first_name == "María José"

    @pytest.mark.parametrize("name", ["J", "Juan2", "O'Brien", "Ana-Lucía", "x" * 101, ""])
    def test_invalid_first_name(self, name):
        with pytest.raises(ValidationError):
            CustomerRequest(first_name=name, last_name="Pérez", age=35, birth_date=date(1989, 3, 15))

    @pytest.mark.parametrize("age", [-1, 151, 200])
    def test_age_out_of_bounds(self, age):
        with pytest.raises(ValidationError):
            CustomerRequest(first_name="Juan", last_name="Pérez", age=age, birth_date=date(1989, 3, 15))

    @pytest.mark.parametrize("age", [0, 150])
    def test_age_bounds_inclusive(self, age):
        request = CustomerRequest(
            first_name="Juan", last_name="Pérez", age=age, birth_date=date(1989, 3, 15)
        )
        assert request.age == age

    def test_birth_date_parsed_from_iso_string(self):
        request = CustomerRequest.model_validate(
            {"first_name": "Juan", "last_name": "Pérez", "age": 35, "birth_date": "1989-03-15"}
        )
        assert request.birth_date == date(1989, 3, 15)

    def test_frozen(self):
        request = CustomerRequest(
            first_name="Juan", last_name="Pérez", age=35, birth_date=date(1989, 3, 15)
        )
        with pytest.raises(ValidationError):
            request.age = 36


# =============================================================================
# CUSTOMER TESTS
# =============================================================================


class TestCustomer:
    """Тесты для модели Customer"""

    @pytest.fixture
    def customer(self) -> Customer:
        return Customer(
            id=1,
            first_name="Juan",
            last_name="Pérez",
            age=35,
            birth_date=date(1989, 3, 15),
            registered_at=NOW,
            updated_at=NOW,
            created_by="admin@example.com",
        )

    def test_defaults(self, customer):
        assert customer.active is True

    def test_with_changes_returns_new_instance(self, customer):
        later = datetime(2024, 4, 1)
        request = CustomerRequest(
            first_name="Juana", last_name="Pérez", age=34, birth_date=date(1989, 4, 15)
        )
        updated = customer.with_changes(request, later)

        assert updated is not customer
        assert updated.first_name == "Juana"
        assert updated.age == 34
        assert updated.birth_date == date(1989, 4, 15)
        assert updated.updated_at == later
        assert updated.registered_at == NOW
        assert updated.created_by == "admin@example.com"
        # Исходная запись не изменилась
        assert customer.first_name == "Juan"

    def test_deactivated(self, customer):
        later = datetime(2024, 4, 1)
        removed = customer.deactivated(later)

        assert removed.active is False
        assert removed.updated_at == later
        assert customer.active is True

    def test_id_must_be_positive(self):
        with pytest.raises(ValidationError):
            Customer(
                id=0,
                first_name="Juan",
                last_name="Pérez",
                age=35,
                birth_date=date(1989, 3, 15),
                registered_at=NOW,
                updated_at=NOW,
            )

    def test_json_roundtrip(self, customer):
        restored = Customer.model_validate_json(customer.model_dump_json())
        assert restored == customer


# =============================================================================
# CUSTOMER VIEW TESTS
# =============================================================================


class TestCustomerView:
    """Тесты для модели CustomerView"""

    def test_from_customer(self):
        customer = Customer(
            id=7,
            first_name="Ana",
            last_name="Gómez",
            age=74,
            birth_date=date(1950, 1, 1),
            registered_at=NOW,
            updated_at=NOW,
        )
        projection = Projection(
            projected_date=date(2025, 1, 1), remaining_days=366, remaining_years=1
        )
        view = CustomerView.from_customer(customer, projection)

        assert view.id == 7
        assert view.first_name == "Ana"
        assert view.registered_at == NOW
        assert view.projected_date == date(2025, 1, 1)
        assert view.remaining_days == 366
        assert view.remaining_years == 1

    def test_json_dates_are_iso(self):
        view = CustomerView(
            id=1,
            first_name="Ana",
            last_name="Gómez",
            age=74,
            birth_date=date(1950, 1, 1),
            registered_at=NOW,
            projected_date=date(2025, 1, 1),
            remaining_years=1,
            remaining_days=366,
        )
        data = view.model_dump(mode="json")

        assert data["birth_date"] == "1950-01-01"
        assert data["projected_date"] == "2025-01-01"


# =============================================================================
# PAGE / BATCH TESTS
# =============================================================================


class TestCustomerPage:
    def test_empty_page(self):
        page = CustomerPage(items=[], page=0, size=20, total_elements=0, total_pages=0)
        assert page.items == []

    def test_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            CustomerPage(items=[], page=0, size=0, total_elements=0, total_pages=0)


class TestBatchResult:
    """Тесты для BatchResult и его текстовой сводки."""

    def test_summary_without_errors(self):
        result = BatchResult(total=2, succeeded=2, failed=0, processed_at=NOW)
        text = result.summary_text()

        assert "Total processed: 2" in text
        assert "Succeeded: 2" in text
        assert "Failed: 0" in text
        assert "Errors:" not in text

    def test_summary_lists_errors(self):
        result = BatchResult(
            total=2,
            succeeded=1,
            failed=1,
            processed_at=NOW,
            errors=[
                BatchError(index=1, first_name="Luis", last_name="Soto", error="duplicate")
            ],
        )
        text = result.summary_text()

        assert "Errors:" in text
        assert "- Customer Luis Soto: duplicate" in text

    def test_negative_index_rejected(self):
        with pytest.raises(ValidationError):
            BatchError(index=-1, first_name="Luis", last_name="Soto", error="x")
