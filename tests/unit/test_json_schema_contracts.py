"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов и constraints (min/max/pattern/enum)
- Интеграция с Pydantic моделями
"""

from datetime import date, datetime

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    BatchResultValidator,
    CustomerRequestValidator,
    CustomerViewValidator,
    SchemaLoader,
    StatisticsReportValidator,
    validate_batch_result,
    validate_customer_request,
    validate_customer_view,
    validate_statistics_report,
)
from src.core.domain import BatchError, BatchResult, CustomerView
from src.core.math import summarize


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_customer_request():
    """Валидный customer_request для тестирования."""
    return {
        "first_name": "Juan",
        "last_name": "Pérez",
        "age": 35,
        "birth_date": "1989-03-15",
    }


@pytest.fixture
def customer_view():
    return CustomerView(
        id=1,
        first_name="Juan",
        last_name="Pérez",
        age=35,
        birth_date=date(1989, 3, 15),
        registered_at=datetime(2024, 3, 20, 10, 0, 0),
        projected_date=date(2064, 3, 15),
        remaining_years=39,
        remaining_days=14605,
    )


# =============================================================================
# SCHEMA LOADER TESTS
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем."""

    @pytest.mark.parametrize(
        "schema_name",
        ["customer_request", "customer_view", "statistics_report", "batch_result"],
    )
    def test_all_schemas_load(self, schema_name):
        schema = SchemaLoader().load_schema(schema_name)
        assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("customer_view") is loader.load_schema("customer_view")
        assert loader.validator_for("customer_view") is loader.validator_for("customer_view")

    def test_available(self):
        assert SchemaLoader().available() == [
            "batch_result", "customer_request", "customer_view", "statistics_report",
        ]

    def test_custom_loader(self, tmp_path):
        (tmp_path / "customer_request.json").write_text(
            '{"$schema": "https://json-schema.org/draft/2020-12/schema", "type": "object"}',
            encoding="utf-8",
        )
        validator = CustomerRequestValidator(loader=SchemaLoader(schema_dir=tmp_path))
        assert validator.is_valid({"anything": 1})

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(schema_dir=tmp_path / "nope")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text('{"type": 12}', encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(schema_dir=tmp_path).load_schema("broken")


# =============================================================================
# CUSTOMER REQUEST CONTRACT
# =============================================================================


class TestCustomerRequestContract:
    """Тесты customer_request контракта."""

    def test_valid(self, valid_customer_request):
        validate_customer_request(valid_customer_request)

    @pytest.mark.parametrize("field", ["first_name", "last_name", "age", "birth_date"])
    def test_missing_required(self, valid_customer_request, field):
        del valid_customer_request[field]
        with pytest.raises(ValidationError):
            validate_customer_request(valid_customer_request)

    @pytest.mark.parametrize("age", [-1, 151, "35", 35.5])
    def test_invalid_age(self, valid_customer_request, age):
        valid_customer_request["age"] = age
        assert not CustomerRequestValidator().is_valid(valid_customer_request)

    def test_invalid_name_pattern(self, valid_customer_request):
        valid_customer_request["first_name"] = "Juan3"
        with pytest.raises(ValidationError):
            validate_customer_request(valid_customer_request)

    def test_invalid_birth_date_format(self, valid_customer_request):
        valid_customer_request["birth_date"] = "15/03/1989"
        with pytest.raises(ValidationError):
            validate_customer_request(valid_customer_request)

    @pytest.mark.parametrize("birth_date", ["1989-02-30", "2023-02-29", "1989-13-01"])
    def test_impossible_calendar_date(self, valid_customer_request, birth_date):
        """Формат YYYY-MM-DD верный, но такой даты нет в календаре."""
        valid_customer_request["birth_date"] = birth_date
        messages = CustomerRequestValidator().error_messages(valid_customer_request)

        assert len(messages) == 1
        assert messages[0].startswith("birth_date: ")

    def test_leap_day_accepted(self, valid_customer_request):
        valid_customer_request["birth_date"] = "2000-02-29"
        validate_customer_request(valid_customer_request)

    def test_additional_properties_rejected(self, valid_customer_request):
        valid_customer_request["email"] = "juan@example.com"
        with pytest.raises(ValidationError):
            validate_customer_request(valid_customer_request)

    def test_error_messages_collects_all(self, valid_customer_request):
        valid_customer_request["age"] = 200
        valid_customer_request["first_name"] = "J"
        messages = CustomerRequestValidator().error_messages(valid_customer_request)

        assert len(messages) == 2
        assert messages[0].startswith("age: ")
        assert messages[1].startswith("first_name: ")

    def test_iter_errors_empty_for_valid(self, valid_customer_request):
        assert list(CustomerRequestValidator().iter_errors(valid_customer_request)) == []


# =============================================================================
# PYDANTIC INTEGRATION
# =============================================================================


class TestPydanticIntegration:
    """model_dump(mode='json') доменных моделей соответствует схемам."""

    def test_customer_view(self, customer_view):
        validate_customer_view(customer_view.model_dump(mode="json"))

    def test_customer_view_negative_remaining_rejected(self, customer_view):
        data = customer_view.model_dump(mode="json")
        data["remaining_days"] = -5
        assert not CustomerViewValidator().is_valid(data)

    def test_statistics_report(self):
        report = summarize([5, 20, 33, 47, 61, 80])
        validate_statistics_report(report.model_dump(mode="json"))

    def test_empty_statistics_report(self):
        validate_statistics_report(summarize([]).model_dump(mode="json"))

    def test_statistics_report_with_timestamp(self):
        report = summarize([20, 30]).model_copy(
            update={"computed_at": datetime(2024, 3, 20, 12, 0, 0)}
        )
        validate_statistics_report(report.model_dump(mode="json"))

    def test_statistics_unknown_bucket_rejected(self):
        data = summarize([20]).model_dump(mode="json")
        data["histogram"] = {"20-25": 1}
        assert not StatisticsReportValidator().is_valid(data)

    def test_batch_result(self, customer_view):
        result = BatchResult(
            total=2,
            succeeded=1,
            failed=1,
            processed_at=datetime(2024, 3, 20, 12, 0, 0),
            created=[customer_view],
            errors=[BatchError(index=1, first_name="Luis", last_name="Soto", error="duplicate")],
        )
        validate_batch_result(result.model_dump(mode="json"))
        assert BatchResultValidator().is_valid(result.model_dump(mode="json"))
