"""
JSON Schema Contract Validators

Проверка внешних документов системы учёта клиентов против формальных
контрактов (JSON Schema Draft 2020-12, библиотека jsonschema).

Контракты (contracts/schema/):
- customer_request.json   входные данные клиента
- customer_view.json      внешнее представление клиента
- statistics_report.json  сводная статистика по возрастам
- batch_result.json       итог пакетного создания

Поля с "format": "date" проверяются по календарю: "1989-02-30" не пройдёт.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

# contracts/schema относительно корня репозитория
DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Чтение контрактов с диска и сборка валидаторов.

    Каждая схема читается и проходит meta-validation один раз; собранный
    валидатор переиспользуется всеми ContractValidator с тем же контрактом.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else DEFAULT_SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._validators: Dict[str, Draft202012Validator] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def available(self) -> list[str]:
        """Имена контрактов в каталоге (без расширения), по алфавиту."""
        return sorted(path.stem for path in self._schema_dir.glob("*.json"))

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема контракта как dict.

        Raises:
            FileNotFoundError: нет файла <schema_name>.json
            ValueError: файл не является валидной JSON Schema
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema

    def validator_for(self, schema_name: str) -> Draft202012Validator:
        """Собранный валидатор контракта (с проверкой format)."""
        validator = self._validators.get(schema_name)
        if validator is None:
            validator = Draft202012Validator(
                self.load_schema(schema_name),
                format_checker=Draft202012Validator.FORMAT_CHECKER,
            )
            self._validators[schema_name] = validator
        return validator


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка документов против одного контракта."""

    schema_name: str = ""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        self.loader = loader or _SCHEMA_LOADER
        self.validator = self.loader.validator_for(self.schema_name)

    @property
    def schema(self) -> Dict[str, Any]:
        return self.validator.schema

    def validate(self, data: Any) -> None:
        """
        Raises:
            ValidationError: первое найденное нарушение контракта
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)

    def error_messages(self, data: Any) -> list[str]:
        """
        Все нарушения контракта в стабильном порядке (по пути поля).

        Формат: "<путь>: <сообщение>"; для корня документа только сообщение.
        """
        messages = []
        for error in sorted(self.iter_errors(data), key=lambda e: [str(p) for p in e.path]):
            path = ".".join(str(part) for part in error.path)
            messages.append(f"{path}: {error.message}" if path else error.message)
        return messages


class CustomerRequestValidator(ContractValidator):
    schema_name = "customer_request"


class CustomerViewValidator(ContractValidator):
    schema_name = "customer_view"


class StatisticsReportValidator(ContractValidator):
    schema_name = "statistics_report"


class BatchResultValidator(ContractValidator):
    schema_name = "batch_result"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_customer_request(data: Dict[str, Any]) -> None:
    """Raises ValidationError если документ нарушает customer_request."""
    CustomerRequestValidator().validate(data)


def validate_customer_view(data: Dict[str, Any]) -> None:
    CustomerViewValidator().validate(data)


def validate_statistics_report(data: Dict[str, Any]) -> None:
    StatisticsReportValidator().validate(data)


def validate_batch_result(data: Dict[str, Any]) -> None:
    BatchResultValidator().validate(data)
