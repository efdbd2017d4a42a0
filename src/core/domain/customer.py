"""
Customer — Модели клиента

Immutable Pydantic модели:
- CustomerRequest: входные данные на создание / обновление
- Customer: сохранённая запись (soft delete через active)
- CustomerView: внешнее представление записи с полями проекции
- CustomerPage: страница списка клиентов
- BatchError / BatchResult: итог пакетного создания

Полная совместимость с JSON Schema (contracts/schema/customer_request.json,
contracts/schema/customer_view.json, contracts/schema/batch_result.json).
"""

from datetime import date, datetime
from typing import Final, Optional

from pydantic import BaseModel, Field

from .reports import Projection

# =============================================================================
# CONSTANTS
# =============================================================================

# Только буквы (включая испанские диакритики) и пробелы
NAME_PATTERN: Final[str] = r"^[a-zA-ZáéíóúÁÉÍÓÚñÑ\s]+$"

AGE_MIN: Final[int] = 0
AGE_MAX: Final[int] = 150


# =============================================================================
# REQUEST
# =============================================================================


class CustomerRequest(BaseModel):
    """
    Данные клиента на создание / обновление.

    Проверяются границы полей. Дата рождения в прошлом и согласованность
    возраста проверяются сервисом относительно его "сегодня".
    """

    first_name: str = Field(
        ..., min_length=2, max_length=100, pattern=NAME_PATTERN, description="Имя"
    )
    last_name: str = Field(
        ..., min_length=2, max_length=100, pattern=NAME_PATTERN, description="Фамилия"
    )
    age: int = Field(..., ge=AGE_MIN, le=AGE_MAX, description="Заявленный возраст (лет)")
    birth_date: date = Field(..., description="Дата рождения")

    model_config = {"frozen": True}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# =============================================================================
# STORED RECORD
# =============================================================================


class Customer(BaseModel):
    """
    Сохранённая запись клиента.

    Immutable модель (frozen=True). Все изменения создают новый экземпляр
    через with_changes() / deactivated().
    """

    id: int = Field(..., gt=0, description="Идентификатор записи")
    first_name: str = Field(..., min_length=1, description="Имя")
    last_name: str = Field(..., min_length=1, description="Фамилия")
    age: int = Field(..., ge=AGE_MIN, le=AGE_MAX, description="Возраст (лет)")
    birth_date: date = Field(..., description="Дата рождения")

    registered_at: datetime = Field(..., description="Момент регистрации")
    updated_at: datetime = Field(..., description="Момент последнего изменения")
    active: bool = Field(True, description="False после soft delete")
    created_by: Optional[str] = Field(None, description="Пользователь, создавший запись")

    model_config = {"frozen": True}

    def with_changes(self, request: CustomerRequest, now: datetime) -> "Customer":
        """Новая версия записи с полями из request."""
        return self.model_copy(
            update={
                "first_name": request.first_name,
                "last_name": request.last_name,
                "age": request.age,
                "birth_date": request.birth_date,
                "updated_at": now,
            }
        )

    def deactivated(self, now: datetime) -> "Customer":
        """Soft delete: запись остаётся, но перестаёт быть активной."""
        return self.model_copy(update={"active": False, "updated_at": now})


# =============================================================================
# EXTERNAL VIEW
# =============================================================================


class CustomerView(BaseModel):
    """
    Внешнее представление клиента с производными полями проекции.
    """

    id: int = Field(..., gt=0)
    first_name: str
    last_name: str
    age: int = Field(..., ge=AGE_MIN, le=AGE_MAX)
    birth_date: date
    registered_at: datetime

    projected_date: date = Field(..., description="birth_date + life_expectancy_years")
    remaining_years: int = Field(..., ge=0, description="Полных лет до projected_date")
    remaining_days: int = Field(..., ge=0, description="Дней до projected_date")

    model_config = {"frozen": True}

    @classmethod
    def from_customer(cls, customer: Customer, projection: Projection) -> "CustomerView":
        return cls(
            id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            age=customer.age,
            birth_date=customer.birth_date,
            registered_at=customer.registered_at,
            projected_date=projection.projected_date,
            remaining_years=projection.remaining_years,
            remaining_days=projection.remaining_days,
        )


class CustomerPage(BaseModel):
    """Страница активных клиентов (нумерация страниц с 0)."""

    items: list[CustomerView] = Field(default_factory=list)
    page: int = Field(..., ge=0)
    size: int = Field(..., gt=0)
    total_elements: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)

    model_config = {"frozen": True}


# =============================================================================
# BATCH
# =============================================================================


class BatchError(BaseModel):
    """Ошибка одной позиции пакетного создания."""

    index: int = Field(..., ge=0, description="Позиция в исходном списке")
    first_name: str
    last_name: str
    error: str = Field(..., min_length=1)

    model_config = {"frozen": True}


class BatchResult(BaseModel):
    """
    Итог пакетного создания.

    Инвариант: succeeded + failed == total.
    """

    total: int = Field(..., ge=0)
    succeeded: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    processed_at: datetime
    created: list[CustomerView] = Field(default_factory=list)
    errors: list[BatchError] = Field(default_factory=list)

    model_config = {"frozen": True}

    def summary_text(self) -> str:
        """Текстовая сводка для уведомления."""
        lines = [
            "Batch processing completed",
            "==========================",
            f"Total processed: {self.total}",
            f"Succeeded: {self.succeeded}",
            f"Failed: {self.failed}",
            f"Date: {self.processed_at.isoformat()}",
        ]
        if self.errors:
            lines.append("")
            lines.append("Errors:")
            for error in self.errors:
                lines.append(f"- Customer {error.first_name} {error.last_name}: {error.error}")
        return "\n".join(lines) + "\n"
