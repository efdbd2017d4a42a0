"""
Derived Reports — производные отчёты по возрастам клиентов

Immutable Pydantic модели, которые вычисляются на каждый запрос и никогда
не сохраняются:
- StatisticsReport: сводная статистика по множеству возрастов
- Projection: проекция даты и оставшегося времени для одной записи

Полная совместимость с JSON Schema (contracts/schema/statistics_report.json,
contracts/schema/customer_view.json).
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# STATISTICS REPORT
# =============================================================================


class StatisticsReport(BaseModel):
    """
    Сводная статистика по возрастам активных клиентов.

    Immutable модель (frozen=True). При total_count == 0:
    mean == 0, sample_std_dev == 0, min/max/median отсутствуют,
    histogram пуст, message содержит индикатор "нет данных".
    """

    total_count: int = Field(..., ge=0, description="Количество возрастов в выборке")
    mean: float = Field(..., description="Среднее арифметическое")
    sample_std_dev: float = Field(
        ..., ge=0, description="Выборочное стандартное отклонение (делитель n-1)"
    )
    min_age: Optional[int] = Field(None, description="Минимальный возраст (None для пустой выборки)")
    max_age: Optional[int] = Field(None, description="Максимальный возраст (None для пустой выборки)")
    median: Optional[float] = Field(None, description="Медиана (None для пустой выборки)")
    histogram: dict[str, int] = Field(
        default_factory=dict,
        description="Распределение по возрастным диапазонам (в порядке возрастания)",
    )
    message: str = Field(..., min_length=1, description="Человекочитаемое описание")
    computed_at: Optional[datetime] = Field(
        None, description="Момент расчёта (заполняется сервисом)"
    )

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        """True если статистика посчитана по пустой выборке."""
        return self.total_count == 0


# =============================================================================
# PROJECTION
# =============================================================================


class Projection(BaseModel):
    """
    Проекция даты для одной записи: birth_date + life_expectancy_years.

    remaining_days и remaining_years никогда не отрицательны:
    если projected_date уже в прошлом, оба равны 0.
    """

    projected_date: date = Field(..., description="Проецируемая дата")
    remaining_days: int = Field(..., ge=0, description="Дней до projected_date")
    remaining_years: int = Field(..., ge=0, description="Полных лет до projected_date")

    model_config = {"frozen": True}
