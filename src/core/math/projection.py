"""
Projection — проекция даты от даты рождения

Для одной записи вычисляет:
    projected_date  = add_years(birth_date, life_expectancy_years)
    remaining_days  = days_between(today, projected_date), clamp к 0
    remaining_years = whole_years_between(today, projected_date), clamp к 0

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. remaining_days и remaining_years никогда не отрицательны
2. Если projected_date в прошлом — оба поля равны 0
3. remaining_years использует тот же алгоритм полных лет, что и проверка возраста
4. life_expectancy_years не валидируется (ответственность конфигурации)
"""

from datetime import date
from typing import Final

from src.core.domain.reports import Projection
from src.core.math.calendar_math import add_years, days_between, whole_years_between

# =============================================================================
# CONSTANTS
# =============================================================================

# Ожидаемая продолжительность жизни по умолчанию (лет)
LIFE_EXPECTANCY_YEARS_DEFAULT: Final[int] = 75


# =============================================================================
# PROJECTION
# =============================================================================


def project(birth_date: date, life_expectancy_years: int, today: date) -> Projection:
    """
    Проекция даты и оставшегося времени для одной записи.

    Args:
        birth_date: Дата рождения
        life_expectancy_years: Сдвиг в годах (непрозрачная положительная константа)
        today: Текущая дата

    Returns:
        Projection с неотрицательными remaining_days / remaining_years

    Examples:
        >>> p = project(date(1950, 1, 1), 75, date(2024, 1, 1))
        >>> (p.projected_date, p.remaining_days, p.remaining_years)
        (datetime.date(2025, 1, 1), 366, 1)
        >>> project(date(1900, 1, 1), 75, date(2024, 1, 1)).remaining_days
        0
    """
    projected_date = add_years(birth_date, life_expectancy_years)
    raw_remaining_days = days_between(today, projected_date)

    if raw_remaining_days < 0:
        return Projection(
            projected_date=projected_date,
            remaining_days=0,
            remaining_years=0,
        )

    return Projection(
        projected_date=projected_date,
        remaining_days=raw_remaining_days,
        remaining_years=whole_years_between(today, projected_date),
    )
