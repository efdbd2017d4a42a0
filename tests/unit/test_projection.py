"""
Тесты для Projection — проекция даты от даты рождения

Проверяемые инварианты:
1. projected_date = birth_date + life_expectancy_years (календарно)
2. remaining_days / remaining_years никогда не отрицательны
3. Прошедшая projected_date → оба поля 0
4. remaining_years — полные годы, усечение, не округление
5. Immutability результата
"""

from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from src.core.domain import Projection
from src.core.math.projection import LIFE_EXPECTANCY_YEARS_DEFAULT, project


class TestProject:
    """Конкретные сценарии проекции."""

    def test_default_life_expectancy(self):
        assert LIFE_EXPECTANCY_YEARS_DEFAULT == 75

    def test_one_year_remaining_across_leap_day(self):
        """1950-01-01 + 75, сегодня 2024-01-01 → 2025-01-01, 366 дней, 1 год."""
        p = project(date(1950, 1, 1), 75, date(2024, 1, 1))

        assert p.projected_date == date(2025, 1, 1)
        assert p.remaining_days == 366  # 2024: високосный
        assert p.remaining_years == 1

    def test_one_year_remaining_without_leap_day(self):
        p = project(date(1951, 1, 1), 75, date(2025, 1, 1))

        assert p.projected_date == date(2026, 1, 1)
        assert p.remaining_days == 365
        assert p.remaining_years == 1

    def test_remaining_years_truncated_not_rounded(self):
        """365 дней до проекции, но годовщина не наступила → 0 полных лет."""
        today = date(2024, 1, 2)
        p = project(date(1950, 1, 1), 75, today)

        assert p.remaining_days == 365
        assert p.remaining_years == 0

    def test_projected_date_today(self):
        p = project(date(1949, 6, 15), 75, date(2024, 6, 15))

        assert p.projected_date == date(2024, 6, 15)
        assert p.remaining_days == 0
        assert p.remaining_years == 0

    def test_projected_date_in_past_clamped(self):
        """Проекция далеко в прошлом → 0 / 0."""
        p = project(date(1900, 1, 1), 75, date(2024, 1, 1))

        assert p.projected_date == date(1975, 1, 1)
        assert p.remaining_days == 0
        assert p.remaining_years == 0

    def test_projected_date_yesterday_clamped(self):
        today = date(2024, 6, 16)
        p = project(date(1949, 6, 15), 75, today)

        assert p.projected_date == today - timedelta(days=1)
        assert p.remaining_days == 0
        assert p.remaining_years == 0

    def test_young_customer(self):
        p = project(date(2000, 5, 20), 75, date(2024, 5, 19))

        assert p.projected_date == date(2075, 5, 20)
        assert p.remaining_years == 51
        assert p.remaining_days == (date(2075, 5, 20) - date(2024, 5, 19)).days

    def test_leap_day_birth(self):
        """29.02 + 75 лет (невисокосный год) → 28.02."""
        p = project(date(1952, 2, 29), 75, date(2024, 3, 1))

        assert p.projected_date == date(2027, 2, 28)
        assert p.remaining_years == 2

    def test_custom_life_expectancy(self):
        p = project(date(1950, 1, 1), 80, date(2024, 1, 1))

        assert p.projected_date == date(2030, 1, 1)
        assert p.remaining_years == 6

    @pytest.mark.parametrize("offset_years", [-100, -10, -1, 0, 1, 10, 100])
    def test_never_negative(self, offset_years):
        today = date(2024, 7, 1)
        birth = date(1949 + offset_years, 7, 1)
        p = project(birth, 75, today)

        assert p.remaining_days >= 0
        assert p.remaining_years >= 0

    def test_result_is_frozen(self):
        p = project(date(1950, 1, 1), 75, date(2024, 1, 1))
        with pytest.raises(ValidationError):
            p.remaining_days = 10


class TestProjectionModel:
    """Валидация модели Projection."""

    def test_negative_remaining_rejected(self):
        with pytest.raises(ValidationError):
            Projection(projected_date=date(2025, 1, 1), remaining_days=-1, remaining_years=0)

        with pytest.raises(ValidationError):
            Projection(projected_date=date(2025, 1, 1), remaining_days=0, remaining_years=-1)
