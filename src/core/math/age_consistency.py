"""
Age Consistency — проверка согласованности возраста и даты рождения

Заявленный возраст считается согласованным с датой рождения, если

    abs(whole_years_between(birth_date, today) - age) <= AGE_TOLERANCE_YEARS

Допуск в 1 год покрывает день рождения, который ещё не наступил в текущем
году на момент, когда возраст был вычислен вызывающей стороной.

Границы age (0..150) и birth_date < today здесь НЕ перепроверяются:
это ответственность слоя валидации запросов.
"""

from datetime import date
from typing import Final

from src.core.math.calendar_math import whole_years_between

# =============================================================================
# CONSTANTS
# =============================================================================

# Максимально допустимое расхождение заявленного и вычисленного возраста
AGE_TOLERANCE_YEARS: Final[int] = 1


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InconsistentAgeError(Exception):
    """
    Заявленный возраст не согласуется с датой рождения.

    Содержит оба значения, чтобы вызывающая сторона могла исправить
    любое из полей. Повторный вызов с теми же входами падает так же.
    """

    def __init__(self, provided_age: int, expected_age: int):
        self.provided_age = provided_age
        self.expected_age = expected_age
        super().__init__(
            f"Age ({provided_age}) is not consistent with the birth date. "
            f"Expected age: {expected_age}"
        )


# =============================================================================
# VALIDATION
# =============================================================================


def expected_age(birth_date: date, today: date) -> int:
    """Возраст по дате рождения на дату today (полные годы)."""
    return whole_years_between(birth_date, today)


def is_age_consistent(age: int, birth_date: date, today: date) -> bool:
    """
    Проверка согласованности без exception.

    Examples:
        >>> is_age_consistent(35, date(1989, 3, 15), date(2024, 3, 20))
        True
        >>> is_age_consistent(40, date(1989, 3, 15), date(2024, 3, 20))
        False
    """
    return abs(expected_age(birth_date, today) - age) <= AGE_TOLERANCE_YEARS


def validate_age_consistency(age: int, birth_date: date, today: date) -> None:
    """
    Валидация согласованности возраста и даты рождения.

    Args:
        age: Заявленный возраст (0..150, проверено вызывающей стороной)
        birth_date: Дата рождения (< today, проверено вызывающей стороной)
        today: Текущая дата

    Raises:
        InconsistentAgeError: Если расхождение больше AGE_TOLERANCE_YEARS
    """
    computed = expected_age(birth_date, today)
    if abs(computed - age) > AGE_TOLERANCE_YEARS:
        raise InconsistentAgeError(provided_age=age, expected_age=computed)
