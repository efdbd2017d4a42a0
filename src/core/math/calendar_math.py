"""
Calendar Math — календарная арифметика для возрастов и проекций

Модуль содержит единственные допустимые примитивы для:
- Подсчёта полных лет между двумя датами (whole years elapsed)
- Сдвига даты на N календарных лет
- Подсчёта дней между датами

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. whole_years_between считает полные 12-месячные периоды, а не разницу годов
2. Результат усекается к нулю (truncation), никогда не округляется
3. 29 февраля + N лет в невисокосный год → 28 февраля (clamp к концу месяца)
4. Все функции чистые и детерминированные: "сегодня" передаётся явно
"""

from datetime import date
from typing import Final

# =============================================================================
# CONSTANTS
# =============================================================================

# День, на который переносится 29 февраля в невисокосном году
LEAP_DAY_FALLBACK: Final[int] = 28


# =============================================================================
# WHOLE YEARS
# =============================================================================


def whole_years_between(start: date, end: date) -> int:
    """
    Количество полных лет между start и end.

    Год считается прошедшим только после наступления того же (месяц, день).
    Для end < start результат отрицательный и симметричный:
    whole_years_between(a, b) == -whole_years_between(b, a).

    Args:
        start: Начальная дата (например, дата рождения)
        end: Конечная дата (например, сегодня)

    Returns:
        Число полных лет, усечённое к нулю

    Examples:
        >>> whole_years_between(date(1989, 3, 15), date(2024, 3, 20))
        35
        >>> whole_years_between(date(1989, 3, 10), date(2024, 3, 5))
        34
        >>> whole_years_between(date(2000, 2, 29), date(2001, 2, 28))
        0
    """
    if end < start:
        return -whole_years_between(end, start)

    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        # Годовщина в текущем году ещё не наступила
        years -= 1
    return years


# =============================================================================
# DATE SHIFTS
# =============================================================================


def add_years(value: date, years: int) -> date:
    """
    Сдвиг даты на years календарных лет.

    29 февраля в невисокосный целевой год переносится на 28 февраля.

    Examples:
        >>> add_years(date(1950, 1, 1), 75)
        datetime.date(2025, 1, 1)
        >>> add_years(date(2000, 2, 29), 1)
        datetime.date(2001, 2, 28)
    """
    target_year = value.year + years
    try:
        return value.replace(year=target_year)
    except ValueError:
        # Только 29.02 → невисокосный год
        return value.replace(year=target_year, day=LEAP_DAY_FALLBACK)


def days_between(start: date, end: date) -> int:
    """
    Число дней от start до end (отрицательное, если end раньше start).

    Examples:
        >>> days_between(date(2024, 1, 1), date(2025, 1, 1))
        366
        >>> days_between(date(2024, 1, 2), date(2024, 1, 1))
        -1
    """
    return (end - start).days
