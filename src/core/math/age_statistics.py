"""
Age Statistics — описательная статистика по возрастам

Модуль вычисляет сводный StatisticsReport по произвольному набору возрастов:
- Среднее (float деление)
- Выборочное стандартное отклонение (Bessel correction, делитель n-1)
- Медиана (для чётного n — среднее двух центральных, всегда float)
- Минимум / максимум
- Гистограмма по шести фиксированным диапазонам

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Пустая выборка → отчёт с total_count=0, без исключений
2. sample_std_dev == 0.0 при n <= 1
3. Популяционное отклонение (делитель n) НЕ используется
4. Результат не зависит от порядка входных возрастов
5. Сумма счётчиков гистограммы == total_count
6. Гистограмма всегда упорядочена по возрастанию диапазонов
"""

import statistics
from typing import Final, Iterable, NamedTuple, Optional, Sequence

from src.core.domain.reports import StatisticsReport


# =============================================================================
# AGE BUCKETS
# =============================================================================


class AgeBucket(NamedTuple):
    """Диапазон возрастов [lower, upper). upper=None означает бесконечность."""

    label: str
    lower: int
    upper: Optional[int]


# Порядок кортежа задаёт порядок вывода гистограммы
AGE_BUCKETS: Final[tuple[AgeBucket, ...]] = (
    AgeBucket("0-17", 0, 18),
    AgeBucket("18-29", 18, 30),
    AgeBucket("30-44", 30, 45),
    AgeBucket("45-59", 45, 60),
    AgeBucket("60-74", 60, 75),
    AgeBucket("75+", 75, None),
)

EMPTY_SAMPLE_MESSAGE: Final[str] = "No customers registered in the system"


# =============================================================================
# PRIMITIVES
# =============================================================================


def bucket_label(age: int) -> str:
    """
    Метка диапазона для возраста.

    Возрасты ниже нуля попадают в первый диапазон (границы возраста
    проверяются на уровне валидации запросов, не здесь).

    Examples:
        >>> bucket_label(17)
        '0-17'
        >>> bucket_label(18)
        '18-29'
        >>> bucket_label(120)
        '75+'
    """
    for bucket in AGE_BUCKETS:
        if bucket.upper is None or age < bucket.upper:
            return bucket.label
    raise AssertionError("AGE_BUCKETS must end with an unbounded bucket")


def compute_mean(ages: Sequence[int]) -> float:
    """Среднее арифметическое; 0.0 для пустой выборки."""
    if not ages:
        return 0.0
    return float(statistics.fmean(ages))


def compute_sample_std_dev(ages: Sequence[int]) -> float:
    """
    Выборочное стандартное отклонение:

        sqrt( sum((age - mean)^2) / (n - 1) )

    Returns:
        0.0 при n <= 1, иначе неотрицательный float

    Examples:
        >>> compute_sample_std_dev([20, 30, 40])
        10.0
        >>> compute_sample_std_dev([42])
        0.0
    """
    if len(ages) <= 1:
        return 0.0
    return float(statistics.stdev(ages))


def compute_median(ages: Sequence[int]) -> Optional[float]:
    """
    Медиана отсортированной выборки.

    Нечётное n: центральный элемент. Чётное n: среднее двух центральных
    (например, [10, 21] → 15.5). None для пустой выборки.
    """
    if not ages:
        return None
    return float(statistics.median(ages))


def compute_histogram(ages: Iterable[int]) -> dict[str, int]:
    """
    Распределение возрастов по AGE_BUCKETS.

    В результат попадают только непустые диапазоны, в порядке AGE_BUCKETS,
    независимо от порядка входа.

    Examples:
        >>> compute_histogram([40, 20, 30])
        {'18-29': 1, '30-44': 2}
    """
    counts = {bucket.label: 0 for bucket in AGE_BUCKETS}
    for age in ages:
        counts[bucket_label(age)] += 1
    return {label: count for label, count in counts.items() if count > 0}


# =============================================================================
# SUMMARY
# =============================================================================


def summarize(ages: Iterable[int]) -> StatisticsReport:
    """
    Сводная статистика по набору возрастов.

    Args:
        ages: Возрасты (любой iterable; порядок не влияет на результат)

    Returns:
        StatisticsReport. Для пустой выборки: total_count=0, mean=0.0,
        sample_std_dev=0.0, min/max/median=None, пустая гистограмма.

    Examples:
        >>> report = summarize([20, 30, 40])
        >>> (report.mean, report.sample_std_dev, report.median)
        (30.0, 10.0, 30.0)
        >>> summarize([]).total_count
        0
    """
    # Сортировка фиксирует порядок: все поля инвариантны к перестановкам
    sample = sorted(ages)
    total = len(sample)

    if total == 0:
        return StatisticsReport(
            total_count=0,
            mean=0.0,
            sample_std_dev=0.0,
            histogram={},
            message=EMPTY_SAMPLE_MESSAGE,
        )

    return StatisticsReport(
        total_count=total,
        mean=compute_mean(sample),
        sample_std_dev=compute_sample_std_dev(sample),
        min_age=sample[0],
        max_age=sample[-1],
        median=compute_median(sample),
        histogram=compute_histogram(sample),
        message=f"Statistics computed for {total} active customers",
    )
