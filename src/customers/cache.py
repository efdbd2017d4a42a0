"""
Customer Cache — кэш производных представлений

Регионы:
- "customers": страницы списка клиентов, ключ (page, size)
- "statistics": сводная статистика, ключ "general"

Политика: любая запись в хранилище инвалидирует ВСЕ регионы целиком
(invalidate-all-on-write). Частичная инвалидация не поддерживается.
"""

import logging
import threading
from typing import Any, Callable, Hashable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

CUSTOMERS_REGION = "customers"
STATISTICS_REGION = "statistics"


class CustomerCache:
    """
    Потокобезопасный кэш с регионами и счётчиками.

    compute() вызывается вне lock: два конкурентных промаха могут оба
    вычислить значение, сохранится последнее.
    """

    def __init__(self):
        self._regions: dict[str, dict[Hashable, Any]] = {}
        self._lock = threading.RLock()
        self._stats = {
            "hits": 0,
            "misses": 0,
            "sets": 0,
            "invalidations": 0,
        }

    def get_or_compute(self, region: str, key: Hashable, compute: Callable[[], T]) -> T:
        """
        Значение из кэша или результат compute(), сохранённый в кэш.

        Exceptions из compute() пробрасываются, ничего не сохраняется.
        """
        with self._lock:
            entries = self._regions.get(region)
            if entries is not None and key in entries:
                self._stats["hits"] += 1
                return entries[key]
            self._stats["misses"] += 1
            generation = self._stats["invalidations"]

        value = compute()

        with self._lock:
            # Инвалидация во время compute(): значение уже устарело
            if generation == self._stats["invalidations"]:
                self._regions.setdefault(region, {})[key] = value
                self._stats["sets"] += 1
        return value

    def invalidate_all(self) -> None:
        """Очистка всех регионов."""
        with self._lock:
            dropped = sum(len(entries) for entries in self._regions.values())
            self._regions.clear()
            self._stats["invalidations"] += 1
        logger.debug("Cache invalidated, %d entries dropped", dropped)

    def size(self, region: str | None = None) -> int:
        with self._lock:
            if region is not None:
                return len(self._regions.get(region, {}))
            return sum(len(entries) for entries in self._regions.values())

    def stats(self) -> dict[str, int]:
        """Копия счётчиков hits / misses / sets / invalidations."""
        with self._lock:
            return dict(self._stats)
