"""
Centralized Configuration for the customer registry

Все настройки процесса загружаются один раз при старте и далее только
читаются. Любое значение переопределяется переменной окружения с префиксом
CUSTOMERS_ (например, CUSTOMERS_LIFE_EXPECTANCY_YEARS=80) или файлом .env.

Usage:
    from src.customers.config import settings

    years = settings.life_expectancy_years
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.logging import RichHandler

from src.core.math.projection import LIFE_EXPECTANCY_YEARS_DEFAULT

# Формат файлового лога; консоль форматирует RichHandler
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class CustomerSettings(BaseSettings):
    """
    Настройки сервиса клиентов.

    Type safety через Pydantic, override через окружение.
    """

    # ========== Projection ==========
    life_expectancy_years: int = Field(
        default=LIFE_EXPECTANCY_YEARS_DEFAULT,
        gt=0,
        description="Years added to a birth date to get the projected date",
    )

    # ========== Notifications ==========
    notifications_enabled: bool = Field(
        default=True,
        description="Dispatch e-mail notifications on writes and reports",
    )
    admin_email: str = Field(
        default="admin@example.com",
        min_length=3,
        description="Recipient of 'customer created' and batch summaries",
    )
    email_max_workers: int = Field(
        default=2,
        gt=0,
        description="Thread pool size for notification dispatch",
    )

    # ========== Listing ==========
    default_page_size: int = Field(default=20, gt=0, description="Page size when none is given")
    max_page_size: int = Field(default=100, gt=0, description="Upper bound for requested page size")

    # ========== Logging ==========
    log_level: str = Field(default="INFO", description="Root logging level")
    log_file: Optional[Path] = Field(
        default=None, description="Also write the log to this file when set"
    )

    model_config = SettingsConfigDict(
        env_prefix="CUSTOMERS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def check_page_sizes(self) -> "CustomerSettings":
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) exceeds "
                f"max_page_size ({self.max_page_size})"
            )
        return self


def setup_logging(level: Optional[str] = None, log_file: Optional[Path] = None) -> None:
    """
    Настройка root логгера: Rich в консоль и, при необходимости, файл.

    Args:
        level: Уровень (по умолчанию settings.log_level)
        log_file: Файл лога (по умолчанию settings.log_file)
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    handlers: list[logging.Handler] = [RichHandler(rich_tracebacks=True)]

    path = log_file or settings.log_file
    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )


# Загружается один раз при импорте
settings = CustomerSettings()
