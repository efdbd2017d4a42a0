"""
Email notifications for customer events.

Отправка выполняется в пуле потоков и не блокирует вызывающую сторону:
каждый notify_* возвращает Future[bool] (True — письмо отправлено).
Ошибка доставки логируется и превращается в False; ход записи клиента
от результата отправки не зависит.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from typing import Optional, Protocol

from src.core.domain import BatchResult, CustomerView, StatisticsReport

logger = logging.getLogger(__name__)


class MailDeliveryError(Exception):
    """Транспорт не смог доставить письмо."""


class MailTransport(Protocol):
    """Контракт транспорта почты."""

    def send(self, to: str, subject: str, body: str) -> None: ...


class LoggingMailTransport:
    """Транспорт по умолчанию: письмо только пишется в лог."""

    def send(self, to: str, subject: str, body: str) -> None:
        logger.info("Mail to %s: %s\n%s", to, subject, body)


class EmailNotifier:
    """
    Асинхронная отправка уведомлений о клиентах.

    Args:
        transport: Транспорт почты
        admin_email: Получатель служебных уведомлений
        max_workers: Размер пула потоков
        enabled: False — уведомления не отправляются (Future сразу False)
    """

    def __init__(
        self,
        transport: MailTransport,
        admin_email: str,
        max_workers: int = 2,
        enabled: bool = True,
    ):
        self.transport = transport
        self.admin_email = admin_email
        self.enabled = enabled
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="customer-mail"
        )

    def notify_customer_created(self, customer: CustomerView) -> Future:
        body = (
            "A new customer has been registered:\n"
            f"ID: {customer.id}\n"
            f"Name: {customer.first_name} {customer.last_name}\n"
            f"Age: {customer.age}\n"
            f"Birth date: {customer.birth_date.isoformat()}\n"
            f"Projected date: {customer.projected_date.isoformat()}\n"
        )
        return self._submit(self.admin_email, f"New customer - {customer.id}", body)

    def notify_customer_created_to(
        self, customer: CustomerView, created_by: Optional[str], to: str, now: datetime
    ) -> Future:
        """Персональное уведомление о создании на указанный адрес."""
        body = (
            "Customer created successfully:\n"
            f"ID: {customer.id}\n"
            f"Name: {customer.first_name} {customer.last_name}\n"
            f"Age: {customer.age} years\n"
            f"Created by: {created_by or 'unknown'}\n"
            f"Date: {now.isoformat(timespec='seconds')}"
        )
        subject = f"Customer Created - {customer.first_name} {customer.last_name}"
        return self._submit(to, subject, body)

    def notify_statistics(self, report: StatisticsReport, to: str) -> Future:
        lines = [
            f"Total customers: {report.total_count}",
            f"Mean age: {report.mean:.2f}",
            f"Sample standard deviation: {report.sample_std_dev:.2f}",
        ]
        if not report.is_empty:
            lines.append(f"Min / max age: {report.min_age} / {report.max_age}")
            lines.append(f"Median age: {report.median:.1f}")
            for label, count in report.histogram.items():
                lines.append(f"  {label}: {count}")
        lines.append(report.message)
        return self._submit(to, "Customer statistics", "\n".join(lines) + "\n")

    def notify_batch_summary(self, result: BatchResult) -> Future:
        return self._submit(self.admin_email, "Bulk customer creation", result.summary_text())

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _submit(self, to: str, subject: str, body: str) -> Future:
        if not self.enabled:
            future: Future = Future()
            future.set_result(False)
            return future
        return self._executor.submit(self._deliver, to, subject, body)

    def _deliver(self, to: str, subject: str, body: str) -> bool:
        try:
            self.transport.send(to, subject, body)
        except Exception:
            # Future отправки никто не обязан читать: сбой фиксируется здесь
            logger.exception("Failed to send '%s' to %s", subject, to)
            return False
        logger.info("Sent '%s' to %s", subject, to)
        return True
