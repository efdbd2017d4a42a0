"""
Identity — кто выполняет операцию.

Выдача и проверка токенов живут во внешнем identity-сервисе; сервису
клиентов нужен только subject текущего вызова.
"""

from typing import Optional, Protocol


class IdentityProvider(Protocol):
    """Контракт источника текущего пользователя."""

    def current_subject(self) -> Optional[str]: ...


class StaticIdentity:
    """Фиксированный subject (CLI, фоновые задачи, тесты)."""

    def __init__(self, subject: Optional[str] = None):
        self.subject = subject

    def current_subject(self) -> Optional[str]:
        return self.subject
