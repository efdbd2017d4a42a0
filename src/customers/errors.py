"""
Ошибки сервиса клиентов.

Несогласованность возраста (InconsistentAgeError) определена в
src.core.math.age_consistency и пробрасывается сервисом без обёртки.
"""


class CustomerServiceError(Exception):
    """Базовая бизнес-ошибка сервиса клиентов."""


class CustomerNotFoundError(CustomerServiceError):
    """Активная запись с таким id не найдена."""

    def __init__(self, customer_id: int):
        self.customer_id = customer_id
        super().__init__(f"Customer not found with id: {customer_id}")


class DuplicateCustomerError(CustomerServiceError):
    """Клиент с тем же именем, фамилией и датой рождения уже существует."""


class InvalidBirthDateError(CustomerServiceError):
    """Дата рождения не в прошлом относительно текущей даты сервиса."""


class InvalidPayloadError(CustomerServiceError):
    """Входной документ не соответствует контракту customer_request."""

    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__("Invalid customer payload: " + "; ".join(messages))
