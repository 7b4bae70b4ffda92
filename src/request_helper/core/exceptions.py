"""
Иерархия исключений request-helper.

Классификация:
- TemporaryError (retryable=True) - внешний retry engine может повторить
- FatalError (fatal=True) - повторять бессмысленно
- AbortError - запрос отменён вызывающей стороной
"""

from typing import Any, Optional

import requests

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RequestHelperError(Exception):
    """Базовое исключение request-helper."""

    retryable: bool = False
    fatal: bool = False

    def __init__(self, message: str, **kwargs: Any):
        self.message = message
        self.request_id: Optional[str] = kwargs.get('request_id')
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ВРЕМЕННЫЕ ОШИБКИ (retryable=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TemporaryError(RequestHelperError):
    """
    Временная ошибка.

    Примеры: таймауты, сетевые ошибки, 5xx серверов.
    """
    retryable = True


class NetworkError(TemporaryError):
    """Сетевая ошибка."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = message
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)


class TimeoutError(NetworkError):
    """
    Таймаут запроса.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        timeout: Значение таймаута (сек)
    """

    def __init__(self, message: str, url: Optional[str] = None, timeout: Optional[float] = None):
        self.timeout = timeout
        msg = message
        if timeout:
            msg += f" (timeout: {timeout}s)"
        super().__init__(msg, url)


class ConnectionError(NetworkError):
    """Ошибка подключения (connection refused, reset, DNS)."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HTTP ОШИБКИ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPError(RequestHelperError):
    """
    Ответ со статусом >= 400.

    Args:
        status_code: HTTP статус
        url: URL
        message: Дополнительное сообщение
        response: Response, из которого возникла ошибка
    """
    fatal = True

    def __init__(self, status_code: int, url: str, message: str = "", response: Any = None):
        self.status_code = status_code
        self.url = url
        self.response = response

        msg = f"HTTP {status_code} error for {url}"
        if message:
            msg += f": {message}"

        super().__init__(msg)


class ServerError(HTTPError):
    """5xx ошибка сервера."""
    retryable = True
    fatal = False


class TooManyRequestsError(HTTPError):
    """429 Rate Limit."""
    retryable = True
    fatal = False

    def __init__(self, url: str, retry_after: Optional[str] = None, response: Any = None):
        self.retry_after = retry_after
        message = f"retry after {retry_after}s" if retry_after else ""
        super().__init__(429, url, message, response=response)


class BadRequestError(HTTPError):
    """400 Bad Request."""

    def __init__(self, url: str, message: str = "", response: Any = None):
        super().__init__(400, url, message, response=response)


class UnauthorizedError(HTTPError):
    """401 Unauthorized."""

    def __init__(self, url: str, message: str = "", response: Any = None):
        super().__init__(401, url, message, response=response)


class ForbiddenError(HTTPError):
    """403 Forbidden."""

    def __init__(self, url: str, message: str = "", response: Any = None):
        super().__init__(403, url, message, response=response)


class NotFoundError(HTTPError):
    """404 Not Found."""

    def __init__(self, url: str, message: str = "", response: Any = None):
        super().__init__(404, url, message, response=response)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ФАТАЛЬНЫЕ ОШИБКИ (fatal=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class FatalError(RequestHelperError):
    """Фатальная ошибка - повторять нельзя."""
    fatal = True


class ParseError(FatalError):
    """
    Не удалось разобрать тело ответа.

    Args:
        message: Сообщение
        url: URL
        response_type: Ожидаемый тип ответа
    """

    def __init__(self, message: str, url: Optional[str] = None, response_type: Optional[str] = None):
        self.url = url
        self.response_type = response_type
        msg = message
        if response_type:
            msg += f" (response_type: {response_type})"
        super().__init__(msg)


class ConfigurationError(FatalError):
    """Ошибка конфигурации."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОТМЕНА
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class AbortError(RequestHelperError):
    """
    Запрос отменён через CancellationController.

    Args:
        message: Сообщение
        reason: Причина, переданная в abort()
        request_id: ID запроса
    """

    def __init__(self, message: str = "Request aborted", reason: Any = None, request_id: Optional[str] = None):
        self.reason = reason
        msg = message
        if reason is not None:
            msg += f": {reason}"
        super().__init__(msg, request_id=request_id)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def error_for_status(status_code: int, url: str, response: Any = None, retry_after: Optional[str] = None) -> HTTPError:
    """
    Выбрать класс HTTP ошибки по статус коду.

    Examples:
        >>> isinstance(error_for_status(404, "https://example.com"), NotFoundError)
        True
    """
    if status_code == 400:
        return BadRequestError(url, response=response)
    if status_code == 401:
        return UnauthorizedError(url, response=response)
    if status_code == 403:
        return ForbiddenError(url, response=response)
    if status_code == 404:
        return NotFoundError(url, response=response)
    if status_code == 429:
        return TooManyRequestsError(url, retry_after=retry_after, response=response)
    if 500 <= status_code < 600:
        return ServerError(status_code, url, response=response)
    return HTTPError(status_code, url, response=response)


def classify_requests_exception(exc: Exception, url: str) -> RequestHelperError:
    """
    Конвертировать requests.exceptions в наши исключения.

    Examples:
        >>> exc = requests.exceptions.Timeout()
        >>> our_exc = classify_requests_exception(exc, "https://example.com")
        >>> assert isinstance(our_exc, TimeoutError)
        >>> assert our_exc.retryable
    """
    if isinstance(exc, requests.exceptions.Timeout):
        return TimeoutError("Request timeout", url)

    elif isinstance(exc, requests.exceptions.ConnectionError):
        return ConnectionError("Connection error", url)

    elif isinstance(exc, requests.exceptions.HTTPError):
        response = exc.response
        status_code = response.status_code if response is not None else 0
        retry_after = response.headers.get('Retry-After') if response is not None else None
        return error_for_status(status_code, url, response=response, retry_after=retry_after)

    elif isinstance(exc, requests.exceptions.RequestException):
        return NetworkError(str(exc) or "Request failed", url)

    else:
        # Неизвестная ошибка - оборачиваем
        return RequestHelperError(str(exc))
