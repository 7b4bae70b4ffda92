"""HTTP verb shortcuts."""

from typing import Any


class HttpVerbs:
    """
    Mixin с методами GET/POST/PUT/PATCH/DELETE/HEAD/OPTIONS.

    Каждый метод только выставляет HTTP метод и передаёт все остальные
    опции вызывающего в ``self.request(method, url, **options)`` без
    изменений. Опция ``method`` от вызывающего игнорируется: метод задаёт verb.
    Класс-носитель должен реализовать ``request``.
    """

    def request(self, method: str, url: str, **options: Any) -> Any:
        raise NotImplementedError

    def get(self, url: str, **options: Any) -> Any:
        """
        Выполняет GET запрос.

        Args:
            url: Endpoint или полный URL
            **options: Опции запроса (headers, query, signal, verbose, retry, ...)
        """
        options.pop("method", None)
        return self.request("GET", url, **options)

    def post(self, url: str, body: Any = None, **options: Any) -> Any:
        """
        Выполняет POST запрос.

        Args:
            url: Endpoint или полный URL
            body: Тело запроса (str/bytes как есть, dict/list как JSON)
            **options: Опции запроса
        """
        options.pop("method", None)
        return self.request("POST", url, body=body, **options)

    def put(self, url: str, body: Any = None, **options: Any) -> Any:
        """Выполняет PUT запрос."""
        options.pop("method", None)
        return self.request("PUT", url, body=body, **options)

    def patch(self, url: str, body: Any = None, **options: Any) -> Any:
        """Выполняет PATCH запрос."""
        options.pop("method", None)
        return self.request("PATCH", url, body=body, **options)

    def delete(self, url: str, **options: Any) -> Any:
        """Выполняет DELETE запрос."""
        options.pop("method", None)
        return self.request("DELETE", url, **options)

    # Короткое имя для тех, кто привык к ``del``
    del_ = delete

    def head(self, url: str, **options: Any) -> Any:
        """Выполняет HEAD запрос."""
        options.pop("method", None)
        return self.request("HEAD", url, **options)

    def options(self, url: str, **options: Any) -> Any:
        """Выполняет OPTIONS запрос."""
        options.pop("method", None)
        return self.request("OPTIONS", url, **options)
