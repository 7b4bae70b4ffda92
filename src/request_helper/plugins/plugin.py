# src/request_helper/plugins/plugin.py

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..core.context import RequestContext
    from ..core.driver import Response


class PluginPriority:
    """
    Константы приоритетов для плагинов.

    Меньший приоритет - раньше в before_request и позже в
    after_response / on_error (хуки ответа идут в обратном порядке).
    """
    FIRST = 0       # Auth, заголовки
    HIGH = 25
    NORMAL = 50     # По умолчанию
    LOW = 75
    LAST = 100      # Логирование, мониторинг


class Plugin:
    """Base class for request interceptors.

    All hooks receive the same RequestContext for the lifetime of a request.

    Example:
        class TracePlugin(Plugin):
            def before_request(self, ctx):
                ctx.req.setdefault('headers', {})['X-Request-ID'] = ctx.request_id
                return None

            def after_response(self, ctx, response):
                print(f"{ctx.method} {ctx.url} -> {response.status}")
                return response
    """

    priority: int = PluginPriority.NORMAL

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def before_request(self, ctx: 'RequestContext') -> Optional['Response']:
        """Called before the driver sends the request.

        Args:
            ctx: Request context; ``ctx.req`` may be modified in place

        Returns:
            - None: continue normally
            - Response: short-circuit and return this response
        """
        return None

    def after_response(self, ctx: 'RequestContext', response: 'Response') -> 'Response':
        """Called after a successful response. Returns the (possibly replaced) response."""
        return response

    def on_error(self, ctx: 'RequestContext', error: Exception) -> None:
        """Called when the request fails; ``ctx.error`` is already set."""
        return None
