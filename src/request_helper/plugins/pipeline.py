"""Ordered execution of plugin hooks."""

import logging
from typing import Iterable, List, Optional, TYPE_CHECKING

from ..core.verbose import plugin_logger
from .plugin import Plugin

if TYPE_CHECKING:
    from ..core.context import RequestContext
    from ..core.driver import Response

logger = logging.getLogger(__name__)


class PluginPipeline:
    """
    Runs plugin hooks around a request.

    before_request runs in priority order (stable for equal priorities);
    after_response and on_error run in the reverse order.
    """

    def __init__(self, plugins: Optional[Iterable[Plugin]] = None):
        self._plugins: List[Plugin] = []
        for plugin in plugins or []:
            self.add(plugin)

    def add(self, plugin: Plugin) -> None:
        self._plugins.append(plugin)
        self._plugins.sort(key=lambda p: p.priority)

    def remove(self, plugin: Plugin) -> None:
        if plugin in self._plugins:
            self._plugins.remove(plugin)

    def clear(self) -> None:
        self._plugins.clear()

    def get_all(self) -> List[Plugin]:
        return list(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)

    def run_before_request(self, ctx: 'RequestContext') -> Optional['Response']:
        """Run before_request hooks; the first returned Response short-circuits."""
        if self._plugins:
            plugin_logger.log(ctx, 'BEFORE_REQUEST', f"Executing before_request plugins ({len(self._plugins)})",
                              plugins=[p.name for p in self._plugins])

        for plugin in self._plugins:
            result = plugin.before_request(ctx)
            if result is not None:
                plugin_logger.log(ctx, 'SHORT_CIRCUIT', f"{plugin.name} returned a response",
                                  plugin=plugin.name)
                return result
        return None

    def run_after_response(self, ctx: 'RequestContext', response: 'Response') -> 'Response':
        if self._plugins:
            plugin_logger.log(ctx, 'AFTER_RESPONSE', f"Executing after_response plugins ({len(self._plugins)})",
                              plugins=[p.name for p in reversed(self._plugins)])

        for plugin in reversed(self._plugins):
            response = plugin.after_response(ctx, response)
        return response

    def run_on_error(self, ctx: 'RequestContext', error: Exception) -> None:
        """Run on_error hooks. Hook failures are logged so the original error survives."""
        for plugin in reversed(self._plugins):
            try:
                plugin.on_error(ctx, error)
            except Exception:
                logger.warning("Plugin %s failed in on_error", plugin.name, exc_info=True)
