"""Request lifecycle events for stats and diagnostics consumers."""

import logging
import threading
from collections import defaultdict
from typing import Any, Callable, DefaultDict, Dict, List

from .verbose import stats_logger

logger = logging.getLogger(__name__)

REQUEST_START = 'request:start'
REQUEST_SUCCESS = 'request:success'
REQUEST_FAIL = 'request:fail'
REQUEST_ABORT = 'request:abort'
# Emitted by an external retry engine: {'id', 'attempt', 'backoff_ms'}
REQUEST_RETRY = 'request:retry'

EVENT_TYPES = frozenset({REQUEST_START, REQUEST_SUCCESS, REQUEST_FAIL, REQUEST_ABORT, REQUEST_RETRY})

EventListener = Callable[[Dict[str, Any]], None]


class StatsEventEmitter:
    """
    Synchronous event emitter for request lifecycle events.

    Listener exceptions are logged and swallowed so that stats collection can
    never break a request.

    Example:
        >>> events = StatsEventEmitter()
        >>> events.on('request:abort', lambda data: print("aborted", data['id']))
        >>> events.emit('request:abort', {'id': 'req_1_1700000000000'})
        aborted req_1_1700000000000
    """

    def __init__(self, enabled: bool = True, verbose: bool = False):
        self._enabled = enabled
        self.verbose = verbose
        self._listeners: DefaultDict[str, List[EventListener]] = defaultdict(list)
        self._lock = threading.Lock()

    def on(self, event_type: str, listener: EventListener) -> None:
        """Subscribe to an event type."""
        if event_type not in EVENT_TYPES:
            raise ValueError(
                f"Unknown event type: {event_type}. "
                f"Available: {', '.join(sorted(EVENT_TYPES))}"
            )
        with self._lock:
            self._listeners[event_type].append(listener)

    def off(self, event_type: str, listener: EventListener) -> None:
        """Unsubscribe; unknown listeners are ignored."""
        with self._lock:
            listeners = self._listeners.get(event_type, [])
            if listener in listeners:
                listeners.remove(listener)

    def listener_count(self, event_type: str) -> int:
        return len(self._listeners.get(event_type, []))

    def emit(self, event_type: str, data: Dict[str, Any]) -> None:
        """Deliver an event to its listeners. No-op while disabled."""
        if not self._enabled:
            return

        stats_logger.log(self.verbose, 'EVENT', event_type, **data)

        with self._lock:
            listeners = list(self._listeners.get(event_type, []))

        for listener in listeners:
            try:
                listener(data)
            except Exception:
                logger.warning("Stats listener for %s failed", event_type, exc_info=True)

    def enable(self) -> None:
        self._enabled = True
        stats_logger.log(self.verbose, 'SYSTEM', 'Stats enabled')

    def disable(self) -> None:
        self._enabled = False
        stats_logger.log(self.verbose, 'SYSTEM', 'Stats disabled')

    def is_enabled(self) -> bool:
        return self._enabled
