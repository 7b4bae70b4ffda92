"""Per-request context and request id generation."""

import copy
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .cancellation import CancellationController


def _now_ms() -> int:
    return int(time.time() * 1000)


class RequestIdGenerator:
    """
    Process-local monotonically increasing request id source.

    Ids look like ``req_<n>_<epoch_ms>``. They are unique for the lifetime of
    the generator, not globally. Thread-safe.

    Example:
        >>> ids = RequestIdGenerator()
        >>> ids.next_id().startswith("req_1_")
        True
        >>> ids.next_id().startswith("req_2_")
        True
    """

    def __init__(self):
        self._counter = 0
        self._lock = threading.Lock()

    @property
    def current(self) -> int:
        """Last sequence number handed out (0 before the first id)."""
        return self._counter

    def next_id(self) -> str:
        with self._lock:
            self._counter += 1
            n = self._counter
        return f"req_{n}_{_now_ms()}"

    def reset(self) -> None:
        """Restart the sequence. Intended for tests."""
        with self._lock:
            self._counter = 0


_default_generator = RequestIdGenerator()


def get_default_id_generator() -> RequestIdGenerator:
    """Generator used by build_context() when none is passed."""
    return _default_generator


def reset_request_counter() -> None:
    """Reset the default request id sequence (test support)."""
    _default_generator.reset()


@dataclass
class RequestMeta:
    """Metadata stamped on a context at creation time."""

    request_id: str
    request_start_time: int = field(default_factory=_now_ms)


@dataclass
class RequestContext:
    """Context carried through the request lifecycle.

    Attributes:
        req: Snapshot of the request descriptor (method, url, body, options)
        res: Response, once one is received
        error: Error raised by the request, if any
        attempt: Attempt number, starting at 1
        controller: Internal cancellation controller for this request
        meta: Request id and start timestamp
        metadata: Shared storage for plugins to communicate

    Example:
        >>> ctx = build_context({'method': 'GET', 'url': '/users'})
        >>> ctx.attempt
        1
        >>> ctx.metadata['cache_key'] = 'abc123'
    """

    req: Dict[str, Any]
    meta: RequestMeta
    res: Any = None
    error: Optional[BaseException] = None
    attempt: int = 1
    controller: CancellationController = field(default_factory=CancellationController)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def request_id(self) -> str:
        return self.meta.request_id

    @property
    def method(self) -> str:
        return str(self.req.get('method') or 'GET').upper()

    @property
    def url(self) -> str:
        return self.req.get('url', '')

    @property
    def signal(self):
        """Internal cancellation signal of this request."""
        return self.controller.signal

    @property
    def verbose(self) -> bool:
        return bool(self.req.get('verbose'))

    def elapsed_ms(self) -> int:
        """Milliseconds since the context was created."""
        return _now_ms() - self.meta.request_start_time


def build_context(request: Dict[str, Any], id_generator: Optional[RequestIdGenerator] = None) -> RequestContext:
    """
    Build a fresh context for a request descriptor.

    The descriptor is copied one level deep (headers get their own dict) so
    plugins can edit ``ctx.req`` without touching the caller's objects.

    Args:
        request: Request descriptor
        id_generator: Counter to draw the id from (default: process-wide one)

    Returns:
        New RequestContext with attempt=1 and an un-aborted controller
    """
    generator = id_generator if id_generator is not None else _default_generator

    snapshot = copy.copy(request)
    if isinstance(snapshot.get('headers'), dict):
        snapshot['headers'] = dict(snapshot['headers'])

    return RequestContext(
        req=snapshot,
        meta=RequestMeta(request_id=generator.next_id()),
    )
