"""Cancellation primitive: a controller that owns a signal observers can watch."""

import logging
import threading
from typing import Any, Callable, List, Optional

from .exceptions import AbortError

logger = logging.getLogger(__name__)

AbortListener = Callable[[Any], None]


class CancellationSignal:
    """
    Read side of a CancellationController.

    A signal flips to aborted at most once. Listeners registered before that
    moment are invoked exactly once, in registration order, with the abort
    reason. Thread-safe.

    Example:
        >>> controller = CancellationController()
        >>> controller.signal.add_listener(lambda reason: print("aborted:", reason))
        >>> controller.abort("user left")
        aborted: user left
        >>> controller.signal.aborted
        True
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._listeners: List[AbortListener] = []
        self._reason: Any = None

    @property
    def aborted(self) -> bool:
        """True once abort() has been called on the owning controller."""
        return self._event.is_set()

    @property
    def reason(self) -> Any:
        """Reason passed to abort(), or None."""
        return self._reason

    def add_listener(self, listener: AbortListener) -> None:
        """
        Register a callback for the abort event.

        Registering the same callable twice has no effect. Listeners added
        after the signal has fired are not called.
        """
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: AbortListener) -> None:
        """Unregister a callback. Unknown callbacks are ignored."""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until aborted or timeout expires. Returns aborted state."""
        return self._event.wait(timeout)

    def raise_if_aborted(self, request_id: Optional[str] = None) -> None:
        """Raise AbortError if the signal has fired."""
        if self.aborted:
            raise AbortError(reason=self._reason, request_id=request_id)

    def _fire(self, reason: Any) -> bool:
        with self._lock:
            if self._event.is_set():
                return False
            self._reason = reason
            self._event.set()
            listeners = list(self._listeners)
            self._listeners.clear()

        for listener in listeners:
            try:
                listener(reason)
            except Exception:
                logger.exception("Abort listener %r failed", listener)
        return True

    def __repr__(self) -> str:
        return f"CancellationSignal(aborted={self.aborted})"


class CancellationController:
    """
    Write side: owns a signal and aborts it.

    Example:
        >>> controller = CancellationController()
        >>> controller.abort()
        True
        >>> controller.abort()  # second call is a no-op
        False
    """

    def __init__(self):
        self._signal = CancellationSignal()

    @property
    def signal(self) -> CancellationSignal:
        return self._signal

    def abort(self, reason: Any = None) -> bool:
        """
        Abort the signal.

        Returns:
            True if this call aborted the signal, False if it was already aborted
        """
        return self._signal._fire(reason)

    def __repr__(self) -> str:
        return f"CancellationController(aborted={self._signal.aborted})"
