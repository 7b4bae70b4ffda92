"""Wire a caller's cancellation signal into a request context."""

import threading
from typing import Any, Callable, Optional

from .cancellation import CancellationSignal
from .context import RequestContext
from .events import REQUEST_ABORT, StatsEventEmitter
from .verbose import verbose_log


def merge_user_signal(
    context: RequestContext,
    user_signal: Optional[CancellationSignal],
    events: Optional[StatsEventEmitter] = None,
) -> Optional[Callable[[], None]]:
    """
    Abort ``context.controller`` when ``user_signal`` fires.

    On the user's abort the internal controller is aborted once and one
    ``request:abort`` event carrying the request id is emitted. A signal that
    is already aborted fires the same path immediately.

    Args:
        context: Context of the in-flight request
        user_signal: Caller-supplied signal, or None
        events: Emitter for the abort event (optional)

    Returns:
        Callable that detaches the listener, or None when there is no user signal
    """
    if user_signal is None:
        return None

    fired = threading.Event()
    guard = threading.Lock()

    def on_user_abort(reason: Any) -> None:
        with guard:
            if fired.is_set():
                return
            fired.set()

        context.controller.abort(reason)
        if events is not None:
            events.emit(REQUEST_ABORT, {'id': context.meta.request_id})

    already_aborted = user_signal.aborted
    if already_aborted:
        on_user_abort(user_signal.reason)
    else:
        user_signal.add_listener(on_user_abort)
        # abort() may have landed between the check and the registration
        if user_signal.aborted:
            on_user_abort(user_signal.reason)

    verbose_log(
        context, 'REQUEST', 'Combined user abort signal with internal signal',
        has_user_signal=True,
        signal_aborted=already_aborted,
        combined_signals='user + internal',
        request_id=context.meta.request_id,
    )

    def detach() -> None:
        user_signal.remove_listener(on_user_abort)

    return detach
