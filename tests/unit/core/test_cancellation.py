"""
Tests for CancellationController / CancellationSignal.
"""

import threading

import pytest

from src.request_helper.core.cancellation import CancellationController
from src.request_helper.core.exceptions import AbortError


class TestCancellationController:
    """Abort semantics."""

    def test_initial_state(self):
        controller = CancellationController()
        assert controller.signal.aborted is False
        assert controller.signal.reason is None

    def test_abort_once(self):
        """Only the first abort() changes state."""
        controller = CancellationController()

        assert controller.abort("first") is True
        assert controller.abort("second") is False
        assert controller.signal.aborted is True
        assert controller.signal.reason == "first"

    def test_listeners_called_once_in_order(self):
        controller = CancellationController()
        calls = []
        controller.signal.add_listener(lambda reason: calls.append(("a", reason)))
        controller.signal.add_listener(lambda reason: calls.append(("b", reason)))

        controller.abort("stop")
        controller.abort("again")

        assert calls == [("a", "stop"), ("b", "stop")]

    def test_duplicate_listener_registered_once(self):
        controller = CancellationController()
        calls = []

        def listener(reason):
            calls.append(reason)

        controller.signal.add_listener(listener)
        controller.signal.add_listener(listener)
        controller.abort()

        assert calls == [None]

    def test_removed_listener_not_called(self):
        controller = CancellationController()
        calls = []

        def listener(reason):
            calls.append(reason)

        controller.signal.add_listener(listener)
        controller.signal.remove_listener(listener)
        controller.signal.remove_listener(listener)
        controller.abort()

        assert calls == []

    def test_listener_added_after_abort_not_called(self):
        controller = CancellationController()
        controller.abort()
        calls = []
        controller.signal.add_listener(calls.append)

        assert calls == []

    def test_failing_listener_does_not_stop_others(self):
        """A raising listener is logged; the rest still run."""
        controller = CancellationController()
        calls = []

        def broken(reason):
            raise RuntimeError("boom")

        controller.signal.add_listener(broken)
        controller.signal.add_listener(calls.append)

        assert controller.abort("x") is True
        assert calls == ["x"]

    def test_concurrent_abort_fires_once(self):
        controller = CancellationController()
        calls = []
        controller.signal.add_listener(calls.append)
        barrier = threading.Barrier(10)
        results = []

        def worker():
            barrier.wait()
            results.append(controller.abort())

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 1
        assert len(calls) == 1


class TestCancellationSignal:
    """Read-side helpers."""

    def test_raise_if_aborted(self):
        controller = CancellationController()
        controller.signal.raise_if_aborted()

        controller.abort("user left")

        with pytest.raises(AbortError) as exc_info:
            controller.signal.raise_if_aborted("req_7_1")
        assert exc_info.value.reason == "user left"
        assert exc_info.value.request_id == "req_7_1"

    def test_wait(self):
        controller = CancellationController()
        assert controller.signal.wait(timeout=0.01) is False

        timer = threading.Timer(0.01, controller.abort)
        timer.start()
        assert controller.signal.wait(timeout=2) is True
        timer.join()

    def test_repr(self):
        controller = CancellationController()
        assert "aborted=False" in repr(controller.signal)
        controller.abort()
        assert "aborted=True" in repr(controller)
