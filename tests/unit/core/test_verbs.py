"""
Tests for HTTP verb shortcuts.
"""

import pytest

from src.request_helper.core.cancellation import CancellationController
from src.request_helper.core.verbs import HttpVerbs


class RecordingClient(HttpVerbs):
    """Captures what each verb forwards to request()."""

    def __init__(self):
        self.calls = []

    def request(self, method, url, **options):
        self.calls.append((method, url, options))
        return "sentinel"


@pytest.fixture
def recorder():
    return RecordingClient()


class TestVerbMethods:
    """Each shortcut sets only the method."""

    @pytest.mark.parametrize("verb, method", [
        ("get", "GET"),
        ("delete", "DELETE"),
        ("head", "HEAD"),
        ("options", "OPTIONS"),
    ])
    def test_bodyless_verbs(self, recorder, verb, method):
        """GET/DELETE/HEAD/OPTIONS forward method and options unchanged."""
        result = getattr(recorder, verb)("/items", headers={"X-A": "1"}, timeout=3)

        assert result == "sentinel"
        assert recorder.calls == [(method, "/items", {"headers": {"X-A": "1"}, "timeout": 3})]

    @pytest.mark.parametrize("verb, method", [
        ("post", "POST"),
        ("put", "PUT"),
        ("patch", "PATCH"),
    ])
    def test_body_verbs(self, recorder, verb, method):
        """POST/PUT/PATCH forward the body as an option."""
        getattr(recorder, verb)("/items", {"name": "x"}, query={"page": 2})

        assert recorder.calls == [(method, "/items", {"body": {"name": "x"}, "query": {"page": 2}})]

    def test_body_verbs_default_to_no_body(self, recorder):
        recorder.post("/items")
        assert recorder.calls[0][2] == {"body": None}

    def test_delete_alias(self, recorder):
        """del_ is the same operation as delete."""
        recorder.del_("/items/1")
        assert recorder.calls[0][0] == "DELETE"

    @pytest.mark.parametrize("verb, method", [
        ("get", "GET"),
        ("post", "POST"),
        ("put", "PUT"),
        ("patch", "PATCH"),
        ("delete", "DELETE"),
        ("head", "HEAD"),
        ("options", "OPTIONS"),
    ])
    def test_verb_overrides_method_option(self, recorder, verb, method):
        """A caller-supplied method option never beats the verb."""
        other = "PATCH" if method != "PATCH" else "GET"
        getattr(recorder, verb)("/items", method=other, timeout=3)

        called_method, url, options = recorder.calls[0]
        assert called_method == method
        assert "method" not in options
        assert options["timeout"] == 3

    def test_options_are_not_copied_or_filtered(self, recorder):
        """Unknown options and user signals pass through as the same objects."""
        controller = CancellationController()
        recorder.get("/x", signal=controller.signal, custom_flag=True, retry=3)

        options = recorder.calls[0][2]
        assert options["signal"] is controller.signal
        assert options["custom_flag"] is True
        assert options["retry"] == 3


class TestBaseRequest:
    """The mixin itself has no transport."""

    def test_request_not_implemented(self):
        with pytest.raises(NotImplementedError):
            HttpVerbs().get("/x")
