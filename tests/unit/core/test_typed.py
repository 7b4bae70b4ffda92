"""
Tests for content-typed request helpers.
"""

import json

import pytest

from src.request_helper.core.typed import TypedRequests, with_accept, with_type
from src.request_helper.core.verbs import HttpVerbs


class RecordingClient(HttpVerbs, TypedRequests):
    def __init__(self):
        self.calls = []

    def request(self, method, url, **options):
        self.calls.append((method, url, options))
        return options


@pytest.fixture
def recorder():
    return RecordingClient()


class TestOptionHelpers:
    """with_accept / with_type."""

    def test_with_accept_defaults(self):
        options = with_accept({}, "application/json", "json")
        assert options == {"headers": {"Accept": "application/json"}, "response_type": "json"}

    def test_caller_values_win(self):
        options = with_accept(
            {"headers": {"Accept": "text/csv"}, "response_type": "text"},
            "application/json", "json",
        )
        assert options["headers"]["Accept"] == "text/csv"
        assert options["response_type"] == "text"

    @pytest.mark.parametrize("name", ["accept", "ACCEPT", "Accept"])
    def test_caller_accept_any_case_wins(self, name):
        options = with_accept({"headers": {name: "text/csv"}}, "application/json", "json")
        assert options["headers"] == {name: "text/csv"}

    def test_caller_content_type_any_case_wins(self):
        options = with_type({"headers": {"content-type": "application/vnd.api+json"}},
                            "application/json", "json")
        assert options["headers"] == {"content-type": "application/vnd.api+json"}

    def test_input_not_mutated(self):
        headers = {"X-A": "1"}
        original = {"headers": headers}
        with_type(original, "text/plain", "text")
        assert original == {"headers": {"X-A": "1"}}


class TestGetHelpers:
    """GET helpers set Accept and response_type."""

    @pytest.mark.parametrize("helper, accept, response_type", [
        ("get_text", "text/plain", "text"),
        ("get_json", "application/json", "json"),
        ("get_html", "text/html", "html"),
        ("get_bytes", "application/octet-stream", "bytes"),
        ("get_ndjson", "application/x-ndjson", "ndjson"),
    ])
    def test_accept(self, recorder, helper, accept, response_type):
        options = getattr(recorder, helper)("/x")
        assert recorder.calls[0][0] == "GET"
        assert options["headers"]["Accept"] == accept
        assert options["response_type"] == response_type

    def test_get_xml(self, recorder):
        options = recorder.get_xml("/feed")
        assert "application/xml" in options["headers"]["Accept"]
        assert options["response_type"] == "xml"


class TestBodyHelpers:
    """POST/PUT/PATCH helpers encode the body."""

    @pytest.mark.parametrize("helper, method", [
        ("post_json", "POST"),
        ("put_json", "PUT"),
        ("patch_json", "PATCH"),
    ])
    def test_json(self, recorder, helper, method):
        options = getattr(recorder, helper)("/x", {"a": [1, 2]})
        assert recorder.calls[0][0] == method
        assert json.loads(options["body"]) == {"a": [1, 2]}
        assert options["headers"]["Content-Type"] == "application/json"
        assert options["response_type"] == "json"

    def test_post_text(self, recorder):
        options = recorder.post_text("/x", 42)
        assert options["body"] == "42"
        assert options["headers"]["Content-Type"] == "text/plain"

    def test_post_form(self, recorder):
        options = recorder.post_form("/login", {"user": "a b", "tag": ["x", "y"]})
        assert options["body"] == "user=a+b&tag=x&tag=y"
        assert options["headers"]["Content-Type"] == "application/x-www-form-urlencoded"

    def test_post_form_string(self, recorder):
        assert recorder.post_form("/login", "a=1")["body"] == "a=1"

    def test_post_multipart(self, recorder):
        files = {"file": ("a.txt", b"hi")}
        options = recorder.post_multipart(
            "/upload", files, data={"k": "v"}, headers={"Content-Type": "application/json", "X-A": "1"}
        )
        assert options["files"] is files
        assert options["body"] == {"k": "v"}
        assert options["headers"] == {"X-A": "1"}
        assert options["response_type"] == "json"

    def test_post_soap_11(self, recorder):
        options = recorder.post_soap("/soap", "<Envelope/>")
        assert options["headers"]["Content-Type"] == "text/xml"
        assert options["response_type"] == "xml"

    def test_post_soap_12_kept(self, recorder):
        options = recorder.post_soap(
            "/soap", "<Envelope/>", headers={"Content-Type": "application/soap+xml; charset=utf-8"}
        )
        assert options["headers"]["Content-Type"] == "application/soap+xml; charset=utf-8"

    def test_post_json_lowercase_content_type(self, recorder):
        options = recorder.post_json("/x", {"a": 1}, headers={"content-type": "application/merge-patch+json"})
        assert options["headers"] == {"content-type": "application/merge-patch+json"}

    def test_get_json_lowercase_accept(self, recorder):
        options = recorder.get_json("/x", headers={"accept": "application/hal+json"})
        assert options["headers"] == {"accept": "application/hal+json"}

    def test_post_multipart_drops_any_case_content_type(self, recorder):
        options = recorder.post_multipart("/upload", {"f": b"x"}, headers={"content-type": "text/plain"})
        assert options["headers"] == {}

    def test_post_soap_12_lowercase_header(self, recorder):
        options = recorder.post_soap("/soap", "<Envelope/>", headers={"content-type": "application/soap+xml"})
        assert options["headers"] == {"content-type": "application/soap+xml"}
