"""
Tests for logging filters.
"""

import logging

from src.request_helper.core.logging.filters import (
    ExtraFieldsFilter,
    RequestIdFilter,
    clear_request_id,
    get_request_id,
    set_request_id,
)


def make_record(**extra):
    record = logging.LogRecord("request_helper", logging.INFO, __file__, 1, "msg", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRequestIdStorage:
    """Thread-local request id."""

    def test_set_get_clear(self):
        assert get_request_id() is None
        set_request_id("req_1_1")
        assert get_request_id() == "req_1_1"
        clear_request_id()
        assert get_request_id() is None

    def test_clear_without_value(self):
        clear_request_id()
        clear_request_id()


class TestRequestIdFilter:
    """Tests for RequestIdFilter."""

    def test_adds_current_id(self):
        set_request_id("req_5_1")
        record = make_record()
        assert RequestIdFilter().filter(record) is True
        assert record.request_id == "req_5_1"

    def test_keeps_explicit_id(self):
        set_request_id("req_5_1")
        record = make_record(request_id="req_9_9")
        RequestIdFilter().filter(record)
        assert record.request_id == "req_9_9"

    def test_no_id_no_attribute(self):
        record = make_record()
        RequestIdFilter().filter(record)
        assert not hasattr(record, "request_id")


class TestExtraFieldsFilter:
    """Tests for ExtraFieldsFilter."""

    def test_adds_static_fields(self):
        record = make_record(service="explicit")
        ExtraFieldsFilter({"service": "billing", "env": "prod"}).filter(record)
        assert record.service == "explicit"
        assert record.env == "prod"
