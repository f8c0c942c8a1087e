"""Unit tests for structured logging and request correlation."""

import json
import logging
import sys

from hotfix.observability.logging_config import (
    JSONFormatter,
    RequestIDFilter,
    get_request_id,
    request_id_var,
    set_request_id,
)


def make_record(**extra):
    record = logging.LogRecord(
        name="hotfix.remote_sync.service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Fetch completed: %d files",
        args=(3,),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRequestID:

    def test_default_outside_request(self):
        token = request_id_var.set(None)
        try:
            assert get_request_id() == "no-request-id"
        finally:
            request_id_var.reset(token)

    def test_filter_stamps_record(self):
        token = request_id_var.set(None)
        try:
            set_request_id("req-42")
            record = make_record()

            assert RequestIDFilter().filter(record) is True
            assert record.request_id == "req-42"
        finally:
            request_id_var.reset(token)


class TestJSONFormatter:

    def test_message_and_known_extras(self):
        record = make_record(request_id="req-1", operation="fetch", file_count=3, elapsed_ms=12)

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Fetch completed: 3 files"
        assert data["level"] == "INFO"
        assert data["request_id"] == "req-1"
        assert data["operation"] == "fetch"
        assert data["file_count"] == 3
        assert data["elapsed_ms"] == 12

    def test_unknown_extras_not_emitted(self):
        record = make_record(password="hunter2")

        output = JSONFormatter().format(record)

        assert "hunter2" not in output

    def test_exception_included(self):
        try:
            raise RuntimeError("listing failed")
        except RuntimeError:
            record = make_record(exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        assert data["error"] == "listing failed"
        assert "Traceback" in data["traceback"]
