"""Structured Logging — JSON formatter and idempotent setup."""

import json
import logging

from shiptrack.infrastructure import observability
from shiptrack.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "shiptrack.test", logging.WARNING, __file__, 1, "Job %s exists", ("B00001234",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "WARNING"
    assert out["logger"] == "shiptrack.test"
    assert out["message"] == "Job B00001234 exists"
    assert "timestamp" in out


def test_json_formatter_surfaces_tracking_extras():
    out = json.loads(JSONFormatter().format(
        _record(job_id="B00001234", shipment_id="ABCD12345678", error_code="CONFLICT"),
    ))
    assert out["job_id"] == "B00001234"
    assert out["shipment_id"] == "ABCD12345678"
    assert out["error_code"] == "CONFLICT"
    assert "status" not in out


def test_setup_logging_replaces_its_handler():
    before = list(logging.root.handlers)
    try:
        setup_logging("DEBUG", "json")
        setup_logging("INFO", "text")
        added = [h for h in logging.root.handlers if h not in before]
        assert added == [observability._handler]
        assert not isinstance(added[0].formatter, JSONFormatter)
        assert logging.root.level == logging.INFO
    finally:
        logging.root.removeHandler(observability._handler)
        observability._handler = None
