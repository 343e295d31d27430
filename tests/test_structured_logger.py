import json
import logging

import pytest

from notilify.structured_logger import JsonFormatter, setup_logging


@pytest.fixture
def restore_loggers():
    names = ["notilify", "httpx", "httpcore"]
    saved = {n: (logging.getLogger(n).level, logging.getLogger(n).handlers[:], logging.getLogger(n).propagate) for n in names}
    yield
    for n, (level, handlers, propagate) in saved.items():
        lg = logging.getLogger(n)
        lg.setLevel(level)
        lg.handlers[:] = handlers
        lg.propagate = propagate


def test_json_formatter_merges_extra():
    record = logging.LogRecord("notilify.request", logging.INFO, __file__, 1, "notilify_request_result", None, None)
    record.extra = {"event": "notilify_request_result", "status_code": 200}
    out = json.loads(JsonFormatter().format(record))
    assert out["severity"] == "INFO"
    assert out["logger"] == "notilify.request"
    assert out["status_code"] == 200


def test_setup_logging_configures_client_logger_only(restore_loggers):
    root_handlers = logging.getLogger().handlers[:]
    log = setup_logging("debug")

    assert log.name == "notilify"
    assert log.level == logging.DEBUG
    assert len(log.handlers) == 1
    assert isinstance(log.handlers[0].formatter, JsonFormatter)
    assert log.propagate is False
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
    assert logging.getLogger().handlers == root_handlers
