from __future__ import annotations

import json
import logging
import sys
import time
from typing import Any, Dict, Optional

from notilify.settings import settings


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time_unix": time.time(),
        }
        if hasattr(record, "extra") and isinstance(record.extra, dict):
            payload.update(record.extra)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Opt-in JSON logging for the client's own "notilify" logger tree.
    The root logger and the application's handlers are left alone.
    """
    log = logging.getLogger("notilify")
    log.setLevel((level or settings.NOTILIFY_LOG_LEVEL).upper())
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    log.handlers[:] = [handler]
    log.propagate = False

    # httpx logs full request lines at INFO; keep them out of the JSON stream
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return log
