from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from notilify.api import NotilifyAPI, OtpOptions
from notilify.errors import NotilifyError
from notilify._metrics import Timer
from notilify._masking import dest_hint

log = logging.getLogger("notilify.dispatcher")


class MessageDispatcher:
    """Sends through NotilifyAPI and reports outcomes as result dicts instead of raising."""

    def __init__(self, api: Optional[NotilifyAPI] = None):
        self._owns_api = api is None
        self.api = api

    def close(self) -> None:
        if self._owns_api and self.api:
            self.api.close()

    def _run(self, channel: str, to_number: str, call: Callable[[NotilifyAPI], Any]) -> Dict[str, Any]:
        t = Timer()
        log.info(
            "message_send_attempt",
            extra={"extra": {"event": "message_send_attempt", "channel": channel, "dest": dest_hint(to_number)}},
        )
        try:
            if not self.api:
                self.api = NotilifyAPI.from_settings()
            body = call(self.api)
        except NotilifyError as e:
            log.error(
                "message_send_exception",
                extra={
                    "extra": {
                        "event": "message_send_exception",
                        "channel": channel,
                        "dest": dest_hint(to_number),
                        "error_type": type(e).__name__,
                        "message": e.message,
                        "status_code": e.status_code,
                        "latency_ms": t.ms(),
                    }
                },
                exc_info=True,
            )
            return {
                "ok": False,
                "error_type": type(e).__name__,
                "message": e.message,
                "status_code": e.status_code,
            }

        status = self.api.get_last_response().get("status")
        log.info(
            "message_send_result",
            extra={
                "extra": {
                    "event": "message_send_result",
                    "channel": channel,
                    "dest": dest_hint(to_number),
                    "ok": True,
                    "status_code": status,
                    "latency_ms": t.ms(),
                }
            },
        )
        return {"ok": True, "status": status, "body": body}

    def send_sms(self, sender_id: str, to_number: str, text: str) -> Dict[str, Any]:
        return self._run("sms", to_number, lambda api: api.send_message(sender_id, to_number, text))

    def send_otp(self, to_number: str, text: str, options: Optional[OtpOptions] = None) -> Dict[str, Any]:
        return self._run("otp", to_number, lambda api: api.create_otp(to_number, text, options))
