from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from notilify.settings import settings
from notilify.errors import NotilifyAPIError, NotilifyTransportError
from notilify._metrics import Timer

log = logging.getLogger("notilify.request")

API_URL = "https://api.notilify.com/v1"
UNKNOWN_ERROR = "An unknown error occurred."


def build_client(timeout_s: Optional[float] = None) -> httpx.Client:
    return httpx.Client(
        timeout=httpx.Timeout(timeout_s or settings.NOTILIFY_TIMEOUT_SECONDS),
        headers={"User-Agent": settings.NOTILIFY_USER_AGENT, "Accept": "application/json"},
    )


def _parse_headers(headers: httpx.Headers) -> Dict[str, list]:
    return {name: headers.get_list(name) for name in headers.keys()}


def _error_message(r: httpx.Response) -> str:
    try:
        parsed = r.json()
    except ValueError:
        return UNKNOWN_ERROR
    if isinstance(parsed, dict) and parsed.get("error"):
        return str(parsed["error"])
    return UNKNOWN_ERROR


class NotilifyRequest:
    """
    HTTP layer for the Notilify API.

    Every call returns an envelope dict:
    - body: parsed JSON when the response is application/json, raw text otherwise
    - headers: header name -> list of values
    - status: HTTP status code
    - url: the URL requested

    4xx/5xx answers raise NotilifyAPIError; failures without a response raise
    NotilifyTransportError. httpx exceptions never leave this class.
    """

    def __init__(self, client: Optional[httpx.Client] = None):
        self._owns_client = client is None
        self.client = client or build_client()
        self.last_response: Dict[str, Any] = {}

    def __enter__(self) -> "NotilifyRequest":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def get_last_response(self) -> Dict[str, Any]:
        return self.last_response

    def api(self, method: str, uri: str, options: Dict[str, Any]) -> Dict[str, Any]:
        return self.send(method, API_URL + uri, options)

    def send(self, method: str, url: str, options: Dict[str, Any]) -> Dict[str, Any]:
        self.last_response = {}

        kwargs: Dict[str, Any] = {"headers": options.get("headers") or {}}
        if "json" in options:
            kwargs["json"] = options["json"]

        t = Timer()
        log.info(
            "notilify_request_attempt",
            extra={"extra": {"event": "notilify_request_attempt", "method": method, "url": url}},
        )
        try:
            r = self.client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            log.error(
                "notilify_transport_error",
                extra={
                    "extra": {
                        "event": "notilify_transport_error",
                        "method": method,
                        "url": url,
                        "error_type": type(e).__name__,
                        "latency_ms": t.ms(),
                    }
                },
            )
            raise NotilifyTransportError(f"Notilify request failed: {type(e).__name__}: {e}") from e

        if r.is_error:
            message = _error_message(r)
            log.warning(
                "notilify_request_failed",
                extra={
                    "extra": {
                        "event": "notilify_request_failed",
                        "method": method,
                        "url": url,
                        "status_code": r.status_code,
                        "message": message,
                        "latency_ms": t.ms(),
                    }
                },
            )
            raise NotilifyAPIError(message, r.status_code)

        body: Any = r.text
        if "application/json" in r.headers.get("content-type", ""):
            try:
                body = r.json()
            except ValueError as e:
                raise NotilifyAPIError(UNKNOWN_ERROR, r.status_code) from e

        log.info(
            "notilify_request_result",
            extra={
                "extra": {
                    "event": "notilify_request_result",
                    "method": method,
                    "url": url,
                    "status_code": r.status_code,
                    "latency_ms": t.ms(),
                }
            },
        )

        self.last_response = {
            "body": body,
            "headers": _parse_headers(r.headers),
            "status": r.status_code,
            "url": url,
        }
        return self.last_response
