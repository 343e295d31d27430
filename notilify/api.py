from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from notilify.settings import settings
from notilify.request import NotilifyRequest


class OtpOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    length: int = Field(default=6, gt=0)  # digits/characters in the generated code
    expiry_time: int = Field(default=20, gt=0)  # minutes
    type: str = Field(default="alphanumeric")
    sender_id: str = Field(default="")  # empty -> account default sender


class NotilifyAPI:
    """
    One method per Notilify endpoint.

    Methods return the parsed response body; the full envelope of the latest
    call is available from get_last_response(). NotilifyError subclasses raised
    by the request layer propagate unchanged.
    """

    def __init__(self, request: Optional[NotilifyRequest] = None, api_key: str = ""):
        self._owns_request = request is None
        self.request = request or NotilifyRequest()
        self.api_key = api_key
        self.last_response: Dict[str, Any] = {}

    def __enter__(self) -> "NotilifyAPI":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_request:
            self.request.close()

    @classmethod
    def from_settings(cls, request: Optional[NotilifyRequest] = None) -> "NotilifyAPI":
        return cls(request=request, api_key=settings.NOTILIFY_API_KEY)

    def set_api_key(self, api_key: str) -> "NotilifyAPI":
        self.api_key = api_key
        return self

    def get_last_response(self) -> Dict[str, Any]:
        return self.last_response

    def _auth_headers(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        merged = dict(headers or {})
        if self.api_key:
            merged["Authorization"] = f"Bearer {self.api_key}"
        return merged

    def _api_request(
        self,
        method: str,
        uri: str,
        parameters: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        options: Dict[str, Any] = {"headers": self._auth_headers(headers)}
        if parameters:
            options["json"] = parameters

        self.last_response = {}
        self.last_response = self.request.api(method, uri, options)
        return self.last_response["body"]

    # Messages

    def send_message(self, sender_id: str, phone_number: str, message: str) -> Any:
        return self._api_request(
            "POST",
            "/message",
            {"senderId": sender_id, "phoneNumber": phone_number, "message": message},
        )

    def message(self, phone_number: str, sender_id: str, message: str) -> Any:
        # Argument order of the first published client.
        return self.send_message(sender_id, phone_number, message)

    def send_bulk_messages(self, sender_id: str, data: List[Dict[str, Any]]) -> Any:
        """data: [{"phoneNumber": ..., "message": ...}, ...]"""
        return self._api_request("POST", "/message/bulk", {"senderId": sender_id, "data": list(data)})

    def get_messages(self, page_number: int = 1, per_page: int = 40) -> Any:
        query = urlencode({"perPage": per_page, "pageNumber": page_number})
        return self._api_request("GET", f"/message?{query}")

    def find_message(self, message_id: str) -> Any:
        return self._api_request("GET", f"/message?{urlencode({'id': message_id})}")

    # OTP

    def create_otp(
        self,
        phone_number: str,
        message: str,
        options: Optional[OtpOptions] = None,
        **overrides: Any,
    ) -> Any:
        """
        Ask Notilify to generate and text a one-time password.

        `options` carries length/expiry_time/type/sender_id; keyword overrides
        (e.g. length=8) are applied on top of it. length and expiry_time are
        sent as strings, and senderId is left out when empty.
        """
        opts = options or OtpOptions()
        if overrides:
            opts = OtpOptions(**{**opts.model_dump(), **overrides})

        parameters: Dict[str, Any] = {
            "phoneNumber": phone_number,
            "message": message,
            "length": str(opts.length),
            "expiryTime": str(opts.expiry_time),
            "type": opts.type,
        }
        if opts.sender_id:
            parameters["senderId"] = opts.sender_id

        return self._api_request("POST", "/otp", parameters)

    def verify_otp(self, phone_number: str, otp: str) -> Any:
        return self._api_request("POST", "/otp/verify", {"phoneNumber": phone_number, "otp": otp})

    # Sender IDs

    def create_sender_id(self, sender_id: str) -> Any:
        return self._api_request("POST", "/sender-id", {"senderId": sender_id})

    def get_sender_ids(self) -> Any:
        return self._api_request("GET", "/sender-id")
