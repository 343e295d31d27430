from __future__ import annotations

from typing import Optional


class NotilifyError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotilifyAPIError(NotilifyError):
    """The API answered with a 4xx/5xx status."""


class NotilifyTransportError(NotilifyError):
    """No response at all (DNS, refused connection, timeout)."""
