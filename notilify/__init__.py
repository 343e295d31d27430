from notilify.api import NotilifyAPI, OtpOptions
from notilify.dispatcher import MessageDispatcher
from notilify.errors import NotilifyAPIError, NotilifyError, NotilifyTransportError
from notilify.request import API_URL, NotilifyRequest

__all__ = [
    "API_URL",
    "MessageDispatcher",
    "NotilifyAPI",
    "NotilifyAPIError",
    "NotilifyError",
    "NotilifyRequest",
    "NotilifyTransportError",
    "OtpOptions",
]
