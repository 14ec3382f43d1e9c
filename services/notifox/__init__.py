"""Async access to the Notifox alert API through the ``notifox`` SDK."""

from notifox import NotifoxAPIError, NotifoxConnectionError

from .models import AlertResponse
from .transport import DEFAULT_BASE_URL, NotifoxTransport

__all__ = [
    "AlertResponse",
    "DEFAULT_BASE_URL",
    "NotifoxAPIError",
    "NotifoxConnectionError",
    "NotifoxTransport",
]
