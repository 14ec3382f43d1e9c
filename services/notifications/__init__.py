from .composer import build_request, compose_body
from .dispatcher import AlertDispatcher, format_response_details, send_alert
from .errors import classify_error, is_retryable
from .retry import execute_with_retries
from .types import (
    AlertRequest,
    AlertResponse,
    AlertValidationError,
    Channel,
    ErrorKind,
    NotificationError,
    NotificationResult,
    RetryState,
)

__all__ = [
    "AlertDispatcher",
    "AlertRequest",
    "AlertResponse",
    "AlertValidationError",
    "Channel",
    "ErrorKind",
    "NotificationError",
    "NotificationResult",
    "RetryState",
    "build_request",
    "classify_error",
    "compose_body",
    "execute_with_retries",
    "format_response_details",
    "is_retryable",
    "send_alert",
]
