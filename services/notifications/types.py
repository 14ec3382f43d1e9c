from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from services.notifox.models import AlertResponse


class Channel(str, Enum):
    SMS = "sms"
    EMAIL = "email"

    @classmethod
    def parse(cls, value: Any) -> "Channel":
        """Return the channel named by ``value`` or raise ``ValueError``."""

        if isinstance(value, Channel):
            return value
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"invalid channel: {value} (must be 'sms' or 'email')")


class ErrorKind(str, Enum):
    AUTHENTICATION = "authentication"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    RATE_LIMIT = "rate_limit"
    API_ERROR = "api_error"
    CONNECTION_ERROR = "connection_error"
    UNCLASSIFIED = "unclassified"
    INVALID_CHANNEL = "invalid_channel"
    INVALID_REQUEST = "invalid_request"
    DEADLINE_EXCEEDED = "deadline_exceeded"


@dataclass(frozen=True)
class AlertRequest:
    audience: str
    channel: Channel
    body: str
    raw_message: str
    subject: Optional[str] = None


@dataclass
class NotificationError:
    kind: ErrorKind
    reason: str
    retryable: bool
    status_code: Optional[int] = None
    response_text: Optional[str] = None
    cause: Optional[BaseException] = None
    details: Optional[Mapping[str, Any]] = None

    def __str__(self) -> str:
        return self.reason


@dataclass
class NotificationResult:
    channel: str
    success: bool
    attempts: int
    error: Optional[NotificationError] = None
    response: Optional[AlertResponse] = None
    delays: Tuple[float, ...] = ()


@dataclass
class RetryState:
    """Per-call bookkeeping for the retry loop."""

    current_delay: float
    max_attempts: int = 4
    attempt_index: int = 0

    @property
    def exhausted(self) -> bool:
        return self.attempt_index >= self.max_attempts - 1

    def advance(self, factor: float) -> float:
        """Consume the current delay and move to the next attempt."""

        delay = self.current_delay
        self.current_delay = delay * factor
        self.attempt_index += 1
        return delay


class AlertValidationError(ValueError):
    """Raised when a request is rejected locally before any network call."""

    def __init__(self, error: NotificationError):
        self.error = error
        super().__init__(error.reason)
