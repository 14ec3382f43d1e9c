"""Map transport failures onto the delivery error taxonomy."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Sequence, Tuple, Type

from notifox import (
    NotifoxAPIError,
    NotifoxAuthenticationError,
    NotifoxConnectionError,
    NotifoxInsufficientBalanceError,
    NotifoxRateLimitError,
)

from .types import ErrorKind, NotificationError


def _authentication(exc: NotifoxAuthenticationError) -> NotificationError:
    return NotificationError(
        kind=ErrorKind.AUTHENTICATION,
        reason=f"authentication failed: {exc.response_text} (status: {exc.status_code})",
        retryable=False,
        status_code=exc.status_code,
        response_text=exc.response_text,
        cause=exc,
    )


def _insufficient_balance(exc: NotifoxInsufficientBalanceError) -> NotificationError:
    return NotificationError(
        kind=ErrorKind.INSUFFICIENT_BALANCE,
        reason=f"insufficient balance: {exc.response_text}",
        retryable=False,
        status_code=exc.status_code,
        response_text=exc.response_text,
        cause=exc,
    )


def _rate_limit(exc: NotifoxRateLimitError) -> NotificationError:
    return NotificationError(
        kind=ErrorKind.RATE_LIMIT,
        reason=f"rate limit exceeded: {exc.response_text}",
        retryable=False,
        status_code=exc.status_code,
        response_text=exc.response_text,
        cause=exc,
    )


def _api_error(exc: NotifoxAPIError) -> NotificationError:
    return NotificationError(
        kind=ErrorKind.API_ERROR,
        reason=f"API error: {exc.response_text} (status: {exc.status_code})",
        retryable=is_retryable_status(exc.status_code),
        status_code=exc.status_code,
        response_text=exc.response_text,
        cause=exc,
    )


def _connection_error(exc: NotifoxConnectionError) -> NotificationError:
    return NotificationError(
        kind=ErrorKind.CONNECTION_ERROR,
        reason=f"connection error: {exc.__cause__ or exc}",
        retryable=True,
        cause=exc,
    )


# First match wins. Every status-specific SDK error subclasses NotifoxAPIError,
# so they must be listed before it; server and validation errors fall through
# to the generic rule.
_RULES: Sequence[Tuple[Type[BaseException], Callable[..., NotificationError]]] = (
    (NotifoxAuthenticationError, _authentication),
    (NotifoxInsufficientBalanceError, _insufficient_balance),
    (NotifoxRateLimitError, _rate_limit),
    (NotifoxAPIError, _api_error),
    (NotifoxConnectionError, _connection_error),
)


def is_retryable_status(status_code: Optional[int]) -> bool:
    return status_code is not None and status_code >= 500


def classify_error(exc: BaseException) -> NotificationError:
    """Return the :class:`NotificationError` describing ``exc``."""

    for error_type, build in _RULES:
        if isinstance(exc, error_type):
            return build(exc)
    return NotificationError(
        kind=ErrorKind.UNCLASSIFIED,
        reason=f"error: {exc}",
        retryable=False,
        cause=exc,
    )


def is_retryable(exc: BaseException) -> bool:
    return classify_error(exc).retryable


def deadline_exceeded(deadline: float, attempts: int) -> NotificationError:
    return NotificationError(
        kind=ErrorKind.DEADLINE_EXCEEDED,
        reason=f"deadline exceeded: no response within {deadline:g}s",
        retryable=False,
        cause=asyncio.TimeoutError(),
        details={"attempts": attempts},
    )


def invalid_channel(channel: object) -> NotificationError:
    return NotificationError(
        kind=ErrorKind.INVALID_CHANNEL,
        reason=f"invalid channel: {channel} (must be 'sms' or 'email')",
        retryable=False,
    )


def invalid_request(reason: str) -> NotificationError:
    return NotificationError(kind=ErrorKind.INVALID_REQUEST, reason=reason, retryable=False)


__all__ = [
    "classify_error",
    "deadline_exceeded",
    "invalid_channel",
    "invalid_request",
    "is_retryable",
    "is_retryable_status",
]
