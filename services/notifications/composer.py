"""Channel-specific formatting of alert bodies."""

from __future__ import annotations

from typing import Any, Optional

from .errors import invalid_channel, invalid_request
from .types import AlertRequest, AlertValidationError, Channel

SUBJECT_SEPARATOR = "\n\n"


def compose_body(channel: Channel, raw_message: str, subject: Optional[str] = None) -> str:
    """Return the body to submit for ``channel``.

    Email subjects become the first line, separated from the message by a
    blank line, so the provider can lift them into the email subject. SMS
    ignores the subject entirely.
    """

    if channel is Channel.EMAIL and subject:
        return f"{subject}{SUBJECT_SEPARATOR}{raw_message}"
    return raw_message


def build_request(
    audience: str,
    channel: Any,
    message: str,
    subject: Optional[str] = None,
) -> AlertRequest:
    """Validate the caller input and return the composed request."""

    try:
        parsed = Channel.parse(channel)
    except ValueError:
        raise AlertValidationError(invalid_channel(channel)) from None
    if not audience or not audience.strip():
        raise AlertValidationError(invalid_request("audience is required"))
    if not message:
        raise AlertValidationError(invalid_request("message is required"))

    body = compose_body(parsed, message, subject)
    return AlertRequest(
        audience=audience,
        channel=parsed,
        body=body,
        raw_message=message,
        subject=subject or None,
    )


__all__ = ["SUBJECT_SEPARATOR", "build_request", "compose_body"]
