"""Deliver a single alert through the Notifox API."""

from __future__ import annotations

import asyncio
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List, Optional, Protocol

from services.policy import DeliveryPolicy

from .composer import build_request
from .errors import deadline_exceeded
from .retry import Sleep, execute_with_retries
from .types import AlertResponse, AlertValidationError, NotificationResult

logger = logging.getLogger(__name__)


class AlertTransport(Protocol):
    async def send_alert(self, audience: str, alert: str, channel: str) -> AlertResponse:
        ...


_COST_STEP = Decimal("0.001")


def format_response_details(response: AlertResponse) -> List[str]:
    """Return the verbose receipt lines; cost is rounded half-up to 3 places."""

    cost = response.cost.quantize(_COST_STEP, rounding=ROUND_HALF_UP)
    return [
        f"Message ID: {response.message_id}",
        f"Cost: ${cost} {response.currency}",
        f"Parts: {response.parts}",
    ]


async def send_alert(
    client: AlertTransport,
    audience: str,
    channel: Any,
    message: str,
    subject: Optional[str] = "",
    *,
    verbose: bool = False,
    policy: Optional[DeliveryPolicy] = None,
    sleep: Sleep = asyncio.sleep,
) -> NotificationResult:
    """Validate, compose and deliver one alert.

    Local validation failures return without touching ``client``. Every
    attempt and every backoff sleep share one deadline of ``policy.deadline``
    seconds; when it elapses the pending work is cancelled and a
    ``deadline_exceeded`` error is returned. Delivery failures are reported in
    the returned :class:`NotificationResult`, never raised.
    The full :class:`AlertResponse` is returned whatever ``verbose`` says;
    callers render it with :func:`format_response_details`.
    """

    selected_policy = policy or DeliveryPolicy()
    try:
        request = build_request(audience, channel, message, subject)
    except AlertValidationError as exc:
        logger.debug("Rejected alert before sending: %s", exc.error.reason)
        return NotificationResult(channel=str(channel), success=False, attempts=0, error=exc.error)

    attempts = 0

    def _record_attempt(attempt: int) -> None:
        nonlocal attempts
        attempts = attempt

    async def _dispatch() -> AlertResponse:
        return await client.send_alert(request.audience, request.body, request.channel.value)

    try:
        result = await asyncio.wait_for(
            execute_with_retries(
                _dispatch,
                channel=request.channel.value,
                policy=selected_policy,
                sleep=sleep,
                on_attempt=_record_attempt,
            ),
            timeout=selected_policy.deadline,
        )
    except asyncio.TimeoutError:
        error = deadline_exceeded(selected_policy.deadline, attempts)
        logger.debug(
            "%s alert abandoned after %s attempt(s): %s",
            request.channel.value,
            attempts,
            error.reason,
        )
        return NotificationResult(
            channel=request.channel.value,
            success=False,
            attempts=attempts,
            error=error,
        )

    return result


class AlertDispatcher:
    """Bind a transport and a delivery policy for repeated ``send_alert`` calls."""

    def __init__(
        self,
        client: AlertTransport,
        *,
        policy: Optional[DeliveryPolicy] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.client = client
        self.policy = policy or DeliveryPolicy()
        self._sleep = sleep

    async def send_alert(
        self,
        audience: str,
        channel: Any,
        message: str,
        subject: Optional[str] = "",
        *,
        verbose: bool = False,
    ) -> NotificationResult:
        return await send_alert(
            self.client,
            audience,
            channel,
            message,
            subject,
            verbose=verbose,
            policy=self.policy,
            sleep=self._sleep,
        )


__all__ = ["AlertDispatcher", "AlertTransport", "format_response_details", "send_alert"]
