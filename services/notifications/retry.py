from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from services.policy import DeliveryPolicy

from .errors import classify_error
from .types import AlertResponse, NotificationError, NotificationResult, RetryState

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]
Classifier = Callable[[BaseException], NotificationError]


async def execute_with_retries(
    operation: Callable[[], Awaitable[AlertResponse]],
    *,
    channel: str,
    policy: Optional[DeliveryPolicy] = None,
    classify: Classifier = classify_error,
    sleep: Sleep = asyncio.sleep,
    on_attempt: Optional[Callable[[int], None]] = None,
) -> NotificationResult:
    """Run ``operation`` until it succeeds or fails terminally.

    Only failures the classifier marks retryable are attempted again, with the
    delay doubling after each one. Exhausting ``policy.max_attempts`` reports
    the last classified error. ``sleep`` is awaited between attempts, so an
    enclosing timeout cancels a pending backoff as well as an in-flight call.
    """

    selected_policy = policy or DeliveryPolicy()
    state = RetryState(
        current_delay=selected_policy.initial_backoff,
        max_attempts=selected_policy.max_attempts,
    )
    delays: List[float] = []

    while True:
        attempt = state.attempt_index + 1
        if on_attempt is not None:
            on_attempt(attempt)
        try:
            response = await operation()
        except Exception as exc:
            error = classify(exc)
        else:
            return NotificationResult(
                channel=channel,
                success=True,
                attempts=attempt,
                response=response,
                delays=tuple(delays),
            )

        if not error.retryable or state.exhausted:
            logger.debug(
                "%s alert failed on attempt %s/%s: %s",
                channel,
                attempt,
                state.max_attempts,
                error.reason,
            )
            return NotificationResult(
                channel=channel,
                success=False,
                attempts=attempt,
                error=error,
                delays=tuple(delays),
            )

        delay = state.advance(selected_policy.backoff_factor)
        logger.warning(
            "%s alert attempt %s/%s failed (%s); retrying in %.1fs",
            channel,
            attempt,
            state.max_attempts,
            error.reason,
            delay,
        )
        delays.append(delay)
        await sleep(delay)


__all__ = ["execute_with_retries"]
