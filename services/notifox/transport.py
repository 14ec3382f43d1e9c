"""Async adapter over the synchronous ``notifox`` SDK client."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import notifox

from .models import AlertResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.notifox.com"


class NotifoxTransport:
    """Run :meth:`notifox.NotifoxClient.send_alert` off the event loop.

    The SDK client is expected to be built with ``max_retries=0`` so that the
    only retries are the ones driven by the delivery policy.
    """

    def __init__(self, client: notifox.NotifoxClient) -> None:
        self.client = client

    @classmethod
    def create(
        cls,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        user_agent: Optional[str] = None,
    ) -> "NotifoxTransport":
        client = notifox.NotifoxClient(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )
        if user_agent:
            client.session.headers["User-Agent"] = user_agent
        return cls(client)

    async def send_alert(self, audience: str, alert: str, channel: str) -> AlertResponse:
        payload = await asyncio.to_thread(self.client.send_alert, audience, alert, channel)
        return _to_response(payload)

    def close(self) -> None:
        self.client.session.close()

    async def __aenter__(self) -> "NotifoxTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()


def _to_response(payload: Any) -> AlertResponse:
    try:
        return AlertResponse.from_payload(payload)
    except ValueError as exc:
        logger.debug("Unusable alert receipt: %r", payload)
        # Status 200 keeps this out of the retry loop.
        raise notifox.NotifoxAPIError(
            f"malformed response: {exc}",
            status_code=200,
            response_text=f"malformed response: {exc}",
        ) from exc


__all__ = ["DEFAULT_BASE_URL", "NotifoxTransport"]
