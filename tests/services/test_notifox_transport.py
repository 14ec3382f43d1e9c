import asyncio
import json
import threading
from decimal import Decimal
from typing import Any, Dict, List

import notifox
import pytest

from services.notifications import ErrorKind, send_alert
from services.notifox import AlertResponse, NotifoxTransport


class StubSdkClient:
    """Stands in for ``notifox.NotifoxClient``; records calls and their thread."""

    def __init__(self, outcome: Any) -> None:
        self.outcome = outcome
        self.calls: List[tuple] = []
        self.threads: List[str] = []

    def send_alert(self, audience: str, alert: str, channel: Any = None) -> Dict[str, Any]:
        self.calls.append((audience, alert, channel))
        self.threads.append(threading.current_thread().name)
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome


class FakeHttpResponse:
    def __init__(self, status_code: int, body: Dict[str, Any]) -> None:
        self.status_code = status_code
        self.headers = {"content-type": "application/json"}
        self.text = json.dumps(body)
        self._body = body

    def json(self) -> Dict[str, Any]:
        return self._body


def _send(transport: NotifoxTransport, channel: str = "sms") -> AlertResponse:
    return asyncio.run(transport.send_alert("ops-team", "disk full", channel))


def test_receipt_is_mapped_to_alert_response():
    sdk = StubSdkClient({"message_id": "m-42", "cost": 0.0125, "currency": "USD", "parts": 2})

    response = _send(NotifoxTransport(sdk))

    assert response == AlertResponse(
        message_id="m-42", cost=Decimal("0.0125"), currency="USD", parts=2
    )
    assert sdk.calls == [("ops-team", "disk full", "sms")]


def test_sdk_call_runs_off_the_event_loop_thread():
    sdk = StubSdkClient({"message_id": "m-1"})

    _send(NotifoxTransport(sdk), channel="email")

    assert sdk.threads and sdk.threads[0] != threading.main_thread().name
    assert sdk.calls[0][2] == "email"


def test_sdk_errors_propagate_unchanged():
    error = notifox.NotifoxRateLimitError("slow down", 429, "slow down")
    sdk = StubSdkClient(error)

    with pytest.raises(notifox.NotifoxRateLimitError) as excinfo:
        _send(NotifoxTransport(sdk))

    assert excinfo.value is error


def test_malformed_receipt_is_a_non_retryable_api_error():
    sdk = StubSdkClient({"cost": 1})

    with pytest.raises(notifox.NotifoxAPIError, match="message_id") as excinfo:
        _send(NotifoxTransport(sdk))

    assert excinfo.value.status_code == 200

    result = asyncio.run(send_alert(NotifoxTransport(sdk), "ops", "sms", "disk full"))
    assert result.error.kind is ErrorKind.API_ERROR
    assert not result.error.retryable
    assert result.attempts == 1


def test_create_builds_sdk_client_without_its_own_retries():
    transport = NotifoxTransport.create(
        "key-123",
        base_url="https://notifox.internal/v2/",
        timeout=4.0,
        user_agent="notifox-cli/9.9.9",
    )

    client = transport.client
    assert isinstance(client, notifox.NotifoxClient)
    assert client.api_key == "key-123"
    assert client.base_url == "https://notifox.internal/v2"
    assert client.timeout == 4.0
    assert client.session.headers["User-Agent"] == "notifox-cli/9.9.9"
    assert client.session.get_adapter("https://notifox.internal").max_retries.total == 0


def test_create_posts_through_the_sdk_session(monkeypatch: pytest.MonkeyPatch):
    seen: Dict[str, Any] = {}
    transport = NotifoxTransport.create("key-123")

    def fake_post(url, **kwargs):
        seen.update(kwargs, url=url)
        return FakeHttpResponse(
            200, {"message_id": "m-7", "cost": "0.0075", "currency": "EUR", "parts": 1}
        )

    monkeypatch.setattr(transport.client.session, "post", fake_post)

    response = _send(transport)

    assert response.message_id == "m-7"
    assert response.cost == Decimal("0.0075")
    assert response.currency == "EUR"
    assert seen["url"] == "https://api.notifox.com/alert"
    assert seen["headers"] == {"Authorization": "Bearer key-123"}
    assert seen["json"] == {"audience": "ops-team", "alert": "disk full", "channel": "sms"}
    assert seen["timeout"] == 10.0


def test_context_manager_closes_the_session():
    transport = NotifoxTransport(StubSdkClient({"message_id": "m-1"}))
    closed: List[bool] = []

    class Session:
        def close(self) -> None:
            closed.append(True)

    transport.client.session = Session()

    async def _run():
        async with transport as entered:
            assert entered is transport

    asyncio.run(_run())

    assert closed == [True]
