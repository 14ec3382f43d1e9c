from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, List, Sequence, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from services.notifox import AlertResponse


class ScriptedTransport:
    """Transport stub that replays ``outcomes``; the last one repeats forever."""

    def __init__(self, outcomes: Sequence[Any]) -> None:
        self._outcomes = list(outcomes)
        self.calls: List[Tuple[str, str, str]] = []

    async def send_alert(self, audience: str, alert: str, channel: str) -> AlertResponse:
        self.calls.append((audience, alert, channel))
        index = min(len(self.calls), len(self._outcomes)) - 1
        outcome = self._outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def receipt() -> AlertResponse:
    return AlertResponse(message_id="msg-1", cost=Decimal("0.025"), currency="USD", parts=1)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_transport():
    return ScriptedTransport
