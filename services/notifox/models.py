from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping


@dataclass(frozen=True)
class AlertResponse:
    """Receipt returned by the API for an accepted alert."""

    message_id: str
    cost: Decimal
    currency: str
    parts: int

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "AlertResponse":
        """Build a response from the API JSON, raising ``ValueError`` when malformed."""

        if not isinstance(payload, Mapping):
            raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
        message_id = payload.get("message_id")
        if not message_id:
            raise ValueError("response is missing message_id")
        try:
            cost = Decimal(str(payload.get("cost", 0)))
        except InvalidOperation as exc:
            raise ValueError(f"invalid cost: {payload.get('cost')!r}") from exc
        try:
            parts = int(payload.get("parts", 1))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"invalid parts: {payload.get('parts')!r}") from exc
        if parts < 1:
            raise ValueError(f"invalid parts: {parts}")
        currency = str(payload.get("currency") or "USD")
        return cls(message_id=str(message_id), cost=cost, currency=currency, parts=parts)


__all__ = ["AlertResponse"]
