"""Delivery policy shared by the retry loop and the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass
class DeliveryPolicy:
    """Retry, backoff and deadline settings for a single alert delivery."""

    max_attempts: int = 4
    initial_backoff: float = 1.0
    backoff_factor: float = 2.0
    deadline: float = 30.0
    request_timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_backoff < 0:
            raise ValueError("initial_backoff must be >= 0")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be >= 1")
        if self.deadline <= 0:
            raise ValueError("deadline must be positive")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

    @classmethod
    def from_mapping(cls, payload: Optional[Mapping[str, Any]]) -> "DeliveryPolicy":
        if not payload:
            return cls()
        kwargs: Dict[str, Any] = {}
        for key in (
            "max_attempts",
            "initial_backoff",
            "backoff_factor",
            "deadline",
            "request_timeout",
        ):
            if key in payload:
                kwargs[key] = payload[key]
        return cls(**kwargs)


__all__ = ["DeliveryPolicy"]
