from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from services.notifox import DEFAULT_BASE_URL
from services.policy import DeliveryPolicy


@dataclass()
class ClientSettings:
    """Credentials and endpoint used to build the Notifox client."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = "notifox-cli"
    policy: DeliveryPolicy = field(default_factory=DeliveryPolicy)

    def __repr__(self) -> str:
        return (
            f"ClientSettings(api_key='***', base_url={self.base_url!r}, "
            f"user_agent={self.user_agent!r}, policy={self.policy!r})"
        )


@dataclass()
class SendOptions:
    """Input collected by the ``send`` command."""

    audience: str
    channel: str
    message: str
    subject: Optional[str] = None
    verbose: bool = False


__all__ = ["ClientSettings", "SendOptions"]
