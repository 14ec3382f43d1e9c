"""Environment-driven configuration for the notifox command-line client."""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping, Optional

import logging_setup
from services.notifox import NotifoxTransport
from services.policy import DeliveryPolicy

from . import __version__
from .config.models import ClientSettings

API_KEY_ENV = "NOTIFOX_API_KEY"
BASE_URL_ENV = "NOTIFOX_BASE_URL"


class ConfigurationError(ValueError):
    """Raised when the client cannot be configured from the environment."""


def user_agent(version: str = __version__) -> str:
    return f"notifox-cli/{version}"


def load_client_settings(
    environ: Optional[Mapping[str, str]] = None,
    *,
    policy_overrides: Optional[Mapping[str, Any]] = None,
) -> ClientSettings:
    """Return :class:`ClientSettings` read from ``environ`` (``os.environ`` by default)."""

    env = os.environ if environ is None else environ
    api_key = (env.get(API_KEY_ENV) or "").strip()
    if not api_key:
        raise ConfigurationError(f"{API_KEY_ENV} environment variable is required")

    try:
        policy = DeliveryPolicy.from_mapping(policy_overrides)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid delivery policy: {exc}") from exc

    settings = ClientSettings(api_key=api_key, user_agent=user_agent(), policy=policy)
    base_url = (env.get(BASE_URL_ENV) or "").strip()
    if base_url:
        settings.base_url = base_url
    return settings


def build_client(settings: ClientSettings) -> NotifoxTransport:
    """Create the API transport described by ``settings``.

    The SDK client never retries on its own; attempts are driven by
    ``settings.policy``.
    """

    return NotifoxTransport.create(
        settings.api_key,
        base_url=settings.base_url,
        timeout=settings.policy.request_timeout,
        user_agent=settings.user_agent,
    )


def _ensure_logger_level(logger: logging.Logger, level: int) -> None:
    """Ensure ``logger`` and its handlers are set to at most ``level``."""

    if logger.level in {logging.NOTSET} or logger.level > level:
        logger.setLevel(level)
    for handler in logger.handlers:
        if handler.level in {logging.NOTSET} or handler.level > level:
            handler.setLevel(level)


def configure_logging(debug_level: int = 0) -> bool:
    """Provision console logging; return ``True`` when handlers were installed."""

    root_logger = logging.getLogger()
    already_configured = bool(root_logger.handlers)
    if not already_configured:
        logging_setup.configure_logging(debug=debug_level)
    else:
        logging_setup.install_redaction()

    desired_level = logging_setup.debug_to_level(debug_level)
    for name in ("", "notifox_cli", "services"):
        _ensure_logger_level(logging.getLogger(name), desired_level)
    return not already_configured


__all__ = [
    "API_KEY_ENV",
    "BASE_URL_ENV",
    "ConfigurationError",
    "build_client",
    "configure_logging",
    "load_client_settings",
    "user_agent",
]
