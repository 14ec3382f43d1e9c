"""Console logging for the notifox command-line client.

Secrets (API keys, bearer tokens) are masked when a record is created, so
handlers attached directly by third-party loggers never see them either.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any, Callable, Optional, TextIO

REDACTED = "***REDACTED***"

_SENSITIVE_KEYS = ("api_key", "apikey", "api-key", "authorization", "token", "password", "secret")

_PATTERNS = (
    re.compile(r"(?i)(bearer\s+)[A-Za-z0-9._~+/=-]+"),
    re.compile(
        r"(?i)(['\"]?(?:%s)['\"]?\s*[:=]\s*['\"]?)(?!bearer\s)[^'\",\s}&]+"
        % "|".join(re.escape(key) for key in _SENSITIVE_KEYS)
    ),
    re.compile(r"(?i)(NOTIFOX_API_KEY=)\S+"),
)

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def redact(text: str) -> str:
    for pattern in _PATTERNS:
        text = pattern.sub(lambda match: f"{match.group(1)}{REDACTED}", text)
    return text


class _RedactingRecordFactory:
    """Wrap the active record factory so every record is redacted at creation."""

    def __init__(self, base: Callable[..., logging.LogRecord]) -> None:
        self.base = base

    def __call__(self, *args: Any, **kwargs: Any) -> logging.LogRecord:
        record = self.base(*args, **kwargs)
        try:
            message = record.getMessage()
        except (TypeError, ValueError):  # pragma: no cover - let logging report bad arguments
            return record
        record.msg = redact(message)
        record.args = None
        return record


def install_redaction() -> None:
    factory = logging.getLogRecordFactory()
    if isinstance(factory, _RedactingRecordFactory):
        return
    logging.setLogRecordFactory(_RedactingRecordFactory(factory))


def debug_to_level(debug: int) -> int:
    """Map a debug verbosity count to a logging level."""

    if debug <= 0:
        return logging.WARNING
    if debug == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(debug: int = 1, stream_target: Optional[TextIO] = None) -> None:
    """Install a console handler on the root logger.

    ``debug`` maps 0 to WARNING, 1 to INFO and 2+ to DEBUG. The
    ``urllib3`` connection logs stay at WARNING unless ``debug`` is at least 2.
    """

    level = debug_to_level(debug)
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream_target or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)

    install_redaction()

    noisy_level = logging.DEBUG if debug >= 2 else logging.WARNING
    logging.getLogger("urllib3").setLevel(noisy_level)


__all__ = ["REDACTED", "configure_logging", "debug_to_level", "install_redaction", "redact"]
