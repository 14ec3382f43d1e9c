"""Configuration models for the notifox command-line client."""

from .models import ClientSettings, SendOptions

__all__ = ["ClientSettings", "SendOptions"]
