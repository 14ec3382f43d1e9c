"""Service-level building blocks for the notifox command-line client."""

from .policy import DeliveryPolicy

__all__ = ["DeliveryPolicy"]
