"""Command-line client for sending alerts through Notifox."""

__version__ = "0.3.0"

__all__ = ["__version__"]
