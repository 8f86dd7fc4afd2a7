"""Client for the queue backend REST API."""

from .api import APIError, TurnosAPIClient

__all__ = ["APIError", "TurnosAPIClient"]
