"""Route modules exposed by the API package."""

from . import boards, ping, service_types, tables, tickets

__all__ = ["boards", "ping", "service_types", "tables", "tickets"]
