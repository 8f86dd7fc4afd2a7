"""Ticket lifecycle and queue ordering policy."""

from .lifecycle import apply_transition
from .models import ServiceType, Table, Ticket, TransitionResult
from .normalize import PayloadError, parse_priority
from .ordering import order_for_operator_list, order_for_public_queue, order_in_attention, take
from .state import InvalidTransition, TableStatus, TicketLifecycle, TicketStatus, TicketTransition

__all__ = [
    "apply_transition",
    "InvalidTransition",
    "order_for_operator_list",
    "order_for_public_queue",
    "order_in_attention",
    "parse_priority",
    "PayloadError",
    "ServiceType",
    "Table",
    "TableStatus",
    "take",
    "Ticket",
    "TicketLifecycle",
    "TicketStatus",
    "TicketTransition",
    "TransitionResult",
]
