"""Display and service order for ticket lists.

The public queue and the operator list sort in opposite time directions:
the public board shows the longest-waiting customer first, the operator list
shows the most recent activity first. They are kept as separate functions.
Ties on ``created_at`` fall back to the ticket id in both.
"""

from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

from .models import Ticket
from .state import TicketStatus, is_active

T = TypeVar("T")


def order_for_public_queue(tickets: Iterable[Ticket]) -> list[Ticket]:
    """Waiting tickets only: priority first, then oldest first."""

    waiting = [ticket for ticket in tickets if ticket.status is TicketStatus.WAITING]
    return sorted(waiting, key=lambda ticket: (not ticket.is_priority, ticket.created_at, ticket.id))


def order_for_operator_list(tickets: Iterable[Ticket]) -> list[Ticket]:
    """All tickets: active work on top, grouped by priority, newest first."""

    ordered = sorted(tickets, key=lambda ticket: ticket.id)
    ordered.sort(key=lambda ticket: ticket.created_at, reverse=True)
    ordered.sort(key=_operator_group)
    return ordered


def order_in_attention(tickets: Iterable[Ticket]) -> list[Ticket]:
    """Serving tickets, most recently called first."""

    serving = sorted(
        (ticket for ticket in tickets if ticket.status is TicketStatus.SERVING),
        key=lambda ticket: ticket.id,
    )
    serving.sort(key=lambda ticket: ticket.called_at or ticket.created_at, reverse=True)
    return serving


def take(items: Sequence[T], limit: int | None) -> list[T]:
    """Cap a board at ``limit`` entries; ``None`` leaves it uncapped."""

    if limit is None:
        return list(items)
    if limit < 0:
        raise ValueError("Board limit must not be negative")
    return list(items[:limit])


def _operator_group(ticket: Ticket) -> tuple[int, int, int]:
    if not is_active(ticket.status):
        return (1, 0, 0)
    return (
        0,
        0 if ticket.is_priority else 1,
        0 if ticket.status is TicketStatus.SERVING else 1,
    )
