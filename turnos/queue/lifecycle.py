from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from .models import Ticket, TransitionResult
from .state import InvalidTransition, TicketLifecycle, TicketStatus, TicketTransition


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def apply_transition(
    ticket: Ticket,
    transition: TicketTransition,
    *,
    table_id: str | None = None,
    at: datetime | None = None,
) -> TransitionResult:
    """Return the ticket as it looks after ``transition``.

    The input ticket is left untouched. ``table_id`` is required for ``call``
    and ignored otherwise. The result carries the id of the table released by
    the transition so callers can patch their table cache in the same step.
    """

    target = TicketLifecycle.target(ticket.status, transition)
    stamp = at or _utcnow()

    if transition is TicketTransition.CALL:
        if not table_id:
            raise InvalidTransition(ticket.status, transition, "Calling a ticket requires a table")
        updated = replace(ticket, status=target, table_id=table_id, called_at=stamp, attended_at=stamp)
        return TransitionResult(ticket=updated)

    released = ticket.table_id if ticket.status is TicketStatus.SERVING else None
    updated = replace(ticket, status=target, completed_at=stamp)
    return TransitionResult(ticket=updated, released_table_id=released)
