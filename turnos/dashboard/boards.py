from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from turnos.queue.models import Ticket
from turnos.queue.ordering import order_for_public_queue, order_in_attention, take
from turnos.queue.state import TicketStatus

from .store import DashboardState


@dataclass(frozen=True, slots=True)
class WaitingBoard:
    """Public waiting screen: who is next."""

    tickets: tuple[Ticket, ...]
    total_waiting: int
    refreshed_at: datetime | None


@dataclass(frozen=True, slots=True)
class AttentionBoard:
    """Attention screen: tickets at a table plus the head of the queue."""

    serving: tuple[Ticket, ...]
    waiting: tuple[Ticket, ...]
    refreshed_at: datetime | None


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    waiting: int
    serving: int
    completed: int
    cancelled: int
    total: int
    serving_tickets: tuple[Ticket, ...]
    next_waiting: tuple[Ticket, ...]


def waiting_board(state: DashboardState, *, limit: int | None = 12) -> WaitingBoard:
    queue = order_for_public_queue(state.tickets())
    return WaitingBoard(
        tickets=tuple(take(queue, limit)),
        total_waiting=len(queue),
        refreshed_at=state.last_refreshed_at,
    )


def attention_board(
    state: DashboardState,
    *,
    serving_limit: int | None = None,
    waiting_limit: int | None = 8,
) -> AttentionBoard:
    tickets = state.tickets()
    return AttentionBoard(
        serving=tuple(take(order_in_attention(tickets), serving_limit)),
        waiting=tuple(take(order_for_public_queue(tickets), waiting_limit)),
        refreshed_at=state.last_refreshed_at,
    )


def status_counts(tickets: Iterable[Ticket]) -> dict[str, int]:
    counts = Counter(ticket.status for ticket in tickets)
    totals = {status.value: counts[status] for status in TicketStatus}
    totals["total"] = sum(counts.values())
    return totals


def dashboard_summary(state: DashboardState, *, waiting_limit: int | None = 10) -> DashboardSummary:
    tickets = state.tickets()
    counts = status_counts(tickets)
    return DashboardSummary(
        waiting=counts[TicketStatus.WAITING.value],
        serving=counts[TicketStatus.SERVING.value],
        completed=counts[TicketStatus.COMPLETED.value],
        cancelled=counts[TicketStatus.CANCELLED.value],
        total=counts["total"],
        serving_tickets=tuple(order_in_attention(tickets)),
        next_waiting=tuple(take(order_for_public_queue(tickets), waiting_limit)),
    )
