from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .state import TableStatus, TicketStatus


@dataclass(frozen=True, slots=True)
class Ticket:
    """One customer's position in the queue ("turno")."""

    id: str
    code: str
    service_type_id: str
    status: TicketStatus
    created_at: datetime
    is_priority: bool = False
    table_id: str | None = None
    customer_name: str | None = None
    notes: str | None = None
    called_at: datetime | None = None
    attended_at: datetime | None = None
    completed_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class Table:
    """Physical service point ("mesa") that serves one ticket at a time."""

    id: str
    number: int
    name: str
    status: TableStatus = TableStatus.AVAILABLE
    active: bool = True

    @property
    def is_available(self) -> bool:
        return self.active and self.status == TableStatus.AVAILABLE


@dataclass(frozen=True, slots=True)
class ServiceType:
    id: str
    name: str
    code: str
    color: str
    estimated_duration_minutes: int
    active: bool = True
    description: str | None = None


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """Ticket after a transition plus the table it gave back, if any."""

    ticket: Ticket
    released_table_id: str | None = None
