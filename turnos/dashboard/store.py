from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Iterable

from turnos.queue.lifecycle import apply_transition
from turnos.queue.models import ServiceType, Table, Ticket, TransitionResult
from turnos.queue.state import TableStatus, TicketTransition


class TicketNotCached(LookupError):
    """Raised when a ticket id is not present in the local cache."""


class DashboardState:
    """In-memory view of the entities last fetched from the backend.

    The cache is possibly stale between refreshes. Ordering and lifecycle
    code never reads it directly; callers pass plain lists out of it.
    """

    def __init__(self) -> None:
        self._tickets: dict[str, Ticket] = {}
        self._tables: dict[str, Table] = {}
        self._service_types: dict[str, ServiceType] = {}
        self.last_refreshed_at: datetime | None = None
        self.last_error: str | None = None

    # Reads
    def tickets(self) -> list[Ticket]:
        return list(self._tickets.values())

    def tables(self) -> list[Table]:
        return list(self._tables.values())

    def service_types(self) -> list[ServiceType]:
        return list(self._service_types.values())

    def get_ticket(self, ticket_id: str) -> Ticket:
        try:
            return self._tickets[ticket_id]
        except KeyError:
            raise TicketNotCached(f"Ticket {ticket_id} not found") from None

    def get_table(self, table_id: str) -> Table | None:
        return self._tables.get(table_id)

    def available_tables(self) -> list[Table]:
        return [table for table in self._tables.values() if table.is_available]

    def active_service_types(self) -> list[ServiceType]:
        return [service for service in self._service_types.values() if service.active]

    # Bulk replacement after a fetch
    def replace_tickets(self, tickets: Iterable[Ticket], *, at: datetime | None = None) -> None:
        self._tickets = {ticket.id: ticket for ticket in tickets}
        self.last_refreshed_at = at or datetime.now(timezone.utc)
        self.last_error = None

    def replace_tables(self, tables: Iterable[Table]) -> None:
        self._tables = {table.id: table for table in tables}

    def replace_service_types(self, service_types: Iterable[ServiceType]) -> None:
        self._service_types = {service.id: service for service in service_types}

    # Single entity updates
    def upsert_ticket(self, ticket: Ticket) -> None:
        self._tickets[ticket.id] = ticket

    def upsert_table(self, table: Table) -> None:
        self._tables[table.id] = table

    def remove_table(self, table_id: str) -> None:
        self._tables.pop(table_id, None)

    def upsert_service_type(self, service_type: ServiceType) -> None:
        self._service_types[service_type.id] = service_type

    def remove_service_type(self, service_type_id: str) -> None:
        self._service_types.pop(service_type_id, None)

    def record_error(self, message: str) -> None:
        self.last_error = message

    def apply_transition(
        self,
        ticket_id: str,
        transition: TicketTransition,
        *,
        table_id: str | None = None,
        at: datetime | None = None,
    ) -> TransitionResult:
        """Patch the cached ticket and its table after a known state change."""

        result = apply_transition(self.get_ticket(ticket_id), transition, table_id=table_id, at=at)
        self._tickets[ticket_id] = result.ticket

        if transition is TicketTransition.CALL and result.ticket.table_id:
            self._set_table_status(result.ticket.table_id, TableStatus.OCCUPIED)
        if result.released_table_id:
            self._set_table_status(result.released_table_id, TableStatus.AVAILABLE)
        return result

    def _set_table_status(self, table_id: str, status: TableStatus) -> None:
        table = self._tables.get(table_id)
        if table is not None:
            self._tables[table_id] = replace(table, status=status)
