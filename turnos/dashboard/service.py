from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from turnos.client.api import APIError, TurnosAPIClient
from turnos.queue.models import ServiceType, Table, Ticket, TransitionResult
from turnos.queue.normalize import (
    PayloadError,
    parse_ticket_status,
    parse_timestamp,
    service_type_from_payload,
    table_from_payload,
    table_status_to_wire,
    ticket_from_payload,
    ticket_status_to_wire,
)
from turnos.queue.state import InvalidTransition, TableStatus, TicketLifecycle, TicketStatus, TicketTransition

from .boards import status_counts
from .store import DashboardState, TicketNotCached

logger = logging.getLogger(__name__)

# backend field carrying the time each transition happened
_TRANSITION_STAMP_FIELDS = {
    TicketTransition.CALL: "hora_llamado",
    TicketTransition.COMPLETE: "hora_finalizacion",
    TicketTransition.CANCEL: "hora_finalizacion",
}


@dataclass(slots=True)
class DashboardService:
    """Orchestrates backend calls and keeps the dashboard cache in step."""

    client: TurnosAPIClient
    state: DashboardState = field(default_factory=DashboardState)

    async def refresh(self) -> None:
        await self.refresh_tickets()
        self.state.replace_tables(table_from_payload(item) for item in await self.client.list_tables())
        self.state.replace_service_types(
            service_type_from_payload(item) for item in await self.client.list_service_types()
        )

    async def refresh_tickets(self) -> list[Ticket]:
        payloads = await self.client.list_tickets()
        tickets = [ticket_from_payload(item) for item in payloads]
        self.state.replace_tickets(tickets)
        logger.debug("Refreshed %d tickets", len(tickets))
        return tickets

    async def create_ticket(
        self,
        *,
        service_type_id: str,
        customer_name: str | None = None,
        is_priority: bool = False,
        notes: str | None = None,
        table_id: str | None = None,
    ) -> Ticket:
        """Issue a ticket; with ``table_id`` it is called straight to that table."""

        data = await self.client.create_ticket(
            service_type_id=service_type_id,
            customer_name=customer_name,
            is_priority=is_priority,
            notes=notes,
        )
        ticket = ticket_from_payload(data)
        self.state.upsert_ticket(ticket)
        logger.info("Created ticket %s (priority=%s)", ticket.code, ticket.is_priority)

        if table_id is None:
            return ticket
        table = self.state.get_table(table_id)
        if table is None or not table.is_available:
            logger.info("Table %s is not available; ticket %s stays in the queue", table_id, ticket.code)
            return ticket
        try:
            result = await self.call_ticket(ticket.id, table_id=table_id)
        except (APIError, InvalidTransition, TicketNotCached, PayloadError) as exc:
            # the ticket exists on the backend either way; report it as created
            logger.warning("Ticket %s created but could not be called to table %s: %s", ticket.code, table_id, exc)
            self.state.record_error(str(exc))
            return ticket
        return result.ticket

    async def call_ticket(self, ticket_id: str, *, table_id: str) -> TransitionResult:
        ticket = await self._cached_ticket(ticket_id)
        self._validate(ticket, TicketTransition.CALL, table_id=table_id)
        data = await self.client.call_ticket(ticket_id, table_id=table_id)
        return self._patch(ticket, TicketTransition.CALL, data, table_id=table_id)

    async def complete_ticket(self, ticket_id: str, *, notes: str | None = None) -> TransitionResult:
        ticket = await self._cached_ticket(ticket_id)
        self._validate(ticket, TicketTransition.COMPLETE)
        data = await self.client.complete_ticket(ticket_id, notes=notes)
        return self._patch(ticket, TicketTransition.COMPLETE, data)

    async def cancel_ticket(self, ticket_id: str, *, notes: str | None = None) -> TransitionResult:
        ticket = await self._cached_ticket(ticket_id)
        self._validate(ticket, TicketTransition.CANCEL)
        data = await self.client.cancel_ticket(ticket_id, notes=notes)
        return self._patch(ticket, TicketTransition.CANCEL, data)

    def statistics(self) -> dict[str, int]:
        return status_counts(self.state.tickets())

    async def remote_statistics(self) -> Mapping[str, Any]:
        return await self.client.get_statistics()

    def tickets(self, *, status: TicketStatus | None = None) -> list[Ticket]:
        tickets = self.state.tickets()
        if status is None:
            return tickets
        return [ticket for ticket in tickets if ticket.status is status]

    # Tables
    async def create_table(self, *, number: int, name: str, status: TableStatus | None = None, active: bool = True) -> Table:
        payload: dict[str, Any] = {"numero": number, "nombre": name, "activo": active}
        if status is not None:
            payload["estado"] = table_status_to_wire(status)
        table = table_from_payload(await self.client.create_table(payload))
        self.state.upsert_table(table)
        return table

    async def update_table(self, table_id: str, changes: Mapping[str, Any]) -> Table:
        payload = dict(changes)
        if isinstance(payload.get("estado"), TableStatus):
            payload["estado"] = table_status_to_wire(payload["estado"])
        table = table_from_payload(await self.client.update_table(table_id, payload))
        self.state.upsert_table(table)
        return table

    async def delete_table(self, table_id: str) -> None:
        await self.client.delete_table(table_id)
        self.state.remove_table(table_id)

    # Service types
    async def create_service_type(self, payload: Mapping[str, Any]) -> ServiceType:
        service_type = service_type_from_payload(await self.client.create_service_type(payload))
        self.state.upsert_service_type(service_type)
        return service_type

    async def update_service_type(self, service_type_id: str, payload: Mapping[str, Any]) -> ServiceType:
        service_type = service_type_from_payload(await self.client.update_service_type(service_type_id, payload))
        self.state.upsert_service_type(service_type)
        return service_type

    async def delete_service_type(self, service_type_id: str) -> None:
        await self.client.delete_service_type(service_type_id)
        self.state.remove_service_type(service_type_id)

    async def _cached_ticket(self, ticket_id: str) -> Ticket:
        try:
            return self.state.get_ticket(ticket_id)
        except TicketNotCached:
            logger.debug("Ticket %s not cached, refreshing", ticket_id)
        await self.refresh_tickets()
        return self.state.get_ticket(ticket_id)

    @staticmethod
    def _validate(ticket: Ticket, transition: TicketTransition, *, table_id: str | None = None) -> None:
        TicketLifecycle.assert_transition(ticket.status, transition)
        if transition is TicketTransition.CALL and not table_id:
            raise InvalidTransition(ticket.status, transition, "Calling a ticket requires a table")

    def _patch(
        self,
        ticket: Ticket,
        transition: TicketTransition,
        data: Mapping[str, Any] | None,
        *,
        table_id: str | None = None,
    ) -> TransitionResult:
        result = self.state.apply_transition(
            ticket.id, transition, table_id=table_id, at=_transition_stamp(transition, data)
        )
        _warn_on_divergence(result.ticket, data)
        logger.info(
            "Ticket %s: %s -> %s (table=%s)",
            ticket.code,
            ticket_status_to_wire(ticket.status),
            ticket_status_to_wire(result.ticket.status),
            result.ticket.table_id,
        )
        return result


def _transition_stamp(transition: TicketTransition, data: Mapping[str, Any] | None) -> datetime | None:
    if not isinstance(data, Mapping):
        return None
    key = _TRANSITION_STAMP_FIELDS[transition]
    try:
        return parse_timestamp(data.get(key), field=key)
    except PayloadError:
        return None


def _warn_on_divergence(ticket: Ticket, data: Mapping[str, Any] | None) -> None:
    if not isinstance(data, Mapping) or "estado" not in data:
        return
    try:
        reported = parse_ticket_status(data["estado"])
    except PayloadError:
        return
    if reported is not ticket.status:
        logger.warning(
            "Backend reports ticket %s as %s, local lifecycle says %s",
            ticket.id,
            reported.value,
            ticket.status.value,
        )
