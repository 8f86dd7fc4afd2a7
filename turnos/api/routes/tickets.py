from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from turnos.api.errors import backend_error, payload_error
from turnos.api.schemas import (
    TicketCallRequest,
    TicketCloseRequest,
    TicketCreateRequest,
    TicketResponse,
    TransitionResponse,
)
from turnos.client.api import APIError
from turnos.dashboard.store import TicketNotCached
from turnos.dependencies.dashboard import DashboardServiceDep
from turnos.queue.models import Ticket, TransitionResult
from turnos.queue.normalize import PayloadError
from turnos.queue.ordering import order_for_operator_list
from turnos.queue.state import InvalidTransition, TicketStatus

router = APIRouter(prefix="/tickets", tags=["tickets"])


def _to_response(ticket: Ticket) -> TicketResponse:
    return TicketResponse.model_validate(ticket)


def _to_transition_response(result: TransitionResult) -> TransitionResponse:
    return TransitionResponse.model_validate(result)


@router.get("", response_model=list[TicketResponse])
async def list_tickets(
    service: DashboardServiceDep,
    status_filter: TicketStatus | None = Query(default=None, alias="status"),
) -> list[TicketResponse]:
    tickets = order_for_operator_list(service.tickets(status=status_filter))
    return [_to_response(ticket) for ticket in tickets]


@router.post("", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
async def create_ticket(payload: TicketCreateRequest, service: DashboardServiceDep) -> TicketResponse:
    try:
        ticket = await service.create_ticket(
            service_type_id=payload.service_type_id,
            customer_name=payload.customer_name,
            is_priority=payload.is_priority,
            notes=payload.notes,
            table_id=payload.table_id,
        )
    except APIError as exc:
        raise backend_error(exc) from exc
    except PayloadError as exc:
        raise payload_error(exc) from exc
    return _to_response(ticket)


@router.post("/{ticket_id}/call", response_model=TransitionResponse)
async def call_ticket(ticket_id: str, payload: TicketCallRequest, service: DashboardServiceDep) -> TransitionResponse:
    try:
        result = await service.call_ticket(ticket_id, table_id=payload.table_id)
    except TicketNotCached as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except APIError as exc:
        raise backend_error(exc) from exc
    except PayloadError as exc:
        raise payload_error(exc) from exc
    return _to_transition_response(result)


@router.post("/{ticket_id}/complete", response_model=TransitionResponse)
async def complete_ticket(
    ticket_id: str, service: DashboardServiceDep, payload: TicketCloseRequest | None = None
) -> TransitionResponse:
    notes = payload.notes if payload is not None else None
    try:
        result = await service.complete_ticket(ticket_id, notes=notes)
    except TicketNotCached as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except APIError as exc:
        raise backend_error(exc) from exc
    except PayloadError as exc:
        raise payload_error(exc) from exc
    return _to_transition_response(result)


@router.post("/{ticket_id}/cancel", response_model=TransitionResponse)
async def cancel_ticket(
    ticket_id: str, service: DashboardServiceDep, payload: TicketCloseRequest | None = None
) -> TransitionResponse:
    notes = payload.notes if payload is not None else None
    try:
        result = await service.cancel_ticket(ticket_id, notes=notes)
    except TicketNotCached as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except APIError as exc:
        raise backend_error(exc) from exc
    except PayloadError as exc:
        raise payload_error(exc) from exc
    return _to_transition_response(result)
