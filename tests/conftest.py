from datetime import datetime, timedelta, timezone

import pytest

from turnos.queue.models import Table, Ticket
from turnos.queue.state import TableStatus, TicketStatus

BASE_TIME = datetime(2024, 5, 6, 9, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


def build_ticket(
    code: str,
    *,
    status: TicketStatus = TicketStatus.WAITING,
    is_priority: bool = False,
    minutes: int = 0,
    ticket_id: str | None = None,
    table_id: str | None = None,
    called_minutes: int | None = None,
) -> Ticket:
    return Ticket(
        id=ticket_id or f"id-{code}",
        code=code,
        service_type_id="svc-a",
        status=status,
        created_at=at(minutes),
        is_priority=is_priority,
        table_id=table_id,
        called_at=None if called_minutes is None else at(called_minutes),
    )


def build_table(table_id: str, number: int, *, status: TableStatus = TableStatus.AVAILABLE, active: bool = True) -> Table:
    return Table(id=table_id, number=number, name=f"Mesa {number}", status=status, active=active)


def ticket_payload(ticket_id: str = "t-1", **overrides):
    payload = {
        "id": ticket_id,
        "codigo": "A-1",
        "tipo_servicio_id": "svc-a",
        "mesa_id": None,
        "estado": "en_espera",
        "prioridad": 0,
        "nombre_cliente": "Ana",
        "created_at": "2024-05-06T09:00:00Z",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_ticket():
    return build_ticket


@pytest.fixture
def make_table():
    return build_table
