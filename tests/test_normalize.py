from datetime import datetime, timezone

import pytest

from conftest import ticket_payload
from turnos.queue.normalize import (
    PayloadError,
    parse_priority,
    service_type_from_payload,
    table_from_payload,
    ticket_from_payload,
    ticket_to_payload,
)
from turnos.queue.state import TableStatus, TicketStatus


@pytest.mark.parametrize("value", [True, 1, "1", "true", "TRUE"])
def test_parse_priority_truthy_encodings(value):
    assert parse_priority(value) is True


@pytest.mark.parametrize("value", [False, 0, "0", "false", None, ""])
def test_parse_priority_falsy_encodings(value):
    assert parse_priority(value) is False


@pytest.mark.parametrize("value", [2, "yes", 0.5])
def test_parse_priority_rejects_unknown_values(value):
    with pytest.raises(ValueError):
        parse_priority(value)


def test_ticket_from_payload_maps_backend_fields():
    ticket = ticket_from_payload(
        ticket_payload(
            estado="en_atencion",
            prioridad=1,
            mesa_id="M1",
            hora_llamado="2024-05-06T09:05:00Z",
            observaciones="trae documentos",
        )
    )

    assert ticket.code == "A-1"
    assert ticket.status is TicketStatus.SERVING
    assert ticket.is_priority is True
    assert ticket.table_id == "M1"
    assert ticket.notes == "trae documentos"
    assert ticket.called_at == datetime(2024, 5, 6, 9, 5, tzinfo=timezone.utc)
    assert ticket.completed_at is None


def test_ticket_from_payload_accepts_camel_case_created_at_and_naive_times():
    payload = ticket_payload()
    del payload["created_at"]
    payload["createdAt"] = "2024-05-06T09:00:00"

    ticket = ticket_from_payload(payload)

    assert ticket.created_at == datetime(2024, 5, 6, 9, 0, tzinfo=timezone.utc)


def test_ticket_from_payload_rejects_unknown_status():
    with pytest.raises(PayloadError):
        ticket_from_payload(ticket_payload(estado="perdido"))


def test_ticket_from_payload_requires_created_at():
    with pytest.raises(PayloadError):
        ticket_from_payload(ticket_payload(created_at=None))


def test_ticket_to_payload_uses_backend_encoding():
    ticket = ticket_from_payload(ticket_payload(prioridad=True))

    payload = ticket_to_payload(ticket)

    assert payload["estado"] == "en_espera"
    assert payload["prioridad"] == 1
    assert payload["hora_llamado"] is None


def test_table_from_payload():
    table = table_from_payload({"id": "M1", "numero": "3", "nombre": "Mesa 3", "estado": "ocupada", "activo": True})

    assert table.number == 3
    assert table.status is TableStatus.OCCUPIED
    assert not table.is_available


def test_table_from_payload_rejects_bad_number():
    with pytest.raises(PayloadError):
        table_from_payload({"id": "M1", "numero": "tres", "nombre": "Mesa"})


def test_service_type_from_payload():
    service = service_type_from_payload(
        {"id": "svc-a", "nombre": "Caja", "codigo": "CJ", "color": "#FF0000", "tiempo_estimado": 15, "activo": False}
    )

    assert service.code == "CJ"
    assert service.estimated_duration_minutes == 15
    assert service.active is False


@pytest.mark.parametrize(("value", "expected"), [("false", False), ("0", False), (0, False), ("true", True), (None, True)])
def test_active_flag_uses_tolerant_parsing(value, expected):
    payload = {"id": "M1", "numero": 1, "nombre": "Mesa 1", "activo": value}

    assert table_from_payload(payload).active is expected


def test_active_flag_rejects_unknown_values():
    with pytest.raises(PayloadError):
        service_type_from_payload({"id": "svc-a", "nombre": "Caja", "codigo": "CJ", "activo": "tal vez"})
