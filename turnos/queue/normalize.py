"""Conversion between backend payloads and queue domain values.

The backend uses Spanish field names and has historically encoded the
priority flag both as a boolean and as ``0``/``1``. Everything is normalized
here so the ordering and lifecycle code only ever sees clean values.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import TypeAdapter, ValidationError

from .models import ServiceType, Table, Ticket
from .state import TableStatus, TicketStatus


class PayloadError(ValueError):
    """Raised when a backend payload cannot be turned into a domain value."""


_TICKET_STATUS_ALIASES: dict[str, TicketStatus] = {
    "en_espera": TicketStatus.WAITING,
    "en_atencion": TicketStatus.SERVING,
    "completado": TicketStatus.COMPLETED,
    "cancelado": TicketStatus.CANCELLED,
}
_TICKET_STATUS_WIRE = {status: alias for alias, status in _TICKET_STATUS_ALIASES.items()}

_TABLE_STATUS_ALIASES: dict[str, TableStatus] = {
    "disponible": TableStatus.AVAILABLE,
    "ocupada": TableStatus.OCCUPIED,
    "inactiva": TableStatus.INACTIVE,
}
_TABLE_STATUS_WIRE = {status: alias for alias, status in _TABLE_STATUS_ALIASES.items()}

_TRUE_VALUES = {"1", "true"}
_FALSE_VALUES = {"0", "false", ""}

_DATETIME = TypeAdapter(datetime)


def parse_priority(value: Any) -> bool:
    """Accept ``True``/``False``, ``1``/``0`` and their string forms."""

    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"Unsupported priority value: {value!r}")
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ValueError(f"Unsupported priority value: {value!r}")


def parse_flag(value: Any, *, default: bool) -> bool:
    """Boolean backend flags such as ``activo``; missing means ``default``."""

    if value is None or value == "":
        return default
    try:
        return parse_priority(value)
    except ValueError as exc:
        raise PayloadError(f"Unsupported flag value: {value!r}") from exc


def parse_ticket_status(value: Any) -> TicketStatus:
    text = str(value)
    if text in _TICKET_STATUS_ALIASES:
        return _TICKET_STATUS_ALIASES[text]
    try:
        return TicketStatus(text)
    except ValueError:
        raise PayloadError(f"Unknown ticket status: {value!r}") from None


def parse_table_status(value: Any) -> TableStatus:
    text = str(value)
    if text in _TABLE_STATUS_ALIASES:
        return _TABLE_STATUS_ALIASES[text]
    try:
        return TableStatus(text)
    except ValueError:
        raise PayloadError(f"Unknown table status: {value!r}") from None


def ticket_status_to_wire(status: TicketStatus) -> str:
    return _TICKET_STATUS_WIRE[status]


def table_status_to_wire(status: TableStatus) -> str:
    return _TABLE_STATUS_WIRE[status]


def ticket_from_payload(payload: Mapping[str, Any]) -> Ticket:
    created_at = payload.get("created_at") or payload.get("createdAt")
    try:
        is_priority = parse_priority(payload.get("prioridad"))
    except ValueError as exc:
        raise PayloadError(str(exc)) from exc
    return Ticket(
        id=_required(payload, "id"),
        code=_required(payload, "codigo"),
        service_type_id=_required(payload, "tipo_servicio_id"),
        status=parse_ticket_status(_required(payload, "estado")),
        created_at=_parse_datetime(created_at, field="created_at"),
        is_priority=is_priority,
        table_id=_optional_str(payload.get("mesa_id")),
        customer_name=_optional_str(payload.get("nombre_cliente")),
        notes=_optional_str(payload.get("observaciones")),
        called_at=parse_timestamp(payload.get("hora_llamado"), field="hora_llamado"),
        attended_at=parse_timestamp(payload.get("hora_atencion"), field="hora_atencion"),
        completed_at=parse_timestamp(payload.get("hora_finalizacion"), field="hora_finalizacion"),
    )


def ticket_to_payload(ticket: Ticket) -> dict[str, Any]:
    return {
        "id": ticket.id,
        "codigo": ticket.code,
        "tipo_servicio_id": ticket.service_type_id,
        "mesa_id": ticket.table_id,
        "estado": ticket_status_to_wire(ticket.status),
        "prioridad": 1 if ticket.is_priority else 0,
        "nombre_cliente": ticket.customer_name,
        "observaciones": ticket.notes,
        "created_at": ticket.created_at.isoformat(),
        "hora_llamado": _format_optional(ticket.called_at),
        "hora_atencion": _format_optional(ticket.attended_at),
        "hora_finalizacion": _format_optional(ticket.completed_at),
    }


def table_from_payload(payload: Mapping[str, Any]) -> Table:
    try:
        number = int(_required(payload, "numero"))
    except (TypeError, ValueError) as exc:
        raise PayloadError(f"Invalid table number: {payload.get('numero')!r}") from exc
    return Table(
        id=_required(payload, "id"),
        number=number,
        name=_required(payload, "nombre"),
        status=parse_table_status(payload.get("estado", TableStatus.AVAILABLE.value)),
        active=parse_flag(payload.get("activo"), default=True),
    )


def service_type_from_payload(payload: Mapping[str, Any]) -> ServiceType:
    try:
        duration = int(payload.get("tiempo_estimado") or 0)
    except (TypeError, ValueError) as exc:
        raise PayloadError(f"Invalid estimated duration: {payload.get('tiempo_estimado')!r}") from exc
    return ServiceType(
        id=_required(payload, "id"),
        name=_required(payload, "nombre"),
        code=_required(payload, "codigo"),
        color=str(payload.get("color") or ""),
        estimated_duration_minutes=duration,
        active=parse_flag(payload.get("activo"), default=True),
        description=_optional_str(payload.get("descripcion")),
    )


def _required(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None or value == "":
        raise PayloadError(f"Missing required field: {key}")
    return str(value)


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _parse_datetime(value: Any, *, field: str) -> datetime:
    if value is None or value == "":
        raise PayloadError(f"Missing required field: {field}")
    try:
        parsed = _DATETIME.validate_python(value)
    except ValidationError as exc:
        raise PayloadError(f"Invalid timestamp for {field}: {value!r}") from exc
    # naive timestamps are taken as UTC so aware and naive values stay comparable
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_timestamp(value: Any, *, field: str = "timestamp") -> datetime | None:
    """Parse an optional backend timestamp into an aware datetime."""

    if value is None or value == "":
        return None
    return _parse_datetime(value, field=field)


def _format_optional(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()
