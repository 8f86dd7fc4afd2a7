from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from turnos.queue.state import TableStatus, TicketStatus


class TicketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    code: str
    service_type_id: str
    status: TicketStatus
    is_priority: bool
    table_id: str | None
    customer_name: str | None
    notes: str | None
    created_at: datetime
    called_at: datetime | None
    attended_at: datetime | None
    completed_at: datetime | None


class TransitionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ticket: TicketResponse
    released_table_id: str | None


class TableResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    number: int
    name: str
    status: TableStatus
    active: bool


class ServiceTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    code: str
    color: str
    estimated_duration_minutes: int
    active: bool
    description: str | None


class WaitingBoardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tickets: list[TicketResponse]
    total_waiting: int
    refreshed_at: datetime | None


class AttentionBoardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    serving: list[TicketResponse]
    waiting: list[TicketResponse]
    refreshed_at: datetime | None


class DashboardSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    waiting: int
    serving: int
    completed: int
    cancelled: int
    total: int
    serving_tickets: list[TicketResponse]
    next_waiting: list[TicketResponse]
    last_error: str | None = None


class TicketCreateRequest(BaseModel):
    service_type_id: str = Field(..., min_length=1)
    customer_name: str | None = Field(default=None, max_length=100)
    is_priority: bool = False
    notes: str | None = Field(default=None, max_length=500)
    table_id: str | None = Field(default=None, min_length=1)


class TicketCallRequest(BaseModel):
    table_id: str = Field(..., min_length=1)


class TicketCloseRequest(BaseModel):
    notes: str | None = Field(default=None, max_length=500)


class TableCreateRequest(BaseModel):
    number: int = Field(..., gt=0)
    name: str = Field(..., min_length=3, max_length=50)
    status: TableStatus | None = None
    active: bool = True


class TableUpdateRequest(BaseModel):
    number: int | None = Field(default=None, gt=0)
    name: str | None = Field(default=None, min_length=3, max_length=50)
    status: TableStatus | None = None
    active: bool | None = None

    def to_backend(self) -> dict[str, object]:
        fields = {"numero": self.number, "nombre": self.name, "estado": self.status, "activo": self.active}
        return {key: value for key, value in fields.items() if value is not None}


class ServiceTypeRequest(BaseModel):
    name: str = Field(..., min_length=3, max_length=50)
    code: str = Field(..., min_length=2, max_length=10)
    description: str | None = Field(default=None, max_length=500)
    color: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}$")
    estimated_duration_minutes: int = Field(..., ge=1, le=180)
    active: bool = True

    @field_validator("code")
    @classmethod
    def _upper_code(cls, value: str) -> str:
        return value.upper()

    def to_backend(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "nombre": self.name,
            "codigo": self.code,
            "color": self.color,
            "tiempo_estimado": self.estimated_duration_minutes,
            "activo": self.active,
        }
        if self.description is not None:
            payload["descripcion"] = self.description
        return payload
