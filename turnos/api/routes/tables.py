from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from turnos.api.errors import backend_error, payload_error
from turnos.api.schemas import TableCreateRequest, TableResponse, TableUpdateRequest
from turnos.client.api import APIError
from turnos.dependencies.dashboard import DashboardServiceDep
from turnos.queue.normalize import PayloadError

router = APIRouter(prefix="/tables", tags=["tables"])


@router.get("", response_model=list[TableResponse])
async def list_tables(service: DashboardServiceDep, available: bool = False) -> list[TableResponse]:
    tables = service.state.available_tables() if available else service.state.tables()
    ordered = sorted(tables, key=lambda table: table.number)
    return [TableResponse.model_validate(table) for table in ordered]


@router.post("", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
async def create_table(payload: TableCreateRequest, service: DashboardServiceDep) -> TableResponse:
    try:
        table = await service.create_table(
            number=payload.number,
            name=payload.name,
            status=payload.status,
            active=payload.active,
        )
    except APIError as exc:
        raise backend_error(exc) from exc
    except PayloadError as exc:
        raise payload_error(exc) from exc
    return TableResponse.model_validate(table)


@router.put("/{table_id}", response_model=TableResponse)
async def update_table(table_id: str, payload: TableUpdateRequest, service: DashboardServiceDep) -> TableResponse:
    changes = payload.to_backend()
    if not changes:
        raise HTTPException(status_code=400, detail="No fields provided for update")
    try:
        table = await service.update_table(table_id, changes)
    except APIError as exc:
        raise backend_error(exc) from exc
    except PayloadError as exc:
        raise payload_error(exc) from exc
    return TableResponse.model_validate(table)


@router.delete("/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_table(table_id: str, service: DashboardServiceDep) -> None:
    try:
        await service.delete_table(table_id)
    except APIError as exc:
        raise backend_error(exc) from exc
