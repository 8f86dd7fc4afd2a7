from __future__ import annotations

from fastapi import APIRouter, status

from turnos.api.errors import backend_error, payload_error
from turnos.api.schemas import ServiceTypeRequest, ServiceTypeResponse
from turnos.client.api import APIError
from turnos.dependencies.dashboard import DashboardServiceDep
from turnos.queue.normalize import PayloadError

router = APIRouter(prefix="/service-types", tags=["service-types"])


@router.get("", response_model=list[ServiceTypeResponse])
async def list_service_types(service: DashboardServiceDep, active: bool = False) -> list[ServiceTypeResponse]:
    service_types = service.state.active_service_types() if active else service.state.service_types()
    return [ServiceTypeResponse.model_validate(item) for item in service_types]


@router.post("", response_model=ServiceTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_service_type(payload: ServiceTypeRequest, service: DashboardServiceDep) -> ServiceTypeResponse:
    try:
        service_type = await service.create_service_type(payload.to_backend())
    except APIError as exc:
        raise backend_error(exc) from exc
    except PayloadError as exc:
        raise payload_error(exc) from exc
    return ServiceTypeResponse.model_validate(service_type)


@router.put("/{service_type_id}", response_model=ServiceTypeResponse)
async def update_service_type(
    service_type_id: str, payload: ServiceTypeRequest, service: DashboardServiceDep
) -> ServiceTypeResponse:
    try:
        service_type = await service.update_service_type(service_type_id, payload.to_backend())
    except APIError as exc:
        raise backend_error(exc) from exc
    except PayloadError as exc:
        raise payload_error(exc) from exc
    return ServiceTypeResponse.model_validate(service_type)


@router.delete("/{service_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service_type(service_type_id: str, service: DashboardServiceDep) -> None:
    try:
        await service.delete_service_type(service_type_id)
    except APIError as exc:
        raise backend_error(exc) from exc
