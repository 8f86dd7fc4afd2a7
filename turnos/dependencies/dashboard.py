from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from turnos.core.config import Settings, get_settings
from turnos.dashboard.service import DashboardService


async def get_dashboard_service(request: Request) -> DashboardService:
    service = getattr(request.app.state, "dashboard_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Dashboard service is not configured")
    return service


DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
