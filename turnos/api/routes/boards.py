from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from turnos.api.errors import backend_error
from turnos.api.schemas import AttentionBoardResponse, DashboardSummaryResponse, WaitingBoardResponse
from turnos.client.api import APIError
from turnos.dashboard.boards import attention_board, dashboard_summary, waiting_board
from turnos.dependencies.dashboard import DashboardServiceDep, SettingsDep

router = APIRouter(prefix="/boards", tags=["boards"])


@router.get("/waiting", response_model=WaitingBoardResponse)
async def get_waiting_board(service: DashboardServiceDep, settings: SettingsDep) -> WaitingBoardResponse:
    board = waiting_board(service.state, limit=settings.waiting_board_limit)
    return WaitingBoardResponse.model_validate(board)


@router.get("/attention", response_model=AttentionBoardResponse)
async def get_attention_board(service: DashboardServiceDep, settings: SettingsDep) -> AttentionBoardResponse:
    board = attention_board(
        service.state,
        serving_limit=settings.attention_board_limit,
        waiting_limit=settings.attention_waiting_limit,
    )
    return AttentionBoardResponse.model_validate(board)


@router.get("/summary", response_model=DashboardSummaryResponse)
async def get_summary(service: DashboardServiceDep, settings: SettingsDep) -> DashboardSummaryResponse:
    summary = dashboard_summary(service.state, waiting_limit=settings.dashboard_waiting_limit)
    response = DashboardSummaryResponse.model_validate(summary)
    response.last_error = service.state.last_error
    return response


@router.get("/statistics")
async def get_backend_statistics(service: DashboardServiceDep) -> dict[str, Any]:
    try:
        return dict(await service.remote_statistics())
    except APIError as exc:
        raise backend_error(exc) from exc
