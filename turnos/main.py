from contextlib import asynccontextmanager

from fastapi import FastAPI

from turnos.api.routes import boards, ping, service_types, tables, tickets
from turnos.client.api import TurnosAPIClient
from turnos.core.config import get_settings
from turnos.core.logging import configure_logging, init_tracer, shutdown_tracer
from turnos.dashboard.poller import QueuePoller
from turnos.dashboard.service import DashboardService
from turnos.dashboard.store import DashboardState


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - executed by framework
    settings = get_settings()
    logger = configure_logging(settings)
    tracer_provider = init_tracer(settings)

    client = TurnosAPIClient(
        base_url=settings.backend_base_url,
        token=settings.backend_token,
        timeout=settings.backend_timeout_seconds,
    )
    state = DashboardState()
    service = DashboardService(client, state)
    poller = QueuePoller(service.refresh, interval=settings.poll_interval_seconds, state=state)

    app.state.logger = logger
    app.state.tracer_provider = tracer_provider
    app.state.dashboard_service = service
    app.state.poller = poller
    if settings.poll_on_startup:
        poller.start()
    try:
        yield
    finally:
        await poller.stop()
        await client.close()
        shutdown_tracer(tracer_provider)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.include_router(ping.router)
    app.include_router(boards.router)
    app.include_router(tickets.router)
    app.include_router(tables.router)
    app.include_router(service_types.router)
    return app


app = create_app()
