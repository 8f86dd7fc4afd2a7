from __future__ import annotations

from fastapi import HTTPException

from turnos.client.api import APIError
from turnos.queue.normalize import PayloadError


def backend_error(exc: APIError) -> HTTPException:
    """Relay a backend failure; its message is shown to the operator as-is."""

    status_code = exc.status_code if exc.status_code is not None and 400 <= exc.status_code < 500 else 502
    return HTTPException(status_code=status_code, detail=exc.args[0] if exc.args else str(exc))


def payload_error(exc: PayloadError) -> HTTPException:
    return HTTPException(status_code=502, detail=f"Unexpected backend payload: {exc}")
