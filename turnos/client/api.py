from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

logger = logging.getLogger(__name__)


class APIError(RuntimeError):
    """Failure reported by, or while talking to, the queue backend.

    The message is the backend's own text and is passed through unchanged.
    """

    def __init__(self, message: str, *, status_code: int | None = None, response: httpx.Response | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        prefix = f"[{self.status_code}] " if self.status_code is not None else ""
        return f"{prefix}{super().__str__()}"


def _extract_error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or "Error desconocido del servidor"

    if isinstance(data, Mapping):
        for key in ("message", "detail"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return "Error al procesar la solicitud"


def _drop_none(params: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}


@dataclass(slots=True)
class TurnosAPIClient:
    """Small async client for the queue backend REST API.

    Every response is wrapped as ``{"success": ..., "message": ..., "data": ...}``;
    the client unwraps ``data`` and raises :class:`APIError` otherwise.
    """

    base_url: str
    token: str | None = None
    timeout: float = 10.0
    transport: httpx.AsyncBaseTransport | None = None
    _client: httpx.AsyncClient | None = field(default=None, init=False, repr=False)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url.rstrip("/"),
                timeout=self.timeout,
                transport=self.transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers: dict[str, str] = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        headers.update(kwargs.pop("headers", {}))
        normalized = path if path.startswith("/") else f"/{path}"

        try:
            response = await self._get_client().request(method, normalized, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("Backend request %s %s failed: %s", method, normalized, exc)
            raise APIError(f"No se pudo contactar al servidor: {exc}") from exc

        if response.status_code >= 400:
            message = _extract_error_message(response)
            logger.info("Backend rejected %s %s with %s: %s", method, normalized, response.status_code, message)
            raise APIError(message, status_code=response.status_code, response=response)

        if response.status_code == 204 or not response.content:
            return None

        try:
            body = response.json()
        except ValueError as exc:
            raise APIError("Respuesta inválida del servidor", status_code=response.status_code, response=response) from exc

        if isinstance(body, Mapping) and "success" in body:
            if not body.get("success"):
                raise APIError(
                    str(body.get("message") or "Error al procesar la solicitud"),
                    status_code=response.status_code,
                    response=response,
                )
            return body.get("data")
        return body

    # Turnos
    async def list_tickets(
        self, *, status: str | None = None, service_type_id: str | None = None
    ) -> list[Mapping[str, Any]]:
        params = _drop_none({"estado": status, "tipo_servicio_id": service_type_id})
        data = await self._request("GET", "/turnos", params=params)
        if isinstance(data, Mapping):
            return list(data.get("turnos") or [])
        return list(data or [])

    async def get_statistics(self) -> Mapping[str, Any]:
        return await self._request("GET", "/turnos/estadisticas") or {}

    async def create_ticket(
        self,
        *,
        service_type_id: str,
        customer_name: str | None = None,
        is_priority: bool = False,
        notes: str | None = None,
    ) -> Mapping[str, Any]:
        payload = _drop_none(
            {
                "tipo_servicio_id": service_type_id,
                "nombre_cliente": customer_name,
                "prioridad": 1 if is_priority else 0,
                "observaciones": notes,
            }
        )
        return await self._request("POST", "/turnos", json=payload)

    async def call_ticket(self, ticket_id: str, *, table_id: str) -> Mapping[str, Any] | None:
        return await self._request("PUT", f"/turnos/{ticket_id}/llamar", json={"mesa_id": table_id})

    async def complete_ticket(self, ticket_id: str, *, notes: str | None = None) -> Mapping[str, Any] | None:
        return await self._request("PUT", f"/turnos/{ticket_id}/completar", json=_drop_none({"observaciones": notes}))

    async def cancel_ticket(self, ticket_id: str, *, notes: str | None = None) -> Mapping[str, Any] | None:
        return await self._request("PUT", f"/turnos/{ticket_id}/cancelar", json=_drop_none({"observaciones": notes}))

    # Mesas
    async def list_tables(self, *, active: bool | None = None, status: str | None = None) -> list[Mapping[str, Any]]:
        params = _drop_none({"activo": None if active is None else str(active).lower(), "estado": status})
        return list(await self._request("GET", "/mesas", params=params) or [])

    async def create_table(self, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        return await self._request("POST", "/mesas", json=dict(payload))

    async def update_table(self, table_id: str, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        return await self._request("PUT", f"/mesas/{table_id}", json=dict(payload))

    async def delete_table(self, table_id: str) -> None:
        await self._request("DELETE", f"/mesas/{table_id}")

    # Servicios
    async def list_service_types(self, *, active: bool | None = None) -> list[Mapping[str, Any]]:
        params = _drop_none({"activo": None if active is None else str(active).lower()})
        return list(await self._request("GET", "/servicios", params=params) or [])

    async def create_service_type(self, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        return await self._request("POST", "/servicios", json=dict(payload))

    async def update_service_type(self, service_type_id: str, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        return await self._request("PUT", f"/servicios/{service_type_id}", json=dict(payload))

    async def delete_service_type(self, service_type_id: str) -> None:
        await self._request("DELETE", f"/servicios/{service_type_id}")
