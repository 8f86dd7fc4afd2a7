import json

import httpx
import pytest

from turnos.client.api import APIError, TurnosAPIClient


def make_client(handler, token="secret"):
    return TurnosAPIClient(
        base_url="http://backend.test/api/",
        token=token,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_list_tickets_unwraps_envelope_and_sends_filters():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        body = {"success": True, "message": "ok", "data": {"turnos": [{"id": "t-1"}], "pagination": {"total": 1}}}
        return httpx.Response(200, json=body)

    client = make_client(handler)
    try:
        tickets = await client.list_tickets(status="en_espera")
    finally:
        await client.close()

    assert tickets == [{"id": "t-1"}]
    assert seen["url"] == "http://backend.test/api/turnos?estado=en_espera"
    assert seen["auth"] == "Bearer secret"


@pytest.mark.asyncio
async def test_call_ticket_sends_table_id():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "message": "", "data": {"id": "t-1"}})

    client = make_client(handler)
    try:
        data = await client.call_ticket("t-1", table_id="M1")
    finally:
        await client.close()

    assert data == {"id": "t-1"}
    assert captured == {"method": "PUT", "path": "/api/turnos/t-1/llamar", "body": {"mesa_id": "M1"}}


@pytest.mark.asyncio
async def test_create_ticket_encodes_priority_as_integer():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        return httpx.Response(201, json={"success": True, "message": "", "data": {"id": "t-9"}})

    client = make_client(handler, token=None)
    try:
        await client.create_ticket(service_type_id="svc-a", is_priority=True)
    finally:
        await client.close()

    assert captured["body"] == {"tipo_servicio_id": "svc-a", "prioridad": 1}


@pytest.mark.asyncio
async def test_error_message_is_passed_through():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"success": False, "message": "La mesa ya está ocupada"})

    client = make_client(handler)
    try:
        with pytest.raises(APIError) as excinfo:
            await client.call_ticket("t-1", table_id="M1")
    finally:
        await client.close()

    assert excinfo.value.status_code == 409
    assert excinfo.value.args[0] == "La mesa ya está ocupada"
    assert str(excinfo.value) == "[409] La mesa ya está ocupada"


@pytest.mark.asyncio
async def test_unsuccessful_envelope_raises_even_with_ok_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": False, "message": "Error al cargar mesas"})

    client = make_client(handler)
    try:
        with pytest.raises(APIError, match="Error al cargar mesas"):
            await client.list_tables()
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_transport_failure_becomes_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    try:
        with pytest.raises(APIError) as excinfo:
            await client.list_tickets()
    finally:
        await client.close()

    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_delete_table_accepts_empty_response():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        return httpx.Response(204)

    client = make_client(handler)
    try:
        assert await client.delete_table("M1") is None
    finally:
        await client.close()
