from fastapi import APIRouter, Request

router = APIRouter(prefix="/ping", tags=["health"])


@router.get("", summary="Public health probe")
async def ping(request: Request) -> dict[str, object]:
    poller = getattr(request.app.state, "poller", None)
    return {"status": "ok", "polling": bool(poller is not None and poller.running)}
