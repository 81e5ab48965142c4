from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["system"])


@router.get("/api/health")
async def health(request: Request) -> dict[str, object]:
    runtime = request.app.state.runtime
    return {"ok": True, **runtime.describe()}


@router.get("/api/ws-stats")
async def websocket_stats(request: Request) -> dict[str, object]:
    return request.app.state.runtime.get_ws_stats()
