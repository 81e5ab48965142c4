from __future__ import annotations

from fastapi import APIRouter

from bingo_server.api.qr import router as qr_router
from bingo_server.api.system import router as system_router
from bingo_server.api.ws import router as ws_router

api_router = APIRouter()
api_router.include_router(system_router)
api_router.include_router(qr_router)
api_router.include_router(ws_router)
