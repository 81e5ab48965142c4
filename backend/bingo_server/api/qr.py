from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from bingo_server.config import settings
from bingo_server.qr import make_qr_data_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["join"])


def player_page_url(request: Request) -> str:
    forwarded_proto = request.headers.get("x-forwarded-proto", "")
    scheme = forwarded_proto.split(",")[0].strip() or request.url.scheme
    host = request.headers.get("host") or request.url.netloc
    return f"{scheme}://{host}{settings.player_page_path}"


@router.get("/qr")
async def join_qr(request: Request) -> JSONResponse:
    url = player_page_url(request)
    try:
        qr = make_qr_data_url(url)
    except Exception:
        logger.exception("Failed to generate QR for %s", url)
        return JSONResponse(status_code=500, content={"error": "Failed to generate QR"})
    return JSONResponse(content={"url": url, "qr": qr})
