from __future__ import annotations

import logging
import random
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from bingo_server.api.router import api_router
from bingo_server.config import settings
from bingo_server.runtime import BingoRuntime
from bingo_server.runtime_utils import local_ip

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Server running on http://localhost:%s", settings.port)
    logger.info("Local IP for LAN: %s", local_ip())
    yield


def create_app(rng: random.Random | None = None) -> FastAPI:
    app = FastAPI(title="Bingo Live Backend", version="1.0.0", lifespan=lifespan)
    app.state.runtime = BingoRuntime(rng=rng)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    if settings.public_dir.is_dir():
        app.mount("/public", StaticFiles(directory=settings.public_dir, html=True), name="public")
    else:
        logger.info("Player page directory not found at %s", settings.public_dir)

    if settings.host_page_dir is not None:
        if settings.host_page_dir.is_dir():
            app.mount("/host", StaticFiles(directory=settings.host_page_dir, html=True), name="host")
        else:
            logger.warning("Host page directory not found at %s", settings.host_page_dir)

    return app


app = create_app()
