from __future__ import annotations

import uvicorn

from bingo_server.config import BACKEND_DIR, settings


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.bind_host,
        port=settings.port,
        reload=True,
        reload_dirs=[str(BACKEND_DIR)],
    )
