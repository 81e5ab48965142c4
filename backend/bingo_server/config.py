from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BACKEND_DIR = Path(__file__).resolve().parents[1]


class Settings:
    def __init__(self) -> None:
        self.port = int(os.getenv("PORT", "3000"))
        self.bind_host = os.getenv("BIND_HOST", "0.0.0.0").strip() or "0.0.0.0"
        self.public_dir = Path(
            os.getenv("PUBLIC_DIR", "").strip() or BACKEND_DIR.parent / "public"
        )
        raw_host_page_dir = os.getenv("HOST_PAGE_DIR", "").strip()
        self.host_page_dir = Path(raw_host_page_dir) if raw_host_page_dir else None
        player_page_path = os.getenv("PLAYER_PAGE_PATH", "/public/player.html").strip()
        if not player_page_path.startswith("/"):
            player_page_path = f"/{player_page_path}"
        self.player_page_path = player_page_path
        self.log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
        raw_origins = os.getenv("CORS_ORIGINS", "*")
        self.cors_origins = [
            origin.strip() for origin in raw_origins.split(",") if origin.strip()
        ] or ["*"]


settings = Settings()
