from __future__ import annotations

import logging

from bingo_server.config import settings

logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

from bingo_server.application import app  # noqa: E402

__all__ = ["app"]
