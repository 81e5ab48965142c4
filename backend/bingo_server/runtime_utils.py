from __future__ import annotations

import re
import socket
import time
import uuid
from typing import Any

from .runtime_constants import (
    DEFAULT_PLAYER_NAME,
    MAX_PLAYER_NAME_LENGTH,
    NUMBER_MAX,
    NUMBER_MIN,
)


def now_ms() -> int:
    return int(time.time() * 1000)


def random_id() -> str:
    return str(uuid.uuid4())


def sanitize_player_name(raw: Any) -> str:
    value = str(raw or "").strip()
    if not value:
        return DEFAULT_PLAYER_NAME
    cleaned = re.sub(r"\s+", " ", value)[:MAX_PLAYER_NAME_LENGTH].strip()
    return cleaned or DEFAULT_PLAYER_NAME


def is_drawable_number(value: int) -> bool:
    return NUMBER_MIN <= value <= NUMBER_MAX


def local_ip() -> str:
    """Best-effort LAN IPv4 address of this machine, ``localhost`` if none."""
    probe = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        # UDP connect does not send packets; it only selects the outbound interface.
        probe.connect(("10.255.255.255", 1))
        address = probe.getsockname()[0]
    except OSError:
        return "localhost"
    finally:
        probe.close()
    if not address or address.startswith("127."):
        return "localhost"
    return address
