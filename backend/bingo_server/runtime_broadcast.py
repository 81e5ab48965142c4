from __future__ import annotations

import logging
from typing import Any, Callable

from fastapi import WebSocket
from fastapi.websockets import WebSocketState

from .runtime_protocol import encode_event
from .runtime_types import ClientConnection, GameSession

logger = logging.getLogger(__name__)


def is_live(websocket: WebSocket) -> bool:
    return (
        getattr(websocket, "client_state", None) == WebSocketState.CONNECTED
        and getattr(websocket, "application_state", None) == WebSocketState.CONNECTED
    )


class Broadcaster:
    """Fans events out to the host and player connections of a session.

    Reads the session, never mutates it. Sends to connections that are not
    open are skipped.
    """

    def __init__(self, session: GameSession, on_send_failure: Callable[[], None] | None = None) -> None:
        self._session = session
        self._on_send_failure = on_send_failure

    async def send(
        self,
        connection: ClientConnection,
        event_type: str,
        payload: dict[str, Any] | None = None,
    ) -> None:
        await self.send_safe(connection, encode_event(event_type, payload))

    async def send_safe(self, connection: ClientConnection, data: dict[str, Any]) -> None:
        websocket = connection.websocket
        if not is_live(websocket):
            logger.debug(
                "[SEND_SKIP] conn=%s type=%s ws_client_state=%s",
                connection.connection_id,
                data.get("type"),
                getattr(websocket, "client_state", None),
            )
            return
        try:
            await websocket.send_json(data)
        except Exception as exc:
            # Connection may have closed between the state check and the send.
            if self._on_send_failure is not None:
                self._on_send_failure()
            logger.debug(
                "[SEND_FAIL] conn=%s type=%s reason=%s",
                connection.connection_id,
                data.get("type"),
                repr(exc),
            )

    async def notify_host(self, event_type: str, payload: dict[str, Any] | None = None) -> None:
        host = self._session.host
        if host is None:
            return
        await self.send(host, event_type, payload)

    async def broadcast(self, event_type: str, payload: dict[str, Any] | None = None) -> None:
        message = encode_event(event_type, payload)
        recipients: list[ClientConnection] = []
        if self._session.host is not None:
            recipients.append(self._session.host)
        recipients.extend(player.connection for player in self._session.players.values())

        for connection in recipients:
            await self.send_safe(connection, message)
