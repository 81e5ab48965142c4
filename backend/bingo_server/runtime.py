from __future__ import annotations

import json
import logging
import random
from typing import Any, Iterable

from fastapi import WebSocket

from .runtime_broadcast import Broadcaster
from .runtime_cards import generate_card, has_win
from .runtime_constants import (
    BINGO_REJECTED,
    BINGO_REJECTED_REASON,
    GAME_JOINED,
    GAME_RESET_CONFIRMED,
    GAME_RESET_NEW_CARD,
    INIT_HOST,
    NUMBER_CALLED,
    PLAYER_JOINED,
    PLAYER_LEFT,
    PLAYER_WON,
)
from .runtime_message_handlers import handle_message
from .runtime_protocol import parse_inbound
from .runtime_types import ClientConnection, GameSession, Player
from .runtime_utils import is_drawable_number, now_ms, random_id, sanitize_player_name

logger = logging.getLogger(__name__)


class BingoRuntime:
    """Authoritative state of one bingo game and the operations on it.

    Every operation applies its state change before the first ``await``, so
    interleaved connections never observe a half-applied mutation.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.session = GameSession()
        self._rng = rng or random.Random()
        self._ws_stats: dict[str, int] = {
            "connectSuccess": 0,
            "disconnects": 0,
            "messageReceived": 0,
            "malformedMessages": 0,
            "ignoredMessages": 0,
            "sendFailures": 0,
            "activeConnections": 0,
            "peakConnections": 0,
        }
        self.broadcaster = Broadcaster(
            self.session,
            on_send_failure=lambda: self._increment_stat("sendFailures"),
        )

    @property
    def players_count(self) -> int:
        return len(self.session.players)

    def _increment_stat(self, key: str, amount: int = 1) -> None:
        self._ws_stats[key] = int(self._ws_stats.get(key, 0)) + amount

    def _on_connect(self) -> None:
        self._increment_stat("connectSuccess")
        active_connections = int(self._ws_stats.get("activeConnections", 0)) + 1
        self._ws_stats["activeConnections"] = active_connections
        if active_connections > int(self._ws_stats.get("peakConnections", 0)):
            self._ws_stats["peakConnections"] = active_connections

    def _on_disconnect(self) -> None:
        self._increment_stat("disconnects")
        active_connections = max(0, int(self._ws_stats.get("activeConnections", 0)) - 1)
        self._ws_stats["activeConnections"] = active_connections

    def _log_ws_event(self, event: str, level: int = logging.INFO, **fields: object) -> None:
        logger.log(
            level,
            "ws.%s %s",
            event,
            json.dumps(fields, ensure_ascii=False, separators=(",", ":")),
        )

    def get_ws_stats(self) -> dict[str, Any]:
        return {
            "generatedAt": now_ms(),
            "stats": dict(self._ws_stats),
        }

    def describe(self) -> dict[str, Any]:
        return {
            "status": self.session.status,
            "hostConnected": self.session.host is not None,
            "players": self.players_count,
            "calledNumbers": len(self.session.called_numbers),
        }

    # --- transport ---

    async def handle_websocket(self, websocket: WebSocket) -> None:
        await websocket.accept()
        connection = ClientConnection(connection_id=random_id(), websocket=websocket)
        self._on_connect()
        self._log_ws_event("connected", level=logging.DEBUG, connId=connection.connection_id)

        disconnect_code: int | None = None
        disconnect_reason = "unknown"

        try:
            while True:
                frame = await websocket.receive()
                if frame["type"] == "websocket.disconnect":
                    disconnect_code = frame.get("code")
                    disconnect_reason = "websocket_disconnect"
                    break

                raw = frame.get("text")
                if raw is None:
                    raw = frame.get("bytes") or b""
                try:
                    await self.handle_raw(connection, raw)
                except Exception:
                    logger.exception(
                        "Unexpected error handling message from conn %s",
                        connection.connection_id,
                    )
        except Exception:
            disconnect_reason = "server_error"
            logger.exception("Unexpected websocket error for conn %s", connection.connection_id)
        finally:
            self._on_disconnect()
            await self.disconnect(connection, reason=disconnect_reason, close_code=disconnect_code)

    async def handle_raw(self, connection: ClientConnection, raw: str | bytes) -> None:
        self._increment_stat("messageReceived")
        await handle_message(self, connection, parse_inbound(raw))

    # --- operations ---

    async def connect_host(self, connection: ClientConnection) -> bool:
        if connection.role == "player":
            return False

        previous = self.session.host
        connection.role = "host"
        self.session.host = connection
        snapshot = {
            "players": [
                {
                    "id": player.player_id,
                    "name": player.name,
                    "bingoCount": player.bingo_count,
                }
                for player in self.session.players.values()
            ],
            "calledNumbers": list(self.session.called_numbers),
        }

        self._log_ws_event(
            "host_connected",
            connId=connection.connection_id,
            replaced=previous is not None and previous is not connection,
        )
        await self.broadcaster.send(connection, INIT_HOST, snapshot)
        return True

    async def join_player(self, connection: ClientConnection, name: Any = None) -> str | None:
        if connection.role != "unidentified":
            return None

        player_id = random_id()
        player = Player(
            player_id=player_id,
            name=sanitize_player_name(name),
            card=generate_card(self._rng),
            connection=connection,
        )
        self.session.players[player_id] = player
        connection.role = "player"
        connection.player_id = player_id

        self._log_ws_event("player_joined", playerId=player_id, name=player.name)
        await self.broadcaster.send(
            connection,
            GAME_JOINED,
            {
                "id": player_id,
                "card": player.card,
                "calledNumbers": list(self.session.called_numbers),
            },
        )
        await self.broadcaster.notify_host(PLAYER_JOINED, {"id": player_id, "name": player.name})
        return player_id

    async def draw_number(self, connection: ClientConnection, number: int) -> bool:
        if not self.session.is_current_host(connection):
            return False
        if not is_drawable_number(number):
            self._log_ws_event("draw_out_of_range", level=logging.WARNING, number=number)
            return False
        if number in self.session.called_numbers:
            return False

        self.session.called_numbers.append(number)
        self._log_ws_event(
            "number_called",
            number=number,
            calledCount=len(self.session.called_numbers),
        )
        await self.broadcaster.broadcast(NUMBER_CALLED, {"number": number})
        return True

    async def reset_game(self, connection: ClientConnection) -> bool:
        if not self.session.is_current_host(connection):
            return False

        self.session.called_numbers.clear()
        players = list(self.session.players.values())
        for player in players:
            player.card = generate_card(self._rng)
            player.marks.clear()

        self._log_ws_event("game_reset", players=len(players))
        for player in players:
            await self.broadcaster.send(player.connection, GAME_RESET_NEW_CARD, {"card": player.card})
        await self.broadcaster.notify_host(GAME_RESET_CONFIRMED, {})
        return True

    async def claim_bingo(self, connection: ClientConnection, marks: Iterable[int]) -> bool:
        player = self.session.player_for(connection)
        if player is None:
            return False

        called = set(self.session.called_numbers)
        player.marks = {mark for mark in marks if mark in called}
        won = has_win(player.card, player.marks)
        self._log_ws_event(
            "bingo_claimed",
            playerId=player.player_id,
            accepted=won,
            validMarks=len(player.marks),
        )

        if won:
            player.bingo_count += 1
            await self.broadcaster.broadcast(PLAYER_WON, {"name": player.name})
        else:
            await self.broadcaster.send(connection, BINGO_REJECTED, {"reason": BINGO_REJECTED_REASON})
        return won

    async def disconnect(
        self,
        connection: ClientConnection,
        reason: str = "unknown",
        close_code: int | None = None,
    ) -> None:
        if connection.is_host:
            if self.session.host is connection:
                self.session.host = None
            self._log_ws_event(
                "host_disconnected",
                connId=connection.connection_id,
                reason=reason,
                closeCode=close_code,
            )
            return

        player = self.session.player_for(connection)
        if player is None:
            return

        self.session.players.pop(player.player_id, None)
        self._log_ws_event(
            "player_left",
            playerId=player.player_id,
            reason=reason,
            closeCode=close_code,
        )
        await self.broadcaster.notify_host(PLAYER_LEFT, {"id": player.player_id})
