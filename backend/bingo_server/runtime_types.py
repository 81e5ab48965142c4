from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Literal, Union

from fastapi import WebSocket

CellValue = Union[int, Literal["FREE"]]
# Column-major: card[col][row].
Card = list[list[CellValue]]
Role = Literal["unidentified", "host", "player"]
GameStatus = Literal["waiting", "playing"]


@dataclass
class ClientConnection:
    connection_id: str
    websocket: WebSocket
    role: Role = "unidentified"
    player_id: str | None = None

    @property
    def is_host(self) -> bool:
        return self.role == "host"

    @property
    def is_player(self) -> bool:
        return self.role == "player" and self.player_id is not None


@dataclass
class Player:
    player_id: str
    name: str
    card: Card
    connection: ClientConnection
    marks: set[int] = field(default_factory=set)
    joined_at: float = field(default_factory=time.monotonic)
    bingo_count: int = 0


@dataclass
class GameSession:
    players: dict[str, Player] = field(default_factory=dict)
    called_numbers: list[int] = field(default_factory=list)
    status: GameStatus = "waiting"
    host: ClientConnection | None = None

    def is_current_host(self, connection: ClientConnection) -> bool:
        return connection.is_host and self.host is connection

    def player_for(self, connection: ClientConnection) -> Player | None:
        if not connection.is_player:
            return None
        player = self.players.get(str(connection.player_id))
        if player is None or player.connection is not connection:
            return None
        return player
