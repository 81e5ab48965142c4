"""Wire protocol for the bingo WebSocket.

Every frame is a JSON object ``{"type": str, "payload": object}``. Inbound
frames are parsed into one of the typed message models below, or into
``UnknownMessage`` / ``MalformedMessage`` when they cannot be dispatched.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, StrictInt, TypeAdapter, ValidationError, field_validator

from .runtime_constants import (
    DEFAULT_PLAYER_NAME,
    HOST_CONNECT,
    HOST_DRAW_NUMBER,
    HOST_RESET_GAME,
    PLAYER_CLAIM_BINGO,
    PLAYER_JOIN,
)
from .runtime_utils import sanitize_player_name


class EmptyPayload(BaseModel):
    pass


class PlayerJoinPayload(BaseModel):
    name: str = DEFAULT_PLAYER_NAME

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, value: Any) -> str:
        return sanitize_player_name(value)


class DrawNumberPayload(BaseModel):
    number: StrictInt


class ClaimBingoPayload(BaseModel):
    marks: list[StrictInt] = Field(default_factory=list)

    @field_validator("marks", mode="before")
    @classmethod
    def default_marks(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            # Non-integer entries (e.g. the "FREE" cell) are dropped, not fatal.
            return [mark for mark in value if type(mark) is int]
        return value


class HostConnectMessage(BaseModel):
    type: Literal["host_connect"]
    payload: EmptyPayload = Field(default_factory=EmptyPayload)


class PlayerJoinMessage(BaseModel):
    type: Literal["player_join"]
    payload: PlayerJoinPayload = Field(default_factory=PlayerJoinPayload)


class DrawNumberMessage(BaseModel):
    type: Literal["host_draw_number"]
    payload: DrawNumberPayload


class ResetGameMessage(BaseModel):
    type: Literal["host_reset_game"]
    payload: EmptyPayload = Field(default_factory=EmptyPayload)


class ClaimBingoMessage(BaseModel):
    type: Literal["player_claim_bingo"]
    payload: ClaimBingoPayload = Field(default_factory=ClaimBingoPayload)


InboundMessage = Annotated[
    Union[
        HostConnectMessage,
        PlayerJoinMessage,
        DrawNumberMessage,
        ResetGameMessage,
        ClaimBingoMessage,
    ],
    Field(discriminator="type"),
]

INBOUND_TYPES = frozenset(
    {HOST_CONNECT, PLAYER_JOIN, HOST_DRAW_NUMBER, HOST_RESET_GAME, PLAYER_CLAIM_BINGO}
)

_inbound_adapter: TypeAdapter[Any] = TypeAdapter(InboundMessage)


@dataclass(frozen=True)
class UnknownMessage:
    type: str


@dataclass(frozen=True)
class MalformedMessage:
    reason: str
    raw: str


ParsedMessage = Union[
    HostConnectMessage,
    PlayerJoinMessage,
    DrawNumberMessage,
    ResetGameMessage,
    ClaimBingoMessage,
    UnknownMessage,
    MalformedMessage,
]


def parse_inbound(raw: str | bytes) -> ParsedMessage:
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return MalformedMessage(reason="invalid utf-8", raw=repr(raw[:200]))

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        return MalformedMessage(reason=f"invalid json: {exc.msg}", raw=raw[:200])

    if not isinstance(data, dict):
        return MalformedMessage(reason="message is not an object", raw=raw[:200])

    message_type = data.get("type")
    if not isinstance(message_type, str):
        return MalformedMessage(reason="missing message type", raw=raw[:200])
    if message_type not in INBOUND_TYPES:
        return UnknownMessage(type=message_type)

    if data.get("payload") is None:
        data = {key: value for key, value in data.items() if key != "payload"}

    try:
        return _inbound_adapter.validate_python(data)
    except ValidationError as exc:
        return MalformedMessage(
            reason=f"invalid {message_type} payload: {exc.error_count()} error(s)",
            raw=raw[:200],
        )


def encode_event(event_type: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
    return {"type": event_type, "payload": payload or {}}
