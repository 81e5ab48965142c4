from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .runtime_protocol import (
    ClaimBingoMessage,
    DrawNumberMessage,
    HostConnectMessage,
    MalformedMessage,
    ParsedMessage,
    PlayerJoinMessage,
    ResetGameMessage,
    UnknownMessage,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from .runtime import BingoRuntime
    from .runtime_types import ClientConnection


async def handle_message(
    runtime: "BingoRuntime",
    connection: "ClientConnection",
    message: ParsedMessage,
) -> None:
    if isinstance(message, MalformedMessage):
        runtime._increment_stat("malformedMessages")
        logger.warning(
            "Dropping malformed message from conn %s: %s (%r)",
            connection.connection_id,
            message.reason,
            message.raw,
        )
        return

    if isinstance(message, UnknownMessage):
        runtime._increment_stat("ignoredMessages")
        logger.debug("Ignoring unknown message type %r from conn %s", message.type, connection.connection_id)
        return

    if isinstance(message, HostConnectMessage):
        handled = await runtime.connect_host(connection)
    elif isinstance(message, PlayerJoinMessage):
        handled = await runtime.join_player(connection, message.payload.name) is not None
    elif isinstance(message, DrawNumberMessage):
        handled = await runtime.draw_number(connection, message.payload.number)
    elif isinstance(message, ResetGameMessage):
        handled = await runtime.reset_game(connection)
    elif isinstance(message, ClaimBingoMessage):
        # A rejected claim is still handled; only non-players are ignored.
        handled = runtime.session.player_for(connection) is not None
        if handled:
            await runtime.claim_bingo(connection, message.payload.marks)
    else:
        return

    if not handled:
        # Role violations and duplicate draws are no-ops and are never reported back.
        runtime._increment_stat("ignoredMessages")
        logger.debug(
            "No-op %s from conn %s role=%s",
            message.type,
            connection.connection_id,
            connection.role,
        )
