from __future__ import annotations

from .runtime_types import CellValue

CARD_SIZE = 5
CENTER_INDEX = CARD_SIZE // 2
NUMBER_MIN = 1
NUMBER_MAX = 50
FREE: CellValue = "FREE"
DEFAULT_PLAYER_NAME = "Anonymous"
MAX_PLAYER_NAME_LENGTH = 32
BINGO_REJECTED_REASON = "card_not_valid"

# Inbound
HOST_CONNECT = "host_connect"
PLAYER_JOIN = "player_join"
HOST_DRAW_NUMBER = "host_draw_number"
HOST_RESET_GAME = "host_reset_game"
PLAYER_CLAIM_BINGO = "player_claim_bingo"

# Outbound
INIT_HOST = "init_host"
GAME_JOINED = "game_joined"
PLAYER_JOINED = "player_joined"
NUMBER_CALLED = "number_called"
GAME_RESET_NEW_CARD = "game_reset_new_card"
GAME_RESET_CONFIRMED = "game_reset_confirmed"
PLAYER_WON = "player_won"
BINGO_REJECTED = "bingo_rejected"
PLAYER_LEFT = "player_left"
