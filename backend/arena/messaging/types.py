from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from arena.logic.enums import AbilityKey, ActionType, Team, Winner
from arena.logic.models import WIRE_MODEL_CONFIG, Hero, Position, Tower


class ClientMessageType(StrEnum):
    PLAYER_ACTION = "playerAction"


class ServerMessageType(StrEnum):
    WELCOME = "welcome"
    PLAYER_JOINED = "playerJoined"
    PLAYER_LEFT = "playerLeft"
    PLAYER_MOVED = "playerMoved"
    ABILITY_USED = "abilityUsed"
    DAMAGE = "damage"
    GAME_OVER = "gameOver"


# --- inbound ---


class MoveAction(BaseModel):
    type: Literal[ActionType.MOVE] = ActionType.MOVE
    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)


class AbilityAction(BaseModel):
    type: Literal[ActionType.ABILITY] = ActionType.ABILITY
    ability: AbilityKey


class AttackAction(BaseModel):
    type: Literal[ActionType.ATTACK] = ActionType.ATTACK


PlayerAction = Annotated[MoveAction | AbilityAction | AttackAction, Field(discriminator="type")]


class PlayerActionMessage(BaseModel):
    """Envelope for every gameplay message a client sends.

    The action payload is kept raw here so that an unknown action type can be
    ignored instead of rejecting the whole envelope.
    """

    type: Literal[ClientMessageType.PLAYER_ACTION] = ClientMessageType.PLAYER_ACTION
    action: dict[str, Any]


_action_adapter = TypeAdapter(PlayerAction)
_KNOWN_ACTION_TYPES = {action_type.value for action_type in ActionType}


def parse_client_message(data: dict[str, Any]) -> PlayerActionMessage | None:
    """Parse a raw dict into a PlayerActionMessage.

    Returns None for envelopes of any other type. Raises ValidationError when
    a playerAction envelope is malformed.
    """
    if data.get("type") != ClientMessageType.PLAYER_ACTION:
        return None
    return PlayerActionMessage.model_validate(data)


def parse_player_action(data: dict[str, Any]) -> MoveAction | AbilityAction | AttackAction | None:
    """Parse an action payload.

    Returns None for unknown action types. Raises ValidationError when a known
    action carries invalid fields (including an unknown ability key).
    """
    action_type = data.get("type")
    if not isinstance(action_type, str) or action_type not in _KNOWN_ACTION_TYPES:
        return None
    return _action_adapter.validate_python(data)


# --- outbound ---


class ServerMessage(BaseModel):
    model_config = WIRE_MODEL_CONFIG

    type: ServerMessageType

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class PlayerSnapshot(BaseModel):
    model_config = WIRE_MODEL_CONFIG

    id: str
    team: Team
    hero: Hero


class GameStateSnapshot(BaseModel):
    model_config = WIRE_MODEL_CONFIG

    players: list[PlayerSnapshot]
    towers: list[Tower]
    game_running: bool


class WelcomeMessage(ServerMessage):
    """Sent privately to a client once it has been admitted to a room."""

    type: Literal[ServerMessageType.WELCOME] = ServerMessageType.WELCOME
    player_id: str
    team: Team
    game_state: GameStateSnapshot


class PlayerJoinedMessage(ServerMessage):
    type: Literal[ServerMessageType.PLAYER_JOINED] = ServerMessageType.PLAYER_JOINED
    player: PlayerSnapshot


class PlayerLeftMessage(ServerMessage):
    type: Literal[ServerMessageType.PLAYER_LEFT] = ServerMessageType.PLAYER_LEFT
    player_id: str


class PlayerMovedMessage(ServerMessage):
    type: Literal[ServerMessageType.PLAYER_MOVED] = ServerMessageType.PLAYER_MOVED
    player_id: str
    x: float
    y: float


class AbilityUsedMessage(ServerMessage):
    type: Literal[ServerMessageType.ABILITY_USED] = ServerMessageType.ABILITY_USED
    player_id: str
    ability: AbilityKey
    position: Position


class DamageMessage(ServerMessage):
    """Damage dealt to a hero or tower; target is the unit after the hit."""

    type: Literal[ServerMessageType.DAMAGE] = ServerMessageType.DAMAGE
    target: Hero | Tower
    damage: int
    new_health: int


class GameOverMessage(ServerMessage):
    type: Literal[ServerMessageType.GAME_OVER] = ServerMessageType.GAME_OVER
    winner: Winner
