"""Per-connection glue between the transport and the rooms."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from arena.messaging.types import WelcomeMessage
from arena.session.broadcast import broadcast_to_players

if TYPE_CHECKING:
    from arena.messaging.protocol import ConnectionProtocol
    from arena.messaging.types import PlayerAction, ServerMessage
    from arena.session.models import Player
    from arena.session.registry import RoomRegistry
    from arena.session.room import GameRoom

logger = structlog.get_logger()


@dataclass
class SessionBinding:
    """The room and player a connection was admitted as."""

    room: GameRoom
    player_id: str


class SessionGateway:
    """Bind each connection to a player in a room for its whole lifetime.

    The gateway hands room output to the broadcaster; rooms themselves never
    perform I/O.
    """

    def __init__(self, registry: RoomRegistry) -> None:
        self._registry = registry
        self._bindings: dict[str, SessionBinding] = {}  # connection_id -> SessionBinding

    def get_binding(self, connection_id: str) -> SessionBinding | None:
        return self._bindings.get(connection_id)

    async def connect(self, connection: ConnectionProtocol) -> Player:
        """Admit a connection into a room and greet it.

        Everyone in the room (the newcomer included) sees playerJoined; the
        newcomer alone then receives the welcome with the full room state.
        """
        player_id = str(uuid4())
        room = self._registry.find_or_create()
        player, messages = room.add_player(player_id, connection)
        self._bindings[connection.connection_id] = SessionBinding(room=room, player_id=player_id)
        logger.info("player connected", player_id=player_id, room_id=room.room_id, team=player.team)

        await self._broadcast(room, messages)
        welcome = WelcomeMessage(player_id=player_id, team=player.team, game_state=room.get_game_state())
        if connection.is_open:
            with contextlib.suppress(RuntimeError, OSError):
                await connection.send_message(welcome.to_wire())
        return player

    async def handle_action(self, connection: ConnectionProtocol, action: PlayerAction) -> None:
        binding = self._bindings.get(connection.connection_id)
        if binding is None:
            return
        messages = binding.room.handle_player_action(binding.player_id, action)
        await self._broadcast(binding.room, messages)

    async def disconnect(self, connection: ConnectionProtocol) -> None:
        binding = self._bindings.pop(connection.connection_id, None)
        if binding is None:
            return
        room = binding.room
        logger.info("player disconnected", player_id=binding.player_id, room_id=room.room_id)
        messages = room.remove_player(binding.player_id)
        self._registry.release(room)
        await self._broadcast(room, messages)

    @staticmethod
    async def _broadcast(room: GameRoom, messages: list[ServerMessage]) -> None:
        for message in messages:
            await broadcast_to_players(room.players, message.to_wire())
