"""Process-wide collection of active rooms and the matchmaking rule."""

from __future__ import annotations

from uuid import uuid4

import structlog

from arena.logic.timer import EffectConfig
from arena.session.room import GameRoom
from arena.session.types import RoomInfo

logger = structlog.get_logger()


class RoomRegistry:
    """Own every active room of this process.

    Rooms are kept in creation order. A room lives from the first admission
    that finds no open room until the moment its last player leaves.
    """

    def __init__(self, effect_config: EffectConfig | None = None) -> None:
        self._rooms: dict[str, GameRoom] = {}  # room_id -> GameRoom, in creation order
        self._effect_config = effect_config or EffectConfig()

    @property
    def room_count(self) -> int:
        return len(self._rooms)

    @property
    def player_count(self) -> int:
        return sum(room.player_count for room in self._rooms.values())

    def get_room(self, room_id: str) -> GameRoom | None:
        return self._rooms.get(room_id)

    def find_or_create(self) -> GameRoom:
        """Return the oldest room with a free slot, creating one if all are full."""
        for room in self._rooms.values():
            if not room.is_full:
                return room
        return self.create_room()

    def create_room(self) -> GameRoom:
        room = GameRoom(str(uuid4()), effect_config=self._effect_config)
        self._rooms[room.room_id] = room
        room.start()
        logger.info("room created", room_id=room.room_id)
        return room

    def release(self, room: GameRoom) -> bool:
        """Drop the room if nobody is left in it. Returns True if it was removed."""
        if not room.is_empty or self._rooms.pop(room.room_id, None) is None:
            return False
        room.close()
        logger.info("room is empty, cleaning up", room_id=room.room_id)
        return True

    def get_rooms_info(self) -> list[RoomInfo]:
        return [
            RoomInfo(room_id=room.room_id, player_count=room.player_count, game_running=room.game_running)
            for room in self._rooms.values()
        ]

    def close_all(self) -> None:
        """Stop every room's timers and forget all rooms (server shutdown)."""
        for room in self._rooms.values():
            room.close()
        self._rooms.clear()
