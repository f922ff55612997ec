from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from arena.messaging.types import PlayerSnapshot

if TYPE_CHECKING:
    from arena.logic.enums import Team
    from arena.logic.models import Hero
    from arena.messaging.protocol import ConnectionProtocol


@dataclass
class Player:
    """Represent a connected player inside a room.

    Lifecycle:
    - Created when the matchmaker admits a connection into a room
    - Removed from the room on disconnect; the hero goes with it

    The connection is borrowed for outbound messages only. Closing it is the
    transport's job, never the room's.
    """

    player_id: str
    connection: ConnectionProtocol
    team: Team
    hero: Hero

    def snapshot(self) -> PlayerSnapshot:
        return PlayerSnapshot(id=self.player_id, team=self.team, hero=self.hero.model_copy(deep=True))
