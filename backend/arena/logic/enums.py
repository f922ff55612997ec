"""
String enum definitions for arena game concepts.
"""

from __future__ import annotations

from enum import Enum


class Team(str, Enum):
    """Side a hero or tower fights for."""

    MORTAL = "mortal"
    ANCIENT = "ancient"

    @property
    def opponent(self) -> Team:
        return Team.ANCIENT if self is Team.MORTAL else Team.MORTAL

    @property
    def display_name(self) -> str:
        """Capitalized name used in game over announcements."""
        return self.value.capitalize()


class AbilityKey(str, Enum):
    """Hero ability slots, named after their keyboard bindings."""

    AREA_DAMAGE = "q"
    SPEED_BOOST = "w"
    PULL = "e"
    OVERHEAL = "r"


class ActionType(str, Enum):
    """Actions a player can send inside a playerAction envelope."""

    MOVE = "move"
    ABILITY = "ability"
    ATTACK = "attack"


class Winner(str, Enum):
    MORTAL = "Mortal"
    ANCIENT = "Ancient"

    @classmethod
    def for_team(cls, team: Team) -> Winner:
        return cls(team.display_name)
