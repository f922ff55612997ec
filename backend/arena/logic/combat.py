"""
Pure geometry and damage helpers.

Nothing here broadcasts or evaluates the win condition; the room turns the
results into events.
"""

import math
from typing import Protocol

from arena.logic.enums import Team

ANCIENT_DAMAGE_MULTIPLIER = 0.7  # ancient passive: 30% damage reduction


class Point(Protocol):
    x: float
    y: float


class Damageable(Protocol):
    team: Team
    health: int


def distance(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def mitigate(team: Team, raw_damage: int) -> int:
    """Return the damage a unit of the given team actually takes."""
    if team == Team.ANCIENT:
        return math.floor(raw_damage * ANCIENT_DAMAGE_MULTIPLIER)
    return raw_damage


def apply_damage(target: Damageable, raw_damage: int) -> int:
    """Subtract mitigated damage from target health, clamped at zero.

    Returns the effective damage dealt.
    """
    damage = mitigate(target.team, raw_damage)
    target.health = max(0, target.health - damage)
    return damage


def pull_towards(target: Point, anchor: Point, amount: float) -> None:
    """Move target ``amount`` units along the line toward anchor."""
    angle = math.atan2(anchor.y - target.y, anchor.x - target.x)
    target.x += math.cos(angle) * amount
    target.y += math.sin(angle) * amount
