"""
Pydantic models for the mutable combat state owned by a room.

Field names are snake_case in Python and serialize to the camelCase names the
browser client reads (``model_dump(by_alias=True)``).
"""

from __future__ import annotations

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from arena.logic.enums import AbilityKey, Team

WIRE_MODEL_CONFIG = ConfigDict(alias_generator=AliasGenerator(serialization_alias=to_camel))

HERO_MAX_HEALTH = 100
HERO_BASE_SPEED = 4
HERO_BOOSTED_SPEED = 6
HERO_ATTACK_RANGE = 30
HERO_ATTACK_DAMAGE = 15
ATTACK_COOLDOWN_FRAMES = 90

SPAWN_Y = 300
SPAWN_X = {Team.MORTAL: 200, Team.ANCIENT: 800}

# max cooldown per ability slot, in frames
ABILITY_COOLDOWNS = {
    AbilityKey.AREA_DAMAGE: 120,
    AbilityKey.SPEED_BOOST: 180,
    AbilityKey.PULL: 150,
    AbilityKey.OVERHEAL: 300,
}


class AbilitySlot(BaseModel):
    model_config = WIRE_MODEL_CONFIG

    cooldown: int = 0
    max_cooldown: int

    @property
    def is_ready(self) -> bool:
        return self.cooldown == 0

    def trigger(self) -> None:
        self.cooldown = self.max_cooldown

    def tick(self) -> None:
        if self.cooldown > 0:
            self.cooldown -= 1


def _slot(key: AbilityKey) -> AbilitySlot:
    return AbilitySlot(max_cooldown=ABILITY_COOLDOWNS[key])


class HeroSkills(BaseModel):
    """The four ability slots of a hero, keyed by their binding."""

    model_config = WIRE_MODEL_CONFIG

    q: AbilitySlot = Field(default_factory=lambda: _slot(AbilityKey.AREA_DAMAGE))
    w: AbilitySlot = Field(default_factory=lambda: _slot(AbilityKey.SPEED_BOOST))
    e: AbilitySlot = Field(default_factory=lambda: _slot(AbilityKey.PULL))
    r: AbilitySlot = Field(default_factory=lambda: _slot(AbilityKey.OVERHEAL))

    def slot(self, key: AbilityKey) -> AbilitySlot:
        return getattr(self, key.value)

    def all_slots(self) -> tuple[AbilitySlot, ...]:
        return (self.q, self.w, self.e, self.r)


class Hero(BaseModel):
    """A player's combat unit.

    ``type`` mirrors ``team``; the client picks hero sprites from it.
    """

    model_config = WIRE_MODEL_CONFIG

    type: Team
    team: Team
    x: float
    y: float
    health: int = HERO_MAX_HEALTH
    max_health: int = HERO_MAX_HEALTH
    speed: int = HERO_BASE_SPEED
    attack_range: float = HERO_ATTACK_RANGE
    attack_damage: int = HERO_ATTACK_DAMAGE
    attack_cooldown: int = 0
    skills: HeroSkills = Field(default_factory=HeroSkills)

    @classmethod
    def spawn(cls, team: Team) -> Hero:
        """Create a hero with baseline stats at its team's spawn point."""
        return cls(type=team, team=team, x=SPAWN_X[team], y=SPAWN_Y)

    def tick_cooldowns(self) -> None:
        """Advance every cooldown by one frame."""
        for slot in self.skills.all_slots():
            slot.tick()
        if self.attack_cooldown > 0:
            self.attack_cooldown -= 1


class Tower(BaseModel):
    model_config = WIRE_MODEL_CONFIG

    id: str
    team: Team
    x: float
    y: float
    health: int
    max_health: int
    range: float
    damage: int
    is_base: bool = False


class Position(BaseModel):
    x: float
    y: float
