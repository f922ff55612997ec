"""Shared helpers for arena tests."""

from arena.logic.models import Hero
from arena.logic.timer import EffectConfig

# effect timings short enough for tests to wait them out; no background clock
FAST_EFFECTS = EffectConfig(speed_boost_seconds=0.02, overheal_seconds=0.02, tick_rate=0)
EFFECT_WAIT = 0.08


def place(hero: Hero, x: float, y: float) -> None:
    hero.x = x
    hero.y = y
