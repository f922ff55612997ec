"""
Deferred ability effects and the per-room cooldown clock.

Both run as asyncio tasks on the server's event loop, so their callbacks are
serialized with every other room mutation. Callbacks are plain synchronous
functions; they must re-check that whatever they mutate still exists.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel, Field

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import Callable

    from arena.server.settings import ArenaServerSettings


class EffectConfig(BaseModel):
    """Timing configuration for ability effects and cooldowns."""

    speed_boost_seconds: float = Field(default=4.0, ge=0)
    overheal_seconds: float = Field(default=10.0, ge=0)
    # cooldown frames per second; 0 leaves cooldowns set once and never decremented
    tick_rate: int = Field(default=60, ge=0)

    @classmethod
    def from_settings(cls, settings: ArenaServerSettings) -> EffectConfig:
        return cls(
            speed_boost_seconds=settings.speed_boost_seconds,
            overheal_seconds=settings.overheal_seconds,
            tick_rate=settings.tick_rate,
        )


class EffectScheduler:
    """Run one-shot callbacks after a delay.

    Pending callbacks are not cancelled when a player leaves; the callback
    itself is responsible for skipping work on a departed player.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    def schedule(self, delay: float, callback: Callable[[], None]) -> asyncio.Task[None]:
        task = asyncio.create_task(self._run(delay, callback))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            if not task.done():
                task.cancel()
        self._tasks.clear()

    async def _run(self, delay: float, callback: Callable[[], None]) -> None:
        try:
            await asyncio.sleep(delay)
            callback()
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("deferred effect failed")


class CooldownTicker:
    """Call ``on_tick`` once per frame at ``tick_rate`` frames per second."""

    def __init__(self, tick_rate: int, on_tick: Callable[[], None]) -> None:
        self._tick_rate = tick_rate
        self._on_tick = on_tick
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self._tick_rate <= 0 or self.is_running:
            return
        self._task = asyncio.create_task(self._run())

    def stop(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        interval = 1 / self._tick_rate
        try:
            while True:
                await asyncio.sleep(interval)
                try:
                    self._on_tick()
                except Exception:
                    logger.exception("cooldown tick failed")
        except asyncio.CancelledError:
            pass
