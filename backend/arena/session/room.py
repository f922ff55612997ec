"""
Authoritative state machine for a single arena match.

A room owns its towers and players and is the only place hero or tower state
changes. Every operation runs synchronously and returns the messages it
produced, in order; the caller sends them. Since the server runs on a single
event loop, no two operations on a room ever interleave.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import structlog

from arena.logic.combat import apply_damage, distance, pull_towards
from arena.logic.enums import AbilityKey, Team
from arena.logic.models import ATTACK_COOLDOWN_FRAMES, HERO_BASE_SPEED, HERO_BOOSTED_SPEED, Hero, Position
from arena.logic.timer import CooldownTicker, EffectConfig, EffectScheduler
from arena.logic.towers import create_towers
from arena.logic.win import resolve_winner
from arena.messaging.types import (
    AbilityAction,
    AbilityUsedMessage,
    AttackAction,
    DamageMessage,
    GameOverMessage,
    GameStateSnapshot,
    MoveAction,
    PlayerJoinedMessage,
    PlayerLeftMessage,
    PlayerMovedMessage,
    ServerMessage,
)
from arena.session.models import Player

if TYPE_CHECKING:
    import asyncio

    from arena.logic.models import Tower
    from arena.messaging.protocol import ConnectionProtocol
    from arena.messaging.types import PlayerAction

logger = structlog.get_logger()

MAX_PLAYERS = 2

AREA_DAMAGE_RADIUS = 100
AREA_DAMAGE_INNER_RADIUS = 50
AREA_DAMAGE_INNER = 20
AREA_DAMAGE_OUTER = 10
PULL_RANGE = 150
PULL_DISTANCE = 50
PULL_DAMAGE = 10
OVERHEAL_MAX_BONUS = 100


class GameRoom:
    """One isolated two-player match.

    States: active (``game_running``) and ended. Once ended, player actions are
    accepted and ignored.
    """

    def __init__(self, room_id: str, effect_config: EffectConfig | None = None) -> None:
        self.room_id = room_id
        self.players: dict[str, Player] = {}  # player_id -> Player, in join order
        self.towers: list[Tower] = create_towers()
        self.game_running = True
        self.created_at = time.time()
        self._config = effect_config or EffectConfig()
        self._effects = EffectScheduler()
        self._boost_reverts: dict[str, asyncio.Task[None]] = {}  # player_id -> pending speed revert
        self._ticker = CooldownTicker(self._config.tick_rate, self._tick_cooldowns)

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def is_empty(self) -> bool:
        return self.player_count == 0

    @property
    def is_full(self) -> bool:
        return self.player_count >= MAX_PLAYERS

    def start(self) -> None:
        """Start the cooldown clock. Needs a running event loop."""
        self._ticker.start()

    def close(self) -> None:
        """Stop the cooldown clock and drop any pending ability effects."""
        self._ticker.stop()
        self._effects.cancel_all()
        self._boost_reverts.clear()

    # --- membership ---

    def add_player(self, player_id: str, connection: ConnectionProtocol) -> tuple[Player, list[ServerMessage]]:
        """Seat a new player: first joiner plays mortal, second ancient.

        Capacity is enforced by the matchmaker, not here.
        """
        if self.is_full:
            logger.warning("room over capacity", room_id=self.room_id, player_count=self.player_count)
        team = Team.MORTAL if self.player_count % 2 == 0 else Team.ANCIENT
        player = Player(player_id=player_id, connection=connection, team=team, hero=Hero.spawn(team))
        self.players[player_id] = player
        logger.info("player joined room", room_id=self.room_id, player_id=player_id, team=team)
        return player, [PlayerJoinedMessage(player=player.snapshot())]

    def remove_player(self, player_id: str) -> list[ServerMessage]:
        if self.players.pop(player_id, None) is None:
            return []
        logger.info("player left room", room_id=self.room_id, player_id=player_id)
        return [PlayerLeftMessage(player_id=player_id)]

    def opponent_of(self, player_id: str) -> Player | None:
        """Return the other occupant of the room.

        Rooms hold two players, so there is at most one opponent.
        """
        for other_id, player in self.players.items():
            if other_id != player_id:
                return player
        return None

    def get_game_state(self) -> GameStateSnapshot:
        return GameStateSnapshot(
            players=[player.snapshot() for player in self.players.values()],
            towers=[tower.model_copy() for tower in self.towers],
            game_running=self.game_running,
        )

    # --- actions ---

    def handle_player_action(self, player_id: str, action: PlayerAction) -> list[ServerMessage]:
        player = self.players.get(player_id)
        if player is None or not self.game_running:
            return []

        if isinstance(action, MoveAction):
            return self._handle_move(player, action)
        if isinstance(action, AbilityAction):
            return self._handle_ability(player, action.ability)
        if isinstance(action, AttackAction):
            return self._handle_attack(player)
        return []

    def _handle_move(self, player: Player, action: MoveAction) -> list[ServerMessage]:
        # client-reported coordinates are trusted as-is
        player.hero.x = action.x
        player.hero.y = action.y
        return [PlayerMovedMessage(player_id=player.player_id, x=action.x, y=action.y)]

    def _handle_ability(self, player: Player, ability: AbilityKey) -> list[ServerMessage]:
        hero = player.hero
        slot = hero.skills.slot(ability)
        if not slot.is_ready:
            return []

        slot.trigger()
        messages: list[ServerMessage] = [
            AbilityUsedMessage(
                player_id=player.player_id,
                ability=ability,
                position=Position(x=hero.x, y=hero.y),
            ),
        ]

        opponent = self.opponent_of(player.player_id)
        if opponent is None:
            return messages

        if ability == AbilityKey.AREA_DAMAGE:
            messages.extend(self._area_damage(player, opponent))
        elif ability == AbilityKey.SPEED_BOOST:
            self._speed_boost(player)
        elif ability == AbilityKey.PULL:
            messages.extend(self._pull(player, opponent))
        elif ability == AbilityKey.OVERHEAL:
            self._overheal(player)
        return messages

    def _area_damage(self, player: Player, opponent: Player) -> list[ServerMessage]:
        dist = distance(player.hero, opponent.hero)
        if dist > AREA_DAMAGE_RADIUS:
            return []
        damage = AREA_DAMAGE_INNER if dist <= AREA_DAMAGE_INNER_RADIUS else AREA_DAMAGE_OUTER
        return self._damage(opponent.hero, damage)

    def _speed_boost(self, player: Player) -> None:
        """Boost speed; a fresh boost restarts the revert delay instead of stacking."""
        hero = player.hero
        hero.speed = HERO_BOOSTED_SPEED
        pending = self._boost_reverts.pop(player.player_id, None)
        if pending is not None:
            pending.cancel()
        self._boost_reverts[player.player_id] = self._effects.schedule(
            self._config.speed_boost_seconds,
            lambda: self._end_speed_boost(player.player_id, hero),
        )

    def _end_speed_boost(self, player_id: str, hero: Hero) -> None:
        self._boost_reverts.pop(player_id, None)
        if not self._owns_hero(player_id, hero):
            return
        hero.speed = HERO_BASE_SPEED

    def _pull(self, player: Player, opponent: Player) -> list[ServerMessage]:
        if distance(player.hero, opponent.hero) > PULL_RANGE:
            return []
        pull_towards(opponent.hero, player.hero, PULL_DISTANCE)
        return self._damage(opponent.hero, PULL_DAMAGE)

    def _overheal(self, player: Player) -> None:
        hero = player.hero
        bonus = min(OVERHEAL_MAX_BONUS, hero.max_health - hero.health)
        hero.health += bonus
        self._effects.schedule(
            self._config.overheal_seconds,
            lambda: self._end_overheal(player.player_id, hero, bonus),
        )

    def _end_overheal(self, player_id: str, hero: Hero, bonus: int) -> None:
        if not self._owns_hero(player_id, hero):
            return
        hero.health = max(1, hero.health - bonus)

    def _owns_hero(self, player_id: str, hero: Hero) -> bool:
        """Check the player is still seated here with the same hero."""
        player = self.players.get(player_id)
        return player is not None and player.hero is hero

    def _handle_attack(self, player: Player) -> list[ServerMessage]:
        hero = player.hero
        opponent = self.opponent_of(player.player_id)
        if opponent is None or hero.attack_cooldown > 0:
            return []
        if distance(hero, opponent.hero) >= hero.attack_range:
            return []
        messages = self._damage(opponent.hero, hero.attack_damage)
        hero.attack_cooldown = ATTACK_COOLDOWN_FRAMES
        return messages

    # --- damage and outcome ---

    def _damage(self, target: Hero | Tower, raw_damage: int) -> list[ServerMessage]:
        """Apply damage and report it, running the win check if the target fell."""
        damage = apply_damage(target, raw_damage)
        messages: list[ServerMessage] = []
        if target.health == 0:
            messages.extend(self.check_win_condition())
        messages.append(DamageMessage(target=target.model_copy(deep=True), damage=damage, new_health=target.health))
        return messages

    def check_win_condition(self) -> list[ServerMessage]:
        if not self.game_running:
            return []
        winner = resolve_winner(self.towers, (player.hero for player in self.players.values()))
        if winner is None:
            return []
        self.game_running = False
        self._ticker.stop()
        logger.info("game over", room_id=self.room_id, winner=winner)
        return [GameOverMessage(winner=winner)]

    def _tick_cooldowns(self) -> None:
        for player in self.players.values():
            player.hero.tick_cooldowns()
