"""Shared broadcast utility for sending messages to a room's players."""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from arena.session.models import Player


async def broadcast_to_players(
    players: dict[str, Player],
    message: dict[str, Any],
) -> None:
    """Broadcast a message to every player whose connection is open.

    Sends are best effort: closed connections are skipped and send failures
    are swallowed. Snapshot the dict values via list() so a leave that
    happens while we yield on a send cannot break iteration.
    """
    for player in list(players.values()):
        if not player.connection.is_open:
            continue
        with contextlib.suppress(RuntimeError, OSError):
            await player.connection.send_message(message)
