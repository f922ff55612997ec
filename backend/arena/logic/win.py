"""Win condition evaluation."""

from collections.abc import Iterable

from arena.logic.enums import Team, Winner
from arena.logic.models import Hero, Tower
from arena.logic.towers import find_base


def resolve_winner(towers: list[Tower], heroes: Iterable[Hero]) -> Winner | None:
    """Return the winning side, or None while the game goes on.

    A destroyed base hands the win to the other team. Hero deaths are checked
    afterwards in join order and overwrite any earlier result, so when several
    conditions hold in the same pass the last dead hero decides.
    """
    winner: Winner | None = None

    mortal_base = find_base(towers, Team.MORTAL)
    ancient_base = find_base(towers, Team.ANCIENT)
    if mortal_base is not None and mortal_base.health <= 0:
        winner = Winner.ANCIENT
    elif ancient_base is not None and ancient_base.health <= 0:
        winner = Winner.MORTAL

    for hero in heroes:
        if hero.health <= 0:
            winner = Winner.for_team(hero.team.opponent)

    return winner
