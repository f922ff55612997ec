"""Fixed tower layout shared by every room."""

from arena.logic.enums import Team
from arena.logic.models import Tower

LANE_Y = 300

# (id, team, x, health, range, damage, is_base)
_TOWER_LAYOUT: tuple[tuple[str, Team, int, int, int, int, bool], ...] = (
    ("mortal_t1", Team.MORTAL, 100, 300, 150, 10, False),
    ("mortal_t2", Team.MORTAL, 300, 300, 150, 10, False),
    ("mortal_base", Team.MORTAL, 500, 500, 200, 15, True),
    ("ancient_t1", Team.ANCIENT, 900, 300, 150, 10, False),
    ("ancient_t2", Team.ANCIENT, 700, 300, 150, 10, False),
    ("ancient_base", Team.ANCIENT, 500, 500, 200, 15, True),
)


def create_towers() -> list[Tower]:
    """Build a fresh set of six towers at full health, two of them bases."""
    return [
        Tower(
            id=tower_id,
            team=team,
            x=x,
            y=LANE_Y,
            health=health,
            max_health=health,
            range=attack_range,
            damage=damage,
            is_base=is_base,
        )
        for tower_id, team, x, health, attack_range, damage, is_base in _TOWER_LAYOUT
    ]


def find_base(towers: list[Tower], team: Team) -> Tower | None:
    return next((t for t in towers if t.team == team and t.is_base), None)
