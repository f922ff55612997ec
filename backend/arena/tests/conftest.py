import pytest

from arena.logic.enums import Team
from arena.messaging.router import MessageRouter
from arena.session.gateway import SessionGateway
from arena.session.registry import RoomRegistry
from arena.session.room import GameRoom
from arena.tests.helpers import FAST_EFFECTS
from arena.tests.mocks import MockConnection


@pytest.fixture
def effect_config():
    return FAST_EFFECTS


@pytest.fixture
def room(effect_config):
    return GameRoom("room-1", effect_config=effect_config)


@pytest.fixture
def duel(room):
    """A room with a mortal and an ancient player, returned as (room, mortal, ancient)."""
    mortal, _ = room.add_player("p-mortal", MockConnection())
    ancient, _ = room.add_player("p-ancient", MockConnection())
    assert mortal.team == Team.MORTAL
    assert ancient.team == Team.ANCIENT
    return room, mortal, ancient


@pytest.fixture
def registry(effect_config):
    return RoomRegistry(effect_config)


@pytest.fixture
def gateway(registry):
    return SessionGateway(registry)


@pytest.fixture
def message_router(gateway):
    return MessageRouter(gateway)
