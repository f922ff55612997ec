from arena.session.registry import RoomRegistry
from arena.session.types import RoomInfo
from arena.tests.mocks import MockConnection


def _join(registry: RoomRegistry, player_id: str):
    room = registry.find_or_create()
    room.add_player(player_id, MockConnection())
    return room


class TestMatchmaking:
    def test_first_connection_creates_room(self, registry):
        room = _join(registry, "a")
        assert registry.room_count == 1
        assert registry.get_room(room.room_id) is room

    def test_second_connection_joins_same_room(self, registry):
        first = _join(registry, "a")
        second = _join(registry, "b")
        assert first is second
        assert registry.room_count == 1

    def test_third_connection_gets_new_room(self, registry):
        first = _join(registry, "a")
        _join(registry, "b")
        third = _join(registry, "c")
        assert third is not first
        assert first.player_count == 2
        assert third.player_count == 1
        assert registry.room_count == 2

    def test_oldest_open_room_is_filled_first(self, registry):
        first = _join(registry, "a")
        _join(registry, "b")
        second = _join(registry, "c")
        _join(registry, "d")
        first.remove_player("a")

        assert registry.find_or_create() is first
        assert second.is_full


class TestRelease:
    def test_empty_room_is_removed(self, registry):
        room = _join(registry, "a")
        room.remove_player("a")
        assert registry.release(room) is True
        assert registry.room_count == 0
        assert registry.get_room(room.room_id) is None

    def test_occupied_room_is_kept(self, registry):
        room = _join(registry, "a")
        _join(registry, "b")
        room.remove_player("a")
        assert registry.release(room) is False
        assert registry.get_room(room.room_id) is room

    def test_release_twice_is_harmless(self, registry):
        room = _join(registry, "a")
        room.remove_player("a")
        registry.release(room)
        assert registry.release(room) is False

    def test_new_room_after_teardown(self, registry):
        room = _join(registry, "a")
        room.remove_player("a")
        registry.release(room)
        assert _join(registry, "b") is not room


class TestStats:
    def test_counts(self, registry):
        for player_id in ("a", "b", "c"):
            _join(registry, player_id)
        assert registry.room_count == 2
        assert registry.player_count == 3

    def test_rooms_info(self, registry):
        room = _join(registry, "a")
        assert registry.get_rooms_info() == [RoomInfo(room_id=room.room_id, player_count=1, game_running=True)]

    def test_rooms_info_wire_format(self, registry):
        room = _join(registry, "a")
        info = registry.get_rooms_info()[0].model_dump(by_alias=True)
        assert info == {"roomId": room.room_id, "playerCount": 1, "gameRunning": True}

    def test_close_all(self, registry):
        _join(registry, "a")
        registry.close_all()
        assert registry.room_count == 0
