import pytest
from pydantic import ValidationError

from arena.server.settings import ArenaServerSettings


class TestArenaServerSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("ARENA_PORT", raising=False)
        settings = ArenaServerSettings(static_dir="public")
        assert settings.port == 3000
        assert settings.host == "0.0.0.0"  # noqa: S104
        assert settings.cors_origins == []
        assert settings.tick_rate == 60

    def test_port_from_platform_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        assert ArenaServerSettings().port == 8080

    def test_port_from_prefixed_env(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.setenv("ARENA_PORT", "9000")
        assert ArenaServerSettings().port == 9000

    def test_port_out_of_range_rejected(self):
        with pytest.raises(ValidationError, match="port"):
            ArenaServerSettings(port=70000)

    def test_timing_from_env(self, monkeypatch):
        monkeypatch.setenv("ARENA_TICK_RATE", "30")
        monkeypatch.setenv("ARENA_SPEED_BOOST_SECONDS", "1.5")
        settings = ArenaServerSettings()
        assert settings.tick_rate == 30
        assert settings.speed_boost_seconds == 1.5

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError, match="overheal_seconds"):
            ArenaServerSettings(overheal_seconds=-1)

    def test_cors_origins_json_array(self, monkeypatch):
        monkeypatch.setenv("ARENA_CORS_ORIGINS", '["http://a.com","http://b.com"]')
        assert ArenaServerSettings().cors_origins == ["http://a.com", "http://b.com"]

    def test_cors_origins_csv(self, monkeypatch):
        monkeypatch.setenv("ARENA_CORS_ORIGINS", "http://a.com,http://b.com")
        assert ArenaServerSettings().cors_origins == ["http://a.com", "http://b.com"]

    def test_cors_origins_blank_rejected(self, monkeypatch):
        monkeypatch.setenv("ARENA_CORS_ORIGINS", "")
        with pytest.raises(ValidationError, match="cors_origins"):
            ArenaServerSettings()

    def test_static_dir_empty_rejected(self):
        with pytest.raises(ValidationError, match="static_dir"):
            ArenaServerSettings(static_dir="")
