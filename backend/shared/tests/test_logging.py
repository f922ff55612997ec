import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

from arena.logic.enums import AbilityKey, Team, Winner
from shared.logging import _serialize_enums, setup_logging


@pytest.fixture(autouse=True)
def _cleanup_root_logger():
    """Close and remove all handlers from the root logger after each test."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)


@pytest.fixture
def allow_file_logging():
    """Disable the pytest guard so a test can create a real log file."""
    with patch("shared.logging._is_test", return_value=False):
        yield


class TestSetupLogging:
    def test_configures_stdout_handler(self):
        assert setup_logging() is None

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_no_log_file_under_pytest(self, tmp_path):
        assert setup_logging(log_dir=tmp_path / "arena") is None
        assert not (tmp_path / "arena").exists()
        assert len(logging.getLogger().handlers) == 1

    @pytest.mark.usefixtures("allow_file_logging")
    def test_log_file_named_by_start_time(self, tmp_path):
        fixed_time = datetime(2025, 3, 15, 10, 30, 45, tzinfo=UTC)
        with patch("shared.logging.datetime") as mock_dt:
            mock_dt.now.return_value = fixed_time
            log_path = setup_logging(log_dir=str(tmp_path / "arena"))

        assert log_path == tmp_path / "arena" / "2025-03-15_10-30-45.log"
        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert [Path(h.baseFilename) for h in file_handlers] == [log_path]

    @pytest.mark.usefixtures("allow_file_logging")
    def test_json_mode_writes_json_lines(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "json")
        log_path = setup_logging(log_dir=tmp_path)

        structlog.contextvars.bind_contextvars(connection_id="conn-1")
        structlog.get_logger("test.json").info("game over", room_id="room-1", winner=Winner.MORTAL)
        structlog.contextvars.clear_contextvars()

        parsed = json.loads(log_path.read_text().strip().splitlines()[0])
        assert parsed["event"] == "game over"
        assert parsed["connection_id"] == "conn-1"
        assert parsed["room_id"] == "room-1"
        assert parsed["winner"] == "Mortal"

    def test_repeated_calls_replace_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_explicit_level(self):
        setup_logging(level=logging.DEBUG)
        assert logging.getLogger().level == logging.DEBUG

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_server_chatter_is_quieted(self):
        setup_logging(level=logging.DEBUG)
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
        assert logging.getLogger("websockets").level == logging.WARNING

    @pytest.mark.parametrize(
        ("variable", "value", "match"),
        [
            ("LOG_LEVEL", "verbose", "Invalid LOG_LEVEL"),
            ("LOG_FORMAT", "xml", "Invalid LOG_FORMAT"),
        ],
    )
    def test_invalid_env_raises(self, monkeypatch, variable, value, match):
        monkeypatch.setenv(variable, value)
        with pytest.raises(ValueError, match=match):
            setup_logging()


class TestSerializeEnums:
    def test_replaces_arena_enums_with_values(self):
        event_dict = {"team": Team.ANCIENT, "ability": AbilityKey.PULL, "event": "ability used"}
        result = _serialize_enums(None, "", event_dict)
        assert result == {"team": "ancient", "ability": "e", "event": "ability used"}

    def test_leaves_other_values_unchanged(self):
        event_dict = {"player_count": 2, "room_id": "room-1"}
        assert _serialize_enums(None, "", dict(event_dict)) == event_dict
