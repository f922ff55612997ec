"""Shared test setup for every package under backend/."""

from pathlib import Path

import pytest
import structlog
from dotenv import load_dotenv

from shared.logging import configure_structlog

load_dotenv(Path(__file__).resolve().parent.parent / ".env.tests")

# no handlers are installed here: caplog's own handler renders arena events
configure_structlog()


@pytest.fixture(autouse=True)
def _reset_connection_context():
    """Drop any connection_id bound by a WebSocket handler in an earlier test."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
