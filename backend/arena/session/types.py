"""
Pydantic models for the session layer.
"""

from pydantic import BaseModel

from arena.logic.models import WIRE_MODEL_CONFIG


class RoomInfo(BaseModel):
    """Room information for the room listing endpoint."""

    model_config = WIRE_MODEL_CONFIG

    room_id: str
    player_count: int
    game_running: bool
