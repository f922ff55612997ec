from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from arena.messaging.types import parse_client_message, parse_player_action

if TYPE_CHECKING:
    from arena.messaging.protocol import ConnectionProtocol
    from arena.session.gateway import SessionGateway

logger = structlog.get_logger()


class MessageRouter:
    """
    Routes decoded client messages to the session gateway.

    Invalid input never surfaces to the client: it is logged and dropped,
    and the connection stays open.
    """

    def __init__(self, gateway: SessionGateway) -> None:
        self._gateway = gateway

    async def handle_connect(self, connection: ConnectionProtocol) -> None:
        await self._gateway.connect(connection)

    async def handle_message(
        self,
        connection: ConnectionProtocol,
        raw_message: dict[str, Any],
    ) -> None:
        try:
            message = parse_client_message(raw_message)
        except ValidationError as e:
            logger.warning("invalid message", connection_id=connection.connection_id, error=str(e))
            return

        if message is None:
            logger.debug("ignoring message", connection_id=connection.connection_id, type=raw_message.get("type"))
            return

        try:
            action = parse_player_action(message.action)
        except ValidationError as e:
            logger.debug("ignoring invalid action", connection_id=connection.connection_id, error=str(e))
            return

        if action is None:
            logger.debug(
                "ignoring unknown action",
                connection_id=connection.connection_id,
                action_type=message.action.get("type"),
            )
            return

        try:
            await self._gateway.handle_action(connection, action)
        except Exception:
            logger.exception("action failed", connection_id=connection.connection_id)

    async def handle_disconnect(self, connection: ConnectionProtocol) -> None:
        await self._gateway.disconnect(connection)
