from __future__ import annotations

import contextlib
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route, WebSocketRoute
from starlette.staticfiles import StaticFiles

from arena.logic.timer import EffectConfig
from arena.messaging.router import MessageRouter
from arena.server.settings import ArenaServerSettings
from arena.server.websocket import websocket_endpoint
from arena.session.gateway import SessionGateway
from arena.session.registry import RoomRegistry
from shared.logging import setup_logging

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request
    from starlette.websockets import WebSocket


async def health(request: Request) -> JSONResponse:
    registry: RoomRegistry = request.app.state.registry
    return JSONResponse(
        {
            "status": "OK",
            "message": "Arena server running",
            "activeRooms": registry.room_count,
            "totalPlayers": registry.player_count,
        },
    )


async def list_rooms(request: Request) -> JSONResponse:
    registry: RoomRegistry = request.app.state.registry
    return JSONResponse([room.model_dump(by_alias=True) for room in registry.get_rooms_info()])


def create_app(
    settings: ArenaServerSettings | None = None,
    registry: RoomRegistry | None = None,
    message_router: MessageRouter | None = None,
) -> Starlette:
    if settings is None:  # pragma: no cover
        settings = ArenaServerSettings()

    if registry is None:
        registry = RoomRegistry(EffectConfig.from_settings(settings))

    if message_router is None:
        message_router = MessageRouter(SessionGateway(registry))

    async def ws_endpoint(websocket: WebSocket) -> None:
        await websocket_endpoint(websocket, message_router)

    routes = [
        Route("/health", health, methods=["GET"]),
        Route("/api/rooms", list_rooms, methods=["GET"]),
        WebSocketRoute("/", ws_endpoint),
        WebSocketRoute("/ws", ws_endpoint),
    ]

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        routes.append(Mount("/", app=StaticFiles(directory=str(static_dir), html=True), name="static"))
    else:
        logger.info("static directory not found, client assets disabled", static_dir=str(static_dir))

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncGenerator[None]:
        yield
        registry.close_all()

    app = Starlette(routes=routes, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )
    app.state.settings = settings
    app.state.registry = registry

    logger.info("arena server ready")
    return app


def get_app() -> Starlette:  # pragma: no cover
    """ASGI application factory for production use (e.g., uvicorn --factory)."""
    settings = ArenaServerSettings()
    setup_logging(log_dir=settings.log_dir)
    return create_app(settings=settings)


def run() -> None:  # pragma: no cover
    """Console entry point: serve the arena on the configured host and port."""
    settings = ArenaServerSettings()
    setup_logging(log_dir=settings.log_dir)
    logger.info("starting arena server", host=settings.host, port=settings.port)
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port, log_config=None)
