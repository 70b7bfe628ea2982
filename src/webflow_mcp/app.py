from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .bridge import CommandBridge
from .config import Settings
from .log import logger
from .protocol import JsonRpcDispatcher, build_mcp_server
from .routes import router
from .sse import SseSessions


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Request error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": str(exc) or "Internal server error"}, status_code=500)


def create_app(
    bridge: Optional[CommandBridge] = None,
    *,
    settings: Optional[Settings] = None,
) -> FastAPI:
    settings = settings or Settings()
    if bridge is None:
        bridge = CommandBridge(
            command_timeout=settings.command_timeout,
            liveness_window=settings.liveness_window,
        )
    sessions = SseSessions()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s %s", config.SERVER_NAME, config.SERVER_VERSION)
        logger.info(
            "Endpoints: GET /sse, POST /sse/message, WS /mcp, GET /mcp/bridge/events, "
            "POST /mcp/command-result, GET /status, GET /health"
        )
        yield
        sessions.close_all()
        bridge.shutdown()
        logger.info("Shutting down %s", config.SERVER_NAME)

    app = FastAPI(
        title="Webflow Designer MCP",
        version=config.SERVER_VERSION,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )
    app.add_exception_handler(Exception, _unhandled_error)

    app.state.settings = settings
    app.state.bridge = bridge
    app.state.mcp_server = build_mcp_server(bridge)
    app.state.dispatcher = JsonRpcDispatcher(bridge)
    app.state.sse_sessions = sessions

    app.include_router(router)
    return app
