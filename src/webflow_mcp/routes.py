from __future__ import annotations

import time
from typing import Any, Dict

from fastapi import APIRouter, Request, WebSocket
from fastapi.responses import JSONResponse, PlainTextResponse, Response, StreamingResponse
from mcp.server.websocket import websocket_server
from pydantic import ValidationError

from . import config
from .bridge import CommandBridge, iso_timestamp
from .log import logger
from .models import Acknowledgement, CommandResult
from .protocol import INTERNAL_ERROR, JsonRpcDispatcher, error_response, parse_error
from .sse import SseSession, SseSessions, event_stream
from .tools import ALL_TOOLS

router = APIRouter()


def get_bridge(request: Request) -> CommandBridge:
    return request.app.state.bridge


# ---------------------------------------------------------------------------
# Info & health
# ---------------------------------------------------------------------------


@router.get("/", response_class=PlainTextResponse)
async def info(request: Request):
    origin = str(request.base_url).rstrip("/")
    return (
        "Webflow MCP Server\n\n"
        "This server provides Model Context Protocol tools for controlling Webflow Designer.\n\n"
        "Available endpoints:\n"
        "- /sse - SSE connection for MCP clients\n"
        "- /mcp - WebSocket MCP connection\n"
        "- /mcp/bridge/events - Frontend bridge polling endpoint\n"
        "- /mcp/command-result - Command result submission\n"
        "- /status - Server status\n"
        "- /health - Health check\n\n"
        "MCP Connection URL:\n"
        f"- SSE: {origin}/sse\n\n"
        "Frontend Bridge URL:\n"
        f"- {origin}/mcp/bridge/events\n\n"
        f"Tools Available: {len(ALL_TOOLS)} Webflow Designer tools\n"
    )


@router.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "timestamp": iso_timestamp(time.time()),
        "service": config.SERVER_NAME,
        "version": config.SERVER_VERSION,
    }


@router.get("/status")
async def status(request: Request) -> Dict[str, Any]:
    snapshot = get_bridge(request).status()
    return {
        "agent": config.AGENT_NAME,
        "consumerConnected": snapshot["connected"],
        "lastConsumerPing": snapshot["lastPing"],
        "commandsExecuted": snapshot["commandsExecuted"],
        "queueLength": snapshot["pendingCommands"],
        "timestamp": iso_timestamp(time.time()),
    }


# ---------------------------------------------------------------------------
# Designer extension bridge
# ---------------------------------------------------------------------------


@router.get("/mcp/bridge/events")
async def bridge_events(request: Request) -> Dict[str, Any]:
    return get_bridge(request).take_next().model_dump()


@router.post("/mcp/command-result")
async def command_result(request: Request):
    try:
        result = CommandResult.model_validate(await request.json())
    except (ValueError, ValidationError) as exc:
        logger.error("Command result error: %s", exc)
        return JSONResponse({"error": f"Malformed command result: {exc}"}, status_code=400)

    logger.info("Received command result for %s", result.id)
    get_bridge(request).complete(result.id, result.payload)
    return Acknowledgement().model_dump()


# ---------------------------------------------------------------------------
# MCP inspector (SSE) and MCP WebSocket transports
# ---------------------------------------------------------------------------


def _wants_event_stream(request: Request) -> bool:
    return (
        request.query_params.get("transportType") == "sse"
        or "text/event-stream" in request.headers.get("accept", "")
    )


@router.get("/sse")
async def sse_connect(request: Request):
    if not _wants_event_stream(request):
        return PlainTextResponse("Bad Request", status_code=400)

    sessions: SseSessions = request.app.state.sse_sessions
    session = sessions.open(request.query_params.get("sessionId"))
    return StreamingResponse(
        event_stream(sessions, session, request.app.state.settings.sse_keepalive),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


async def _reply(session: SseSession, dispatcher: JsonRpcDispatcher, message: Dict[str, Any]) -> None:
    response = await dispatcher.handle(message)
    if response is not None:
        session.send(response)


@router.post("/sse/message")
async def sse_message(request: Request):
    try:
        body = await request.json()
    except ValueError as exc:
        logger.error("Error parsing SSE message: %s", exc)
        return JSONResponse(parse_error(), status_code=400)
    if not isinstance(body, dict):
        return JSONResponse(parse_error(), status_code=400)

    logger.debug("SSE message received: %s", body)
    session = request.app.state.sse_sessions.get(request.query_params.get("sessionId"))
    if session is None:
        return JSONResponse(
            error_response(body.get("id"), INTERNAL_ERROR, "No SSE connection found for this session")
        )

    dispatcher: JsonRpcDispatcher = request.app.state.dispatcher
    if body.get("method") == "tools/call":
        # Tool calls wait on the Designer; answer the POST now, reply on the stream later.
        session.spawn(_reply(session, dispatcher, body))
    else:
        await _reply(session, dispatcher, body)
    return Response(status_code=202)


@router.websocket("/mcp")
async def mcp_websocket(websocket: WebSocket) -> None:
    server = websocket.app.state.mcp_server
    async with websocket_server(websocket.scope, websocket.receive, websocket.send) as (
        read_stream,
        write_stream,
    ):
        await server.run(read_stream, write_stream, server.create_initialization_options())
