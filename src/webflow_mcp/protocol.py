"""MCP-facing side of the relay.

Tool calls arriving through either door (the MCP SDK server used by the
WebSocket transport, or the inspector-compatible JSON-RPC channel) end up in
``invoke_tool``. Failures of the Designer side are reported in-band as JSON
text content; the RPC call itself still succeeds.
"""

import json
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import Resource, TextContent, Tool
from pydantic import AnyUrl

from . import config
from .bridge import CommandBridge
from .errors import BridgeError, ConsumerUnavailable, UnknownResource, UnknownTool
from .log import logger
from .tools import ALL_TOOLS, get_tool

PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

SITE_INFO_URI = "webflow://site-info"
COMMAND_QUEUE_URI = "webflow://command-queue"

RESOURCE_DEFINITIONS: List[Dict[str, str]] = [
    {
        "uri": SITE_INFO_URI,
        "name": "Site Information",
        "description": "Current Webflow site information and connection status",
        "mimeType": "application/json",
    },
    {
        "uri": COMMAND_QUEUE_URI,
        "name": "Command Queue",
        "description": "Current command queue status",
        "mimeType": "application/json",
    },
]

# ---------------------------------------------------------------------------
# Tool results
# ---------------------------------------------------------------------------


def ok(result: Any) -> List[TextContent]:
    """Wrap a Designer result in an MCP TextContent list."""
    text = result if isinstance(result, str) else json.dumps(result, indent=2)
    return [TextContent(type="text", text=text)]


def err(exc: BridgeError, tool_name: str) -> List[TextContent]:
    """Wrap a bridge failure as a structured JSON error in TextContent."""
    body: Dict[str, Any] = {
        "error": True,
        "message": str(exc),
        "toolName": tool_name,
        "errorType": exc.error_type,
    }
    if isinstance(exc, ConsumerUnavailable):
        body["args"] = exc.arguments
    return [TextContent(type="text", text=json.dumps(body))]


async def invoke_tool(
    bridge: CommandBridge, name: str, arguments: Optional[Dict[str, Any]]
) -> List[TextContent]:
    if get_tool(name) is None:
        return err(UnknownTool(name), name)

    logger.info("Executing tool: %s", name)
    try:
        result = await bridge.execute(name, arguments or {})
    except BridgeError as exc:
        return err(exc, name)
    return ok(result)


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


def read_resource(bridge: CommandBridge, uri: str) -> str:
    uri = str(uri).rstrip("/")
    if uri == SITE_INFO_URI:
        return json.dumps(bridge.status(), indent=2)
    if uri == COMMAND_QUEUE_URI:
        return json.dumps(bridge.queue_snapshot(), indent=2)
    raise UnknownResource(uri)


# ---------------------------------------------------------------------------
# MCP SDK server
# ---------------------------------------------------------------------------


def build_mcp_server(bridge: CommandBridge) -> Server:
    server = Server(config.SERVER_NAME, version=config.SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> List[Tool]:
        return ALL_TOOLS

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        return await invoke_tool(bridge, name, arguments)

    @server.list_resources()
    async def handle_list_resources() -> List[Resource]:
        return [Resource(**definition) for definition in RESOURCE_DEFINITIONS]

    @server.read_resource()
    async def handle_read_resource(uri: AnyUrl) -> List[ReadResourceContents]:
        text = read_resource(bridge, str(uri))
        return [ReadResourceContents(content=text, mime_type="application/json")]

    return server


# ---------------------------------------------------------------------------
# JSON-RPC for the inspector event-stream channel
# ---------------------------------------------------------------------------


def result_response(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def error_response(request_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}


def parse_error() -> Dict[str, Any]:
    return error_response(None, PARSE_ERROR, "Parse error")


class JsonRpcDispatcher:
    """Answers the subset of MCP methods the inspector uses over SSE."""

    def __init__(self, bridge: CommandBridge):
        self.bridge = bridge

    async def handle(self, message: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Return the response for *message*, or None when none is due."""
        method = message.get("method")
        request_id = message.get("id")
        params = message.get("params")
        if params is None:
            params = {}

        if method is None:
            if request_id is None:
                return None
            return error_response(request_id, INVALID_REQUEST, "Invalid Request")

        if method in ("initialized", "notifications/initialized"):
            return None

        if not isinstance(params, dict):
            return error_response(request_id, INVALID_PARAMS, "Invalid params: expected an object")

        if method == "initialize":
            return result_response(request_id, {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {
                    "tools": {},
                    "resources": {"subscribe": False, "list": True},
                },
                "serverInfo": {
                    "name": config.SERVER_NAME,
                    "version": config.SERVER_VERSION,
                },
            })

        if method == "ping":
            return result_response(request_id, {})

        if method == "tools/list":
            return result_response(request_id, {
                "tools": [
                    {
                        "name": tool.name,
                        "description": tool.description,
                        "inputSchema": tool.inputSchema,
                    }
                    for tool in ALL_TOOLS
                ]
            })

        if method == "resources/list":
            return result_response(request_id, {"resources": RESOURCE_DEFINITIONS})

        if method == "resources/read":
            uri = params.get("uri", "")
            try:
                text = read_resource(self.bridge, uri)
            except UnknownResource as exc:
                return error_response(request_id, INVALID_PARAMS, str(exc))
            return result_response(request_id, {
                "contents": [{"uri": uri, "mimeType": "application/json", "text": text}]
            })

        if method == "tools/call":
            name = params.get("name")
            if get_tool(name) is None:
                return error_response(request_id, METHOD_NOT_FOUND, f"Unknown tool: {name}")
            arguments = params.get("arguments")
            if arguments is not None and not isinstance(arguments, dict):
                return error_response(
                    request_id, INVALID_PARAMS, "Invalid params: tool arguments must be an object"
                )
            content = await invoke_tool(self.bridge, name, arguments)
            return result_response(request_id, {
                "content": [{"type": "text", "text": item.text} for item in content]
            })

        if request_id is None:
            logger.debug("Ignoring notification %s", method)
            return None
        return error_response(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")
