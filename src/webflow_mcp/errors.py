"""Error kinds raised by the command bridge and the protocol front."""

from typing import Any, Dict, Optional


class BridgeError(Exception):
    """Base class for failures reported back to the MCP caller in-band."""

    error_type = "bridge_error"


class ConsumerUnavailable(BridgeError):
    """The Designer extension has not polled within the liveness window."""

    error_type = "consumer_unavailable"

    def __init__(self, tool_name: str, arguments: Optional[Dict[str, Any]] = None):
        self.tool_name = tool_name
        self.arguments = arguments if arguments is not None else {}
        super().__init__(
            f"Tool '{tool_name}' requires the Webflow Designer extension to be "
            "connected. Please ensure the extension is installed and active in "
            "Webflow Designer."
        )


class CommandTimeout(BridgeError):
    error_type = "timeout"

    def __init__(self, tool_name: str, timeout: float):
        self.tool_name = tool_name
        self.timeout = timeout
        super().__init__(f"Command {tool_name} timed out after {timeout:g} seconds")


class ToolExecutionFailed(BridgeError):
    """The extension ran the command and reported an error payload."""

    error_type = "tool_execution_failed"


class BridgeShutdown(BridgeError):
    error_type = "shutdown"

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Command {tool_name} aborted: bridge shutting down")


class UnknownTool(BridgeError):
    error_type = "unknown_tool"

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class UnknownResource(LookupError):
    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"Unknown resource: {uri}")
