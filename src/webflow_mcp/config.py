"""Environment-driven settings for the relay."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__

SERVER_NAME = "webflow-designer-mcp"
SERVER_VERSION = __version__
AGENT_NAME = "webflow-mcp-agent"

DEFAULT_COMMAND_TIMEOUT = 30.0
DEFAULT_LIVENESS_WINDOW = 60.0


def _env(name: str, env_name: str) -> AliasChoices:
    # field name for keyword construction, WEBFLOW_MCP_* for the environment
    return AliasChoices(name, env_name)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8787
    log_level: str = "INFO"

    command_timeout: float = Field(
        DEFAULT_COMMAND_TIMEOUT,
        validation_alias=_env("command_timeout", "WEBFLOW_MCP_COMMAND_TIMEOUT"),
    )
    liveness_window: float = Field(
        DEFAULT_LIVENESS_WINDOW,
        validation_alias=_env("liveness_window", "WEBFLOW_MCP_LIVENESS_WINDOW"),
    )
    sse_keepalive: float = Field(
        30.0,
        validation_alias=_env("sse_keepalive", "WEBFLOW_MCP_SSE_KEEPALIVE"),
    )
