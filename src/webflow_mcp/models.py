from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field


class CommandMessage(BaseModel):
    """A command handed to the Designer extension by the poll endpoint."""

    id: str
    name: str
    params: Dict[str, Any] = Field(default_factory=dict)


class Heartbeat(BaseModel):
    type: Literal["heartbeat"] = "heartbeat"
    timestamp: str


class CommandResult(BaseModel):
    id: str
    payload: Any = None


class Acknowledgement(BaseModel):
    success: bool = True
