"""Command bridge between MCP tool calls and the polling Designer extension.

A tool call becomes a ``Command`` in the pending map and the caller awaits its
completion future. The extension polls ``take_next`` for work, runs the command
inside the Designer and posts the outcome to ``complete``. A per-command timer
removes commands whose result never arrives. Whichever of ``complete`` and the
timer reaches a command first removes it; the other finds nothing and does
nothing.
"""

import asyncio
import json
import time
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union

from . import config
from .errors import BridgeShutdown, CommandTimeout, ConsumerUnavailable, ToolExecutionFailed
from .log import logger
from .models import CommandMessage, Heartbeat
from .state import BridgeState, Command, StateStore


def iso_timestamp(ts: float) -> str:
    """Format epoch seconds the way browsers print ``Date.toISOString()``."""
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _error_message(error: Any) -> str:
    if error is None:
        return "Tool execution failed"
    if isinstance(error, str):
        return error
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return json.dumps(error)


class CommandBridge:
    def __init__(
        self,
        store: Optional[StateStore] = None,
        *,
        command_timeout: float = config.DEFAULT_COMMAND_TIMEOUT,
        liveness_window: float = config.DEFAULT_LIVENESS_WINDOW,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store if store is not None else StateStore()
        self.command_timeout = command_timeout
        self.liveness_window = liveness_window
        self._clock = clock

    # ------------------------------------------------------------------
    # Liveness
    # ------------------------------------------------------------------

    def is_consumer_connected(self) -> bool:
        state = self.store.get()
        if not state.consumer_connected:
            return False
        return self._clock() - state.last_consumer_ping < self.liveness_window

    # ------------------------------------------------------------------
    # Producer side
    # ------------------------------------------------------------------

    def _new_command_id(self) -> str:
        return f"{int(self._clock() * 1000)}-{uuid.uuid4().hex[:12]}"

    def submit(self, name: str, params: Optional[Dict[str, Any]] = None) -> asyncio.Future:
        """Queue *name* for the extension and return the future of its result.

        Raises ``ConsumerUnavailable`` without touching the state when the
        extension has not polled within the liveness window.
        """
        if params is None:
            params = {}
        if not isinstance(params, dict):
            raise TypeError(f"params for {name} must be a dict, not {type(params).__name__}")
        if not self.is_consumer_connected():
            logger.warning("Rejecting %s: Designer extension not connected", name)
            raise ConsumerUnavailable(name, params)

        loop = asyncio.get_running_loop()
        command = Command(
            id=self._new_command_id(),
            name=name,
            params=params,
            created_at=self._clock(),
            completion=loop.create_future(),
        )
        command.timer = loop.call_later(self.command_timeout, self._expire, command.id)

        state = self.store.get()
        pending = dict(state.pending)
        pending[command.id] = command
        self.store.set(
            replace(state, pending=pending, command_count=state.command_count + 1)
        )
        logger.info("Queued command %s (%s)", command.name, command.id)
        return command.completion

    async def execute(self, name: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.submit(name, params)

    def _expire(self, command_id: str) -> None:
        state = self.store.get()
        command = state.pending.get(command_id)
        if command is None:
            return
        pending = dict(state.pending)
        del pending[command_id]
        self.store.set(replace(state, pending=pending))
        logger.warning("Command %s (%s) timed out", command.name, command_id)
        command.settle_error(CommandTimeout(command.name, self.command_timeout))

    # ------------------------------------------------------------------
    # Consumer side
    # ------------------------------------------------------------------

    def take_next(self) -> Union[CommandMessage, Heartbeat]:
        """Record a ping and hand out the oldest undelivered command, if any."""
        now = self._clock()
        state = replace(self.store.get(), consumer_connected=True, last_consumer_ping=now)

        command = next((c for c in state.pending.values() if not c.delivered), None)
        if command is None:
            self.store.set(state)
            return Heartbeat(timestamp=iso_timestamp(now))

        message = CommandMessage(id=command.id, name=command.name, params=command.params)
        pending = dict(state.pending)
        pending[command.id] = replace(command, delivered=True)
        self.store.set(replace(state, pending=pending))
        logger.info("Delivered command %s (%s)", command.name, command.id)
        return message

    def complete(self, command_id: str, payload: Any) -> bool:
        """Settle the command *command_id* with *payload*.

        Unknown ids (late results after a timeout, duplicates) are ignored and
        reported by returning False.
        """
        state = self.store.get()
        command = state.pending.get(command_id)
        if command is None:
            logger.info("Ignoring result for unknown command %s", command_id)
            return False

        pending = dict(state.pending)
        del pending[command_id]
        self.store.set(replace(state, pending=pending))
        command.cancel_timer()

        if isinstance(payload, dict) and "error" in payload:
            message = _error_message(payload["error"])
            logger.error("Command %s (%s) failed: %s", command.name, command_id, message)
            command.settle_error(ToolExecutionFailed(message))
        else:
            logger.info("Command %s (%s) completed", command.name, command_id)
            command.settle_result(payload)
        return True

    def shutdown(self) -> None:
        """Abort every pending command so no caller waits on a dead bridge."""
        state = self.store.get()
        if not state.pending:
            return
        self.store.set(replace(state, pending={}))
        for command in state.pending.values():
            command.cancel_timer()
            command.settle_error(BridgeShutdown(command.name))
        logger.info("Aborted %d pending command(s)", len(state.pending))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def status(self) -> Dict[str, Any]:
        state = self.store.get()
        return {
            "connected": self.is_consumer_connected(),
            "lastPing": _last_ping(state),
            "commandsExecuted": state.command_count,
            "pendingCommands": len(state.pending),
        }

    def queue_snapshot(self) -> Dict[str, Any]:
        state = self.store.get()
        now = self._clock()
        queue = [
            {
                "id": c.id,
                "name": c.name,
                "timestamp": iso_timestamp(c.created_at),
                "delivered": c.delivered,
                "age": int((now - c.created_at) * 1000),
            }
            for c in state.pending.values()
        ]
        return {
            "totalCommands": state.command_count,
            "pendingCommands": len([c for c in queue if not c["delivered"]]),
            "queue": queue,
        }


def _last_ping(state: BridgeState) -> str:
    if not state.last_consumer_ping:
        return "Never"
    return iso_timestamp(state.last_consumer_ping)
