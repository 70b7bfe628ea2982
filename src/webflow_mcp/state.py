"""Bridge state record and the store that holds it.

The store keeps a single ``BridgeState``. Writers never mutate the record in
place: they build a replacement (with a copied ``pending`` dict) and hand it
back to ``StateStore.set``. All access happens on one event loop, so each
read-modify-write step is atomic between awaits.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .log import logger


@dataclass
class Command:
    id: str
    name: str
    params: Dict[str, Any]
    created_at: float
    completion: asyncio.Future
    delivered: bool = False
    timer: Optional[asyncio.TimerHandle] = field(default=None, repr=False)

    def settle_result(self, value: Any) -> bool:
        """Resolve the completion slot. Returns False if it was already settled."""
        if self.completion.done():
            return False
        self.completion.set_result(value)
        return True

    def settle_error(self, exc: BaseException) -> bool:
        if self.completion.done():
            return False
        self.completion.set_exception(exc)
        return True

    def cancel_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()


@dataclass(frozen=True)
class BridgeState:
    command_count: int = 0
    pending: Dict[str, Command] = field(default_factory=dict)
    consumer_connected: bool = False
    last_consumer_ping: float = 0.0


class StateStore:
    """Holder for the one ``BridgeState`` shared by every bridge operation."""

    def __init__(self, initial: Optional[BridgeState] = None):
        self._state = initial if initial is not None else BridgeState()

    def get(self) -> BridgeState:
        return self._state

    def set(self, state: BridgeState) -> None:
        self._state = state
        logger.debug(
            "State updated: commandCount=%s queueLength=%s consumerConnected=%s",
            state.command_count,
            len(state.pending),
            state.consumer_connected,
        )
