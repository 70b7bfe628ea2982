"""Server-sent-event sessions for the MCP inspector channel.

The inspector opens ``GET /sse`` and keeps it open; its JSON-RPC requests
arrive separately on ``POST /sse/message?sessionId=...`` and the replies are
pushed back down the matching stream. A session and everything it spawned is
released as soon as its stream ends.
"""

import asyncio
import json
import time
import uuid
from typing import Any, AsyncIterator, Coroutine, Dict, Optional, Set

from .log import logger


def format_event(event: str, data: str) -> str:
    return f"event: {event}\ndata: {data}\n\n"


class SseSession:
    def __init__(self, session_id: str):
        self.id = session_id
        self.queue: "asyncio.Queue[str]" = asyncio.Queue()
        self.tasks: Set[asyncio.Task] = set()

    def send(self, message: Dict[str, Any]) -> None:
        self.queue.put_nowait(format_event("message", json.dumps(message)))

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Run *coro* for this session; it is cancelled if the stream closes."""
        task = asyncio.get_running_loop().create_task(coro)
        self.tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self.tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("SSE session %s task failed: %s", self.id, task.exception())

    def close(self) -> None:
        for task in list(self.tasks):
            task.cancel()
        self.tasks.clear()


class SseSessions:
    def __init__(self) -> None:
        self._sessions: Dict[str, SseSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def open(self, session_id: Optional[str] = None) -> SseSession:
        session_id = session_id or uuid.uuid4().hex
        previous = self._sessions.pop(session_id, None)
        if previous is not None:
            previous.close()
        session = SseSession(session_id)
        self._sessions[session_id] = session
        logger.info("SSE session %s opened", session_id)
        return session

    def get(self, session_id: Optional[str]) -> Optional[SseSession]:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    def discard(self, session: SseSession) -> None:
        if self._sessions.get(session.id) is session:
            del self._sessions[session.id]
        session.close()

    def close_all(self) -> None:
        for session in list(self._sessions.values()):
            self.discard(session)


async def event_stream(
    sessions: SseSessions,
    session: SseSession,
    keepalive: float,
    endpoint: str = "/sse/message",
) -> AsyncIterator[str]:
    getter: Optional[asyncio.Task] = None
    try:
        yield format_event("endpoint", f"{endpoint}?sessionId={session.id}")
        while True:
            if getter is None:
                getter = asyncio.ensure_future(session.queue.get())
            # one pending get() spans any number of keepalives
            done, _ = await asyncio.wait({getter}, timeout=keepalive)
            if not done:
                yield f": keepalive {int(time.time() * 1000)}\n\n"
                continue
            event, getter = getter.result(), None
            yield event
    finally:
        if getter is not None:
            getter.cancel()
        sessions.discard(session)
        logger.info("SSE session %s closed", session.id)
