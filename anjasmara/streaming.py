"""Simulated server-sent-event stream.

The upstream answers in one piece; the relay slices the finished reply into
fixed-size fragments and emits them with a short pause to mimic typing. If
the upstream ever streams for real, only the fragment source changes: the
event contract (ordered data events, then `done` or `error`) stays the same.
"""
from __future__ import annotations

import asyncio
import re
from enum import Enum
from typing import AsyncGenerator, Awaitable, Callable, List, Optional

from fastapi.concurrency import run_in_threadpool

from .logger import logger

DONE_SENTINEL = "[DONE]"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


class RelayState(str, Enum):
    STARTED = "started"
    EMITTING = "emitting"
    DONE = "done"
    ERROR = "error"


def chunk_text(text: str, size: int = 60) -> List[str]:
    if size <= 0:
        raise ValueError("chunk size must be positive")
    return [text[i : i + size] for i in range(0, len(text), size)]


def normalize_newlines(text: str) -> str:
    return _LINE_BREAK.sub("\n", text)


def format_event(data: str, event: Optional[str] = None) -> str:
    lines = []
    if event:
        lines.append(f"event: {event}")
    # every line break in the payload must become a new data: line
    for part in _LINE_BREAK.split(data):
        lines.append(f"data: {part}")
    return "\n".join(lines) + "\n\n"


class StreamingRelay:
    def __init__(
        self,
        source: Callable[[], Awaitable[str]],
        on_reply: Optional[Callable[[str], None]] = None,
        chunk_size: int = 60,
        delay: float = 0.12,
    ) -> None:
        self.source = source
        self.on_reply = on_reply
        self.chunk_size = chunk_size
        self.delay = delay
        self.state = RelayState.STARTED

    async def events(self) -> AsyncGenerator[str, None]:
        try:
            reply = await self.source()
        except Exception as e:
            logger.warning("Stream aborted before emission: {}", e)
            self.state = RelayState.ERROR
            yield format_event(str(e), event="error")
            return

        if self.on_reply is not None:
            await run_in_threadpool(self.on_reply, reply)

        self.state = RelayState.EMITTING
        # SSE clients read any line break as \n, so a CRLF must not straddle two fragments
        fragments = chunk_text(normalize_newlines(reply), self.chunk_size)
        for i, fragment in enumerate(fragments):
            if i and self.delay > 0:
                await asyncio.sleep(self.delay)
            yield format_event(fragment)

        self.state = RelayState.DONE
        yield format_event(DONE_SENTINEL, event="done")
