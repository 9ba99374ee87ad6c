"""Agent backend - streaming Claude Agent SDK session.

The session is a lazy, finite, non-restartable stream of events.  The
adapter is a terminal-event detector, not a full stream consumer:

* terminal ``result`` with sub-kind ``success``  → return its text
* terminal ``result`` with any other sub-kind     → ``BackendError``
* stream exhausted with no terminal event         → ``BackendError``
* deadline fired before a terminal event          → ``BackendError``

Everything else in the stream (assistant turns, tool calls, system
notices, partial messages) is ignored.

The consumer and the deadline run as two tasks; whichever finishes first
decides the outcome.  On deadline the consumer task is cancelled, which
closes the SDK generator, and the adapter waits for it to unwind before
failing.
"""

import asyncio
import logging
import os
import time
from contextlib import aclosing
from typing import Any, AsyncIterator, Callable, TYPE_CHECKING

from .base import Backend
from ..errors import BackendError, ExecutionError, TransportError
from ..instructions import AGENT_ALLOWED_TOOLS, SYSTEM_PROMPT
from ..protocol import StreamEvent
from ..timeout import TimeoutGuard

if TYPE_CHECKING:
    from ..logging import TraceLogger
    from ..protocol import ExecutorConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 300_000

NO_RESULT_MESSAGE = "No result received from agent backend"

SessionFactory = Callable[[str, "ExecutorConfig"], AsyncIterator[StreamEvent]]

# SDK message class → stream event type
_SDK_EVENT_TYPES = {
    "AssistantMessage": "assistant",
    "UserMessage": "user",
    "SystemMessage": "system",
    "StreamEvent": "stream_event",
    "ResultMessage": "result",
}


def to_stream_event(message: Any) -> StreamEvent:
    """Convert an SDK message object into a ``StreamEvent``."""
    if isinstance(message, dict):
        return StreamEvent.from_dict(message)

    event_type = _SDK_EVENT_TYPES.get(type(message).__name__, type(message).__name__)
    if event_type != "result":
        return StreamEvent(type=event_type, raw=message)

    errors = getattr(message, "errors", None) or []
    return StreamEvent(
        type="result",
        subtype=getattr(message, "subtype", None),
        result=getattr(message, "result", None),
        errors=[str(e) for e in errors],
        raw=message,
    )


def build_agent_options(config: "ExecutorConfig") -> dict[str, Any]:
    """Keyword arguments for ``ClaudeAgentOptions``."""
    return {
        "model": config.model,
        "allowed_tools": list(AGENT_ALLOWED_TOOLS),
        "system_prompt": SYSTEM_PROMPT,
        "cwd": os.getcwd(),
    }


async def sdk_session(prompt: str, config: "ExecutorConfig") -> AsyncIterator[StreamEvent]:
    """Open a Claude Agent SDK session and yield its events."""
    try:
        from claude_agent_sdk import query, ClaudeAgentOptions
    except ImportError:
        raise ImportError(
            "claude-agent-sdk is required for the agent backend. "
            "Install it with: pip install claude-agent-sdk"
        )

    options = ClaudeAgentOptions(**build_agent_options(config))
    async with aclosing(query(prompt=prompt, options=options)) as messages:
        async for message in messages:
            yield to_stream_event(message)


class AgentBackend(Backend):
    """Streaming, tool-using agent session with a hard deadline."""

    name = "agent"

    def __init__(
        self,
        logger: "TraceLogger | None" = None,
        session_factory: SessionFactory | None = None,
    ):
        super().__init__(logger=logger)
        self.session_factory = session_factory or sdk_session

    async def _do_run(self, prompt: str, config: "ExecutorConfig") -> str:
        timeout_ms = config.timeout_ms or DEFAULT_TIMEOUT_MS
        logger.info(
            "Agent session: model=%s timeout=%dms prompt_chars=%d",
            config.model or "<default>", timeout_ms, len(prompt),
        )

        async with TimeoutGuard(timeout_ms) as guard:
            consumer = asyncio.ensure_future(self._consume(prompt, config))
            deadline = asyncio.ensure_future(guard.wait())
            try:
                done, _ = await asyncio.wait(
                    {consumer, deadline},
                    return_when=asyncio.FIRST_COMPLETED,
                )
            except asyncio.CancelledError:
                consumer.cancel()
                raise
            finally:
                deadline.cancel()

            if consumer not in done:
                # Deadline won; abort the session and let it unwind.
                consumer.cancel()
                await asyncio.wait({consumer})
                if not consumer.cancelled():
                    consumer.exception()  # mark retrieved
                if self.logger:
                    self.logger.log("agent_timeout", timeout_ms=timeout_ms)
                raise BackendError(
                    f"{NO_RESULT_MESSAGE} (timed out after {timeout_ms}ms)"
                )

        return consumer.result()

    async def _consume(self, prompt: str, config: "ExecutorConfig") -> str:
        """Read events until the terminal result; return its text."""
        started = time.monotonic()
        ignored = 0
        terminal: str | None = None
        stream = None
        try:
            stream = self.session_factory(prompt, config)
            async for event in stream:
                if not event.is_terminal:
                    ignored += 1
                    logger.debug("Ignoring %s event", event.type)
                    continue

                terminal = event.subtype or "unknown"
                if event.is_success:
                    return event.result or ""

                detail = "; ".join(event.errors) if event.errors else terminal
                raise BackendError(f"Agent backend error: {detail}")
        except ExecutionError:
            raise
        except Exception as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()
            logger.debug(
                "Agent stream finished: terminal=%s ignored=%d elapsed=%.0fms",
                terminal, ignored, (time.monotonic() - started) * 1000,
            )
            if self.logger:
                self.logger.log(
                    "agent_stream_complete",
                    terminal=terminal,
                    ignored_events=ignored,
                )

        raise BackendError(NO_RESULT_MESSAGE)
