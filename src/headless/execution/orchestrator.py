"""ExecutionOrchestrator — public entry point for headless invocations.

Routes each call to the backend for its ``ExecutionMode`` and always
resolves to an ``ExecutionResult``:

1. Record the start time
2. Dispatch to the agent or direct backend
3. Catch any failure from the backend (the only catch site)
4. Normalize value or failure into the result contract
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from ..backends.base import Backend
from ..backends.registry import get_backend
from ..normalize import error_message, to_result
from ..protocol import AssembledPrompt, ExecutionMode, ExecutionResult, ExecutorConfig

if TYPE_CHECKING:
    from ..logging import TraceLogger

logger = logging.getLogger(__name__)


class ExecutionOrchestrator:
    """Dispatches invocations by mode and guarantees a result.

    ``backends`` overrides the transport used for a mode; modes without
    an override get a fresh backend from the registry on every call.
    """

    def __init__(
        self,
        logger: TraceLogger | None = None,
        backends: dict[ExecutionMode, Backend] | None = None,
    ):
        self.logger = logger
        self.backends = dict(backends or {})

    async def execute(
        self,
        prompt: AssembledPrompt,
        config: ExecutorConfig,
    ) -> ExecutionResult:
        """Run one invocation.  Never raises for backend failures.

        Returns:
            ExecutionResult with ``duration_ms`` measured from before
            dispatch to resolution.
        """
        start = time.monotonic()

        self._trace(
            "invocation_start",
            mode=_mode_name(config.mode),
            model=config.model,
            prompt_chars=len(prompt.prompt),
        )

        outcome: str | Exception
        try:
            outcome = await self._dispatch(prompt.prompt, config)
        except Exception as exc:
            logger.error("Invocation failed (%s): %s", _mode_name(config.mode), error_message(exc))
            outcome = exc

        result = to_result(outcome, int((time.monotonic() - start) * 1000))

        self._trace("invocation_complete", **result.to_dict())
        return result

    def _trace(self, event_type: str, **data) -> None:
        """Write a trace record; a failing trace file never fails the call."""
        if not self.logger:
            return
        try:
            self.logger.log(event_type, **data)
        except (OSError, ValueError) as exc:
            logger.warning("Could not write %s trace record: %s", event_type, exc)

    # ------------------------------------------------------------------
    # Mode dispatch
    # ------------------------------------------------------------------

    async def _dispatch(self, prompt: str, config: ExecutorConfig) -> str:
        """Route to the backend for ``config.mode``."""
        backend = self._backend_for(config.mode)
        return await backend.run(prompt, config)

    def _backend_for(self, mode: ExecutionMode | str) -> Backend:
        try:
            mode = ExecutionMode(mode)
        except ValueError:
            raise ValueError(f"Unknown execution mode: {mode}")
        if mode in self.backends:
            return self.backends[mode]
        return get_backend(mode, logger=self.logger)


def _mode_name(mode: ExecutionMode | str) -> str:
    return mode.value if isinstance(mode, ExecutionMode) else str(mode)


async def execute_headless(
    prompt: AssembledPrompt,
    config: ExecutorConfig,
    logger: TraceLogger | None = None,
) -> ExecutionResult:
    """Execute a headless invocation with the assembled prompt."""
    return await ExecutionOrchestrator(logger=logger).execute(prompt, config)


def execute_headless_sync(
    prompt: AssembledPrompt,
    config: ExecutorConfig,
    logger: TraceLogger | None = None,
) -> ExecutionResult:
    """Blocking wrapper around ``execute_headless`` for synchronous callers."""
    return asyncio.run(execute_headless(prompt, config, logger=logger))
