"""Base backend types.

Every transport implements one capability::

    async def run(prompt: str, config: ExecutorConfig) -> str

It returns the model's final answer or raises an ``ExecutionError``
(``BackendError`` / ``TransportError``).  The orchestrator is the only
caller and the only place those errors are caught.

Subclass ``Backend`` and implement ``_do_run()``.  The public ``run()``
wraps it with trace logging so every call leaves a ``backend_start`` /
``backend_complete`` pair in the trace when a logger is attached.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..normalize import error_message

if TYPE_CHECKING:
    from ..logging import TraceLogger
    from ..protocol import ExecutorConfig


class Backend(ABC):
    """Abstract base class for backend transports."""

    name: str = "backend"

    def __init__(self, logger: "TraceLogger | None" = None):
        self.logger = logger

    # ------------------------------------------------------------------
    # Public API — do NOT override
    # ------------------------------------------------------------------

    async def run(self, prompt: str, config: "ExecutorConfig") -> str:
        """Run one invocation and return the answer text."""
        if self.logger:
            self.logger.log("backend_start", backend=self.name, model=config.model)
        try:
            response = await self._do_run(prompt, config)
        except Exception as exc:
            if self.logger:
                self.logger.log(
                    "backend_complete",
                    backend=self.name,
                    success=False,
                    error=error_message(exc),
                )
            raise
        if self.logger:
            self.logger.log(
                "backend_complete",
                backend=self.name,
                success=True,
                response_chars=len(response),
            )
        return response

    # ------------------------------------------------------------------
    # Subclass contract
    # ------------------------------------------------------------------

    @abstractmethod
    async def _do_run(self, prompt: str, config: "ExecutorConfig") -> str:
        """Implement the actual backend call."""
        ...
