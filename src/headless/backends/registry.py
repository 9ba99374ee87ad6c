"""Backend registry - the closed mapping from execution mode to transport."""

from typing import TYPE_CHECKING

from ..protocol import ExecutionMode
from .base import Backend

if TYPE_CHECKING:
    from ..logging import TraceLogger


def get_backend(
    mode: ExecutionMode | str,
    logger: "TraceLogger | None" = None,
) -> Backend:
    """Return a fresh backend for ``mode``.

    Raises:
        ValueError: if ``mode`` is not ``agent`` or ``direct``.
    """
    match ExecutionMode(mode):
        case ExecutionMode.AGENT:
            from .agent import AgentBackend
            return AgentBackend(logger=logger)
        case ExecutionMode.DIRECT:
            from .direct import DirectBackend
            return DirectBackend(logger=logger)


def list_modes() -> list[str]:
    """Names of the supported execution modes."""
    return [m.value for m in ExecutionMode]
