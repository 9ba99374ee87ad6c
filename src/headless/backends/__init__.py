"""Backend transports for headless invocations."""

from .base import Backend
from .agent import AgentBackend
from .direct import DirectBackend
from .registry import get_backend, list_modes

__all__ = [
    "Backend",
    "AgentBackend",
    "DirectBackend",
    "get_backend",
    "list_modes",
]
