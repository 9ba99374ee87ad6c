"""Headless Runner - single-shot prompt execution against model backends."""

__version__ = "0.1.0"

from .protocol import AssembledPrompt, ExecutorConfig, ExecutionResult, ExecutionMode
from .errors import ConfigurationError, BackendError, TransportError
from .execution import ExecutionOrchestrator, execute_headless, execute_headless_sync

__all__ = [
    "AssembledPrompt", "ExecutorConfig", "ExecutionResult", "ExecutionMode",
    "ConfigurationError", "BackendError", "TransportError",
    "ExecutionOrchestrator", "execute_headless", "execute_headless_sync",
    "__version__",
]
