"""Execution entry points.

Provides the ``ExecutionOrchestrator`` that routes invocations to the
correct backend based on their ``ExecutionMode``.
"""

from .orchestrator import ExecutionOrchestrator, execute_headless, execute_headless_sync

__all__ = ["ExecutionOrchestrator", "execute_headless", "execute_headless_sync"]
