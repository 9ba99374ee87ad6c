"""Deadline timer with a cooperative cancellation signal."""

import asyncio
import logging

logger = logging.getLogger(__name__)


class TimeoutGuard:
    """Owns one deadline timer and the signal it fires.

    Use as an async context manager; the timer is armed on entry and
    always released on exit, whether the body returned, raised or was
    cancelled::

        async with TimeoutGuard(5000) as guard:
            ...
            await guard.wait()   # returns once the deadline fires

    Each call creates its own guard, nothing is shared.
    """

    def __init__(self, timeout_ms: int):
        if timeout_ms < 0:
            raise ValueError(f"timeout_ms must be non-negative, got {timeout_ms}")
        self.timeout_ms = timeout_ms
        self._signal = asyncio.Event()
        self._handle: asyncio.TimerHandle | None = None

    @property
    def expired(self) -> bool:
        """True once the deadline has fired."""
        return self._signal.is_set()

    @property
    def armed(self) -> bool:
        """True while the timer is pending."""
        return self._handle is not None

    async def wait(self) -> None:
        """Suspend until the deadline fires."""
        await self._signal.wait()

    def _fire(self) -> None:
        self._handle = None
        logger.warning("Deadline of %dms reached, cancelling session", self.timeout_ms)
        self._signal.set()

    async def __aenter__(self) -> "TimeoutGuard":
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.timeout_ms / 1000, self._fire)
        return self

    async def __aexit__(self, *args) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
