"""Direct backend - one Anthropic Messages API call per invocation."""

import logging
from typing import Any, Callable, TYPE_CHECKING

from .base import Backend
from ..errors import BackendError, TransportError

if TYPE_CHECKING:
    from ..logging import TraceLogger
    from ..protocol import ExecutorConfig

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 8192


def _default_client_factory(api_key: str) -> Any:
    """Build an ``AsyncAnthropic`` client (lazy import)."""
    try:
        from anthropic import AsyncAnthropic
    except ImportError:
        raise ImportError(
            "anthropic is required for the direct backend. "
            "Install it with: pip install anthropic"
        )
    return AsyncAnthropic(api_key=api_key)


def extract_text(content: list[Any]) -> str:
    """Join the text blocks of a response, in order, with newlines.

    Non-text blocks (tool use, thinking, ...) are skipped.
    """
    return "\n".join(
        block.text for block in content if getattr(block, "type", None) == "text"
    )


class DirectBackend(Backend):
    """Single request/response completion call.

    No streaming, no tools, no multi-turn exchange.  The client is built
    per call from ``client_factory(api_key)``.
    """

    name = "direct"

    def __init__(
        self,
        logger: "TraceLogger | None" = None,
        client_factory: Callable[[str], Any] | None = None,
    ):
        super().__init__(logger=logger)
        self.client_factory = client_factory or _default_client_factory

    def build_request(self, prompt: str, config: "ExecutorConfig") -> dict[str, Any]:
        """Keyword arguments for ``messages.create``."""
        return {
            "model": config.model or DEFAULT_MODEL,
            "max_tokens": config.max_tokens or DEFAULT_MAX_TOKENS,
            "messages": [
                {"role": "user", "content": prompt},
            ],
        }

    async def _do_run(self, prompt: str, config: "ExecutorConfig") -> str:
        if not config.api_key:
            raise BackendError("API key required for API mode")

        request = self.build_request(prompt, config)
        logger.info(
            "Direct call: model=%s max_tokens=%d prompt_chars=%d",
            request["model"], request["max_tokens"], len(prompt),
        )

        try:
            client = self.client_factory(config.api_key)
            message = await client.messages.create(**request)
        except Exception as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc

        return extract_text(message.content)
