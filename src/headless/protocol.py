"""Data contracts for headless invocations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ExecutionMode(str, Enum):
    """Which backend transport serves a call."""
    AGENT = "agent"    # streaming, tool-using agent session
    DIRECT = "direct"  # one synchronous completion request


@dataclass(frozen=True)
class AssembledPrompt:
    """A fully-assembled prompt.

    ``prompt`` is the entire context sent to the backend.  ``metadata`` is
    whatever the prompt assembler attached; the core never reads it.
    """
    prompt: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: dict) -> "AssembledPrompt":
        """Create from ``{"prompt": ..., **metadata}``."""
        metadata = {k: v for k, v in d.items() if k != "prompt"}
        return cls(prompt=d["prompt"], metadata=metadata)


@dataclass(frozen=True)
class ExecutorConfig:
    """Per-call backend settings, validated upstream."""
    mode: ExecutionMode
    api_key: str | None = None
    model: str | None = None
    timeout_ms: int | None = None
    max_tokens: int | None = None

    @classmethod
    def from_dict(cls, d: dict) -> "ExecutorConfig":
        """Create from a dict using snake_case or camelCase keys."""
        return cls(
            mode=ExecutionMode(d["mode"]),
            api_key=d.get("api_key", d.get("apiKey")),
            model=d.get("model"),
            timeout_ms=d.get("timeout_ms", d.get("timeoutMs")),
            max_tokens=d.get("max_tokens", d.get("maxTokens")),
        )


@dataclass
class ExecutionResult:
    """Outcome of one headless invocation.

    On success ``response`` holds the answer and ``error`` is None.  On
    failure ``response`` is empty and ``error`` holds the message.
    """
    success: bool
    response: str
    error: str | None = None
    duration_ms: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Wire shape; ``error`` is omitted on success."""
        d: dict[str, Any] = {"success": self.success, "response": self.response}
        if self.error is not None:
            d["error"] = self.error
        d["durationMs"] = self.duration_ms
        return d


@dataclass(frozen=True)
class StreamEvent:
    """One record from an agent session stream.

    Only ``type == "result"`` is terminal.  ``raw`` keeps the object the
    backend produced, for tracing.
    """
    type: str
    subtype: str | None = None
    result: str | None = None
    errors: list[str] = field(default_factory=list)
    raw: Any = None

    @property
    def is_terminal(self) -> bool:
        return self.type == "result"

    @property
    def is_success(self) -> bool:
        return self.subtype == "success"

    @classmethod
    def from_dict(cls, d: dict) -> "StreamEvent":
        """Create from a JSON-style message (``{"type": "result", ...}``)."""
        return cls(
            type=d.get("type", "unknown"),
            subtype=d.get("subtype"),
            result=d.get("result"),
            errors=[str(e) for e in d.get("errors") or []],
            raw=d,
        )
