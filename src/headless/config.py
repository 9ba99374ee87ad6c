"""Configuration loading.

Reads the process environment (``.env`` files are loaded by the CLI)::

    MODE                 cli | api            (default: cli)
    ANTHROPIC_API_KEY    required when MODE=api
    HEADLESS_MODEL       model identifier     (optional)
    HEADLESS_TIMEOUT_MS  per-call deadline    (default: 60000)
    HEADLESS_MAX_TOKENS  output token bound   (optional)

The external mode names map onto execution modes at this boundary:
``cli`` → ``agent`` and ``api`` → ``direct``.  Any problem raises
``ConfigurationError``; callers report it and stop before executing.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .errors import ConfigurationError
from .protocol import ExecutionMode, ExecutorConfig

logger = logging.getLogger(__name__)

MODE_MAP = {
    "cli": ExecutionMode.AGENT,
    "api": ExecutionMode.DIRECT,
}

DEFAULT_SPEC_FILE = "spec.html"
DEFAULT_DEBOUNCE_MS = 300
DEFAULT_TIMEOUT_MS = 60_000


@dataclass(frozen=True)
class Config:
    """Validated startup configuration."""
    mode: str                  # "cli" or "api"
    spec_file: Path
    api_key: str | None = None
    model: str | None = None
    max_tokens: int | None = None
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def execution_mode(self) -> ExecutionMode:
        return MODE_MAP[self.mode]

    def executor_config(self) -> ExecutorConfig:
        """Per-call settings for the orchestrator."""
        return ExecutorConfig(
            mode=self.execution_mode,
            api_key=self.api_key,
            model=self.model,
            timeout_ms=self.timeout_ms,
            max_tokens=self.max_tokens,
        )

    def describe(self) -> dict:
        """Printable summary with the API key masked."""
        return {
            "mode": self.mode,
            "execution_mode": self.execution_mode.value,
            "api_key": _mask(self.api_key),
            "model": self.model,
            "max_tokens": self.max_tokens,
            "spec_file": str(self.spec_file),
            "debounce_ms": self.debounce_ms,
            "timeout_ms": self.timeout_ms,
        }


def load_config(
    cwd: Path | str | None = None,
    env: Mapping[str, str] | None = None,
    spec_file: Path | str | None = None,
) -> Config:
    """Load and validate configuration.

    Args:
        cwd: Directory holding the spec file (default: current directory)
        env: Environment mapping (default: ``os.environ``)
        spec_file: Explicit spec file path, overriding ``<cwd>/spec.html``

    Raises:
        ConfigurationError: invalid mode, missing API key, missing spec
            file, or a non-integer numeric setting.
    """
    env = os.environ if env is None else env
    cwd = Path(cwd) if cwd is not None else Path.cwd()

    raw_mode = env.get("MODE")
    mode = (raw_mode or "cli").lower()
    if mode not in MODE_MAP:
        raise ConfigurationError(f"Invalid MODE: {raw_mode}. Must be 'cli' or 'api'")

    api_key = None
    if mode == "api":
        api_key = env.get("ANTHROPIC_API_KEY")
        if not api_key:
            raise ConfigurationError(
                "ANTHROPIC_API_KEY is required when MODE=api "
                "(set it in a .env file or the environment)"
            )

    spec_path = Path(spec_file) if spec_file is not None else cwd / DEFAULT_SPEC_FILE
    if not spec_path.is_absolute():
        spec_path = cwd / spec_path
    if not spec_path.exists():
        raise ConfigurationError(f"{spec_path.name} not found in {spec_path.parent}")

    config = Config(
        mode=mode,
        spec_file=spec_path,
        api_key=api_key,
        model=env.get("HEADLESS_MODEL") or None,
        max_tokens=_int_setting(env, "HEADLESS_MAX_TOKENS"),
        timeout_ms=_int_setting(env, "HEADLESS_TIMEOUT_MS") or DEFAULT_TIMEOUT_MS,
    )

    logger.debug("Configuration loaded: mode=%s, specFile=%s", mode, spec_path)
    return config


def _int_setting(env: Mapping[str, str], name: str) -> int | None:
    value = env.get(name)
    if not value:
        return None
    try:
        parsed = int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if parsed <= 0:
        raise ConfigurationError(f"{name} must be positive, got {parsed}")
    return parsed


def _mask(secret: str | None) -> str | None:
    if not secret:
        return None
    return secret[:4] + "…" if len(secret) > 8 else "…"
