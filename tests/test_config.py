"""Tests for configuration loading."""

import pytest

from headless.config import (
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_TIMEOUT_MS,
    load_config,
)
from headless.errors import ConfigurationError
from headless.protocol import ExecutionMode


@pytest.fixture
def workdir(tmp_path):
    (tmp_path / "spec.html").write_text("<app></app>")
    return tmp_path


class TestLoadConfig:

    def test_defaults_to_cli_mode(self, workdir):
        config = load_config(cwd=workdir, env={})
        assert config.mode == "cli"
        assert config.execution_mode is ExecutionMode.AGENT
        assert config.api_key is None
        assert config.spec_file == workdir / "spec.html"
        assert config.debounce_ms == DEFAULT_DEBOUNCE_MS == 300
        assert config.timeout_ms == DEFAULT_TIMEOUT_MS == 60_000

    def test_mode_is_case_insensitive(self, workdir):
        config = load_config(cwd=workdir, env={"MODE": "API", "ANTHROPIC_API_KEY": "sk-x"})
        assert config.mode == "api"
        assert config.execution_mode is ExecutionMode.DIRECT

    def test_invalid_mode(self, workdir):
        with pytest.raises(ConfigurationError, match="Invalid MODE: sdk"):
            load_config(cwd=workdir, env={"MODE": "sdk"})

    def test_api_mode_requires_key(self, workdir):
        with pytest.raises(ConfigurationError, match="ANTHROPIC_API_KEY"):
            load_config(cwd=workdir, env={"MODE": "api"})

    def test_cli_mode_ignores_key(self, workdir):
        config = load_config(cwd=workdir, env={"ANTHROPIC_API_KEY": "sk-x"})
        assert config.api_key is None

    def test_missing_spec_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="spec.html not found"):
            load_config(cwd=tmp_path, env={})

    def test_explicit_spec_file(self, tmp_path):
        (tmp_path / "app.html").write_text("")
        config = load_config(cwd=tmp_path, env={}, spec_file="app.html")
        assert config.spec_file == tmp_path / "app.html"

    def test_numeric_overrides(self, workdir):
        config = load_config(cwd=workdir, env={
            "HEADLESS_TIMEOUT_MS": "1500",
            "HEADLESS_MAX_TOKENS": "2048",
            "HEADLESS_MODEL": "claude-opus",
        })
        assert config.timeout_ms == 1500
        assert config.max_tokens == 2048
        assert config.model == "claude-opus"

    @pytest.mark.parametrize("value", ["abc", "0", "-5"])
    def test_bad_numeric_values(self, workdir, value):
        with pytest.raises(ConfigurationError, match="HEADLESS_TIMEOUT_MS"):
            load_config(cwd=workdir, env={"HEADLESS_TIMEOUT_MS": value})


class TestExecutorConfig:

    def test_cli_maps_to_agent(self, workdir):
        ec = load_config(cwd=workdir, env={"HEADLESS_TIMEOUT_MS": "10"}).executor_config()
        assert ec.mode is ExecutionMode.AGENT
        assert ec.timeout_ms == 10
        assert ec.api_key is None

    def test_api_maps_to_direct(self, workdir):
        ec = load_config(
            cwd=workdir, env={"MODE": "api", "ANTHROPIC_API_KEY": "sk-secret-key"},
        ).executor_config()
        assert ec.mode is ExecutionMode.DIRECT
        assert ec.api_key == "sk-secret-key"

    def test_describe_masks_key(self, workdir):
        config = load_config(cwd=workdir, env={"MODE": "api", "ANTHROPIC_API_KEY": "sk-secret-key"})
        described = config.describe()
        assert described["api_key"] == "sk-s…"
        assert "secret" not in str(described)
