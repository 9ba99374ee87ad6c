"""Tests for the command line interface."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from headless.cli import cli
from headless.instructions import SYSTEM_PROMPT
from headless.protocol import ExecutionMode, ExecutionResult


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("MODE", "ANTHROPIC_API_KEY", "HEADLESS_MODEL",
                 "HEADLESS_TIMEOUT_MS", "HEADLESS_MAX_TOKENS"):
        monkeypatch.delenv(name, raising=False)
    (tmp_path / "spec.html").write_text("<app></app>")
    return tmp_path


def fake_execute(result, seen):
    def execute(prompt, config, logger=None):
        seen.append((prompt, config))
        if logger:
            logger.log("invocation_start", mode=config.mode.value)
            logger.log("invocation_complete", **result.to_dict())
        return result
    return execute


class TestRun:

    def test_success_prints_response(self, project):
        seen = []
        result = ExecutionResult(success=True, response="<header/>", duration_ms=12)
        with patch("headless.execution.execute_headless_sync", fake_execute(result, seen)):
            out = CliRunner().invoke(cli, ["run", "--prompt", "make a header"])

        assert out.exit_code == 0, out.output
        assert "<header/>" in out.output
        prompt, config = seen[0]
        assert prompt.prompt == "make a header"
        assert config.mode is ExecutionMode.AGENT

    def test_failure_exits_nonzero(self, project):
        result = ExecutionResult(success=False, response="", error="boom", duration_ms=3)
        with patch("headless.execution.execute_headless_sync", fake_execute(result, [])):
            out = CliRunner().invoke(cli, ["run", "--prompt", "x"])

        assert out.exit_code == 1
        assert "Failed: boom" in out.output

    def test_reads_stdin_and_overrides(self, project):
        seen = []
        result = ExecutionResult(success=True, response="ok", duration_ms=1)
        with patch("headless.execution.execute_headless_sync", fake_execute(result, seen)):
            out = CliRunner().invoke(
                cli, ["run", "--model", "m-2", "--timeout-ms", "250"], input="from stdin",
            )

        assert out.exit_code == 0, out.output
        prompt, config = seen[0]
        assert prompt.prompt == "from stdin"
        assert config.model == "m-2"
        assert config.timeout_ms == 250

    def test_output_dir_writes_trace_and_result(self, project):
        result = ExecutionResult(success=True, response="ok", duration_ms=1)
        with patch("headless.execution.execute_headless_sync", fake_execute(result, [])):
            out = CliRunner().invoke(cli, ["run", "--prompt", "x", "--output", "out"])

        assert out.exit_code == 0, out.output
        saved = json.loads((project / "out" / "result.json").read_text())
        assert saved == {"success": True, "response": "ok", "durationMs": 1}
        assert (project / "out" / "trace.jsonl").read_text().count("\n") == 2

    def test_missing_spec_file_is_fatal(self, project):
        (project / "spec.html").unlink()
        out = CliRunner().invoke(cli, ["run", "--prompt", "x"])
        assert out.exit_code == 1
        assert "spec.html not found" in out.output

    def test_api_mode_without_key_is_fatal(self, project, monkeypatch):
        monkeypatch.setenv("MODE", "api")
        out = CliRunner().invoke(cli, ["run", "--prompt", "x"])
        assert out.exit_code == 1
        assert "ANTHROPIC_API_KEY" in out.output

    def test_prompt_and_file_are_exclusive(self, project):
        (project / "p.txt").write_text("x")
        out = CliRunner().invoke(cli, ["run", "--prompt", "x", "--prompt-file", "p.txt"])
        assert out.exit_code == 2


class TestOtherCommands:

    def test_config(self, project, monkeypatch):
        monkeypatch.setenv("MODE", "api")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-abcdefgh")
        out = CliRunner().invoke(cli, ["config"])
        assert out.exit_code == 0, out.output
        assert "execution_mode: direct" in out.output
        assert "sk-abcdefgh" not in out.output

    def test_instructions(self):
        out = CliRunner().invoke(cli, ["instructions"])
        assert out.exit_code == 0
        assert SYSTEM_PROMPT in out.output
