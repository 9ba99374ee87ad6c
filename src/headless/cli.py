"""CLI for headless invocations."""

import json
import sys
import uuid
from pathlib import Path

import click
from dotenv import load_dotenv

from .config import load_config
from .errors import ConfigurationError
from .instructions import SYSTEM_PROMPT
from .logging import TraceLogger
from .protocol import AssembledPrompt

# Load .env file if present
load_dotenv()


@click.group()
@click.version_option(package_name="headless-runner")
def cli():
    """Headless runner - submit one assembled prompt to a model backend."""
    pass


def _load_or_exit(spec_file: str | None):
    try:
        return load_config(spec_file=spec_file)
    except ConfigurationError as e:
        click.echo(f"✗ {e}", err=True)
        raise SystemExit(1)


@cli.command("run")
@click.option("--prompt", "-p", "prompt_text", help="Prompt text (default: read stdin)")
@click.option("--prompt-file", type=click.Path(exists=True, dir_okay=False), help="Read the prompt from a file")
@click.option("--spec-file", type=click.Path(), help="Spec file (default: ./spec.html)")
@click.option("--model", "-m", help="Model to use (overrides HEADLESS_MODEL)")
@click.option("--timeout-ms", type=int, help="Deadline in milliseconds (overrides HEADLESS_TIMEOUT_MS)")
@click.option("--output", "-o", type=click.Path(), help="Output directory for trace and result")
def run(
    prompt_text: str | None,
    prompt_file: str | None,
    spec_file: str | None,
    model: str | None,
    timeout_ms: int | None,
    output: str | None,
):
    """Run one headless invocation."""
    from dataclasses import replace

    from .execution import execute_headless_sync

    if prompt_text and prompt_file:
        raise click.UsageError("Use either --prompt or --prompt-file, not both")

    config = _load_or_exit(spec_file)

    if prompt_file:
        prompt_text = Path(prompt_file).read_text()
    elif prompt_text is None:
        prompt_text = sys.stdin.read()
    if not prompt_text.strip():
        raise click.UsageError("Prompt is empty")

    executor_config = config.executor_config()
    if model:
        executor_config = replace(executor_config, model=model)
    if timeout_ms:
        executor_config = replace(executor_config, timeout_ms=timeout_ms)

    # Set up tracing if output specified
    logger = None
    if output:
        output_dir = Path(output)
        output_dir.mkdir(parents=True, exist_ok=True)
        logger = TraceLogger(
            output_path=output_dir / "trace.jsonl",
            run_id=str(uuid.uuid4())[:8],
        )

    click.echo(f"Running {executor_config.mode.value} backend...", err=True)

    try:
        result = execute_headless_sync(
            AssembledPrompt(prompt=prompt_text), executor_config, logger=logger,
        )
    finally:
        if logger:
            logger.close()

    if output:
        result_path = Path(output) / "result.json"
        result_path.write_text(json.dumps(result.to_dict(), indent=2))
        click.echo(f"Trace: {output}/trace.jsonl", err=True)

    if not result.success:
        click.echo(f"✗ Failed: {result.error} ({result.duration_ms}ms)", err=True)
        raise SystemExit(1)

    click.echo(result.response)
    click.echo(f"✓ Done in {result.duration_ms}ms", err=True)


@cli.command("config")
@click.option("--spec-file", type=click.Path(), help="Spec file (default: ./spec.html)")
def show_config(spec_file: str | None):
    """Show the resolved configuration."""
    config = _load_or_exit(spec_file)
    for key, value in config.describe().items():
        click.echo(f"{key}: {value}")


@cli.command("instructions")
def instructions():
    """Print the fixed system instruction sent to the agent backend."""
    click.echo(SYSTEM_PROMPT)


if __name__ == "__main__":
    cli()
