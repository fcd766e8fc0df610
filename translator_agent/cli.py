"""Command line interface for running the translator agent."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from dotenv import find_dotenv, load_dotenv

from translator_agent.config import load_config
from translator_agent.exceptions import BootstrapError
from translator_agent.runtime import AgentRuntime
from translator_agent.store import get_step_store
from translator_agent.utils.logging import configure_logging

app = typer.Typer(help="CLI for the AI translator agent")

step_app = typer.Typer(help="Commands for inspecting steps")
app.add_typer(step_app, name="step")


@app.callback()
def main() -> None:
    """Translator agent CLI entry point."""
    load_dotenv(find_dotenv(usecwd=True), override=False)


@app.command("run")
def run(
    config: Optional[Path] = typer.Option(None, help="Path to a YAML config file"),
    lifespan: Optional[float] = typer.Option(
        None, help="Seconds to keep listening (default: run indefinitely)"
    ),
    log_level: Optional[str] = typer.Option(None, help="debug, info, warning or error"),
) -> None:
    """
    Run the agent: log in, subscribe to step events and translate pending steps.

    Example:
        translator-agent run
        translator-agent run --config ./config.yaml --lifespan 300
    """
    agent_config = load_config(str(config) if config else None)
    configure_logging(log_level or agent_config.log_level)

    try:
        runtime = AgentRuntime.from_config(agent_config)
        asyncio.run(runtime.run(lifespan=lifespan))
    except BootstrapError as exc:
        typer.secho(f"Failed to start agent: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@step_app.command("show")
def step_show(
    step_id: str,
    config: Optional[Path] = typer.Option(None, help="Path to a YAML config file"),
) -> None:
    """
    Show a step as stored by the configured step store.

    Example:
        translator-agent step show step-1234
        # Output: Step step-1234 (task task-99): Completed
        #         Input: Hello
        #         Output: Hola
    """
    store = get_step_store(config=load_config(str(config) if config else None))

    async def _fetch():
        await store.connect()
        try:
            return await store.get_step(step_id)
        finally:
            await store.disconnect()

    try:
        step = asyncio.run(_fetch())
    except Exception as exc:
        typer.secho(f"Step not found: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.echo(f"Step {step.step_id} (task {step.task_id}): {step.step_status}")
    typer.echo(f"Input: {step.input_query}")
    if step.output is not None:
        typer.echo(f"Output: {step.output}")
    if step.cost is not None:
        typer.echo(f"Cost: {step.cost}")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
