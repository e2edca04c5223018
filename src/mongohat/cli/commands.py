# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""
Mongohat CLI Commands.

Provides a command line interface for running a disposable engine outside a
test runner and for clearing engines a crashed run left behind.
"""

from __future__ import annotations

import asyncio
import json
import signal
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.table import Table

from mongohat.errors import MongohatError
from mongohat.models import ModelMongohatOptions, ModelMongohatSettings
from mongohat.runtime.config_resolver import resolve_instance_config
from mongohat.runtime.fixture_manager import FixtureSet
from mongohat.runtime.lifecycle_controller import Mongohat
from mongohat.runtime.process_reaper import ProcessReaper

console = Console()


@click.group()
def cli() -> None:
    """Disposable MongoDB instances for integration tests."""


def load_fixture_file(path: Path) -> FixtureSet:
    """Read a fixture set from a YAML or JSON file.

    The file must hold a mapping of collection name to a list of documents.

    Raises:
        click.BadParameter: If the file content has the wrong shape.
    """
    text = path.read_text()
    try:
        if path.suffix.lower() == ".json":
            data: Any = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise click.BadParameter(f"{path}: {e}", param_hint="--fixtures") from e

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise click.BadParameter(
            f"{path}: expected a mapping of collection name to documents",
            param_hint="--fixtures",
        )
    for name, documents in data.items():
        if not isinstance(documents, list) or not all(
            isinstance(document, Mapping) for document in documents
        ):
            raise click.BadParameter(
                f"{path}: collection {name!r} must be a list of documents",
                param_hint="--fixtures",
            )
    return data


async def _wait_for_shutdown() -> None:
    shutdown_event = asyncio.Event()

    def signal_handler() -> None:
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    try:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, signal_handler)
    except NotImplementedError:
        # Signal handlers not supported on Windows
        pass
    await shutdown_event.wait()


async def _run_serve(hat: Mongohat, fixtures: FixtureSet | None, verbose: bool) -> None:
    url = await hat.start(verbose=verbose)
    try:
        console.print(f"[bold green]Ready[/bold green] {url}")
        if fixtures:
            result = await hat.load(fixtures)
            console.print(
                f"  Loaded {result.total_inserted} documents into "
                f"{len(result.inserted_counts)} collections"
            )
        console.print("[dim]Press Ctrl+C to stop[/dim]")
        await _wait_for_shutdown()
    finally:
        await hat.stop()
        console.print("[yellow]Stopped[/yellow]")


@cli.command("serve")
@click.argument("context")
@click.option("--port", type=click.IntRange(1, 65535), default=None, help="Base port")
@click.option("--db-name", default=None, help="Database name (default: CONTEXT)")
@click.option("--replica-set", is_flag=True, help="Run a replica set")
@click.option(
    "--members",
    type=click.IntRange(1, 7),
    default=None,
    help="Replica set member count",
)
@click.option("--version", "version", default=None, help="Required engine version")
@click.option(
    "--fixtures",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML or JSON fixture file to load after start",
)
@click.option("--verbose", is_flag=True, help="Log lifecycle details to stderr")
def serve_cmd(
    context: str,
    port: int | None,
    db_name: str | None,
    replica_set: bool,
    members: int | None,
    version: str | None,
    fixtures: Path | None,
    verbose: bool,
) -> None:
    """Start an instance for CONTEXT and keep it running until interrupted."""
    fixture_set = load_fixture_file(fixtures) if fixtures is not None else None
    options = ModelMongohatOptions(
        db_port=port,
        db_name=db_name,
        use_replica_set=replica_set or None,
        replica_member_count=members,
        version=version,
    )
    hat = Mongohat(context, options)

    console.print(f"[bold blue]Starting mongohat context {hat.config.context_name}[/bold blue]")
    console.print(f"  Working directory: {hat.config.working_directory}")
    console.print(f"  Topology: {hat.config.topology.kind.value}")
    try:
        asyncio.run(_run_serve(hat, fixture_set, verbose))
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped by user[/yellow]")
    except MongohatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)


@cli.command("reap")
@click.argument("context")
@click.option(
    "--db-path",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Working directory override used when the instance was started",
)
def reap_cmd(context: str, db_path: Path | None) -> None:
    """Kill engines left running on CONTEXT's working directory."""
    settings = ModelMongohatSettings.from_environment()
    config = resolve_instance_config(
        context, ModelMongohatOptions(db_path=db_path), settings
    )
    reaper = ProcessReaper.from_settings(settings)

    try:
        reaped = asyncio.run(reaper.cleanup(config.working_directory))
    except MongohatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    if not reaped:
        console.print(f"[green]No stale engines for {config.working_directory}[/green]")
        return

    table = Table(title=f"Reaped Engines ({len(reaped)})")
    table.add_column("PID", style="cyan")
    table.add_column("Command", style="bold")
    table.add_column("Arguments", style="dim")
    for handle in reaped:
        table.add_row(str(handle.pid), handle.name, " ".join(handle.arguments))
    console.print(table)


__all__: list[str] = ["cli", "load_fixture_file"]
