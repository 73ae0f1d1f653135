# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""CLI command implementations."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import click

from pbsetup import engine, ports
from pbsetup._config import install_dir
from pbsetup._logger import SetupHistory
from pbsetup.cli._output import (
    confirm,
    format_container_list,
    format_error,
    format_history,
    format_summary,
    print_info,
    print_success,
    report,
)
from pbsetup.cli._prompts import collect_input
from pbsetup.errors import PocketBaseSetupError
from pbsetup.provision import provision
from pbsetup.types import ProjectSettings

if TYPE_CHECKING:
    from pbsetup._config import SetupConfig
    from pbsetup.cli.main import CliContext

logger = logging.getLogger(__name__)


def _get_ctx(ctx: click.Context) -> CliContext:
    """Extract the CliContext from Click's context object."""
    return ctx.obj  # type: ignore[no-any-return]


def _fail(exc: PocketBaseSetupError) -> SystemExit:
    """Render *exc* and build the matching ``SystemExit``."""
    format_error(exc)
    return SystemExit(exc.exit_code)


def _require_engine(config: SetupConfig) -> None:
    """Run the runtime preflight or exit."""
    try:
        engine.check_engine(config.engine)
    except PocketBaseSetupError as exc:
        raise _fail(exc) from exc


def _container_name(config: SetupConfig, project: str) -> str:
    return f"{config.container_prefix}{project}"


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


@click.command("setup")
@click.pass_context
def setup_cmd(ctx: click.Context) -> None:
    """Interactively provision a PocketBase container for a project."""
    config = _get_ctx(ctx).config
    started_at = datetime.now(tz=timezone.utc)

    print_info("Starting PocketBase Docker setup...")
    _require_engine(config)
    print_success(f"{config.engine.capitalize()} is installed and running")

    try:
        name, port = collect_input(config, ports.is_port_available)
        settings = ProjectSettings.from_config(name, port, config)
        result = provision(settings, config, report)
    except PocketBaseSetupError as exc:
        raise _fail(exc) from exc

    format_summary(result, config.engine)

    history = SetupHistory(install_dir(), enabled=config.auto_log)
    try:
        history.log_setup(result, started_at)
    except OSError as exc:
        logger.warning("Could not record setup history at %s: %s", history.path, exc)


# ---------------------------------------------------------------------------
# Follow-up commands
# ---------------------------------------------------------------------------


@click.command("list")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(ctx: click.Context, *, json_output: bool) -> None:
    """List provisioned PocketBase containers."""
    config = _get_ctx(ctx).config
    _require_engine(config)
    try:
        items = engine.list_containers(config.engine, config.container_prefix)
    except PocketBaseSetupError as exc:
        raise _fail(exc) from exc
    format_container_list(items, json_output=json_output)


@click.command("logs")
@click.argument("project")
@click.option("--follow", "-f", is_flag=True, help="Keep streaming new output.")
@click.pass_context
def logs_cmd(ctx: click.Context, project: str, *, follow: bool) -> None:
    """Show a project's container logs."""
    config = _get_ctx(ctx).config
    _require_engine(config)
    code = engine.container_logs(config.engine, _container_name(config, project), follow=follow)
    if code != 0:
        raise SystemExit(code)


@click.command("start")
@click.argument("project")
@click.pass_context
def start_cmd(ctx: click.Context, project: str) -> None:
    """Start a project's stopped container."""
    config = _get_ctx(ctx).config
    name = _container_name(config, project)
    _require_engine(config)
    try:
        engine.start_container(config.engine, name)
    except PocketBaseSetupError as exc:
        raise _fail(exc) from exc
    print_success(f"Started container {name}")


@click.command("stop")
@click.argument("project")
@click.pass_context
def stop_cmd(ctx: click.Context, project: str) -> None:
    """Stop a project's container (without removing)."""
    config = _get_ctx(ctx).config
    name = _container_name(config, project)
    _require_engine(config)
    try:
        engine.stop_container(config.engine, name)
    except PocketBaseSetupError as exc:
        raise _fail(exc) from exc
    print_success(f"Stopped container {name}")


@click.command("remove")
@click.argument("project")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt.")
@click.pass_context
def remove_cmd(ctx: click.Context, project: str, *, yes: bool) -> None:
    """Remove a project's container. The project directory is kept."""
    config = _get_ctx(ctx).config
    name = _container_name(config, project)
    _require_engine(config)
    if not yes and not confirm(f"Remove container '{name}'?"):
        click.echo("Aborted.")
        return

    try:
        engine.delete_container(config.engine, name)
    except PocketBaseSetupError as exc:
        raise _fail(exc) from exc
    print_success(f"Removed container {name}")


@click.command("history")
@click.option(
    "--last", "last_n", type=click.IntRange(min=1), default=10, help="Number of entries to show."
)
@click.option("--project", default=None, help="Only show this project.")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
def history_cmd(*, last_n: int, project: str | None, json_output: bool) -> None:
    """Show previous setups recorded in ~/.pbsetup/history.jsonl."""
    entries = SetupHistory(install_dir()).read()
    if project:
        entries = [e for e in entries if e.get("project") == project]
    format_history(entries[-last_n:], json_output=json_output)
