# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Rich output formatters and prompts for the CLI."""

from __future__ import annotations

import dataclasses
import json
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pbsetup.errors import PocketBaseSetupError
    from pbsetup.types import ContainerListItem, ProvisionResult

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

_console = Console()
_err_console = Console(stderr=True)


def print_info(msg: str) -> None:
    _console.print(f"[blue]\\[INFO][/blue] {escape(msg)}", soft_wrap=True)


def print_success(msg: str) -> None:
    _console.print(f"[green]\\[SUCCESS][/green] {escape(msg)}", soft_wrap=True)


def print_warning(msg: str) -> None:
    _console.print(f"[yellow]\\[WARNING][/yellow] {escape(msg)}", soft_wrap=True)


def print_error(msg: str) -> None:
    _err_console.print(f"[red]\\[ERROR][/red] {escape(msg)}", soft_wrap=True)


_LEVELS = {
    "info": print_info,
    "success": print_success,
    "warning": print_warning,
    "error": print_error,
}


def report(level: str, msg: str) -> None:
    """Progress callback for :func:`pbsetup.provision`."""
    _LEVELS.get(level, print_info)(msg)


def echo(msg: str = "") -> None:
    """Print a plain line (no markup)."""
    _console.print(msg, markup=False, highlight=False, soft_wrap=True)


def ask(prompt: str) -> str:
    """Read one line from the operator. End of input counts as an empty answer."""
    try:
        return _console.input(escape(prompt))
    except EOFError:
        echo()
        return ""


def confirm(msg: str) -> bool:
    """Ask a y/N question. Only ``y`` or ``Y`` confirms."""
    return ask(f"{msg} (y/N) ").strip() in ("y", "Y")


def format_summary(result: ProvisionResult, engine: str) -> None:
    """Print the final container details and follow-up runtime commands."""
    s = result.settings
    echo()
    print_success("PocketBase setup completed!")
    echo()
    echo(f"Container name: {s.container_name}")
    echo(f"Port: {s.port}")
    echo(f"Project directory: {s.project_dir}")
    echo(f"Admin URL: {s.admin_url}")
    echo()
    print_info("Useful commands:")
    echo(f"  View logs: {engine} logs {s.container_name}")
    echo(f"  Stop container: {engine} stop {s.container_name}")
    echo(f"  Start container: {engine} start {s.container_name}")
    echo(f"  Remove container: {engine} rm {s.container_name}")
    echo()


def format_container_list(items: list[ContainerListItem], *, json_output: bool = False) -> None:
    """Print provisioned containers as a rich table or JSON."""
    if json_output:
        click_echo_json([dataclasses.asdict(item) for item in items])
        return

    if not items:
        _console.print("[dim]No PocketBase containers found.[/dim]")
        return

    table = Table(title="PocketBase containers")
    table.add_column("Name", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Status")
    table.add_column("Image")
    table.add_column("Ports")

    for item in items:
        status_style = "green" if item.running else "yellow"
        table.add_row(
            item.name,
            item.id,
            f"[{status_style}]{escape(item.status)}[/{status_style}]",
            item.image,
            item.ports,
        )

    _console.print(table)


def format_history(entries: list[dict[str, object]], *, json_output: bool = False) -> None:
    """Print provisioning history as a rich table or JSON."""
    if json_output:
        click_echo_json(entries)
        return

    if not entries:
        _console.print("[dim]No setup history found.[/dim]")
        return

    table = Table(title="Setup history")
    table.add_column("Project", style="cyan")
    table.add_column("Container")
    table.add_column("Port")
    table.add_column("Image")
    table.add_column("Replaced")
    table.add_column("Timestamp", style="dim")

    for entry in entries:
        table.add_row(
            str(entry.get("project", "")),
            str(entry.get("container", "")),
            str(entry.get("port", "")),
            str(entry.get("image", "")),
            "yes" if entry.get("replaced") else "no",
            str(entry.get("timestamp", "")),
        )

    _console.print(table)


def format_error(err: PocketBaseSetupError) -> None:
    """Print an error as a rich panel with a suggestion."""
    title, suggestion = _error_info(err)
    lines = [escape(str(err))]
    if suggestion:
        lines.append(f"\n[dim]{escape(suggestion)}[/dim]")

    panel = Panel(
        "\n".join(lines),
        title=f"[red]{title}[/red]",
        expand=False,
    )
    _err_console.print(panel)


def _error_info(err: PocketBaseSetupError) -> tuple[str, str]:
    """Map an error to a title and suggestion string."""
    from pbsetup.errors import (  # noqa: PLC0415
        CommandFailed,
        EngineNotInstalled,
        EngineNotRunning,
        NoPortAvailable,
        PortInUse,
        ValidationError,
    )

    if isinstance(err, EngineNotInstalled):
        return "Engine Not Found", "Install Docker or Podman and make sure it is on PATH."
    if isinstance(err, EngineNotRunning):
        return "Engine Not Running", "Start the container engine daemon and try again."
    if isinstance(err, NoPortAvailable):
        return "No Free Port", "Run again and enter a port manually (option 2)."
    if isinstance(err, PortInUse):
        return "Port In Use", "Please choose a different port or use auto-detect option."
    if isinstance(err, ValidationError):
        return "Invalid Input", "Run pbsetup again with a valid answer."
    if isinstance(err, CommandFailed):
        return "Command Failed", "See the runtime output above for details."
    return "Error", ""


def click_echo_json(data: object) -> None:
    """Serialize data to JSON and echo to stdout."""
    sys.stdout.write(json.dumps(data, indent=2, default=str) + "\n")
