# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Interactive collection of the project name and port."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pbsetup.cli._output import ask, confirm, echo, print_info, print_success, print_warning
from pbsetup.errors import InvalidMenuChoice, PortInUse
from pbsetup.ports import find_available_port, is_port_available, parse_port
from pbsetup.projects import validate_project_name

if TYPE_CHECKING:
    from collections.abc import Callable

    from pbsetup._config import SetupConfig

AUTO = "1"
MANUAL = "2"


def prompt_project_name() -> str:
    """Ask for the project name; empty or blank input raises ``InvalidProjectName``."""
    return validate_project_name(ask("Enter project name (e.g., contentjet-pb, sync-app): "))


def prompt_port(
    config: SetupConfig,
    available: Callable[[int], bool] = is_port_available,
) -> int:
    """Ask for the port mode and return the chosen port.

    Mode 1 scans for a free port. Mode 2 takes a number from the operator and
    only warns if it looks taken; continuing then needs an explicit ``y``.
    """
    echo()
    echo("Port options:")
    echo("1) Auto-detect available port (recommended)")
    echo("2) Enter custom port number")
    echo()
    choice = ask("Choose option (1 or 2): ").strip()

    if choice == AUTO:
        print_info("Finding available port...")
        port = find_available_port(config.start_port, available)
        print_success(f"Found available port: {port}")
        return port

    if choice == MANUAL:
        port = parse_port(ask("Enter port number: "))
        if not available(port):
            print_warning(f"Port {port} appears to be in use.")
            if not confirm("Continue anyway?"):
                print_info("Please choose a different port or use auto-detect option")
                raise PortInUse(port)
        return port

    raise InvalidMenuChoice(choice)


def collect_input(
    config: SetupConfig,
    available: Callable[[int], bool] = is_port_available,
) -> tuple[str, int]:
    """Run both prompts in order and return ``(project_name, port)``."""
    echo()
    print_info(f"Setting up PocketBase v{config.pb_version}")
    echo()
    name = prompt_project_name()
    port = prompt_port(config, available)
    return name, port
