# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""CLI entry point for pbsetup."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import click

from pbsetup import __version__
from pbsetup._config import SetupConfig, load_config
from pbsetup._logger import configure_logging


@dataclasses.dataclass
class CliContext:
    """Shared state passed through Click's context object."""

    config: SetupConfig = dataclasses.field(default_factory=SetupConfig)
    verbose: bool = False


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "config_path",
    envvar="PBSETUP_CONFIG",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a pbsetup.yaml overriding ~/.pbsetup/pbsetup.yaml.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every runtime command.")
@click.version_option(version=__version__, prog_name="pbsetup")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, *, verbose: bool) -> None:
    """Provision a local PocketBase container for a named project.

    With no command, runs the interactive setup.
    """
    config = load_config(config_path)
    configure_logging(config.log_level, verbose=verbose)
    ctx.obj = CliContext(config=config, verbose=verbose)
    if ctx.invoked_subcommand is None:
        ctx.invoke(setup_cmd)


# --- Register commands ---

from pbsetup.cli._commands import (  # noqa: E402
    history_cmd,
    list_cmd,
    logs_cmd,
    remove_cmd,
    setup_cmd,
    start_cmd,
    stop_cmd,
)

cli.add_command(setup_cmd)
cli.add_command(list_cmd)
cli.add_command(logs_cmd)
cli.add_command(start_cmd)
cli.add_command(stop_cmd)
cli.add_command(remove_cmd)
cli.add_command(history_cmd)
