# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

from __future__ import annotations

from importlib.metadata import version

from pbsetup._config import SetupConfig, load_config
from pbsetup.errors import (
    CommandFailed,
    EngineError,
    EngineNotInstalled,
    EngineNotRunning,
    InvalidMenuChoice,
    InvalidPort,
    InvalidProjectName,
    NoPortAvailable,
    PocketBaseSetupError,
    PortInUse,
    ValidationError,
)
from pbsetup.ports import find_available_port, is_port_available, parse_port
from pbsetup.provision import provision
from pbsetup.types import ContainerListItem, ProjectSettings, ProvisionResult

__version__ = version("pocketbase-setup")


def get_version() -> str:
    """Return the pbsetup package version string."""
    return __version__


__all__ = [
    "CommandFailed",
    "ContainerListItem",
    "EngineError",
    "EngineNotInstalled",
    "EngineNotRunning",
    "InvalidMenuChoice",
    "InvalidPort",
    "InvalidProjectName",
    "NoPortAvailable",
    "PocketBaseSetupError",
    "PortInUse",
    "ProjectSettings",
    "ProvisionResult",
    "SetupConfig",
    "ValidationError",
    "__version__",
    "find_available_port",
    "get_version",
    "is_port_available",
    "load_config",
    "parse_port",
    "provision",
]
