# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Per-project directory layout under the configured root."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pbsetup.errors import InvalidProjectName

if TYPE_CHECKING:
    from pathlib import Path

    from pbsetup.types import ProjectSettings


def validate_project_name(name: str) -> str:
    """Return *name* stripped of surrounding whitespace; reject empty names."""
    name = name.strip()
    if not name:
        raise InvalidProjectName
    return name


def ensure_project_dirs(settings: ProjectSettings) -> Path:
    """Create the project directory with ``public/`` and ``hooks/`` subdirs.

    Safe to call repeatedly; existing directories and their contents are left
    alone. Returns the project directory path.
    """
    settings.public_dir.mkdir(parents=True, exist_ok=True)
    settings.hooks_dir.mkdir(parents=True, exist_ok=True)
    return settings.project_dir
