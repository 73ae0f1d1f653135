# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Diagnostic logging setup and the on-disk provisioning history.

History is a fire-and-forget JSONL file: one line per completed setup,
synchronous appends, no locking.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    import datetime
    from pathlib import Path

    from pbsetup.types import ProvisionResult

HISTORY_FILENAME = "history.jsonl"


def configure_logging(level: str = "info", *, verbose: bool = False) -> None:
    """Route the ``pbsetup`` logger through rich on stderr.

    ``verbose`` forces DEBUG, which shows every runtime command executed.
    """
    resolved = logging.DEBUG if verbose else logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    pkg_logger = logging.getLogger("pbsetup")
    pkg_logger.setLevel(resolved)
    if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            show_time=False,
        )
        pkg_logger.addHandler(handler)
    pkg_logger.propagate = False


class SetupHistory:
    """Appends one record per provisioning run to ``history.jsonl``."""

    def __init__(self, directory: Path, *, enabled: bool = True) -> None:
        self._dir = directory
        self._path = directory / HISTORY_FILENAME
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        """Whether history recording is active."""
        return self._enabled

    @property
    def path(self) -> Path:
        return self._path

    def log_setup(self, result: ProvisionResult, started_at: datetime.datetime) -> None:
        """Record a completed setup."""
        s = result.settings
        self.append(
            {
                "type": "setup",
                "project": s.name,
                "container": s.container_name,
                "container_id": result.container_id[:12],
                "image": s.image_tag,
                "port": s.port,
                "directory": str(s.project_dir),
                "replaced": result.replaced,
                "timestamp": started_at.isoformat(),
            }
        )

    def append(self, entry: dict[str, object]) -> None:
        """Append one JSONL line, creating the directory on first use."""
        if not self._enabled:
            return
        self._dir.mkdir(parents=True, exist_ok=True)
        with self._path.open("a") as f:
            f.write(json.dumps(entry, default=str) + "\n")

    def read(self) -> list[dict[str, object]]:
        """Return all parseable entries, oldest first. Corrupt lines are skipped."""
        if not self._path.is_file():
            return []
        entries: list[dict[str, object]] = []
        for raw in self._path.read_text().splitlines():
            stripped = raw.strip()
            if not stripped:
                continue
            try:
                entry = json.loads(stripped)
            except json.JSONDecodeError:
                continue
            if isinstance(entry, dict):
                entries.append(entry)
        return entries
