# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Thin wrappers over the container runtime CLI (``docker`` or ``podman``).

Every call blocks until the runtime command exits.  Commands whose output the
operator should see (``build``, ``logs``) inherit the terminal; the rest are
captured.
"""

from __future__ import annotations

import logging
import shutil
import subprocess  # nosec B404
from typing import TYPE_CHECKING

from pbsetup.errors import CommandFailed, EngineNotInstalled, EngineNotRunning
from pbsetup.types import ContainerListItem

if TYPE_CHECKING:
    from pathlib import Path

    from pbsetup.types import ProjectSettings

logger = logging.getLogger(__name__)

_LIST_FORMAT = "{{.ID}}\t{{.Names}}\t{{.Status}}\t{{.Image}}\t{{.Ports}}"


def _run(
    args: list[str],
    *,
    capture: bool = True,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run a runtime command, raising ``CommandFailed`` on non-zero exit when *check*."""
    logger.debug("exec: %s", " ".join(args))
    try:
        proc = subprocess.run(  # noqa: S603  # nosec B603
            args,
            capture_output=capture,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise EngineNotInstalled(args[0]) from exc
    logger.debug("exit %d: %s", proc.returncode, args[1] if len(args) > 1 else args[0])
    if check and proc.returncode != 0:
        detail = (proc.stderr or "").strip() if capture else ""
        raise CommandFailed(args, proc.returncode, detail)
    return proc


def check_engine(engine: str) -> None:
    """Verify that *engine* is on ``PATH`` and its daemon is reachable."""
    if shutil.which(engine) is None:
        raise EngineNotInstalled(engine)
    try:
        proc = _run([engine, "info"], check=False)
    except OSError as exc:
        raise EngineNotRunning(engine) from exc
    if proc.returncode != 0:
        logger.debug("%s info failed: %s", engine, proc.stderr.strip())
        raise EngineNotRunning(engine)


def build_image(engine: str, dockerfile: Path, tag: str, context: Path) -> None:
    """Build *tag* from *dockerfile*; build output goes straight to the terminal."""
    _run(
        [engine, "build", "-f", str(dockerfile), "-t", tag, str(context)],
        capture=False,
    )


def container_exists(engine: str, name: str) -> bool:
    """Return True if a container named exactly *name* exists, running or stopped.

    A failing listing counts as "no such container".
    """
    proc = _run([engine, "ps", "-a", "--format", "{{.Names}}"], check=False)
    if proc.returncode != 0:
        logger.debug("%s ps failed: %s", engine, proc.stderr.strip())
        return False
    return any(line.strip() == name for line in proc.stdout.splitlines())


def remove_container(engine: str, name: str) -> None:
    """Stop and remove *name*, ignoring failures of either step."""
    for verb in ("stop", "rm"):
        proc = _run([engine, verb, name], check=False)
        if proc.returncode != 0:
            logger.debug("%s %s %s ignored: %s", engine, verb, name, proc.stderr.strip())


def run_container(engine: str, settings: ProjectSettings) -> str:
    """Start a detached PocketBase container for *settings*. Return its ID."""
    args = [
        engine,
        "run",
        "-d",
        "--name",
        settings.container_name,
        "-p",
        f"{settings.port}:{settings.container_port}",
    ]
    for host, target in settings.volumes:
        args += ["-v", f"{host}:{target}"]
    args.append(settings.image_tag)
    proc = _run(args)
    return proc.stdout.strip()


def start_container(engine: str, name: str) -> None:
    """Start an existing stopped container."""
    _run([engine, "start", name])


def stop_container(engine: str, name: str) -> None:
    """Stop a running container without removing it."""
    _run([engine, "stop", name])


def delete_container(engine: str, name: str) -> None:
    """Remove a container, stopping it first if needed."""
    _run([engine, "rm", "-f", name])


def container_logs(engine: str, name: str, *, follow: bool = False) -> int:
    """Stream container logs to the terminal. Return the runtime's exit status."""
    args = [engine, "logs"]
    if follow:
        args.append("--follow")
    args.append(name)
    return _run(args, capture=False, check=False).returncode


def list_containers(engine: str, prefix: str) -> list[ContainerListItem]:
    """List all containers (running or stopped) whose name starts with *prefix*."""
    proc = _run([engine, "ps", "-a", "--format", _LIST_FORMAT])
    return [
        item
        for item in (_parse_list_line(line) for line in proc.stdout.splitlines())
        if item is not None and item.name.startswith(prefix)
    ]


def _parse_list_line(line: str) -> ContainerListItem | None:
    """Parse one tab-separated ``ps`` line into a ``ContainerListItem``."""
    parts = line.rstrip("\n").split("\t")
    if len(parts) < 4:  # noqa: PLR2004
        return None
    ports = parts[4] if len(parts) > 4 else ""  # noqa: PLR2004
    return ContainerListItem(
        id=parts[0][:12],
        name=parts[1],
        status=parts[2],
        image=parts[3],
        ports=ports,
    )
