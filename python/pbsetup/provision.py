# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""The provisioning pipeline: directories, image, container.

Steps run strictly in order and the first failure propagates; whatever was
created before it (directories, image) is left in place for the next run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pbsetup import engine
from pbsetup.image import build_definition
from pbsetup.projects import ensure_project_dirs
from pbsetup.types import ProvisionResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from pbsetup._config import SetupConfig
    from pbsetup.types import ProjectSettings


def _silent(level: str, msg: str) -> None:
    """Default reporter: discard progress messages."""


def provision(
    settings: ProjectSettings,
    config: SetupConfig,
    report: Callable[[str, str], None] = _silent,
) -> ProvisionResult:
    """Create directories, build the image and (re)start the project's container.

    Args:
        settings: Project name, port and derived paths/names.
        config: Resolved configuration (runtime, architecture).
        report: Progress callback ``report(level, message)`` where *level* is
            ``"info"``, ``"success"`` or ``"warning"``.

    Raises:
        CommandFailed: If the build or run command exits non-zero.

    """
    eng = config.engine

    report("info", "Creating project directories...")
    project_dir = ensure_project_dirs(settings)
    report("success", f"Created directories at {project_dir}")

    with build_definition(settings.version, config.pb_arch, settings.container_port) as dockerfile:
        report("success", "Created Dockerfile")
        report("info", "Building PocketBase Docker image...")
        engine.build_image(eng, dockerfile, settings.image_tag, dockerfile.parent)
        report("success", f"Built Docker image {settings.image_tag}")

        replaced = engine.container_exists(eng, settings.container_name)
        if replaced:
            report("warning", f"Stopping existing container {settings.container_name}...")
            engine.remove_container(eng, settings.container_name)
            report("success", "Removed existing container")

        report("info", "Starting PocketBase container...")
        container_id = engine.run_container(eng, settings)
        report(
            "success",
            f"Started container {settings.container_name} on port {settings.port}",
        )

    return ProvisionResult(settings=settings, container_id=container_id, replaced=replaced)
