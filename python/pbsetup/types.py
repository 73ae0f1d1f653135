# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pbsetup._config import SetupConfig

# In-container paths PocketBase reads from.
PB_PUBLIC_DIR = "/pb/pb_public"
PB_DATA_DIR = "/pb/pb_data"
PB_HOOKS_DIR = "/pb/pb_hooks"


@dataclasses.dataclass(frozen=True)
class ProjectSettings:
    """Everything one provisioning run needs, passed explicitly between steps."""

    name: str
    port: int
    root_dir: str = "/home/projects/pocketbase"
    version: str = "0.28.3"
    image_name: str = "pocketbase"
    container_prefix: str = "pocketbase-"
    container_port: int = 8080

    @classmethod
    def from_config(cls, name: str, port: int, config: SetupConfig) -> ProjectSettings:
        """Combine operator answers with the resolved configuration."""
        return cls(
            name=name,
            port=port,
            root_dir=config.root_dir,
            version=config.pb_version,
            image_name=config.image_name,
            container_prefix=config.container_prefix,
            container_port=config.container_port,
        )

    @property
    def container_name(self) -> str:
        return f"{self.container_prefix}{self.name}"

    @property
    def project_dir(self) -> Path:
        return Path(self.root_dir) / self.name

    @property
    def public_dir(self) -> Path:
        return self.project_dir / "public"

    @property
    def hooks_dir(self) -> Path:
        return self.project_dir / "hooks"

    @property
    def image_tag(self) -> str:
        return f"{self.image_name}:{self.version}"

    @property
    def admin_url(self) -> str:
        return f"http://localhost:{self.port}/_/"

    @property
    def volumes(self) -> tuple[tuple[str, str], ...]:
        """Host -> container bind mounts, in ``run`` argument order."""
        return (
            (str(self.public_dir), PB_PUBLIC_DIR),
            (str(self.project_dir), PB_DATA_DIR),
            (str(self.hooks_dir), PB_HOOKS_DIR),
        )


@dataclasses.dataclass(frozen=True)
class ProvisionResult:
    """Outcome of a successful provisioning run."""

    settings: ProjectSettings
    container_id: str = ""
    replaced: bool = False


@dataclasses.dataclass(frozen=True)
class ContainerListItem:
    """Summary of a provisioned container for ``list`` output."""

    id: str
    name: str
    status: str
    image: str
    ports: str = ""

    @property
    def running(self) -> bool:
        """Return True if the runtime reports the container as up."""
        return self.status.lower().startswith(("up", "running"))
