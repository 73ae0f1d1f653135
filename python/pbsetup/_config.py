# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Configuration loading with defaults -> install-level -> explicit file precedence."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_CONFIG_DIRNAME = ".pbsetup"
_CONFIG_FILENAME = "pbsetup.yaml"


@dataclasses.dataclass(frozen=True)
class SetupConfig:
    """Resolved pbsetup configuration."""

    root_dir: str = "/home/projects/pocketbase"
    pb_version: str = "0.28.3"
    pb_arch: str = "amd64"
    engine: str = "docker"
    image_name: str = "pocketbase"
    container_prefix: str = "pocketbase-"
    container_port: int = 8080
    start_port: int = 9090
    auto_log: bool = True
    log_level: str = "info"


def install_dir() -> Path:
    """Return the per-user ``~/.pbsetup`` directory (may not exist)."""
    return Path.home() / _CONFIG_DIRNAME


def load_config(path: Path | None = None) -> SetupConfig:
    """Load configuration with precedence: explicit file > install > defaults.

    1. Start with defaults
    2. Overlay install-level ``~/.pbsetup/pbsetup.yaml`` (if exists)
    3. Overlay *path* (if given and exists)
    """
    overrides: dict[str, Any] = {}

    install_config = install_dir() / _CONFIG_FILENAME
    if install_config.is_file():
        _merge_yaml(overrides, install_config)

    if path is not None and path.is_file():
        _merge_yaml(overrides, path)

    return _build_config(overrides)


def _merge_yaml(target: dict[str, Any], path: Path) -> None:
    """Parse a YAML file and merge its values into *target*."""
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError:
        return
    if not isinstance(data, dict):
        return

    for key, value in data.items():
        if key == "pocketbase" and isinstance(value, dict):
            # pocketbase: {version, arch} -> pb_version, pb_arch
            target.update({f"pb_{k}": v for k, v in value.items()})
        else:
            target[key] = value


def _coerce(kind: str, value: Any) -> Any:
    """Convert a YAML scalar to the field's type. Return ``None`` to drop it."""
    if isinstance(value, (dict, list)) or value is None:
        return None
    if kind == "bool":
        return value if isinstance(value, bool) else None
    if kind == "int":
        if isinstance(value, bool):
            return None
        try:
            return int(value)
        except ValueError:
            return None
    return str(value)


def _build_config(overrides: dict[str, Any]) -> SetupConfig:
    """Build a ``SetupConfig`` from a dict of overrides.

    Unknown keys are ignored. Values that cannot be converted to the field's
    type are dropped with a warning, leaving the default in place.
    """
    kinds = {f.name: f.type for f in dataclasses.fields(SetupConfig)}
    filtered: dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in kinds:
            continue
        coerced = _coerce(str(kinds[key]), value)
        if coerced is None:
            logger.warning("Ignoring config value %s=%r (expected %s)", key, value, kinds[key])
            continue
        filtered[key] = coerced
    if "root_dir" in filtered:
        filtered["root_dir"] = str(Path(filtered["root_dir"]).expanduser())
    return SetupConfig(**filtered)
