"""Shared fixtures for pbsetup tests."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

import pytest

ENGINE = shutil.which("docker") or shutil.which("podman")


def _engine_running() -> bool:
    """Return True if the detected engine answers ``info``."""
    if ENGINE is None:
        return False
    try:
        proc = subprocess.run(  # noqa: S603
            [ENGINE, "info"], capture_output=True, check=False, timeout=15
        )
    except (OSError, subprocess.TimeoutExpired):
        return False
    return proc.returncode == 0


HAS_ENGINE = _engine_running()

requires_engine = pytest.mark.skipif(
    not HAS_ENGINE,
    reason="No running container engine found (Podman or Docker)",
)


class FakeRuntime:
    """Stands in for ``subprocess.run`` against a docker-like CLI.

    Tracks containers by name so repeated setups can be checked for leftovers.
    ``fail`` maps a verb (``"build"``, ``"stop"``, ...) to the exit status it
    should return.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.containers: dict[str, str] = {}
        self.fail: dict[str, int] = {}

    def __call__(self, args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        args = list(args)
        self.calls.append(args)
        verb = args[1] if len(args) > 1 else ""
        rc = self.fail.get(verb, 0)
        stdout = ""
        stderr = "simulated failure" if rc else ""
        if rc == 0:
            rc, stdout, stderr = self._handle(verb, args)
        return subprocess.CompletedProcess(args, rc, stdout=stdout, stderr=stderr)

    def _handle(self, verb: str, args: list[str]) -> tuple[int, str, str]:
        if verb == "ps":
            fmt = args[args.index("--format") + 1]
            if fmt == "{{.Names}}":
                return 0, "".join(f"{n}\n" for n in self.containers), ""
            rows = [
                f"0123456789abcdef\t{n}\t{status}\tpocketbase:0.28.3\t0.0.0.0:9090->8080/tcp\n"
                for n, status in self.containers.items()
            ]
            return 0, "".join(rows), ""
        if verb == "run":
            name = args[args.index("--name") + 1]
            if name in self.containers:
                return 125, "", f"Conflict. The container name {name} is already in use"
            self.containers[name] = "Up 1 second"
            return 0, "f00dcafe" * 8 + "\n", ""
        if verb in ("stop", "start", "rm"):
            name = args[-1]
            if name not in self.containers:
                return 1, "", f"No such container: {name}"
            if verb == "rm":
                del self.containers[name]
            else:
                self.containers[name] = "Exited (0)" if verb == "stop" else "Up 1 second"
        return 0, "", ""

    def verbs(self) -> list[str]:
        """Return the runtime verb of every call, in order."""
        return [c[1] for c in self.calls if len(c) > 1]

    def find(self, verb: str) -> list[list[str]]:
        """Return every call made with *verb*."""
        return [c for c in self.calls if len(c) > 1 and c[1] == verb]


@pytest.fixture(autouse=True)
def home_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``~`` at a temp dir so no test reads or writes the real home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr("pbsetup._config.Path.home", lambda: home)
    return home


@pytest.fixture
def project_root(home_dir: Path, tmp_path: Path) -> Path:
    """Install-level config that puts project dirs under a temp root."""
    root = tmp_path / "projects"
    cfg_dir = home_dir / ".pbsetup"
    cfg_dir.mkdir()
    (cfg_dir / "pbsetup.yaml").write_text(f"root_dir: {root}\n")
    return root


@pytest.fixture
def runtime(monkeypatch: pytest.MonkeyPatch) -> FakeRuntime:
    """Replace the docker CLI with a ``FakeRuntime``."""
    fake = FakeRuntime()
    monkeypatch.setattr("pbsetup.engine.subprocess.run", fake)
    monkeypatch.setattr("pbsetup.engine.shutil.which", lambda name: f"/usr/bin/{name}")
    return fake


@pytest.fixture
def debug_log(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> pytest.LogCaptureFixture:
    """Capture ``pbsetup`` DEBUG records even after the CLI turned propagation off."""
    monkeypatch.setattr(logging.getLogger("pbsetup"), "propagate", True)
    caplog.set_level(logging.DEBUG, logger="pbsetup")
    return caplog
