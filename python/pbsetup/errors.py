# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

from __future__ import annotations


class PocketBaseSetupError(Exception):
    """Base exception for all pbsetup errors."""

    exit_code = 1


class EngineError(PocketBaseSetupError):
    """Error related to the container runtime itself."""

    def __init__(self, engine: str, detail: str) -> None:
        self.engine = engine
        super().__init__(detail)


class EngineNotInstalled(EngineError):
    """The runtime executable is not on ``PATH``."""

    def __init__(self, engine: str) -> None:
        super().__init__(
            engine,
            f"{engine.capitalize()} is not installed. "
            f"Please install {engine.capitalize()} first.",
        )


class EngineNotRunning(EngineError):
    """The runtime executable exists but its daemon does not answer."""

    def __init__(self, engine: str) -> None:
        super().__init__(
            engine,
            f"{engine.capitalize()} is not running. "
            f"Please start {engine.capitalize()} first.",
        )


class ValidationError(PocketBaseSetupError):
    """Operator input was rejected."""


class InvalidProjectName(ValidationError):
    """Project name is empty."""

    def __init__(self) -> None:
        super().__init__("Project name cannot be empty")


class InvalidPort(ValidationError):
    """Manual port input is not a valid port number."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__("Please enter a valid port number")


class InvalidMenuChoice(ValidationError):
    """Port mode selection was neither 1 nor 2."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__("Invalid option. Please choose 1 or 2.")


class NoPortAvailable(PocketBaseSetupError):
    """Every port in the scan ranges is taken."""

    def __init__(self, ranges: tuple[tuple[int, int], ...]) -> None:
        self.ranges = ranges
        super().__init__("Could not find available port. Please choose option 2.")


class PortInUse(PocketBaseSetupError):
    """Operator declined to continue with a port that appears taken."""

    def __init__(self, port: int) -> None:
        self.port = port
        super().__init__(f"Port {port} appears to be in use")


class CommandFailed(PocketBaseSetupError):
    """A runtime command exited non-zero.

    The process exits with the command's own status rather than 1.
    """

    def __init__(self, command: list[str], returncode: int, detail: str = "") -> None:
        self.command = command
        self.returncode = returncode
        # A command killed by signal N reports -N; the shell convention is 128 + N.
        self.exit_code = 128 - returncode if returncode < 0 else returncode or 1
        msg = f"Command failed with exit status {returncode}: {' '.join(command)}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
