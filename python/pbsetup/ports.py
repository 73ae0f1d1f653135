# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Host port availability probes and the linear free-port scan.

A port counts as free only when *every* probe agrees nothing is listening.
A port can still be taken between the probe and the runtime's own bind;
that race is not handled.
"""

from __future__ import annotations

import errno
import logging
import re
import shutil
import socket
import subprocess  # nosec B404
from typing import Callable

from pbsetup.errors import InvalidPort, NoPortAvailable

logger = logging.getLogger(__name__)

PRIMARY_RANGE_END = 9999
FALLBACK_RANGE = (8081, 8999)
MAX_PORT = 65535

Probe = Callable[[int], bool]
"""Return True if something is listening on the port."""


def bind_probe(port: int) -> bool:
    """Try to bind *port* on all IPv4 interfaces and release it immediately.

    Only ``EADDRINUSE`` means a listener holds the port. Lingering TIME_WAIT
    sockets and missing bind privilege are not listeners.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            s.bind(("0.0.0.0", port))  # noqa: S104  # nosec B104
        except OSError as exc:
            return exc.errno == errno.EADDRINUSE
    return False


def _tool_output(args: list[str]) -> str:
    """Run a listing tool, returning its stdout or ``""`` if it is missing or fails."""
    if shutil.which(args[0]) is None:
        return ""
    logger.debug("exec: %s", " ".join(args))
    try:
        proc = subprocess.run(  # noqa: S603  # nosec B603
            args,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        logger.debug("%s not runnable: %s", args[0], exc)
        return ""
    logger.debug("exit %d: %s", proc.returncode, args[0])
    return proc.stdout


def _listens_on(table: str, port: int) -> bool:
    """Match ``:<port>`` followed by whitespace in a socket table."""
    return re.search(rf":{port}\s", table) is not None


def ss_probe(port: int) -> bool:
    """Look for *port* in ``ss -tuln``."""
    return _listens_on(_tool_output(["ss", "-tuln"]), port)


def netstat_probe(port: int) -> bool:
    """Look for *port* in ``netstat -tuln``."""
    return _listens_on(_tool_output(["netstat", "-tuln"]), port)


def lsof_probe(port: int) -> bool:
    """Look for a LISTEN entry for *port* in ``lsof -i``."""
    return "LISTEN" in _tool_output(["lsof", "-i", f":{port}"])


DEFAULT_PROBES: tuple[Probe, ...] = (bind_probe, netstat_probe, ss_probe, lsof_probe)


def is_port_available(port: int, probes: tuple[Probe, ...] = DEFAULT_PROBES) -> bool:
    """Return True if no probe reports a listener on *port*."""
    return not any(probe(port) for probe in probes)


def scan_ranges(start: int) -> tuple[tuple[int, int], ...]:
    """Return the inclusive ranges scanned for a given starting port."""
    return ((start, PRIMARY_RANGE_END), FALLBACK_RANGE)


def find_available_port(
    start: int = 9090,
    probe: Callable[[int], bool] = is_port_available,
) -> int:
    """Return the first free port scanning ``[start, 9999]`` then ``[8081, 8999]``.

    Args:
        start: First port of the primary range.
        probe: Availability check; True means the port is free.

    Raises:
        NoPortAvailable: If every port in both ranges is taken.

    """
    ranges = scan_ranges(start)
    for low, high in ranges:
        for port in range(low, high + 1):
            if probe(port):
                logger.debug("port %d is free", port)
                return port
        logger.debug("no free port in %d-%d", low, high)
    raise NoPortAvailable(ranges)


def parse_port(text: str) -> int:
    """Validate manual port input: digits only, within ``1..65535``."""
    text = text.strip()
    if not text.isascii() or not text.isdigit():
        raise InvalidPort(text)
    port = int(text)
    if not 1 <= port <= MAX_PORT:
        raise InvalidPort(text)
    return port
