# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""PocketBase image definition.

The Dockerfile is rendered from a fixed template and written to a private
temporary directory that doubles as the (empty) build context, so nothing
else on the host is sent to the runtime.
"""

from __future__ import annotations

import contextlib
import tempfile
from pathlib import Path
from typing import Iterator

DOCKERFILE_NAME = "Dockerfile"
RELEASE_URL = (
    "https://github.com/pocketbase/pocketbase/releases/download/"
    "v${{PB_VERSION}}/pocketbase_${{PB_VERSION}}_linux_{arch}.zip"
)

_DOCKERFILE_TEMPLATE = """\
FROM alpine:latest

# Set the PocketBase version as an environment variable
ENV PB_VERSION={version}

RUN apk add --no-cache \\
    unzip \\
    ca-certificates

# Download and unzip PocketBase
ADD {url} /tmp/pb.zip
RUN unzip /tmp/pb.zip -d /pb/

# Uncomment to copy the local pb_migrations dir into the image
# COPY ./pb_migrations /pb/pb_migrations

# Uncomment to copy the local pb_hooks dir into the image
# COPY ./pb_hooks /pb/pb_hooks

EXPOSE {port}

# Start PocketBase
CMD ["/pb/pocketbase", "serve", "--http=0.0.0.0:{port}"]
"""


def release_url(arch: str = "amd64") -> str:
    """Return the release archive URL, with ``${PB_VERSION}`` left for the build."""
    return RELEASE_URL.format(arch=arch)


def render_dockerfile(version: str, arch: str = "amd64", port: int = 8080) -> str:
    """Return the Dockerfile text for a pinned PocketBase *version*."""
    return _DOCKERFILE_TEMPLATE.format(version=version, url=release_url(arch), port=port)


@contextlib.contextmanager
def build_definition(version: str, arch: str = "amd64", port: int = 8080) -> Iterator[Path]:
    """Write the Dockerfile to a temporary directory and yield its path.

    The directory and file are removed on exit, including when the build fails.
    """
    with tempfile.TemporaryDirectory(prefix="pbsetup-") as tmp:
        dockerfile = Path(tmp) / DOCKERFILE_NAME
        dockerfile.write_text(render_dockerfile(version, arch, port))
        yield dockerfile
