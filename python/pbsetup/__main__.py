# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

from pbsetup.cli.main import cli

cli()
