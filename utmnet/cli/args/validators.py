# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict

from ...core.exceptions import wrap_config
from ...driver.profiles import select_profile
from .groups import COMMANDS
from .helpers import _merged_cmd, _merged_get, _require


def validate_args(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    """
    Normalize and check the final args in place.

    Only the run-level settings are validated here. Individual network
    entries are never rejected; the compiler handles them leniently.
    """
    cmd = _merged_cmd(args, conf) or "apply"
    if cmd not in COMMANDS:
        raise wrap_config(f"Unknown cmd {cmd!r} (expected one of: {', '.join(COMMANDS)})", cmd=cmd)
    args.cmd = cmd

    vm = _merged_get(args, conf, "vm")
    if cmd in ("apply", "show") and not _require(vm):
        raise wrap_config(f"cmd={cmd} needs a VM id (--vm or YAML `vm:`)")
    args.vm = str(vm).strip() if _require(vm) else None

    # YAML reads an unquoted 4.10 as the float 4.1.
    if not isinstance(args.utm_version, str):
        raise wrap_config(
            f"utm_version must be a string, got {type(args.utm_version).__name__} {args.utm_version!r}; "
            "quote the version in YAML (utm_version: \"4.10\")",
            utm_version=args.utm_version,
        )
    # Raises ConfigurationError for unknown/unsupported versions.
    select_profile(args.utm_version)

    if args.scripts_dir and not Path(str(args.scripts_dir)).expanduser().is_dir():
        raise wrap_config(f"--scripts-dir is not a directory: {args.scripts_dir}", scripts_dir=str(args.scripts_dir))

    if args.command_timeout is not None and float(args.command_timeout) <= 0:
        raise wrap_config("--timeout must be > 0", timeout=args.command_timeout)

    if int(args.retries) < 1:
        raise wrap_config("--retries must be >= 1", retries=args.retries)
