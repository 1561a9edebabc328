# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse

from ...driver.profiles import DEFAULT_UTM_VERSION

COMMANDS = ("apply", "plan", "show")


def _add_global_config_logging(p: argparse.ArgumentParser) -> None:
    # Global config/logging (two-phase parse relies on these)
    from ... import __version__

    p.add_argument(
        "--config",
        action="append",
        default=[],
        help="YAML config file or directory (repeatable; later overrides earlier).",
    )
    p.add_argument("--dump-config", action="store_true", help="Print merged config and exit.")
    p.add_argument("--version", action="version", version=__version__)
    p.add_argument("-v", "--verbose", action="count", default=0, help="Verbosity: -v, -vv, -vvv")
    p.add_argument("-q", "--quiet", action="count", default=0, help="Less output: -q, -qq")
    p.add_argument("--log-file", dest="log_file", default=None, help="Write logs to file.")
    p.add_argument("--json-logs", dest="json_logs", action="store_true", help="Emit logs as NDJSON.")


def _add_project_control(p: argparse.ArgumentParser) -> None:
    # YAML-driven operation (no subcommands)
    p.add_argument(
        "--cmd",
        dest="cmd",
        default=None,
        help=f"Operation (normally from YAML `cmd:`): {', '.join(COMMANDS)}. Default: apply",
    )
    p.add_argument("--vm", dest="vm", default=None, help="UTM virtual machine UUID (YAML `vm:`).")
    p.add_argument("--json", dest="json", action="store_true", help="Machine-readable output for plan/show/apply.")


def _add_driver_knobs(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--utm-version",
        dest="utm_version",
        default=DEFAULT_UTM_VERSION,
        help="Installed UTM version; selects the driver profile.",
    )
    p.add_argument(
        "--scripts-dir",
        dest="scripts_dir",
        default=None,
        help="Directory holding the UTM AppleScripts (default: bundled scripts).",
    )
    p.add_argument("--osascript", dest="osascript_bin", default="osascript", help="osascript binary.")
    p.add_argument(
        "--timeout",
        dest="command_timeout",
        type=float,
        default=None,
        help="Per-osascript-call timeout in seconds (default: none).",
    )


def _add_reconcile_behavior(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--retries",
        dest="retries",
        type=int,
        default=1,
        help="Total attempts for the whole reconciliation when a UTM call fails.",
    )
    p.add_argument(
        "--legacy-substring-match",
        dest="legacy_substring_match",
        action="store_true",
        help="When clearing adapters, match argument lines by plain substring "
        "(net1 also matches net10) instead of whole net ids.",
    )
