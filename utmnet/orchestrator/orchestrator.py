# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# utmnet/orchestrator/orchestrator.py

from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, List, Optional

import yaml

from ..config.config_loader import Config
from ..core.console import ConsoleUI
from ..core.exceptions import ExternalCommandError
from ..core.logger import Log
from ..core.logging_utils import log_step
from ..core.retry import rerun_with_backoff
from ..core.utils import U
from ..driver.channel import UtmScriptChannel
from ..driver.profiles import select_profile
from ..driver.state import AdapterStateReader
from ..network.arguments import build_adapter_args
from ..network.compile import compile_networks
from ..network.context import ReconcileContext, ReconcileReport
from ..network.model import AUTO_MAC, BASE_ADAPTERS, NetworkDescriptor
from ..network.reconciler import AdapterReconciler


class Orchestrator:
    """
    Runs one `cmd` (apply / plan / show) against one UTM VM.
    """

    def __init__(
        self,
        logger: logging.Logger,
        args: argparse.Namespace,
        conf: Optional[Dict[str, Any]] = None,
        *,
        ui: Optional[ConsoleUI] = None,
        channel: Any = None,
    ):
        self.logger = logger
        self.args = args
        self.conf = conf or {}
        self.ui = ui or ConsoleUI(quiet=bool(getattr(args, "json", False)))
        self._channel = channel

        Log.trace(
            self.logger,
            "🧠 Orchestrator init: cmd=%r vm=%r utm_version=%r",
            getattr(args, "cmd", None),
            getattr(args, "vm", None),
            getattr(args, "utm_version", None),
        )

    # ------------------------------------------------------------------
    # wiring
    # ------------------------------------------------------------------

    def channel(self) -> Any:
        if self._channel is None:
            self._channel = UtmScriptChannel(
                self.logger,
                select_profile(str(self.args.utm_version)),
                scripts_dir=getattr(self.args, "scripts_dir", None),
                timeout=getattr(self.args, "command_timeout", None),
                osascript_bin=getattr(self.args, "osascript_bin", None) or "osascript",
            )
            Log.trace(self.logger, "Driver profile: %s", self._channel.profile.name)
        return self._channel

    def descriptors(self) -> List[NetworkDescriptor]:
        entries = Config.network_entries(self.logger, self.conf)
        descriptors = compile_networks(entries)
        self.logger.debug("Compiled %d network adapter(s) from %d network entries", len(descriptors), len(entries))
        return descriptors

    # ------------------------------------------------------------------
    # commands
    # ------------------------------------------------------------------

    def run(self) -> int:
        cmd = getattr(self.args, "cmd", None) or "apply"
        Log.trace(self.logger, "🧭 run: cmd=%r", cmd)
        if cmd == "plan":
            return self.plan()
        if cmd == "show":
            return self.show()
        return self.apply()

    def apply(self) -> int:
        vm_id = str(self.args.vm)
        descriptors = self.descriptors()

        channel = self.channel()
        reader = AdapterStateReader(channel)
        reconciler = AdapterReconciler(
            reader,
            channel,
            legacy_substring_match=bool(getattr(self.args, "legacy_substring_match", False)),
        )
        ctx = ReconcileContext(vm_id=vm_id, logger=Log.bind(self.logger, vm=vm_id), ui=self.ui)
        Log.step(self.logger, f"Reconciling {len(descriptors)} declared network adapter(s)", vm=vm_id)

        with log_step(ctx.logger, "Reconciling network adapters"):
            report: ReconcileReport = rerun_with_backoff(
                lambda: reconciler.reconcile(ctx, descriptors),
                max_attempts=int(getattr(self.args, "retries", 1) or 1),
                exceptions=ExternalCommandError,
                operation_name="reconcile",
                logger=ctx.logger,
            )

        if getattr(self.args, "json", False):
            print(U.json_dump({"vm": vm_id, **report.to_dict()}))
            return 0

        body = "\n".join(
            [
                f"added:   {', '.join(report.added) or '-'}",
                f"skipped: {', '.join(report.skipped) or '-'}",
                f"removed: {len(report.removed_args)} argument(s)",
            ]
        )
        self.ui.panel(f"utmnet apply: {vm_id}", body)
        if report.changed:
            Log.ok(self.logger, "Network adapters reconciled", vm=vm_id)
        else:
            Log.ok(self.logger, "Network adapters already up to date", vm=vm_id)
        return 0

    def plan(self) -> int:
        """
        Print what `apply` would add after clearing, without touching UTM.
        Generated MACs are shown as `auto`.
        """
        descriptors = self.descriptors()
        adapters = []
        for d in descriptors:
            netdev, device = build_adapter_args(d.net_id, d.mode, d, mac_factory=lambda: AUTO_MAC)
            item = d.to_dict()
            item["arguments"] = [netdev, device]
            adapters.append(item)

        doc = {
            "vm": getattr(self.args, "vm", None),
            "base_adapters": [{"index": i, "mode": m.value} for i, m in BASE_ADAPTERS],
            "adapters": adapters,
        }
        if getattr(self.args, "json", False):
            print(U.json_dump(doc))
        else:
            print(yaml.safe_dump(doc, sort_keys=False, default_flow_style=False), end="")
        return 0

    def show(self) -> int:
        vm_id = str(self.args.vm)
        reader = AdapterStateReader(self.channel())

        records = reader.list_adapters(vm_id)
        raw_args = reader.list_raw_arguments(vm_id)
        nics = reader.list_native_interfaces(vm_id)
        for net_id, r in records.items():
            if not r.complete:
                Log.warn(self.logger, f"Adapter {net_id} is incomplete (netdev={r.netdev_present}, device={r.device_present})", vm=vm_id)

        if getattr(self.args, "json", False):
            print(
                U.json_dump(
                    {
                        "vm": vm_id,
                        "adapters": {
                            net_id: {"netdev": r.netdev_present, "device": r.device_present, "complete": r.complete}
                            for net_id, r in records.items()
                        },
                        "arguments": raw_args,
                        "interfaces": {str(i): t for i, t in nics.items()},
                    }
                )
            )
            return 0

        self.ui.table(
            f"QEMU network adapters: {vm_id}",
            ["id", "netdev", "device", "state"],
            [
                (
                    net_id,
                    "yes" if r.netdev_present else "no",
                    "yes" if r.device_present else "no",
                    ("base" if r.reserved else "additional") if r.complete else "incomplete",
                )
                for net_id, r in sorted(records.items(), key=lambda kv: _net_sort_key(kv[0]))
            ],
        )
        self.ui.table("QEMU additional arguments", ["#", "argument"], list(enumerate(raw_args)))
        self.ui.table("UTM network interfaces", ["index", "mode"], sorted(nics.items()))
        return 0


def _net_sort_key(net_id: str) -> Any:
    digits = net_id[3:] if net_id.startswith("net") else ""
    return (0, int(digits), net_id) if digits.isdigit() else (1, 0, net_id)
