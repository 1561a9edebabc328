# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# utmnet/network/reconciler.py
"""
Converge a UTM VM's network adapters to the declared set.

Per adapter id the only transitions are absent -> complete (add) and
complete -> absent (remove). A half-present adapter (netdev without device
or the reverse) counts as absent.

Each run:
  1. make sure net0 (shared) and net1 (emulated) exist
  2. if any networks are declared: remove every adapter except net0/net1,
     then add each declared adapter in order

Step 2 always starts from a clean slate, so adapters dropped or edited in
the configuration never survive a run. Nothing here retries; a failed call
propagates and the caller re-runs the whole reconciliation.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..driver.channel import MutationChannel
from ..driver.state import AdapterStateReader
from .arguments import build_adapter_args
from .base_adapters import BaseAdapterGuarantor
from .context import ReconcileContext, ReconcileReport
from .model import RESERVED_NET_IDS, NetworkDescriptor, NetworkMode, net_id_for


def _id_pattern(net_id: str) -> "re.Pattern[str]":
    return re.compile(rf"(?<![A-Za-z0-9_]){re.escape(net_id)}(?![A-Za-z0-9_])")


def arguments_referencing(
    raw_args: Iterable[str],
    net_ids: Sequence[str],
    *,
    legacy_substring_match: bool = False,
) -> List[str]:
    """
    Argument lines that mention any of `net_ids`, in their original order.

    By default an id only matches as a whole token, so `net1` does not match
    `id=net10`. `legacy_substring_match=True` restores plain substring
    containment for setups that depend on it.
    """
    if legacy_substring_match:
        def matches(arg: str) -> bool:
            return any(net_id in arg for net_id in net_ids)
    else:
        patterns = [_id_pattern(net_id) for net_id in net_ids]

        def matches(arg: str) -> bool:
            return any(p.search(arg) for p in patterns)

    return [arg for arg in raw_args if matches(arg)]


class AdapterReconciler:
    def __init__(
        self,
        reader: AdapterStateReader,
        mutator: MutationChannel,
        *,
        legacy_substring_match: bool = False,
        build_args: Callable[..., Tuple[str, str]] = build_adapter_args,
        guarantor: Optional[BaseAdapterGuarantor] = None,
    ):
        self.reader = reader
        self.mutator = mutator
        self.legacy_substring_match = legacy_substring_match
        self.build_args = build_args
        self.guarantor = guarantor or BaseAdapterGuarantor(reader, mutator, build_args=build_args)

    def ensure_base_adapters_exist(
        self, ctx: ReconcileContext, report: Optional[ReconcileReport] = None
    ) -> ReconcileReport:
        return self.guarantor.ensure(ctx, report)

    def clear_additional_adapters(
        self, ctx: ReconcileContext, report: Optional[ReconcileReport] = None
    ) -> List[str]:
        """Remove every adapter except net0/net1. Returns the removed argument lines."""
        ctx.logger.info("Clearing additional network adapters (preserving base adapters 0,1)")

        existing = self.reader.list_adapters(ctx.vm_id)
        to_remove = sorted(net_id for net_id in existing if net_id not in RESERVED_NET_IDS)
        if not to_remove:
            ctx.logger.info("No additional network adapters to remove")
            return []

        ctx.logger.info("Removing additional network adapters: %s", ", ".join(to_remove))

        raw_args = self.reader.list_raw_arguments(ctx.vm_id)
        args_to_remove = arguments_referencing(
            raw_args, to_remove, legacy_substring_match=self.legacy_substring_match
        )
        for arg in args_to_remove:
            ctx.logger.debug("Found argument to remove: %s", arg)

        if args_to_remove:
            ctx.logger.info("Removing %d QEMU arguments", len(args_to_remove))
            self.mutator.remove_arguments(ctx.vm_id, args_to_remove)
            if report is not None:
                report.removed_args.extend(args_to_remove)

        ctx.logger.info("Finished clearing additional network adapters")
        return args_to_remove

    def add_adapter(
        self,
        ctx: ReconcileContext,
        index: int,
        mode: NetworkMode,
        descriptor: Optional[NetworkDescriptor] = None,
        report: Optional[ReconcileReport] = None,
    ) -> bool:
        """Add adapter `index` unless a complete one exists. Returns True if added."""
        net_id = net_id_for(index)
        ctx.logger.info("Adding network adapter %d of type %s", index, mode.value)

        record = self.reader.list_adapters(ctx.vm_id).get(net_id)
        if record is not None and record.complete:
            ctx.logger.info("Network adapter %s already exists, skipping", net_id)
            if report is not None:
                report.skipped.append(net_id)
            return False

        netdev_arg, device_arg = self.build_args(net_id, mode, descriptor)
        ctx.logger.debug("Adding netdev: %s", netdev_arg)
        ctx.logger.debug("Adding device: %s", device_arg)
        self.mutator.add_arguments(ctx.vm_id, [netdev_arg, device_arg])
        if report is not None:
            report.added.append(net_id)
        return True

    def reconcile(self, ctx: ReconcileContext, descriptors: Sequence[NetworkDescriptor]) -> ReconcileReport:
        report = ReconcileReport()
        self.ensure_base_adapters_exist(ctx, report)

        if not descriptors:
            return report

        ctx.ui.output("Configuring network adapters...")
        self.clear_additional_adapters(ctx, report)

        for descriptor in descriptors:
            # UTM's UI numbers adapters from 1
            ctx.ui.detail(f"Adapter {descriptor.adapter_index + 1}: {descriptor.kind.value}")
            self.add_adapter(ctx, descriptor.adapter_index, descriptor.mode, descriptor, report)

        return report
