# SPDX-License-Identifier: LGPL-3.0-or-later
# utmnet/network/base_adapters.py
"""
Guarantee the two reserved adapters every UTM VM needs:

    net0  shared (NAT)     internet access
    net1  emulated (VLAN)  SSH / port forwarding

An adapter counts as present when its QEMU argument pair is complete, or,
for VMs configured through UTM's own network settings, when a native
interface exists at that index. Otherwise a fresh pair is added.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

from ..driver.channel import MutationChannel
from ..driver.state import AdapterStateReader
from .arguments import build_adapter_args
from .context import ReconcileContext, ReconcileReport
from .model import BASE_ADAPTERS, NetworkMode, net_id_for


class BaseAdapterGuarantor:
    def __init__(
        self,
        reader: AdapterStateReader,
        mutator: MutationChannel,
        *,
        build_args: Callable[..., Tuple[str, str]] = build_adapter_args,
        base_adapters: Sequence[Tuple[int, NetworkMode]] = BASE_ADAPTERS,
    ):
        self.reader = reader
        self.mutator = mutator
        self.build_args = build_args
        self.base_adapters = tuple(base_adapters)

    def ensure(self, ctx: ReconcileContext, report: Optional[ReconcileReport] = None) -> ReconcileReport:
        report = report if report is not None else ReconcileReport()
        ctx.ui.detail("Ensuring base network adapters exist...")
        for index, mode in self.base_adapters:
            self.ensure_adapter_exists(ctx, index, mode, report)
        return report

    def ensure_adapter_exists(
        self,
        ctx: ReconcileContext,
        index: int,
        mode: NetworkMode,
        report: Optional[ReconcileReport] = None,
    ) -> bool:
        """Add the adapter unless it already exists. Returns True if added."""
        report = report if report is not None else ReconcileReport()
        net_id = net_id_for(index)
        ctx.logger.info("Ensuring network adapter %d (%s) exists", index, mode.value)

        record = self.reader.list_adapters(ctx.vm_id).get(net_id)
        if record is not None and record.complete:
            ctx.logger.info("Base network adapter %s already exists, skipping", net_id)
            report.skipped.append(net_id)
            return False

        interfaces = self.reader.list_native_interfaces(ctx.vm_id)
        if index in interfaces:
            ctx.logger.debug("Adapter %d already exists as %s", index, interfaces[index])
            report.skipped.append(net_id)
            return False

        netdev_arg, device_arg = self.build_args(net_id, mode)
        ctx.logger.debug("Adding netdev: %s", netdev_arg)
        ctx.logger.debug("Adding device: %s", device_arg)
        self.mutator.add_arguments(ctx.vm_id, [netdev_arg, device_arg])
        report.added.append(net_id)
        return True
