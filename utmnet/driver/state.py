# SPDX-License-Identifier: LGPL-3.0-or-later
# utmnet/driver/state.py
"""
Typed view of a VM's network state, read fresh through the state channel.

`read_qemu_network_adapters` prints one line per QEMU additional argument
plus a marker line for every network directive it recognizes:

    Arg 0: -netdev vmnet-shared,id=net0
    netdev:net0
    Arg 1: -device e1000,mac=02:1c:42:aa:bb:cc,netdev=net0
    device:net0

`read_network_interfaces` lists adapters configured through UTM's own
network settings (not QEMU arguments):

    nic0,shared
    nic1,emulated

Raw text stays in this module. The only raw strings handed out are the
exact argument lines, because UTM removes arguments by literal match.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List

from ..network.model import AdapterRecord
from .channel import StateChannel

log = logging.getLogger("utmnet.driver.state")

_ARG_RE = re.compile(r"^\s*Arg \d+: (.*)$")
_NIC_RE = re.compile(r"^nic(\d+),(.+?)$")
_NETDEV_PREFIX = "netdev:"
_DEVICE_PREFIX = "device:"


def _marker_id(line: str) -> str:
    return line.split(":", 2)[1].strip()


def parse_adapter_records(output: str) -> Dict[str, AdapterRecord]:
    adapters: Dict[str, AdapterRecord] = {}
    for raw in (output or "").splitlines():
        line = raw.strip()
        if line.startswith(_NETDEV_PREFIX):
            net_id = _marker_id(line)
            if net_id:
                adapters.setdefault(net_id, AdapterRecord(net_id)).netdev_present = True
        elif line.startswith(_DEVICE_PREFIX):
            net_id = _marker_id(line)
            if net_id:
                adapters.setdefault(net_id, AdapterRecord(net_id)).device_present = True
    return adapters


def parse_raw_arguments(output: str) -> List[str]:
    args: List[str] = []
    for raw in (output or "").splitlines():
        # Argument text is removed by exact match; keep it byte for byte.
        m = _ARG_RE.match(raw.rstrip("\r\n"))
        if m:
            args.append(m.group(1))
    return args


def parse_native_interfaces(output: str) -> Dict[int, str]:
    nics: Dict[int, str] = {}
    for raw in (output or "").splitlines():
        m = _NIC_RE.match(raw.strip())
        if m:
            nics[int(m.group(1))] = m.group(2).strip()
    return nics


class AdapterStateReader:
    """Reads adapter state for one VM per call; nothing is cached."""

    def __init__(self, channel: StateChannel):
        self.channel = channel

    def list_adapters(self, vm_id: str) -> Dict[str, AdapterRecord]:
        adapters = parse_adapter_records(self.channel.read_network_adapters(vm_id))
        log.debug("Found QEMU network adapters: %s", sorted(adapters))
        return adapters

    def list_raw_arguments(self, vm_id: str) -> List[str]:
        return parse_raw_arguments(self.channel.read_network_adapters(vm_id))

    def list_native_interfaces(self, vm_id: str) -> Dict[int, str]:
        return parse_native_interfaces(self.channel.read_network_interfaces(vm_id))
