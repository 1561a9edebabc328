# SPDX-License-Identifier: LGPL-3.0-or-later
# utmnet/network/model.py
"""
Network model for UTM adapter reconciliation.

- NetworkKind / NetworkMode enums
- NetworkDescriptor: one desired additional adapter, compiled from config
- AdapterRecord: one adapter as observed in the VM's QEMU arguments
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


# Adapter 0 is the shared (NAT) uplink, adapter 1 the emulated VLAN used for
# SSH port forwarding. User-declared adapters start after them.
SHARED_ADAPTER_INDEX = 0
EMULATED_ADAPTER_INDEX = 1
FIRST_ADDITIONAL_INDEX = 2

DEFAULT_NETMASK = "255.255.255.0"
DEFAULT_BRIDGE_INTERFACE = "en0"
AUTO_MAC = "auto"

BRIDGED_DEVICE_TYPE = "virtio-net-pci"
DEFAULT_DEVICE_TYPE = "e1000"


class NetworkKind(Enum):
    """Declared attachment type."""

    PRIVATE = "private_network"
    PUBLIC = "public_network"


class NetworkMode(Enum):
    """How an adapter is backed on the host (vmnet backend selection)."""

    HOST_ONLY = "host_only"
    BRIDGED = "bridged"
    INTERNAL = "internal"  # no distinct vmnet backend; maps to host
    SHARED = "shared"  # base adapter 0 only
    EMULATED = "emulated"  # base adapter 1 only


BASE_ADAPTERS: Tuple[Tuple[int, NetworkMode], ...] = (
    (SHARED_ADAPTER_INDEX, NetworkMode.SHARED),
    (EMULATED_ADAPTER_INDEX, NetworkMode.EMULATED),
)


def net_id_for(adapter_index: int) -> str:
    return f"net{adapter_index}"


RESERVED_NET_IDS = frozenset(net_id_for(i) for i, _ in BASE_ADAPTERS)


@dataclass(frozen=True)
class NetworkDescriptor:
    """A desired additional adapter (index >= 2)."""

    adapter_index: int
    kind: NetworkKind
    mode: NetworkMode
    dhcp: bool = True
    ip: Optional[str] = None
    netmask: Optional[str] = None
    bridge: Optional[str] = None
    mac: Optional[str] = None
    device_type: Optional[str] = None

    @property
    def net_id(self) -> str:
        return net_id_for(self.adapter_index)

    @property
    def wants_generated_mac(self) -> bool:
        return self.mac is None or self.mac == AUTO_MAC

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["kind"] = self.kind.value
        d["mode"] = self.mode.value
        d["net_id"] = self.net_id
        return {k: v for k, v in d.items() if v is not None}


@dataclass
class AdapterRecord:
    """
    One adapter observed in the VM's QEMU additional arguments.

    A record with only one of the two directives present is incomplete and is
    treated exactly like an absent adapter.
    """

    net_id: str
    netdev_present: bool = False
    device_present: bool = False

    @property
    def complete(self) -> bool:
        return self.netdev_present and self.device_present

    @property
    def reserved(self) -> bool:
        return self.net_id in RESERVED_NET_IDS
