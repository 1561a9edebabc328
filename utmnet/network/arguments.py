# SPDX-License-Identifier: LGPL-3.0-or-later
# utmnet/network/arguments.py
"""
Build the QEMU argument pair that defines one UTM network adapter:

    -netdev vmnet-<backend>,id=<net_id>[,ifname=<iface>]
    -device <device_type>,mac=<mac>,netdev=<net_id>

UTM stores these strings verbatim as "QEMU additional arguments" and removes
them by exact text match, so the format must not drift.
"""

from __future__ import annotations

import random
from typing import Callable, Optional, Tuple

from .model import (
    BRIDGED_DEVICE_TYPE,
    DEFAULT_BRIDGE_INTERFACE,
    DEFAULT_DEVICE_TYPE,
    NetworkDescriptor,
    NetworkMode,
)

_BACKENDS = {
    NetworkMode.HOST_ONLY: "host",
    NetworkMode.BRIDGED: "bridged",
    NetworkMode.INTERNAL: "host",
    NetworkMode.SHARED: "shared",
    NetworkMode.EMULATED: "emulated",
}
_FALLBACK_BACKEND = "shared"

_rng = random.SystemRandom()


def random_mac_address(rand: Callable[[int], int] = _rng.getrandbits) -> str:
    """
    Random unicast, locally administered MAC (first octet xxxxxx10).
    """
    octets = [rand(8) for _ in range(6)]
    octets[0] = (octets[0] & 0xFC) | 0x02
    return ":".join(f"{o:02x}" for o in octets)


def vmnet_backend(mode: Optional[NetworkMode]) -> str:
    return _BACKENDS.get(mode, _FALLBACK_BACKEND) if mode is not None else _FALLBACK_BACKEND


def build_adapter_args(
    net_id: str,
    mode: NetworkMode,
    descriptor: Optional[NetworkDescriptor] = None,
    *,
    mac_factory: Callable[[], str] = random_mac_address,
) -> Tuple[str, str]:
    """
    Return `(netdev_arg, device_arg)` for `net_id`.

    Without a descriptor (base adapters) the MAC is always generated and the
    default device type for `mode` is used.
    """
    if descriptor is not None and not descriptor.wants_generated_mac:
        mac = str(descriptor.mac)
    else:
        mac = mac_factory()

    netdev_options = ""
    if mode is NetworkMode.BRIDGED:
        bridge = (descriptor.bridge if descriptor is not None else None) or DEFAULT_BRIDGE_INTERFACE
        netdev_options = f",ifname={bridge}"

    device_type = descriptor.device_type if descriptor is not None else None
    if not device_type:
        device_type = BRIDGED_DEVICE_TYPE if mode is NetworkMode.BRIDGED else DEFAULT_DEVICE_TYPE

    netdev_arg = f"-netdev vmnet-{vmnet_backend(mode)},id={net_id}{netdev_options}"
    device_arg = f"-device {device_type},mac={mac},netdev={net_id}"
    return netdev_arg, device_arg
