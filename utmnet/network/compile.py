# SPDX-License-Identifier: LGPL-3.0-or-later
# utmnet/network/compile.py
"""
Compile declared network attachments into NetworkDescriptor values.

Entries are `(type, options)` pairs in declaration order, e.g.

    [("forwarded_port", {"guest": 22, "host": 2222}),
     ("private_network", {"ip": "192.168.1.50"}),
     ("public_network", {"bridge": "en1", "utm__mac": "auto"})]

Rules:
  - forwarded_port entries are skipped (port forwarding lives elsewhere)
  - every other entry consumes the next adapter index, starting at 2
  - entries of an unsupported type consume their index but produce no
    descriptor; they are logged, never rejected
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .model import (
    DEFAULT_NETMASK,
    FIRST_ADDITIONAL_INDEX,
    NetworkDescriptor,
    NetworkKind,
    NetworkMode,
)

log = logging.getLogger("utmnet.network.compile")

FORWARDED_PORT = "forwarded_port"
PROVIDER_SCOPE = "utm"

NetworkEntry = Tuple[str, Mapping[str, Any]]


def scoped_override(options: Mapping[str, Any], scope: str = PROVIDER_SCOPE) -> Dict[str, Any]:
    """
    Apply provider-scoped keys: `utm__ip: x` replaces `ip`.

    Keys scoped to other providers (`virtualbox__intnet`) are kept as-is.
    """
    result = dict(options or {})
    for key, value in (options or {}).items():
        parts = str(key).split("__", 1)
        if len(parts) != 2:
            continue
        if parts[0] == scope:
            result[parts[1]] = value
            result.pop(key, None)
    return result


def _entry_type(raw: Any) -> str:
    # Accept enum members as well as plain strings.
    return str(getattr(raw, "value", raw) or "").strip()


def _private_mode(options: Mapping[str, Any]) -> NetworkMode:
    # Private networks are always host-only; `bridge` only names the interface.
    return NetworkMode.HOST_ONLY


def _addressing(options: Mapping[str, Any]) -> Dict[str, Any]:
    ip = options.get("ip")
    if ip:
        return {"ip": str(ip), "netmask": str(options.get("netmask") or DEFAULT_NETMASK), "dhcp": False}
    return {"ip": None, "netmask": None, "dhcp": True}


def _optional_str(options: Mapping[str, Any], key: str) -> Optional[str]:
    v = options.get(key)
    return str(v) if v else None


def compile_private_network(adapter_index: int, options: Mapping[str, Any]) -> NetworkDescriptor:
    return NetworkDescriptor(
        adapter_index=adapter_index,
        kind=NetworkKind.PRIVATE,
        mode=_private_mode(options),
        bridge=_optional_str(options, "bridge"),
        mac=_optional_str(options, "mac"),
        device_type=_optional_str(options, "device_type"),
        **_addressing(options),
    )


def compile_public_network(adapter_index: int, options: Mapping[str, Any]) -> NetworkDescriptor:
    return NetworkDescriptor(
        adapter_index=adapter_index,
        kind=NetworkKind.PUBLIC,
        mode=NetworkMode.BRIDGED,
        bridge=_optional_str(options, "bridge"),
        mac=_optional_str(options, "mac"),
        device_type=_optional_str(options, "device_type"),
        **_addressing(options),
    )


_COMPILERS = {
    NetworkKind.PRIVATE.value: compile_private_network,
    NetworkKind.PUBLIC.value: compile_public_network,
}


def compile_networks(entries: Iterable[NetworkEntry], scope: str = PROVIDER_SCOPE) -> List[NetworkDescriptor]:
    """Turn ordered `(type, options)` entries into ordered descriptors."""
    networks: List[NetworkDescriptor] = []
    adapter_index = FIRST_ADDITIONAL_INDEX

    for raw_type, raw_options in entries:
        net_type = _entry_type(raw_type)
        if net_type == FORWARDED_PORT:
            continue

        options = scoped_override(raw_options or {}, scope)
        compiler = _COMPILERS.get(net_type)
        if compiler is None:
            log.debug("Skipping unsupported network type %r at adapter index %d", net_type, adapter_index)
        else:
            networks.append(compiler(adapter_index, options))

        adapter_index += 1

    return networks
