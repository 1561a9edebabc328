# SPDX-License-Identifier: LGPL-3.0-or-later
# utmnet/network/__init__.py
from .arguments import build_adapter_args, random_mac_address
from .compile import compile_networks
from .model import AdapterRecord, NetworkDescriptor, NetworkKind, NetworkMode

__all__ = [
    "AdapterRecord",
    "NetworkDescriptor",
    "NetworkKind",
    "NetworkMode",
    "build_adapter_args",
    "compile_networks",
    "random_mac_address",
]
