# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# utmnet/__init__.py
"""
utmnet - UTM virtual machine network adapter reconciliation

Keeps the QEMU network adapters of a UTM VM in line with a declared list of
private and public networks. Adapters 0 (shared) and 1 (emulated) are always
present; every declared network becomes adapter 2, 3, ... on each run.

Usage as a library:

    from utmnet.driver import AdapterStateReader, UtmScriptChannel, select_profile
    from utmnet.network import compile_networks
    from utmnet.network.context import ReconcileContext
    from utmnet.network.reconciler import AdapterReconciler

    channel = UtmScriptChannel(logger, select_profile("4.6"))
    reconciler = AdapterReconciler(AdapterStateReader(channel), channel)
    descriptors = compile_networks([("private_network", {"ip": "192.168.1.50"})])
    reconciler.reconcile(ReconcileContext(vm_id, logger, ui), descriptors)
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
