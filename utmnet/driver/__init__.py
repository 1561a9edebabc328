# SPDX-License-Identifier: LGPL-3.0-or-later
# utmnet/driver/__init__.py
from .channel import MutationChannel, StateChannel, UtmScriptChannel
from .profiles import DriverProfile, select_profile
from .state import AdapterStateReader

__all__ = [
    "AdapterStateReader",
    "DriverProfile",
    "MutationChannel",
    "StateChannel",
    "UtmScriptChannel",
    "select_profile",
]
