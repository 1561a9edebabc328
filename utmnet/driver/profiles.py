# SPDX-License-Identifier: LGPL-3.0-or-later
# utmnet/driver/profiles.py
"""
Per-UTM-version driver profiles.

Each supported UTM release gets a complete, explicit profile: which
AppleScript implements each channel operation. A profile is chosen once,
from the configured version string, when the channel is built.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from ..core.exceptions import ConfigurationError

_VERSION_RE = re.compile(r"^\s*v?(\d+)(?:\.(\d+))?(?:\.(\d+))?")


@dataclass(frozen=True)
class DriverProfile:
    name: str
    min_version: Tuple[int, int]
    read_adapters_script: str
    read_interfaces_script: str
    add_arguments_script: str
    remove_arguments_script: str

    def scripts(self) -> Tuple[str, ...]:
        return (
            self.read_adapters_script,
            self.read_interfaces_script,
            self.add_arguments_script,
            self.remove_arguments_script,
        )


UTM_4_5 = DriverProfile(
    name="4.5",
    min_version=(4, 5),
    read_adapters_script="read_qemu_network_adapters.applescript",
    read_interfaces_script="read_network_interfaces.applescript",
    add_arguments_script="add_qemu_additional_args.applescript",
    remove_arguments_script="remove_qemu_additional_args.applescript",
)

UTM_4_6 = DriverProfile(
    name="4.6",
    min_version=(4, 6),
    read_adapters_script="read_qemu_network_adapters.applescript",
    read_interfaces_script="read_network_interfaces.applescript",
    add_arguments_script="add_qemu_additional_args.applescript",
    remove_arguments_script="remove_qemu_additional_args.applescript",
)

# Newest first. The network scripts did not change between UTM 4.5 and 4.6,
# so these profiles share script names and differ only in min_version.
PROFILES: Tuple[DriverProfile, ...] = (UTM_4_6, UTM_4_5)
DEFAULT_UTM_VERSION = "4.6"


def parse_version(version: str) -> Tuple[int, int]:
    m = _VERSION_RE.match(str(version or ""))
    if not m:
        raise ConfigurationError(code=2, msg=f"Unrecognized UTM version: {version!r}")
    return int(m.group(1)), int(m.group(2) or 0)


def select_profile(version: str = DEFAULT_UTM_VERSION) -> DriverProfile:
    """Newest profile whose minimum version is <= `version`."""
    wanted = parse_version(version)
    for profile in PROFILES:
        if wanted >= profile.min_version:
            return profile
    supported = ", ".join(p.name for p in reversed(PROFILES))
    raise ConfigurationError(
        code=2,
        msg=f"UTM {version} is not supported (supported: {supported} and newer)",
        context={"utm_version": version},
    )
