# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# utmnet/driver/channel.py
"""
osascript channel to UTM.

Everything the reconciler reads or writes goes through one of two
protocols; `UtmScriptChannel` implements both by running the bundled
AppleScripts one at a time:

    osascript <scripts_dir>/<script> <vm_id> [--args <arg> <arg> ...]

Any process failure surfaces as ExternalCommandError. A failed batch leaves
the VM in an unknown state; callers re-run the whole reconciliation.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any, List, Optional, Protocol, Sequence, Union

from ..core.exceptions import wrap_external
from ..core.logger import Log
from ..core.utils import U
from .profiles import DriverProfile, select_profile

DEFAULT_SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"


class StateChannel(Protocol):
    def read_network_adapters(self, vm_id: str) -> str: ...

    def read_network_interfaces(self, vm_id: str) -> str: ...


class MutationChannel(Protocol):
    def add_arguments(self, vm_id: str, args: Sequence[str]) -> None: ...

    def remove_arguments(self, vm_id: str, args: Sequence[str]) -> None: ...


class UtmScriptChannel:
    def __init__(
        self,
        logger: Any,
        profile: Optional[DriverProfile] = None,
        *,
        scripts_dir: Optional[Union[str, Path]] = None,
        timeout: Optional[float] = None,
        osascript_bin: str = "osascript",
    ):
        self.logger = logger
        self.profile = profile or select_profile()
        self.scripts_dir = Path(scripts_dir).expanduser() if scripts_dir else DEFAULT_SCRIPTS_DIR
        self.timeout = timeout
        self.osascript_bin = osascript_bin

    def _command(self, script: str, argv: Sequence[str]) -> List[str]:
        return [self.osascript_bin, str(self.scripts_dir / script), *argv]

    def execute_osa_script(self, script: str, *argv: str) -> str:
        cmd = self._command(script, argv)
        vm = argv[0] if argv else None
        try:
            cp = U.run_cmd(self.logger, cmd, capture=True, timeout=self.timeout)
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise wrap_external(script, e, cmd=cmd, returncode=e.returncode, stderr=stderr).with_context(vm=vm) from e
        except subprocess.TimeoutExpired as e:
            raise wrap_external(script, e, cmd=cmd, timeout=self.timeout).with_context(vm=vm) from e
        except OSError as e:
            raise wrap_external(script, e, cmd=cmd).with_context(vm=vm) from e

        out = U.to_text(cp.stdout)
        Log.trace(self.logger, "%s output: %r", script, out)
        return out

    def read_network_adapters(self, vm_id: str) -> str:
        return self.execute_osa_script(self.profile.read_adapters_script, vm_id)

    def read_network_interfaces(self, vm_id: str) -> str:
        return self.execute_osa_script(self.profile.read_interfaces_script, vm_id)

    def add_arguments(self, vm_id: str, args: Sequence[str]) -> None:
        out = self.execute_osa_script(self.profile.add_arguments_script, vm_id, "--args", *args)
        self.logger.debug("Add arguments output: %s", out.strip())

    def remove_arguments(self, vm_id: str, args: Sequence[str]) -> None:
        out = self.execute_osa_script(self.profile.remove_arguments_script, vm_id, "--args", *args)
        self.logger.debug("Remove arguments output: %s", out.strip())
