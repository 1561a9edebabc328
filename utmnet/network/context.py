# SPDX-License-Identifier: LGPL-3.0-or-later
# utmnet/network/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Protocol


class ProgressSink(Protocol):
    """Receives human-readable status lines; never affects control flow."""

    def output(self, msg: str) -> None: ...

    def detail(self, msg: str) -> None: ...


@dataclass(frozen=True)
class ReconcileContext:
    """Everything one reconciliation call needs to know about its target."""

    vm_id: str
    logger: Any
    ui: ProgressSink


@dataclass
class ReconcileReport:
    """What a reconciliation run did, for display only."""

    added: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    removed_args: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed_args)

    def to_dict(self) -> dict:
        return {
            "added": list(self.added),
            "skipped": list(self.skipped),
            "removed_args": list(self.removed_args),
            "changed": self.changed,
        }
