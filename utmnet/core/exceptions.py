# SPDX-License-Identifier: LGPL-3.0-or-later
# utmnet/core/exceptions.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence


def _safe_int(x: Any, default: int = 1) -> int:
    try:
        return int(x)
    except Exception:
        return default


def _clamp_exit_code(code: int) -> int:
    # Exit codes are 0..255
    if code < 0:
        return 1
    if code > 255:
        return 255
    return code


def _one_line(s: str, limit: int = 600) -> str:
    s = (s or "").strip().replace("\r", " ").replace("\n", " ")
    s = " ".join(s.split())
    return s if len(s) <= limit else (s[: limit - 3] + "...")


def _format_context_compact(ctx: Dict[str, Any]) -> str:
    return ", ".join(f"{k}={ctx.get(k)!r}" for k in sorted(ctx.keys()))


@dataclass(eq=False)
class UtmNetError(Exception):
    """
    Base project error with:
      - stable fields for reporting/JSON
      - readable __str__ (what users see)
      - safe code handling (never crashes on int())
    """
    code: int = 1
    msg: str = "error"
    cause: Optional[BaseException] = None
    context: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        self.code = _clamp_exit_code(_safe_int(self.code, default=1))
        self.msg = _one_line(self.msg) or self.__class__.__name__
        super().__init__(self.msg)
        self.args = (self.msg,)

    def with_context(self, **ctx: Any) -> "UtmNetError":
        if self.context is None:
            self.context = {}
        self.context.update(ctx)
        return self

    def user_message(self, *, include_context: bool = False, include_cause: bool = False) -> str:
        """
        Human-friendly message for CLI output/logs.
        """
        parts = [self.msg or self.__class__.__name__]

        if include_context and self.context:
            parts.append(f"[{_one_line(_format_context_compact(self.context))}]")

        if include_cause and self.cause is not None:
            parts.append(f"(cause: {type(self.cause).__name__}: {_one_line(str(self.cause))})")

        return " ".join(parts)

    def __str__(self) -> str:
        return self.user_message(include_context=False, include_cause=False)

    def to_dict(self, *, include_cause: bool = False) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "code": self.code,
            "message": self.msg,
            "context": self.context or {},
        }
        if include_cause and self.cause is not None:
            d["cause"] = {"type": type(self.cause).__name__, "message": _one_line(str(self.cause))}
        return d


class Fatal(UtmNetError):
    """
    User-facing fatal error (exit code is honored by the top-level main()).
    """
    pass


class ConfigurationError(Fatal):
    """
    A configuration file could not be used at all (unreadable, wrong shape,
    missing VM id). Individual network declarations never raise this.
    """
    pass


class ExternalCommandError(UtmNetError):
    """
    osascript / UTM call failed (non-zero exit, timeout, missing binary).
    The VM's final adapter state is unknown; re-running is safe.
    """
    pass


def wrap_config(msg: str, exc: Optional[BaseException] = None, code: int = 2, **context: Any) -> ConfigurationError:
    return ConfigurationError(code=code, msg=msg, cause=exc, context=context or None)


def wrap_external(
    script: str,
    exc: Optional[BaseException] = None,
    *,
    cmd: Optional[Sequence[str]] = None,
    code: int = 60,
    **context: Any,
) -> ExternalCommandError:
    ctx: Dict[str, Any] = {"script": script}
    if cmd is not None:
        ctx["cmd"] = " ".join(cmd)
    ctx.update(context)
    reason = _one_line(str(exc)) if exc is not None else "failed"
    return ExternalCommandError(code=code, msg=f"{script} failed: {reason}", cause=exc, context=ctx)


def format_exception_for_cli(e: BaseException, *, verbose: int = 0) -> str:
    """
    One-liner output for CLI.

    verbose=0: just message
    verbose=1: message + compact context (if any)
    verbose>=2: message + context + cause
    """
    if isinstance(e, UtmNetError):
        return e.user_message(
            include_context=(verbose >= 1),
            include_cause=(verbose >= 2),
        )

    if verbose >= 2:
        return f"{type(e).__name__}: {_one_line(str(e))}"
    return _one_line(str(e)) or type(e).__name__
