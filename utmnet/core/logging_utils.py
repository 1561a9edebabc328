# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
"""
Shared logging helpers.
"""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Generator

from .logger import Log


def emoji_for_level(level: int) -> str:
    if level >= logging.ERROR:
        return "❌"
    if level >= logging.WARNING:
        return "⚠️"
    if level >= logging.INFO:
        return "✅"
    return "🔍"


def log_with_emoji(logger: Any, level: int, msg: str, *args: Any) -> None:
    logger.log(level, f"{emoji_for_level(level)} {msg}", *args)


@contextmanager
def log_step(logger: Any, description: str) -> Generator[None, None, None]:
    """
    Log the start of an operation, run the block, then log completion with
    the elapsed time. On exception, log the failure and re-raise.

    Example:
        with log_step(logger, "Reconciling network adapters"):
            reconciler.reconcile(ctx, descriptors)
    """
    t0 = time.time()
    log_with_emoji(logger, logging.INFO, "%s ...", description)
    try:
        yield
    except Exception as e:
        Log.fail(logger, f"{description} failed ({time.time() - t0:.2f}s): {e}")
        raise
    log_with_emoji(logger, logging.INFO, "%s done (%.2fs)", description, time.time() - t0)
