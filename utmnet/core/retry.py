# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
"""
Whole-run re-invocation with exponential backoff.

The reconciler never retries a single osascript call on its own: a failed
batch leaves the VM in an unknown state, and only a complete re-run (read,
diff, mutate) is known to converge. Callers wrap the whole reconciliation
with `rerun_with_backoff`.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Callable, Optional, Tuple, Type, TypeVar, Union

T = TypeVar("T")


def backoff_delay(attempt: int, base_backoff_s: float, max_backoff_s: float, jitter_s: float) -> float:
    """Sleep time before attempt `attempt + 1` (attempt is 1-based)."""
    delay = min(base_backoff_s * (2 ** (attempt - 1)), max_backoff_s)
    if jitter_s > 0:
        delay += random.uniform(0, jitter_s)
    return delay


def rerun_with_backoff(
    operation: Callable[[], T],
    *,
    max_attempts: int = 1,
    base_backoff_s: float = 2.0,
    max_backoff_s: float = 30.0,
    jitter_s: float = 0.5,
    exceptions: Union[Type[BaseException], Tuple[Type[BaseException], ...]] = Exception,
    operation_name: str = "operation",
    logger: Optional[Any] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Run `operation`, re-running it up to `max_attempts` times in total when it
    raises one of `exceptions`. The last exception propagates unchanged.

    Example:
        report = rerun_with_backoff(
            lambda: reconciler.reconcile(ctx, descriptors),
            max_attempts=3,
            exceptions=ExternalCommandError,
            operation_name="reconcile",
            logger=logger,
        )
    """
    attempts = max(1, int(max_attempts))

    for attempt in range(1, attempts + 1):
        try:
            return operation()
        except exceptions as e:
            if attempt >= attempts:
                if logger is not None and attempts > 1:
                    logger.log(logging.ERROR, "%s failed after %d attempts: %s", operation_name, attempts, e)
                raise

            delay = backoff_delay(attempt, base_backoff_s, max_backoff_s, jitter_s)
            if logger is not None:
                logger.log(
                    logging.WARNING,
                    "%s failed (attempt %d/%d): %s. Re-running in %.2fs...",
                    operation_name,
                    attempt,
                    attempts,
                    e,
                    delay,
                )
            sleep(delay)

    raise RuntimeError(f"{operation_name} failed with no exception recorded")
