# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
from __future__ import annotations

from .orchestrator import Orchestrator

__all__ = ["Orchestrator"]
