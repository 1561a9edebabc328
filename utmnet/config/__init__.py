# SPDX-License-Identifier: LGPL-3.0-or-later
# utmnet/config/__init__.py
from .config_loader import Config, deep_merge

__all__ = ["Config", "deep_merge"]
