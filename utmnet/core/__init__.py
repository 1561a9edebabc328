# SPDX-License-Identifier: LGPL-3.0-or-later
# utmnet/core/__init__.py
from .exceptions import ConfigurationError, ExternalCommandError, Fatal, UtmNetError

__all__ = ["ConfigurationError", "ExternalCommandError", "Fatal", "UtmNetError"]
