"""
Cordon CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .command import Command
from .context import Context
from .cordon import Cordon
from .exceptions import (
    CommandNotFoundError,
    CordonError,
    ExitError,
    HookError,
    InvalidFlagValueError,
    MultiError,
    UndefinedFlagError,
    UsageError,
)
from .parser import Flag
from .version import __version__

logger = logging.getLogger("cordon")


__all__ = [
    "Cordon",
    "Command",
    "Context",
    "Flag",
    "CordonError",
    "CommandNotFoundError",
    "ExitError",
    "HookError",
    "InvalidFlagValueError",
    "MultiError",
    "UndefinedFlagError",
    "UsageError",
    "__version__",
]
