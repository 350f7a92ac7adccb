"""
Cordon CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .flag import Flag
from .flag_parser import FlagParser, ParseResult
from .utils import coerce_value

__all__ = [
    "Flag",
    "FlagParser",
    "ParseResult",
    "coerce_value",
]
