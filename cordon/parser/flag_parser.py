# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `FlagParser`, the component that splits a command's
argument list into recognized flag values and leftover positional arguments.

Recognized syntaxes (one or two leading dashes are equivalent):
- `-name value` / `--name value`
- `-name=value` / `--name=value`
- `-name` / `--name` for bool flags, which never consume the next token
- `--` ends flag parsing, every following token is positional
- a lone `-` is positional

Errors:
- An unknown flag token raises `UndefinedFlagError`.
- A value that fails coercion raises `InvalidFlagValueError`.
- A value-taking flag at the end of the input raises `MissingFlagValueError`.
- `-h`, `-help` and `--help`, unless a flag of that name is defined, raise
  `HelpSignal`. The parser never renders help itself.

Example Usage:
    parser = FlagParser([Flag("count", type=int, aliases=["c"])])
    result = parser.parse(["-c", "3", "file.txt"])

    # result.values == {"count": 3}
    # result.args == ["file.txt"]
"""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Iterable

from cordon.exceptions import (
    FlagDefinitionError,
    InvalidFlagValueError,
    MissingFlagValueError,
    UndefinedFlagError,
    UsageError,
)
from cordon.logger import logger
from cordon.parser.flag import Flag
from cordon.parser.utils import coerce_value
from cordon.signals import HelpSignal

HELP_FLAG_NAMES = ("h", "help")


@dataclass
class ParseResult:
    """Outcome of a successful parse."""

    values: dict[str, Any] = field(default_factory=dict)
    args: list[str] = field(default_factory=list)
    set_flags: set[str] = field(default_factory=set)


class FlagParser:
    """
    Parses a token list against an ordered set of `Flag` definitions.

    Args:
        flags (Iterable[Flag]): The flag definitions. Names and aliases must be
            unique across the set.
        interspersed (bool): If True, flags may follow positional arguments. If
            False, parsing stops at the first positional argument and the rest of
            the tokens are returned verbatim.
    """

    def __init__(self, flags: Iterable[Flag] = (), interspersed: bool = True) -> None:
        self.flags: list[Flag] = list(flags)
        self.interspersed = interspersed
        self._flag_map: dict[str, Flag] = {}
        for flag in self.flags:
            self._register(flag)

    def _register(self, flag: Flag) -> None:
        if not isinstance(flag, Flag):
            raise FlagDefinitionError(f"Expected a Flag, got {type(flag).__name__}")
        for name in flag.names:
            if name in self._flag_map:
                existing = self._flag_map[name]
                raise FlagDefinitionError(
                    f"Flag name '{name}' is already used by flag '{existing.name}'"
                )
            self._flag_map[name] = flag

    def get_flag(self, name: str) -> Flag | None:
        """Return the Flag registered under a name or alias."""
        return self._flag_map.get(name)

    def defaults(self) -> dict[str, Any]:
        return {flag.name: deepcopy(flag.default) for flag in self.flags}

    @staticmethod
    def is_flag_token(token: str) -> bool:
        return token.startswith("-") and token != "-"

    def _split_token(self, token: str) -> tuple[str, str | None]:
        """Split `--name=value` into the flag name and its inline value."""
        stripped = token[2:] if token.startswith("--") else token[1:]
        if not stripped or stripped.startswith("-") or stripped.startswith("="):
            raise UsageError(f"bad flag syntax: {token}")
        name, separator, value = stripped.partition("=")
        return name, value if separator else None

    def _coerce(self, flag: Flag, flag_token: str, raw: str) -> Any:
        try:
            return coerce_value(raw, flag.type)
        except (ValueError, TypeError) as error:
            logger.debug("Coercion of %r for '%s' failed: %s", raw, flag.name, error)
            raise InvalidFlagValueError(flag_token, raw, flag.type_name) from error

    def parse(self, tokens: Iterable[str]) -> ParseResult:
        """
        Parse tokens into flag values and positional arguments.

        The input is never mutated. Flags that are not given keep their default.

        Returns:
            ParseResult: Flag values keyed by primary name, positional arguments,
            and the names of the flags that were explicitly set.
        """
        tokens = list(tokens)
        result = ParseResult(values=self.defaults())
        i = 0
        while i < len(tokens):
            token = tokens[i]
            if token == "--":
                result.args.extend(tokens[i + 1 :])
                break
            if not self.is_flag_token(token):
                if not self.interspersed:
                    result.args.extend(tokens[i:])
                    break
                result.args.append(token)
                i += 1
                continue

            name, inline_value = self._split_token(token)
            flag_token = token.partition("=")[0]
            flag = self._flag_map.get(name)
            if flag is None:
                if name in HELP_FLAG_NAMES:
                    raise HelpSignal()
                raise UndefinedFlagError(flag_token)

            if flag.is_bool:
                value = (
                    True
                    if inline_value is None
                    else self._coerce(flag, flag_token, inline_value)
                )
                i += 1
            elif inline_value is not None:
                value = self._coerce(flag, flag_token, inline_value)
                i += 1
            elif i + 1 < len(tokens):
                value = self._coerce(flag, flag_token, tokens[i + 1])
                i += 2
            else:
                raise MissingFlagValueError(flag_token)

            if flag.multiple:
                if flag.name not in result.set_flags:
                    result.values[flag.name] = []
                result.values[flag.name].append(value)
            else:
                result.values[flag.name] = value
            result.set_flags.add(flag.name)

        return result

    def __str__(self) -> str:
        return (
            f"FlagParser(flags={len(self.flags)}, names={len(self._flag_map)}, "
            f"interspersed={self.interspersed})"
        )

    def __repr__(self) -> str:
        return str(self)
