# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Turns raw command-line strings into the value a `Flag` declares.

`coerce_value` understands plain types and converter callables, `bool` (strict
literals only), `datetime` (through dateutil), `Enum` subclasses (by member
name or value), `Literal[...]` and unions. Every rejection is a `ValueError`
(a custom converter may also raise `TypeError`); `FlagParser` reports either
one as an `InvalidFlagValueError`.
"""
import types
from datetime import datetime
from enum import EnumMeta
from typing import Any, Callable, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

BOOL_LITERALS: dict[str, bool] = {
    "1": True,
    "t": True,
    "true": True,
    "y": True,
    "yes": True,
    "on": True,
    "0": False,
    "f": False,
    "false": False,
    "n": False,
    "no": False,
    "off": False,
}


def coerce_bool(value: Any) -> bool:
    """
    Convert `value` to a bool.

    Only the literals in `BOOL_LITERALS` (case-insensitive) are accepted, so a
    typo never becomes a silent `True`.
    """
    if isinstance(value, bool):
        return value
    try:
        return BOOL_LITERALS[str(value).strip().lower()]
    except KeyError:
        raise ValueError(f"'{value}' is not a valid boolean") from None


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """Resolve `value` to a member of `enum_type` by name, then by value."""
    if isinstance(value, enum_type):
        return value
    members = enum_type.__members__
    if isinstance(value, str) and value in members:
        return members[value]
    for member in enum_type:
        if member.value == value or str(member.value) == str(value):
            return member
    choices = ", ".join(str(member.value) for member in enum_type)
    raise ValueError(f"'{value}' should be one of {{{choices}}}")


def coerce_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as error:
        raise ValueError(f"Value '{value}' could not be parsed as a datetime") from error


def _is_union(target_type: Any) -> bool:
    return isinstance(target_type, types.UnionType) or get_origin(target_type) is Union


def _coerce_union(value: Any, members: tuple[Any, ...]) -> Any:
    for member in members:
        try:
            return coerce_value(value, member)
        except (ValueError, TypeError):
            continue
    raise ValueError(f"Value '{value}' could not be coerced to any of {members}")


_CONVERTERS: dict[Any, Callable[[Any], Any]] = {
    bool: coerce_bool,
    datetime: coerce_datetime,
}


def coerce_value(value: Any, target_type: Any) -> Any:
    """
    Convert `value` to `target_type`.

    Union members are tried left to right and the first that accepts the value
    wins. Values already of a plain target type are returned unchanged. Any
    other target is called with the value.

    Raises:
        ValueError: If the value is not acceptable for the target.
    """
    if get_origin(target_type) is Literal:
        if value not in get_args(target_type):
            raise ValueError(
                f"Value '{value}' is not a valid literal for type {target_type}"
            )
        return value
    if _is_union(target_type):
        return _coerce_union(value, get_args(target_type))
    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)
    if target_type in _CONVERTERS:
        return _CONVERTERS[target_type](value)
    if isinstance(target_type, type) and isinstance(value, target_type):
        return value
    return target_type(value)


def type_name(target_type: Any) -> str:
    """Return a readable name for a coercion target."""
    if get_origin(target_type) is Literal:
        return "one of " + ", ".join(repr(arg) for arg in get_args(target_type))
    if _is_union(target_type):
        return " | ".join(type_name(arg) for arg in get_args(target_type))
    return getattr(target_type, "__name__", repr(target_type))
