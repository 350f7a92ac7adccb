from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Literal, Union

import pytest

from cordon.parser.utils import coerce_bool, coerce_value, type_name


class Mode(Enum):
    DEV = "dev"
    PROD = "prod"


class Level(Enum):
    LOW = 1
    HIGH = 2


# --- Tests ---
@pytest.mark.parametrize(
    "value, target_type, expected",
    [
        ("42", int, 42),
        ("3.14", float, 3.14),
        ("hello", str, "hello"),
        ("", str, ""),
        ("True", bool, True),
        ("off", bool, False),
    ],
)
def test_coerce_value_basic(value, target_type, expected):
    assert coerce_value(value, target_type) == expected


@pytest.mark.parametrize("value", ["maybe", "", "2", "tru"])
def test_coerce_bool_is_strict(value):
    with pytest.raises(ValueError):
        coerce_bool(value)


def test_coerce_value_union():
    assert coerce_value("42", int | float) == 42
    assert coerce_value("3.5", int | float) == 3.5
    assert coerce_value("abc", Union[int, str]) == "abc"
    with pytest.raises(ValueError, match="could not be coerced"):
        coerce_value("abc", int | float)


def test_coerce_value_enum_by_name_or_value():
    assert coerce_value("dev", Mode) is Mode.DEV
    assert coerce_value("PROD", Mode) is Mode.PROD
    assert coerce_value("2", Level) is Level.HIGH
    with pytest.raises(ValueError, match="should be one of"):
        coerce_value("staging", Mode)


def test_coerce_value_literal():
    assert coerce_value("dev", Literal["dev", "prod"]) == "dev"
    with pytest.raises(ValueError):
        coerce_value("staging", Literal["dev", "prod"])


def test_coerce_value_datetime():
    assert coerce_value("2024-05-01 13:30", datetime) == datetime(2024, 5, 1, 13, 30)
    with pytest.raises(ValueError, match="datetime"):
        coerce_value("not a date", datetime)


def test_coerce_value_custom_converter():
    assert coerce_value("/tmp/out", Path) == Path("/tmp/out")
    assert coerce_value("a,b", lambda raw: raw.split(",")) == ["a", "b"]


def test_coerce_value_keeps_values_of_target_type():
    assert coerce_value(5, int) == 5
    assert coerce_value(Mode.DEV, Mode) is Mode.DEV


def test_type_name():
    assert type_name(int) == "int"
    assert type_name(int | None) == "int | NoneType"
    assert type_name(Literal["a", "b"]) == "one of 'a', 'b'"
