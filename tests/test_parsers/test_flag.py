from enum import Enum

import pytest

from cordon.exceptions import FlagDefinitionError
from cordon.parser import Flag


class Color(Enum):
    RED = "red"
    BLUE = "blue"


# --- Tests ---
def test_flag_defaults():
    assert Flag("name").default is None
    assert Flag("verbose", type=bool).default is False
    assert Flag("tag", multiple=True).default == []


def test_flag_default_is_coerced():
    assert Flag("count", type=int, default="3").default == 3
    assert Flag("color", type=Color, default="red").default is Color.RED
    assert Flag("port", type=int, multiple=True, default="80").default == [80]


def test_flag_default_must_coerce():
    with pytest.raises(FlagDefinitionError, match="cannot be coerced"):
        Flag("count", type=int, default="many")


@pytest.mark.parametrize("name", ["", "-v", "--verbose", "a=b", "two words"])
def test_flag_name_validation(name):
    with pytest.raises(FlagDefinitionError):
        Flag(name)


def test_flag_alias_validation():
    with pytest.raises(FlagDefinitionError):
        Flag("verbose", aliases=["-v"])


def test_flag_type_must_be_callable():
    with pytest.raises(FlagDefinitionError):
        Flag("count", type="int")


def test_bool_flag_cannot_be_multiple():
    with pytest.raises(FlagDefinitionError):
        Flag("verbose", type=bool, multiple=True)


def test_flag_help_text():
    flag = Flag("output", aliases=["o"])
    assert flag.names == ["output", "o"]
    assert flag.get_flag_text() == "--output, -o"
    assert flag.get_value_text() == "OUTPUT"
    assert Flag("verbose", type=bool).get_value_text() == ""
