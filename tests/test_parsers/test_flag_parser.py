import pytest

from cordon.exceptions import (
    FlagDefinitionError,
    InvalidFlagValueError,
    MissingFlagValueError,
    UndefinedFlagError,
    UsageError,
)
from cordon.parser import Flag, FlagParser
from cordon.signals import HelpSignal


@pytest.fixture
def parser():
    return FlagParser(
        [
            Flag("count", type=int, aliases=["c"], default=1),
            Flag("verbose", type=bool, aliases=["v"]),
            Flag("name", default="world"),
            Flag("tag", multiple=True, aliases=["t"]),
        ]
    )


# --- Tests ---
def test_defaults_when_no_flags_given(parser):
    result = parser.parse(["a", "b"])
    assert result.values == {"count": 1, "verbose": False, "name": "world", "tag": []}
    assert result.args == ["a", "b"]
    assert result.set_flags == set()


@pytest.mark.parametrize(
    "tokens",
    [
        ["-count", "3"],
        ["--count", "3"],
        ["-count=3"],
        ["--count=3"],
        ["-c", "3"],
        ["--c=3"],
    ],
)
def test_flag_syntaxes(parser, tokens):
    result = parser.parse(tokens)
    assert result.values["count"] == 3
    assert result.set_flags == {"count"}


def test_bool_flag_does_not_consume_next_token(parser):
    result = parser.parse(["-v", "file.txt"])
    assert result.values["verbose"] is True
    assert result.args == ["file.txt"]


def test_bool_flag_inline_value(parser):
    assert parser.parse(["--verbose=false"]).values["verbose"] is False
    with pytest.raises(InvalidFlagValueError) as exc_info:
        parser.parse(["--verbose=maybe"])
    assert str(exc_info.value).startswith('invalid value "maybe" for flag --verbose')


def test_flags_interspersed_with_positionals(parser):
    result = parser.parse(["one", "-c", "2", "two", "--name", "x", "three"])
    assert result.args == ["one", "two", "three"]
    assert result.values["count"] == 2
    assert result.values["name"] == "x"


def test_last_occurrence_wins(parser):
    assert parser.parse(["-c", "1", "-c", "5"]).values["count"] == 5


def test_multiple_flag_accumulates(parser):
    result = parser.parse(["-t", "a", "--tag=b", "-t", "c"])
    assert result.values["tag"] == ["a", "b", "c"]


def test_double_dash_terminates_parsing(parser):
    result = parser.parse(["-v", "--", "-c", "--unknown", "x"])
    assert result.values["verbose"] is True
    assert result.values["count"] == 1
    assert result.args == ["-c", "--unknown", "x"]


def test_single_dash_is_positional(parser):
    assert parser.parse(["-"]).args == ["-"]


def test_value_may_look_like_a_flag(parser):
    assert parser.parse(["--name", "-v"]).values["name"] == "-v"


def test_undefined_flag(parser):
    with pytest.raises(UndefinedFlagError) as exc_info:
        parser.parse(["blah", "-break"])
    assert str(exc_info.value) == "flag provided but not defined: -break"


def test_undefined_flag_with_inline_value(parser):
    with pytest.raises(UndefinedFlagError) as exc_info:
        parser.parse(["--nope=1"])
    assert exc_info.value.flag == "--nope"


def test_invalid_value(parser):
    with pytest.raises(InvalidFlagValueError) as exc_info:
        parser.parse(["--count=wrong"])
    error = exc_info.value
    assert str(error) == 'invalid value "wrong" for flag --count: expected int'
    assert error.exit_code == 2
    assert isinstance(error.__cause__, ValueError)


def test_missing_value(parser):
    with pytest.raises(MissingFlagValueError) as exc_info:
        parser.parse(["--count"])
    assert str(exc_info.value) == "flag needs an argument: --count"


@pytest.mark.parametrize("token", ["---count", "--=3", "-=x"])
def test_bad_flag_syntax(parser, token):
    with pytest.raises(UsageError, match="bad flag syntax"):
        parser.parse([token])


@pytest.mark.parametrize("token", ["-h", "-help", "--help"])
def test_help_flags_signal(parser, token):
    with pytest.raises(HelpSignal):
        parser.parse(["x", token])


def test_help_name_can_be_defined():
    parser = FlagParser([Flag("h", type=bool)])
    assert parser.parse(["-h"]).values["h"] is True


def test_non_interspersed_stops_at_first_positional(parser):
    parser.interspersed = False
    result = parser.parse(["-v", "sub", "-c", "3", "--bogus"])
    assert result.values["verbose"] is True
    assert result.values["count"] == 1
    assert result.args == ["sub", "-c", "3", "--bogus"]


def test_input_is_not_mutated(parser):
    tokens = ["-c", "3", "x"]
    parser.parse(tokens)
    assert tokens == ["-c", "3", "x"]


def test_defaults_are_not_shared_between_parses(parser):
    first = parser.parse(["-t", "a"])
    second = parser.parse([])
    assert first.values["tag"] == ["a"]
    assert second.values["tag"] == []


def test_duplicate_names_rejected():
    with pytest.raises(FlagDefinitionError):
        FlagParser([Flag("name", aliases=["n"]), Flag("number", aliases=["n"])])


def test_get_flag(parser):
    assert parser.get_flag("c").name == "count"
    assert parser.get_flag("missing") is None
