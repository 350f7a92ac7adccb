import pytest

from cordon.exceptions import (
    CommandNotFoundError,
    CordonError,
    ExitError,
    HookError,
    InvalidFlagValueError,
    MultiError,
    UndefinedFlagError,
    UsageError,
)
from cordon.hook_manager import Stage


def test_usage_errors_share_exit_code():
    assert issubclass(UndefinedFlagError, UsageError)
    assert UndefinedFlagError("-x").exit_code == 2
    assert InvalidFlagValueError("--n", "a", "int").exit_code == 2
    assert CordonError().exit_code == 1


def test_command_not_found_message():
    assert str(CommandNotFoundError("x")) == "command not found: 'x'"
    error = CommandNotFoundError("stauts", ["status", "start"])
    assert str(error) == "command not found: 'stauts'. Did you mean: status, start?"
    assert error.suggestions == ["status", "start"]


def test_hook_error_keeps_message_and_cause():
    original = ExitError("stop", exit_code=4)
    error = HookError(Stage.ACTION, original)
    assert str(error) == "stop"
    assert error.stage is Stage.ACTION
    assert error.__cause__ is original
    assert error.exit_code == 4
    assert HookError(Stage.AFTER, RuntimeError("x")).exit_code == 1


def test_multi_error_joins_in_order():
    errors = [
        HookError(Stage.BEFORE, RuntimeError("first")),
        UndefinedFlagError("-q"),
    ]
    error = MultiError(errors)
    assert str(error) == "first\nflag provided but not defined: -q"
    assert list(error) == errors
    assert len(error) == 2
    assert error.exit_code == 2


@pytest.mark.parametrize("code", [0, 3, 64])
def test_exit_error_code(code):
    assert ExitError("bye", exit_code=code).exit_code == code
