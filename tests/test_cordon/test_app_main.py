import sys

import pytest

from cordon import Cordon, ExitError
from cordon.parser import Flag


def leave(ctx):
    raise ExitError("leaving", exit_code=3)


@pytest.fixture
def app():
    app = Cordon(name="tool")
    app.add_command("ok", lambda ctx: "fine")
    app.add_command("count", lambda ctx: ctx.get("n"), flags=[Flag("n", type=int)])
    app.add_command("quit", leave)
    app.add_command("crash", lambda ctx: {}["missing"])
    return app


def test_main_success(app):
    with pytest.raises(SystemExit) as exc_info:
        app.main(["ok"])
    assert exc_info.value.code == 0


def test_main_usage_error(app, capsys):
    with pytest.raises(SystemExit) as exc_info:
        app.main(["count", "-n", "many"])
    assert exc_info.value.code == 2
    assert 'invalid value "many" for flag -n' in capsys.readouterr().err


def test_main_unknown_command(app, capsys):
    with pytest.raises(SystemExit) as exc_info:
        app.main(["okk"])
    assert exc_info.value.code == 1
    assert "command not found: 'okk'" in capsys.readouterr().err


def test_main_exit_error_code(app, capsys):
    with pytest.raises(SystemExit) as exc_info:
        app.main(["quit"])
    assert exc_info.value.code == 3
    assert "leaving" in capsys.readouterr().err


def test_main_hook_failure(app, capsys):
    with pytest.raises(SystemExit) as exc_info:
        app.main(["crash"])
    assert exc_info.value.code == 1
    assert "missing" in capsys.readouterr().err


def test_main_interrupt(capsys):
    def interrupt(ctx):
        raise KeyboardInterrupt

    app = Cordon(action=interrupt)
    with pytest.raises(SystemExit) as exc_info:
        app.main([])
    assert exc_info.value.code == 130
    assert "Interrupted" in capsys.readouterr().err


def test_run_defaults_to_sys_argv(app, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["tool", "count", "-n", "4"])
    assert app.run() == 4
