import gc

import pytest

from cordon import Cordon
from cordon.command import Command
from cordon.context import Context
from cordon.parser import Flag


@pytest.fixture
def app():
    return Cordon(name="tool")


def test_context_defaults():
    context = Context()
    assert context.flags == {}
    assert context.args == []
    assert context.parent is None
    assert context.duration is None
    assert context.status == "OK"


def test_metadata_is_the_app_bag(app):
    context = Context(app=app)
    context.metadata["key"] = "value"
    assert app.metadata == {"key": "value"}
    assert context.metadata is app.metadata


def test_metadata_requires_app():
    with pytest.raises(ValueError, match="not attached"):
        Context(name="loose").metadata


def test_child_inherits_app_and_references_parent(app):
    parent = Context(name="root", app=app)
    child = Context(name="sub", parent=parent)
    assert child.parent is parent
    assert child.app is app
    assert child.metadata is parent.metadata
    assert [ctx.name for ctx in child.lineage()] == ["sub", "root"]


def test_parent_is_held_weakly(app):
    parent = Context(name="root", app=app)
    child = Context(name="sub", parent=parent)
    del parent
    gc.collect()
    assert child.parent is None


def test_get_resolves_aliases():
    command = Command(name="build", flags=[Flag("output", aliases=["o"])])
    context = Context(command=command, flags={"output": "dist"}, set_flags={"output"})
    assert context.get("output") == "dist"
    assert context.get("o") == "dist"
    assert context.get("missing", "fallback") == "fallback"
    assert context.is_set("o")
    assert not context.is_set("missing")


def test_lookup_walks_enclosing_contexts(app):
    root_command = Command(name="tool", flags=[Flag("verbose", type=bool, aliases=["v"])])
    root = Context(name="tool", command=root_command, app=app, flags={"verbose": True})
    child = Context(name="sub", command=Command(name="sub"), parent=root)
    assert child.get("verbose") is None
    assert child.lookup("v") is True
    assert child.lookup("missing", 0) == 0


def test_timer_and_log_line():
    context = Context(name="job", args=["a"])
    context.start_timer()
    context.stop_timer()
    context.result = 3
    assert context.duration is not None and context.duration >= 0
    line = context.to_log_line()
    assert line.startswith("[job] status=OK")
    assert "args=['a']" in line
    assert "result=3" in line

    context.exception = RuntimeError("boom")
    assert context.status == "ERROR"
    assert "exception=RuntimeError: boom" in context.to_log_line()
