# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Invocation context for Cordon commands.

This module defines `Context`, the per-invocation bundle handed to every
lifecycle hook (`before`, `action`, `after`, `on_usage_error`) of a command.
A fresh context is created for each command run, including nested subcommands,
and discarded once the command's hooks complete.

A context carries:
- The parsed flag values and the leftover positional arguments.
- A weak back-reference to the enclosing context when running a subcommand.
- The application's metadata bag, shared by reference for the whole run.
- Result, exception and timing bookkeeping used by observer hooks and logging.
"""
from __future__ import annotations

import time
import weakref
from datetime import datetime
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class Context(BaseModel):
    """
    Represents the runtime state for a single command invocation.

    Attributes:
        name (str): Name of the command being run (or the application name).
        command (Command | None): The command that owns this context.
        app (Cordon | None): The application running the command.
        flags (dict[str, Any]): Flag values keyed by primary flag name, defaults
            included. Empty in skip mode or when parsing failed.
        args (list[str]): Positional arguments not consumed as flags.
        set_flags (set[str]): Names of flags given explicitly on the command line.
        result (Any | None): Value returned by the action, if any.
        exception (BaseException | None): Final failure of the invocation, if any.

    Properties:
        parent (Context | None): Enclosing context, held by weak reference.
        metadata (dict[str, Any]): The application's shared metadata bag.
        duration (float | None): Execution duration in seconds.
        status (str): "OK" if no failure was recorded, otherwise "ERROR".
    """

    name: str = ""
    command: Any = None
    app: Any = None
    flags: dict[str, Any] = Field(default_factory=dict)
    args: list[str] = Field(default_factory=list)
    set_flags: set[str] = Field(default_factory=set)

    result: Any | None = None
    exception: BaseException | None = None

    start_time: float | None = None
    end_time: float | None = None
    start_wall: datetime | None = None
    end_wall: datetime | None = None

    _parent: Any = PrivateAttr(default=None)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def __init__(self, parent: Context | None = None, **data: Any) -> None:
        super().__init__(**data)
        if parent is not None:
            self._parent = weakref.ref(parent)
            if self.app is None:
                self.app = parent.app

    @property
    def parent(self) -> Context | None:
        if self._parent is None:
            return None
        return self._parent()

    @property
    def metadata(self) -> dict[str, Any]:
        """The application-wide metadata bag. Mutations are seen by later hooks."""
        if self.app is None:
            raise ValueError(
                f"Context '{self.name}' is not attached to an application."
            )
        return self.app.metadata

    def lineage(self) -> Iterator[Context]:
        """Yield this context followed by each enclosing context."""
        context: Context | None = self
        while context is not None:
            yield context
            context = context.parent

    def _primary_name(self, name: str) -> str:
        lookup = getattr(self.command, "lookup_flag", None)
        if callable(lookup):
            flag = lookup(name)
            if flag is not None:
                return flag.name
        return name

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value of a flag by name or alias from this context only."""
        return self.flags.get(self._primary_name(name), default)

    def lookup(self, name: str, default: Any = None) -> Any:
        """Return a flag value from the nearest context that defines it."""
        for context in self.lineage():
            primary = context._primary_name(name)
            if primary in context.flags:
                return context.flags[primary]
        return default

    def is_set(self, name: str) -> bool:
        """Whether the flag was given explicitly on the command line."""
        return self._primary_name(name) in self.set_flags

    def start_timer(self):
        self.start_wall = datetime.now()
        self.start_time = time.perf_counter()

    def stop_timer(self):
        self.end_time = time.perf_counter()
        self.end_wall = datetime.now()

    @property
    def duration(self) -> float | None:
        if self.start_time is None:
            return None
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time

    @property
    def success(self) -> bool:
        return self.exception is None

    @property
    def status(self) -> str:
        return "OK" if self.success else "ERROR"

    def to_log_line(self) -> str:
        """Structured flat-line format for logging and metrics."""
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        exception_str = (
            f"{type(self.exception).__name__}: {self.exception}"
            if self.exception
            else "None"
        )
        return (
            f"[{self.name}] status={self.status} duration={duration_str} "
            f"args={self.args!r} result={self.result!r} exception={exception_str}"
        )

    def __str__(self) -> str:
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        return (
            f"<Context '{self.name}' | {self.status} | Duration: {duration_str} | "
            f"Flags: {self.flags} | Args: {self.args}>"
        )

    def __repr__(self) -> str:
        return (
            f"Context(name={self.name!r}, flags={self.flags!r}, args={self.args!r}, "
            f"parent={self.parent.name if self.parent else None!r})"
        )
