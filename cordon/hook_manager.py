# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Lifecycle vocabulary for Cordon commands, and the observer registry.

Two separate things happen around a command:

- The command's own callbacks run in the fixed `Stage` order. Their failures
  decide the outcome of the command.
- Observer hooks registered on the application (`HookType`) watch every
  invocation. They see the `Context` before the stages start and once the
  outcome is known, and are meant for logging and diagnostics. A failing
  observer is logged and skipped; it never changes the outcome.

Usage:
    hooks = HookManager()
    hooks.register("error", report_failure)
    hooks.trigger(HookType.ON_ERROR, context)
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from cordon.context import Context
from cordon.logger import logger

Hook = Callable[[Context], Any]


class Stage(Enum):
    """The stages of a command run, in execution order."""

    BEFORE = "before"
    ACTION = "action"
    AFTER = "after"

    def __str__(self) -> str:
        return self.value


class HookType(Enum):
    """
    Observer hook points.

    `HookType("success")` and `HookType("error")` are accepted as short forms
    of `on_success` and `on_error`; lookups ignore case and surrounding spaces.
    """

    BEFORE = "before"
    ON_SUCCESS = "on_success"
    ON_ERROR = "on_error"
    AFTER = "after"

    @classmethod
    def choices(cls) -> list[HookType]:
        return list(cls)

    @classmethod
    def _missing_(cls, value: object) -> HookType | None:
        if isinstance(value, str):
            key = value.strip().lower()
            key = {"success": "on_success", "error": "on_error"}.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: {value!r}. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


def _hook_name(hook: Hook) -> str:
    return getattr(hook, "__name__", repr(hook))


class HookManager:
    """
    Holds observer hooks per `HookType` and runs them in registration order.

    An observer that raises is logged as a warning and the remaining observers
    still run. The one exception is `ON_ERROR`: if an error observer fails, the
    failure already recorded on the context is raised again, chained to the
    observer's error, so the original outcome is never lost.
    """

    def __init__(self) -> None:
        self._hooks: dict[HookType, list[Hook]] = {}

    def register(self, hook_type: HookType | str, hook: Hook) -> None:
        """
        Add `hook` to the observers of `hook_type`.

        Raises:
            ValueError: If `hook_type` names no hook point.
            TypeError: If `hook` is not callable.
        """
        hook_type = HookType(hook_type)
        if not callable(hook):
            raise TypeError(f"Hook for '{hook_type}' must be callable, got {hook!r}")
        self._hooks.setdefault(hook_type, []).append(hook)

    def clear(self, hook_type: HookType | None = None) -> None:
        """Drop the observers of one hook point, or of all of them."""
        if hook_type is None:
            self._hooks.clear()
        else:
            self._hooks.pop(HookType(hook_type), None)

    def get(self, hook_type: HookType) -> list[Hook]:
        return list(self._hooks.get(HookType(hook_type), []))

    def trigger(self, hook_type: HookType, context: Context) -> None:
        for hook in self.get(hook_type):
            try:
                hook(context)
            except Exception as hook_error:
                logger.warning(
                    "[Hook:%s] failed during '%s' for '%s': %s",
                    _hook_name(hook),
                    hook_type,
                    context.name,
                    hook_error,
                )
                if hook_type is HookType.ON_ERROR and context.exception is not None:
                    raise context.exception from hook_error

    def __str__(self) -> str:
        registered = {
            str(hook_type): [_hook_name(hook) for hook in hooks]
            for hook_type, hooks in self._hooks.items()
            if hooks
        }
        return f"HookManager({registered})"
