# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the Cordon CLI framework.

These exceptions provide structured error handling for the failure cases of
command dispatch: bad flag definitions, usage errors raised while parsing the
command line, unknown commands, and failures raised by lifecycle hooks.

All exceptions inherit from `CordonError`, the base exception for the framework.

Exception Hierarchy:
- CordonError
    ├── CommandAlreadyExistsError
    ├── InvalidHookError
    ├── FlagDefinitionError
    ├── UsageError
    │   ├── UndefinedFlagError
    │   ├── InvalidFlagValueError
    │   └── MissingFlagValueError
    ├── CommandNotFoundError
    ├── HookError
    ├── MultiError
    └── ExitError

Every error carries an `exit_code` used by `Cordon.main` when it terminates the
process.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cordon.hook_manager import Stage


class CordonError(Exception):
    """Base exception for the Cordon framework."""

    exit_code: int = 1


class CommandAlreadyExistsError(CordonError):
    """Exception raised when a command name or alias is already registered."""


class InvalidHookError(CordonError):
    """Exception raised when a hook is not callable or returns an unusable value."""


class FlagDefinitionError(CordonError):
    """Exception raised when a flag definition is invalid."""


class UsageError(CordonError):
    """Exception raised when the command line cannot be parsed."""

    exit_code = 2


class UndefinedFlagError(UsageError):
    """Exception raised when a flag token is not defined on the command."""

    def __init__(self, flag: str):
        self.flag = flag
        super().__init__(f"flag provided but not defined: {flag}")


class InvalidFlagValueError(UsageError):
    """Exception raised when a flag value cannot be coerced to the flag type."""

    def __init__(self, flag: str, value: str, expected: str):
        self.flag = flag
        self.value = value
        self.expected = expected
        super().__init__(f'invalid value "{value}" for flag {flag}: expected {expected}')


class MissingFlagValueError(UsageError):
    """Exception raised when a flag expecting a value is the last token."""

    def __init__(self, flag: str):
        self.flag = flag
        super().__init__(f"flag needs an argument: {flag}")


class CommandNotFoundError(CordonError):
    """Exception raised when no command matches the requested name."""

    def __init__(self, name: str, suggestions: list[str] | None = None):
        self.name = name
        self.suggestions = suggestions or []
        message = f"command not found: '{name}'"
        if self.suggestions:
            message += f". Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)


class HookError(CordonError):
    """
    Wraps an exception raised by a lifecycle hook, tagged with its stage.

    The string form is the original error's message so aggregated output reads
    exactly like the hooks reported it.
    """

    def __init__(self, stage: Stage, error: BaseException):
        self.stage = stage
        self.error = error
        super().__init__(str(error))
        self.__cause__ = error

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        return getattr(self.error, "exit_code", CordonError.exit_code)

    def __repr__(self) -> str:
        return f"HookError(stage={self.stage!s}, error={self.error!r})"


class MultiError(CordonError):
    """Aggregates two or more failures while keeping every message in order."""

    def __init__(self, errors: list[BaseException]):
        self.errors = list(errors)
        super().__init__("\n".join(str(error) for error in self.errors))

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        return max(
            (getattr(error, "exit_code", CordonError.exit_code) for error in self.errors),
            default=CordonError.exit_code,
        )

    def __iter__(self):
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


class ExitError(CordonError):
    """Raised by user code to terminate with a specific exit code."""

    def __init__(self, message: Any = "", exit_code: int = 1):
        super().__init__(message)
        self._exit_code = exit_code

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        return self._exit_code
