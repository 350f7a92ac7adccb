# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the Command class for Cordon CLI.

Commands are named units of dispatch. Each one owns its flags and up to three
lifecycle callbacks plus a usage-error interceptor:

- Flag parsing (or pass-through of raw arguments in skip mode)
- Lifecycle callbacks (before, action, after), all attempted on every run
- Failure aggregation: every failing stage is reported, none is dropped
- Usage error interception through `on_usage_error`
- Nested subcommands, dispatched from the action stage

A run proceeds as:
    match -> parse -> before -> action -> after -> aggregate

Parse failures end the run before any callback. Callback failures never end it
early; they are collected and raised together once `after` has had its chance
to clean up. An exit or interrupt raised by `before` or `action` skips the rest
of those stages, still runs `after`, and is then raised unchanged.
"""
from __future__ import annotations

from difflib import get_close_matches
from typing import Any, Callable, Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cordon.context import Context
from cordon.exceptions import (
    CommandAlreadyExistsError,
    CommandNotFoundError,
    HookError,
    InvalidHookError,
    MultiError,
    UsageError,
)
from cordon.help import render_help
from cordon.hook_manager import HookType, Stage
from cordon.logger import logger
from cordon.parser.flag import Flag
from cordon.parser.flag_parser import FlagParser, ParseResult
from cordon.signals import HelpSignal

HELP_COMMAND_NAMES = ("help", "h")


def find_command(commands: Iterable[Command], name: str) -> Command | None:
    """Return the first command whose name or alias equals `name` exactly."""
    return next((command for command in commands if command.has_name(name)), None)


def show_help(context: Context) -> None:
    """Hand the context to the application's help renderer."""
    renderer = getattr(context.app, "show_help", None)
    if callable(renderer):
        renderer(context)
    else:
        render_help(context)


class Command(BaseModel):
    """
    Represents a command in a Cordon application.

    Attributes:
        name (str): Primary name the command is invoked by.
        aliases (list[str]): Alternate names resolving to the same command.
        usage (str): One-line usage text for help output.
        description (str): Longer description for help output.
        flags (list[Flag]): Ordered flag definitions.
        skip_flag_parsing (bool): Treat every argument as positional.
        before (Callable[[Context], Any] | None): Runs first.
        action (Callable[[Context], Any] | None): The command's work. Its return
            value is the result of the invocation.
        after (Callable[[Context], Any] | None): Runs last, even if earlier stages
            failed.
        on_usage_error (Callable[[Context, Exception, bool], Exception | None] | None):
            Receives flag parsing failures. Returning None suppresses the failure,
            returning an exception replaces it.
        subcommands (list[Command]): Nested commands.
        hidden (bool): Omit the command from help listings.

    Methods:
        run(context): Run the command named by `context.args[0]` (this command)
            on the remaining arguments.
        invoke(args, parent, app): Run the command on `args`.
        parse_args(args): Parse `args` against the command's flags.
    """

    name: str
    description: str = ""
    usage: str = ""
    aliases: list[str] = Field(default_factory=list)
    flags: list[Any] = Field(default_factory=list)
    skip_flag_parsing: bool = False
    before: Callable[..., Any] | None = None
    action: Callable[..., Any] | None = None
    after: Callable[..., Any] | None = None
    on_usage_error: Callable[..., Any] | None = None
    subcommands: list[Command] = Field(default_factory=list)
    hidden: bool = False

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, name: str) -> str:
        if not name.strip():
            raise ValueError("Command name must be a non-empty string")
        return name

    @field_validator("flags")
    @classmethod
    def validate_flags(cls, flags: list[Any]) -> list[Any]:
        for flag in flags:
            if not isinstance(flag, Flag):
                raise ValueError(f"Expected a Flag, got {type(flag).__name__}")
        return flags

    def model_post_init(self, _: Any) -> None:
        """Validate the flag set and report duplicate subcommand names."""
        self.get_parser()
        seen: dict[str, str] = {}
        for command in self.subcommands:
            for name in command.names:
                if name in seen:
                    logger.warning(
                        "[Command:%s] '%s' is claimed by both '%s' and '%s'; "
                        "the first one wins.",
                        self.name,
                        name,
                        seen[name],
                        command.name,
                    )
                else:
                    seen[name] = command.name

    @property
    def names(self) -> list[str]:
        return [self.name, *self.aliases]

    def has_name(self, name: str) -> bool:
        return name == self.name or name in self.aliases

    def get_parser(self) -> FlagParser:
        """
        Build the parser for the current flags.

        Built on every use so flags added after construction are seen by both
        parsing and `Context.get`.
        """
        return FlagParser(self.flags, interspersed=not self.subcommands)

    def lookup_flag(self, name: str) -> Flag | None:
        return self.get_parser().get_flag(name)

    def find_subcommand(self, name: str) -> Command | None:
        return find_command(self.subcommands, name)

    def add_subcommand(self, command: Command) -> Command:
        """Register a nested command, rejecting name or alias clashes."""
        for name in command.names:
            existing = self.find_subcommand(name)
            if existing is not None:
                raise CommandAlreadyExistsError(
                    f"Command '{name}' already exists under '{self.name}' "
                    f"(registered by '{existing.name}')."
                )
        self.subcommands.append(command)
        return command

    def parse_args(self, args: Sequence[str]) -> ParseResult:
        """
        Parse `args` against this command's flags.

        Commands that own subcommands stop at the first positional argument so
        the nested command receives its own flags untouched.
        """
        return self.get_parser().parse(args)

    def run(self, context: Context) -> Any:
        """
        Run this command for a parent context whose first argument is the
        command name; the remaining arguments belong to this command.
        """
        return self.invoke(context.args[1:], parent=context)

    def invoke(
        self,
        args: Sequence[str],
        parent: Context | None = None,
        app: Any = None,
    ) -> Any:
        """
        Run the full lifecycle on `args`.

        Returns:
            Any: The value returned by the action, or by a nested subcommand.

        Raises:
            UsageError: Flag parsing failed and no interceptor handled it.
            HookError: Exactly one lifecycle callback failed.
            MultiError: Two or more stages failed.
        """
        context = Context(
            name=self.name,
            command=self,
            app=app if app is not None else (parent.app if parent else None),
            parent=parent,
        )

        if self.skip_flag_parsing:
            logger.debug(
                "[Command:%s] Skipping flag parsing for %d argument(s).",
                self.name,
                len(args),
            )
            context.args = list(args)
        else:
            try:
                parsed = self.parse_args(args)
            except HelpSignal:
                logger.debug("[Command:%s] Help requested.", self.name)
                show_help(context)
                return None
            except UsageError as error:
                return self._handle_usage_error(context, error)
            context.flags = parsed.values
            context.args = parsed.args
            context.set_flags = parsed.set_flags

        return self._run_lifecycle(context)

    def _handle_usage_error(self, context: Context, error: UsageError) -> Any:
        context.exception = error
        if self.on_usage_error is None:
            logger.debug("[Command:%s] Usage error: %s", self.name, error)
            raise error

        is_subcommand = context.parent is not None and context.parent.parent is not None
        replacement = self.on_usage_error(context, error, is_subcommand)
        if replacement is None:
            logger.info(
                "[Command:%s] Usage error suppressed by on_usage_error: %s",
                self.name,
                error,
            )
            context.exception = None
            return None
        if not isinstance(replacement, BaseException):
            raise InvalidHookError(
                f"on_usage_error for '{self.name}' must return an exception or None, "
                f"got {type(replacement).__name__}"
            ) from error
        context.exception = replacement
        if replacement is error:
            raise error
        raise replacement from error

    def _call_hook(
        self, stage: Stage, hook: Callable[..., Any] | None, context: Context
    ) -> Any:
        if hook is None:
            return None
        try:
            return hook(context)
        except Exception as error:
            logger.debug("[Command:%s] '%s' failed: %s", self.name, stage, error)
            raise HookError(stage, error) from error

    def _run_action_stage(self, context: Context) -> Any:
        if self.subcommands:
            if not context.args:
                if self.action is None:
                    show_help(context)
                    return None
            else:
                name = context.args[0]
                command = self.find_subcommand(name)
                if command is not None:
                    logger.info(
                        "[Command:%s] Dispatching to '%s'.", self.name, command.name
                    )
                    return command.invoke(context.args[1:], parent=context)
                if self.action is None:
                    return self._command_not_found(context, name)
        return self._call_hook(Stage.ACTION, self.action, context)

    def _command_not_found(self, context: Context, name: str) -> Any:
        if name in HELP_COMMAND_NAMES:
            target = (
                self.find_subcommand(context.args[1]) if len(context.args) > 1 else None
            )
            if target is not None:
                show_help(Context(name=target.name, command=target, parent=context))
            else:
                show_help(context)
            return None

        handler = getattr(context.app, "command_not_found", None)
        if callable(handler):
            logger.info("[Command:%s] No command '%s', using fallback.", self.name, name)
            return handler(context, name)

        candidates = [
            command_name
            for command in self.subcommands
            if not command.hidden
            for command_name in command.names
        ]
        suggestions = get_close_matches(name, candidates, n=3, cutoff=0.6)
        raise CommandNotFoundError(name, suggestions)

    def _run_lifecycle(self, context: Context) -> Any:
        hooks = getattr(context.app, "hooks", None)
        context.start_timer()
        if hooks is not None:
            hooks.trigger(HookType.BEFORE, context)

        failures: list[Exception] = []
        interrupted: BaseException | None = None
        for stage in (Stage.BEFORE, Stage.ACTION):
            try:
                if stage is Stage.BEFORE:
                    self._call_hook(stage, self.before, context)
                else:
                    context.result = self._run_action_stage(context)
            except Exception as error:
                failures.append(error)
            except BaseException as signal:
                # exits, interrupts and flow signals skip the remaining stages
                # but not `after`; they are raised once it has run
                interrupted = signal
                break
        try:
            self._call_hook(Stage.AFTER, self.after, context)
        except Exception as error:
            failures.append(error)
        context.stop_timer()

        try:
            if interrupted is not None:
                if failures:
                    logger.warning(
                        "[Command:%s] %s superseded %d failure(s): %s",
                        self.name,
                        type(interrupted).__name__,
                        len(failures),
                        "; ".join(str(failure) for failure in failures),
                    )
                raise interrupted
            if failures:
                context.exception = (
                    failures[0] if len(failures) == 1 else MultiError(failures)
                )
                if hooks is not None:
                    hooks.trigger(HookType.ON_ERROR, context)
                raise context.exception
            if hooks is not None:
                hooks.trigger(HookType.ON_SUCCESS, context)
            return context.result
        finally:
            if hooks is not None:
                hooks.trigger(HookType.AFTER, context)

    def __str__(self) -> str:
        return (
            f"Command(name='{self.name}', aliases={self.aliases}, "
            f"flags={[flag.name for flag in self.flags]}, "
            f"subcommands={[command.name for command in self.subcommands]})"
        )
