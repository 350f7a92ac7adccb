# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Main class for constructing and running Cordon CLI applications.

Cordon turns a flat argument list into a structured invocation of user
callbacks. It supports:

- Command registration with aliases and nested subcommands
- Application-level flags parsed ahead of the command name
- Per-command flag parsing, or raw pass-through in skip mode
- A before/action/after lifecycle that always runs every stage and
  reports every failure
- Usage error interception and a fallback for unknown commands
- A shared, mutable metadata bag visible to every hook of a run
- Observer hooks for logging and diagnostics

Example:
    app = Cordon("tool")
    app.add_command(
        "greet",
        action=lambda ctx: print(f"hello {ctx.get('name')}"),
        flags=[Flag("name", default="world")],
    )
    app.main()
"""
from __future__ import annotations

import sys
from typing import Any, Callable, Sequence

from rich.markup import escape

from cordon.command import Command, find_command
from cordon.console import error_console
from cordon.context import Context
from cordon.debug import register_debug_hooks
from cordon.exceptions import CordonError
from cordon.help import render_help
from cordon.hook_manager import Hook, HookManager, HookType
from cordon.logger import logger
from cordon.parser.flag import Flag
from cordon.version import __version__


class Cordon:
    """
    Main application class for Cordon.

    The application owns a root `Command` named after the program. Its flags are
    the application-level flags, its subcommands are the registered commands, and
    its callbacks wrap every top-level invocation.

    Args:
        name (str): Program name, used in help output.
        description (str): Program description, used in help output.
        version (str): Program version.
        commands (list[Command] | None): Initial top-level commands.
        flags (list[Flag] | None): Application-level flags.
        before, action, after: Application-level lifecycle callbacks. `action`
            runs when no command name is given.
        on_usage_error: Interceptor for application-level flag parsing failures.
        command_not_found: Fallback `handler(context, name)` for unknown commands.
        help_renderer: `renderer(context)` used when help is requested.
        metadata (dict[str, Any] | None): Initial contents of the metadata bag.
        debug_hooks (bool): Register logging observer hooks.

    Methods:
        run(args): Dispatch an argument list (without the program name).
        main(args): Run and exit the process with the outcome.
        add_command(...): Register a command.
        register_all_hooks(hook_type, hooks): Register observer hooks.
    """

    def __init__(
        self,
        name: str = "",
        description: str = "",
        version: str = __version__,
        commands: list[Command] | None = None,
        flags: list[Flag] | None = None,
        before: Callable[[Context], Any] | None = None,
        action: Callable[[Context], Any] | None = None,
        after: Callable[[Context], Any] | None = None,
        on_usage_error: Callable[[Context, Exception, bool], Any] | None = None,
        command_not_found: Callable[[Context, str], Any] | None = None,
        help_renderer: Callable[[Context], None] | None = None,
        metadata: dict[str, Any] | None = None,
        debug_hooks: bool = False,
    ) -> None:
        self.name: str = name or "cordon"
        self.version: str = version
        self.metadata: dict[str, Any] = metadata if metadata is not None else {}
        self.hooks: HookManager = HookManager()
        self.command_not_found = command_not_found
        self.help_renderer: Callable[[Context], None] = help_renderer or render_help
        self.root: Command = Command(
            name=self.name,
            description=description,
            flags=flags or [],
            before=before,
            action=action,
            after=after,
            on_usage_error=on_usage_error,
        )
        for command in commands or []:
            self.add_command_from_command(command)
        if debug_hooks:
            self.register_all_with_debug_hooks()

    @property
    def commands(self) -> list[Command]:
        return self.root.subcommands

    @property
    def description(self) -> str:
        return self.root.description

    def get_command(self, name: str) -> Command | None:
        """Return the top-level command matching `name` by name or alias."""
        return find_command(self.commands, name)

    def add_command_from_command(self, command: Command) -> Command:
        """Register an existing Command instance."""
        if not isinstance(command, Command):
            raise TypeError(f"Expected a Command, got {type(command).__name__}")
        self.root.add_subcommand(command)
        logger.debug("[Cordon:%s] Registered command '%s'.", self.name, command.name)
        return command

    def add_commands(self, commands: list[Command] | list[dict]) -> None:
        """Register several commands, given as Command instances or keyword dicts."""
        for command in commands:
            if isinstance(command, dict):
                self.add_command(**command)
            else:
                self.add_command_from_command(command)

    def add_command(
        self,
        name: str,
        action: Callable[[Context], Any] | None = None,
        *,
        description: str = "",
        usage: str = "",
        aliases: list[str] | None = None,
        flags: list[Flag] | None = None,
        skip_flag_parsing: bool = False,
        before: Callable[[Context], Any] | None = None,
        after: Callable[[Context], Any] | None = None,
        on_usage_error: Callable[[Context, Exception, bool], Any] | None = None,
        subcommands: list[Command] | None = None,
        hidden: bool = False,
    ) -> Command:
        """
        Create and register a top-level command.

        Raises:
            CommandAlreadyExistsError: If the name or an alias is already taken.
        """
        command = Command(
            name=name,
            action=action,
            description=description,
            usage=usage,
            aliases=aliases or [],
            flags=flags or [],
            skip_flag_parsing=skip_flag_parsing,
            before=before,
            after=after,
            on_usage_error=on_usage_error,
            subcommands=subcommands or [],
            hidden=hidden,
        )
        return self.add_command_from_command(command)

    def command(
        self, name: str | None = None, **kwargs: Any
    ) -> Callable[[Callable[[Context], Any]], Command]:
        """Decorator registering a function as the action of a new command."""

        def decorator(function: Callable[[Context], Any]) -> Command:
            command_name = name or function.__name__.replace("_", "-")
            kwargs.setdefault("description", (function.__doc__ or "").strip())
            return self.add_command(command_name, function, **kwargs)

        return decorator

    def register_all_hooks(self, hook_type: HookType | str, hooks: Hook | list[Hook]) -> None:
        """Register observer hooks run around every command invocation."""
        hook_type = HookType(hook_type)
        for hook in hooks if isinstance(hooks, list) else [hooks]:
            self.hooks.register(hook_type, hook)

    def register_all_with_debug_hooks(self) -> None:
        register_debug_hooks(self.hooks)

    def show_help(self, context: Context) -> None:
        self.help_renderer(context)

    def run(self, args: Sequence[str] | None = None) -> Any:
        """
        Dispatch an argument list, excluding the program name.

        Application flags are parsed first, up to the first positional argument,
        which is matched against the registered commands by name or alias. The
        matched command then parses its own flags and runs its lifecycle.

        Returns:
            Any: The result of the invoked action.

        Raises:
            CordonError: Usage errors, unknown commands and hook failures.
        """
        args = list(sys.argv[1:] if args is None else args)
        logger.debug("[Cordon:%s] Running with args %r", self.name, args)
        return self.root.invoke(args, app=self)

    def main(self, args: Sequence[str] | None = None) -> None:
        """
        Entry point for console scripts: run, report failures, and exit.

        Exits with status 0 on success, the failure's `exit_code` on a
        `CordonError`, 1 on any other exception and 130 on interrupt.
        """
        try:
            self.run(args)
        except KeyboardInterrupt:
            error_console.print("[bold red]Interrupted.[/bold red]")
            sys.exit(130)
        except CordonError as error:
            logger.debug("[Cordon:%s] Failed: %r", self.name, error)
            error_console.print(f"[bold red]error:[/bold red] {escape(str(error))}")
            sys.exit(error.exit_code)
        except Exception as error:
            logger.debug("[Cordon:%s] Failed: %r", self.name, error)
            error_console.print(f"[bold red]error:[/bold red] {escape(str(error))}")
            sys.exit(1)
        sys.exit(0)

    def __str__(self) -> str:
        return (
            f"Cordon(name='{self.name}', version='{self.version}', "
            f"commands={[command.name for command in self.commands]})"
        )

