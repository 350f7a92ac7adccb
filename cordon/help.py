# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Default help renderer for Cordon commands.

Help output is a presentation concern kept out of dispatch: the flag parser
only signals that help was requested, and the application calls its
`help_renderer` with the current context. This module provides the default
renderer, a Rich panel listing usage, flags and subcommands.
"""
from __future__ import annotations

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cordon.console import console as default_console
from cordon.context import Context


def get_command_path(context: Context) -> str:
    """Return the command names from the application down to this context."""
    names = [ctx.name for ctx in reversed(list(context.lineage())) if ctx.name]
    return " ".join(names)


def get_usage_line(context: Context) -> str:
    command = context.command
    parts = [get_command_path(context) or "command"]
    if command is not None:
        if command.flags:
            parts.append("[flags]")
        if command.subcommands:
            parts.append("<command> [args...]")
        elif command.skip_flag_parsing or command.action is not None:
            parts.append("[args...]")
    return " ".join(parts)


def render_help(context: Context, console: Console | None = None) -> None:
    """Render help for the command owning `context`."""
    console = console or default_console
    command = context.command
    items: list = [f"[bold]usage:[/bold] {escape(get_usage_line(context))}"]

    if command is not None:
        if command.usage:
            items.append(f"\n{escape(command.usage)}")
        if command.description:
            items.append(f"\n{escape(command.description)}")

        if command.flags:
            flags_table = Table(box=None, show_header=False, padding=(0, 2))
            for flag in command.flags:
                flag_text = f"{flag.get_flag_text()} {flag.get_value_text()}".strip()
                default = (
                    f" [dim](default: {escape(repr(flag.default))})[/dim]"
                    if flag.default not in (None, False, [])
                    else ""
                )
                flags_table.add_row(escape(flag_text), f"{escape(flag.usage)}{default}")
            items.append("\n[bold]flags:[/bold]")
            items.append(flags_table)

        visible = [sub for sub in command.subcommands if not sub.hidden]
        if visible:
            commands_table = Table(box=None, show_header=False, padding=(0, 2))
            for sub in visible:
                commands_table.add_row(
                    escape(", ".join(sub.names)), escape(sub.usage or sub.description)
                )
            items.append("\n[bold]commands:[/bold]")
            items.append(commands_table)

    console.print(
        Panel(
            Group(*items),
            title=escape(context.name or "help"),
            title_align="left",
            expand=False,
        )
    )
