# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Logging setup for applications built on Cordon.

Cordon itself only logs to the `cordon` logger and never installs handlers.
Applications call `setup_logging` once at start-up to get either readable
Rich output on a terminal or one JSON object per line for log collectors.
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import pythonjsonlogger.json
from rich.logging import RichHandler

from cordon.console import error_console

LOG_MODES = ("cli", "json")
JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
CONTAINER_MARKERS = ("docker", "kubepods", "containerd", "podman")


def running_in_container() -> bool:
    """Best-effort check of PID 1's cgroup for a container runtime."""
    try:
        cgroup = Path("/proc/1/cgroup").read_text(encoding="UTF-8")
    except OSError:
        return False
    return any(marker in cgroup for marker in CONTAINER_MARKERS)


def detect_log_mode() -> str:
    """`CORDON_LOG_MODE` if set, else "json" in a container and "cli" elsewhere."""
    mode = os.getenv("CORDON_LOG_MODE", "").strip().lower()
    if mode:
        return mode
    return "json" if running_in_container() else "cli"


def make_json_formatter() -> pythonjsonlogger.json.JsonFormatter:
    return pythonjsonlogger.json.JsonFormatter(
        JSON_LOG_FORMAT, rename_fields={"levelname": "level"}
    )


def make_console_handler(mode: str, level: int = logging.WARNING) -> logging.Handler:
    """
    Build the stderr handler for `mode`.

    Raises:
        ValueError: If `mode` is not one of `LOG_MODES`.
    """
    if mode == "cli":
        handler: logging.Handler = RichHandler(
            console=error_console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    elif mode == "json":
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(make_json_formatter())
    else:
        raise ValueError(f"Invalid log mode: {mode!r}. Must be one of: {', '.join(LOG_MODES)}")
    handler.setLevel(level)
    return handler


def make_file_handler(
    filename: str | os.PathLike, level: int = logging.DEBUG, as_json: bool = False
) -> logging.FileHandler:
    handler = logging.FileHandler(filename, "a", "UTF-8")
    handler.setLevel(level)
    if as_json:
        handler.setFormatter(make_json_formatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    return handler


def setup_logging(
    mode: str | None = None,
    log_filename: str | os.PathLike | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Replace the root logger's handlers with a console handler and, optionally,
    a file handler.

    Args:
        mode (str | None): "cli" for Rich output, "json" for structured lines.
            Defaults to `detect_log_mode()`.
        log_filename (str | PathLike | None): Also append logs to this file.
        json_log_to_file (bool): Write the file log as JSON lines.
        file_log_level (int): Threshold for the file handler.
        console_log_level (int): Threshold for the console handler.

    Raises:
        ValueError: If `mode` is not a known log mode.
    """
    mode = mode or detect_log_mode()
    console_handler = make_console_handler(mode, console_log_level)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(console_handler)
    if log_filename:
        root.addHandler(make_file_handler(log_filename, file_log_level, json_log_to_file))

    logging.getLogger("cordon").debug("Logging initialized in '%s' mode.", mode)
