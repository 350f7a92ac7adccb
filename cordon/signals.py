# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by the Cordon CLI framework.

These signals are raised to interrupt or redirect CLI execution flow without
being treated as traditional exceptions.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks, including the ones
that collect lifecycle hook failures.

Signals:
- HelpSignal: A help flag was found while parsing; render help and stop.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in Cordon.

    These are not errors. They're used to control flow like stopping a command
    to display help instead of running it.
    """


class HelpSignal(FlowSignal):
    """Raised to display help information."""

    def __init__(self, message: str = "Help signal received."):
        super().__init__(message)
