# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for Cordon CLI applications."""
from rich.console import Console

console = Console()
error_console = Console(stderr=True)
