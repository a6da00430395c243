"""Shared Rich console."""

from rich.console import Console

console = Console()
