"""Command-line interface for zigunit."""

from .commands import CLICommandHandler

__all__ = ["CLICommandHandler"]
