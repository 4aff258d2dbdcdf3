"""Exit command."""

from .exit import ExitCommand

__all__ = ["ExitCommand"]
