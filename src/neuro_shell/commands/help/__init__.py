"""Help command."""

from .help import HelpCommand

__all__ = ["HelpCommand"]
