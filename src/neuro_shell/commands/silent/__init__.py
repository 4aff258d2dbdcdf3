"""Silent command."""

from .silent import SilentCommand

__all__ = ["SilentCommand"]
