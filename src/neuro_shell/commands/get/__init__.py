"""Get command."""

from .get import GetCommand

__all__ = ["GetCommand"]
