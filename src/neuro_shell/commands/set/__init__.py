"""Set command."""

from .set import SetCommand

__all__ = ["SetCommand"]
