"""Vars command."""

from .vars import VarsCommand

__all__ = ["VarsCommand"]
