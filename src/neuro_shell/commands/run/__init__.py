"""Run command."""

from .run import RunCommand

__all__ = ["RunCommand"]
