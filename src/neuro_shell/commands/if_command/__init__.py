"""If and if-not commands."""

from .if_command import IfCommand, IfNotCommand

__all__ = ["IfCommand", "IfNotCommand"]
