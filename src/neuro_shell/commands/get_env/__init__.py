"""Get-env command."""

from .get_env import GetEnvCommand

__all__ = ["GetEnvCommand"]
