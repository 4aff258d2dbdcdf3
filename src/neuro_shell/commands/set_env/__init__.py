"""Set-env command."""

from .set_env import SetEnvCommand

__all__ = ["SetEnvCommand"]
