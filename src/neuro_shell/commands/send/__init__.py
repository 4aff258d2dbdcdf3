"""Send command."""

from .send import SendCommand

__all__ = ["SendCommand"]
