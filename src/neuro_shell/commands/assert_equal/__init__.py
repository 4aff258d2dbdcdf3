"""Assert-equal command."""

from .assert_equal import AssertEqualCommand

__all__ = ["AssertEqualCommand"]
