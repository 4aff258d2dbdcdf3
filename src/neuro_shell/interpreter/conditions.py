"""Truthiness rules shared by conditional commands and shell switches."""

from typing import Optional

TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})


def is_truthy(value: Optional[str]) -> bool:
    """Evaluate a condition string.

    Explicit truthy and falsy words are matched case-insensitively after
    trimming. Empty or missing values are falsy; any other non-empty text
    is truthy.
    """
    if value is None:
        return False
    normalized = value.strip().lower()
    if normalized in TRUTHY_VALUES:
        return True
    if normalized in FALSY_VALUES:
        return False
    return normalized != ""
