"""Parser module for neuro-shell."""

from .command import (
    COMMAND_MARKER,
    DEFAULT_COMMAND,
    ParsedCommand,
    parse_array_value,
    parse_command,
    parse_key_value_options,
    split_by_comma,
    unquote,
)

__all__ = [
    "COMMAND_MARKER",
    "DEFAULT_COMMAND",
    "ParsedCommand",
    "parse_command",
    "parse_key_value_options",
    "split_by_comma",
    "unquote",
    "parse_array_value",
]
