"""Command Parser - turns one raw line into a structured command.

Grammar of a command line::

    \\name[bracket content] trailing message
    \\name trailing message
    plain text                       (default command, usually "send")

Parsing is a total function: malformed input degrades to the default
command carrying the original text, so the pipeline never stalls on a
line it cannot understand.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..types import ParseMode

COMMAND_MARKER = "\\"
DEFAULT_COMMAND = "send"

_COMMAND_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_-]*$")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class ParsedCommand:
    """A parsed command line."""

    name: str
    """Command identifier without the leading marker."""

    bracket_content: str = ""
    """Raw text inside ``[...]``, empty if none."""

    options: dict[str, str] = field(default_factory=dict)
    """Bracket options (only filled in KEY_VALUE mode)."""

    message: str = ""
    """Trailing free text after the bracket, trimmed."""

    parse_mode: ParseMode = ParseMode.KEY_VALUE
    """How the bracket content was treated."""

    original_text: str = ""
    """The line as it was handed to the parser."""

    def __str__(self) -> str:
        result = f"{COMMAND_MARKER}{self.name}"
        if self.options:
            parts = []
            for key, value in self.options.items():
                parts.append(f'{key}="{value}"' if value else key)
            result += "[" + ", ".join(parts) + "]"
        elif self.bracket_content:
            result += f"[{self.bracket_content}]"
        if self.message:
            result += " " + self.message
        return result


def parse_command(
    raw: str | bytes,
    *,
    default_command: str = DEFAULT_COMMAND,
    parse_mode_for: Optional[Callable[[str], ParseMode]] = None,
) -> ParsedCommand:
    """Parse one input line into a ParsedCommand.

    Args:
        raw: The input line.
        default_command: Command used for plain text and malformed input.
        parse_mode_for: Lookup of a command's declared parse mode. Commands
            unknown to the lookup (and all commands when it is omitted) use
            KEY_VALUE.

    Returns:
        The parsed command. Never raises.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    original = raw
    text = raw.strip()

    if not text.startswith(COMMAND_MARKER):
        return ParsedCommand(name=default_command, message=text, original_text=original)

    rest = text[len(COMMAND_MARKER):]

    bracketed = _split_bracketed(rest)
    if bracketed is not None:
        name, bracket_content, message = bracketed
    else:
        parts = _WHITESPACE_RE.split(rest, maxsplit=1)
        name = parts[0]
        bracket_content = ""
        message = parts[1].strip() if len(parts) > 1 else ""

    # Bare marker (or marker followed by whitespace)
    if not name:
        return ParsedCommand(
            name=default_command, message=rest.strip(), original_text=original
        )

    mode = parse_mode_for(name) if parse_mode_for is not None else ParseMode.KEY_VALUE
    options: dict[str, str] = {}
    if bracket_content and mode is ParseMode.KEY_VALUE:
        parse_key_value_options(bracket_content, options)

    return ParsedCommand(
        name=name,
        bracket_content=bracket_content,
        options=options,
        message=message,
        parse_mode=mode,
        original_text=original,
    )


def _split_bracketed(text: str) -> Optional[tuple[str, str, str]]:
    """Split ``name[content] message`` with bracket nesting.

    Returns None when the text is not a bracket command: no ``[``, a space
    before the first ``[``, an invalid name, or an unclosed bracket.
    """
    bracket_idx = text.find("[")
    if bracket_idx <= 0:
        return None
    space_idx = text.find(" ")
    if space_idx != -1 and space_idx < bracket_idx:
        return None

    name = text[:bracket_idx]
    if not _COMMAND_NAME_RE.match(name):
        return None

    depth = 0
    for i in range(bracket_idx, len(text)):
        c = text[i]
        if c == "[":
            depth += 1
        elif c == "]":
            depth -= 1
            if depth == 0:
                return name, text[bracket_idx + 1:i], text[i + 1:].strip()
    return None


def parse_key_value_options(content: str, options: dict[str, str]) -> None:
    """Parse ``key=value, flag, key2="quoted, value"`` into *options*.

    Values are split on the first ``=`` only and lose one matching pair of
    surrounding quotes. Pieces without ``=`` become flags with an empty
    value. Empty pieces are ignored; the last duplicate key wins.
    """
    if not content:
        return

    for part in split_by_comma(content):
        part = part.strip()
        if not part:
            continue
        if "=" in part:
            key, value = part.split("=", 1)
            options[key.strip()] = unquote(value.strip())
        else:
            options[part] = ""


def split_by_comma(text: str) -> list[str]:
    """Split on commas outside quotes and outside ``[...]`` values.

    The first quote character opens a quoted run that only the same
    character closes; an unmatched quote keeps the rest of the text
    unsplit. A leading comma yields a leading empty piece while a trailing
    comma yields nothing.
    """
    parts: list[str] = []
    current: list[str] = []
    quote_char = ""
    bracket_depth = 0

    for c in text:
        if not quote_char and c in ("\"", "'"):
            quote_char = c
            current.append(c)
        elif quote_char and c == quote_char:
            quote_char = ""
            current.append(c)
        elif not quote_char and c == "[":
            bracket_depth += 1
            current.append(c)
        elif not quote_char and c == "]":
            bracket_depth = max(bracket_depth - 1, 0)
            current.append(c)
        elif not quote_char and bracket_depth == 0 and c == ",":
            parts.append("".join(current))
            current = []
        else:
            current.append(c)

    if current:
        parts.append("".join(current))
    return parts


def unquote(value: str) -> str:
    """Strip one matching pair of surrounding quotes. No de-escaping."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("\"", "'"):
        return value[1:-1]
    return value


def parse_array_value(value: str) -> list[str]:
    """Parse ``[a, "b", 'c']`` into a list of items.

    A value that is not wrapped in brackets is returned as a single item.
    Empty items are dropped and each item loses its surrounding quotes.
    """
    value = value.strip()
    if len(value) >= 2 and value[0] == "[" and value[-1] == "]":
        content = value[1:-1].strip()
        if not content:
            return []
        items = []
        for item in content.split(","):
            item = item.strip()
            if item:
                items.append(unquote(item))
        return items
    return [unquote(value)]
