"""Variable Interpolation.

Expands ``${name}`` references, including nested and composite names
such as ``${a_${b_${c}}}``:

- A single pass (``expand_once``) resolves only the innermost complete
  ``${...}`` spans it finds, using a stack of fragments.
- ``expand_with_limit`` repeats single passes until the text stops
  changing or the iteration ceiling is reached, so every level of nesting
  resolves without recursion and circular references cannot loop forever.

Undefined names expand to the empty string. An unterminated ``${`` and an
unmatched ``}`` are kept as literal text.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..parser import ParsedCommand
    from .types import VariableStore

logger = logging.getLogger(__name__)

OPEN_MARKER = "${"
CLOSE_MARKER = "}"
DEFAULT_MAX_ITERATIONS = 10


def has_variables(text: str) -> bool:
    """Check if *text* contains a variable marker."""
    return OPEN_MARKER in text


class CoreInterpolator:
    """Stack-based variable expander bound to a variable environment."""

    def __init__(self, variables: "VariableStore", max_iterations: int = DEFAULT_MAX_ITERATIONS):
        self._variables = variables
        self._max_iterations = max_iterations if max_iterations > 0 else DEFAULT_MAX_ITERATIONS

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    @max_iterations.setter
    def max_iterations(self, value: int) -> None:
        self._max_iterations = value if value > 0 else DEFAULT_MAX_ITERATIONS

    def has_variables(self, text: str) -> bool:
        return has_variables(text)

    def expand_variables(self, text: str) -> str:
        """Expand all variables using the configured iteration ceiling."""
        return self.expand_with_limit(text, self._max_iterations)

    def expand_with_limit(self, text: str, max_iterations: int) -> str:
        """Repeat single passes until a fixed point or *max_iterations* passes."""
        if max_iterations <= 0:
            max_iterations = DEFAULT_MAX_ITERATIONS

        for iteration in range(max_iterations):
            expanded = self.expand_once(text)
            if expanded == text:
                break
            logger.debug("Variable expansion pass %d: %r", iteration + 1, expanded)
            text = expanded
        return text

    def expand_once(self, text: str) -> str:
        """Expand the innermost complete ``${...}`` spans in one sweep.

        Values are inserted as-is; a value that itself contains ``${`` is
        left for the next pass.
        """
        stack: list[str] = []
        pending = False
        i = 0
        n = len(text)

        while i < n:
            if text.startswith(OPEN_MARKER, i):
                stack.append(OPEN_MARKER)
                pending = True
                i += len(OPEN_MARKER)
                continue

            c = text[i]
            if c == CLOSE_MARKER and pending:
                name_parts: list[str] = []
                while stack and stack[-1] != OPEN_MARKER:
                    name_parts.append(stack.pop())
                if stack:
                    stack.pop()
                stack.append(self._lookup("".join(reversed(name_parts))))
                pending = False
            else:
                stack.append(c)
            i += 1

        return "".join(stack)

    def interpolate_command_line(self, line: str) -> tuple[str, bool]:
        """Expand a whole command line before parsing.

        Returns:
            The expanded line and whether expansion changed it.
        """
        if not has_variables(line):
            return line, False
        expanded = self.expand_variables(line)
        return expanded, expanded != line

    def interpolate_command(self, command: "ParsedCommand") -> "ParsedCommand":
        """Return a copy of *command* with message, bracket content and option
        values expanded. The command name is never expanded."""
        return replace(
            command,
            message=self.expand_variables(command.message),
            bracket_content=self.expand_variables(command.bracket_content),
            options={key: self.expand_variables(value) for key, value in command.options.items()},
        )

    def _lookup(self, name: str) -> str:
        if not name:
            return ""
        value = self._variables.get_variable(name)
        return value if value is not None else ""
