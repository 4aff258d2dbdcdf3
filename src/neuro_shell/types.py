"""Type definitions for neuro-shell.

Defines the shapes shared between the engine and the native command
catalog: command results, the command protocol, the context handed to a
command while it runs, and the execution limits.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, Protocol

if TYPE_CHECKING:
    from .interpreter.types import InterpreterState, VariableStore
    from .parser import ParsedCommand


@dataclass
class ExecResult:
    """Result of executing a command or a top-level line."""

    stdout: str
    """Text written to standard output."""

    stderr: str
    """Text written to standard error."""

    exit_code: int
    """Exit code (0 = success)."""

    env: Optional[dict[str, str]] = None
    """Snapshot of the variable environment after execution."""


class ParseMode(Enum):
    """How a command wants its bracket content handled by the parser."""

    KEY_VALUE = "key_value"
    """Bracket content is split into ``options``."""

    RAW = "raw"
    """Bracket content is left as an opaque string."""


@dataclass
class ExecutionLimits:
    """Execution limits that keep runaway input from hanging the engine."""

    max_recursion_depth: int = 50
    """Ceiling on nested re-entry (interpolation, script lines, nested commands)."""

    max_interpolation_iterations: int = 10
    """Passes the interpolator may make before giving up on a fixed point."""


@dataclass
class CommandContext:
    """Context provided to native commands."""

    variables: "VariableStore"
    """The variable environment."""

    state: "InterpreterState"
    """Mutable shell state (message history, output buffers)."""

    commands: dict[str, "Command"] = field(default_factory=dict)
    """Command registry (for help and introspection)."""

    exec: Optional[Callable[[str], Awaitable[ExecResult]]] = None
    """Run a nested line through the engine and return its captured output."""

    parsed: Optional["ParsedCommand"] = None
    """The command line being executed (raw bracket content for RAW commands)."""


class Command(Protocol):
    """Protocol for native commands."""

    name: str
    parse_mode: ParseMode
    description: str
    usage: str

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the command with parsed bracket options and message text."""
        ...


CommandRegistry = dict[str, Command]
"""Mapping from command name to native command."""
