"""Interpreter types for neuro-shell."""

from __future__ import annotations

import getpass
import os
import platform
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from .errors import ShellError, VariableError

if TYPE_CHECKING:
    from ..parser import ParsedCommand
    from ..types import Command


SYSTEM_PREFIXES = ("@", "#", "_")
"""Variable names starting with one of these belong to the system."""

ALLOWED_GLOBAL_VARIABLES = frozenset({
    "_style",
    "_echo_command",
    "_default_command",
    "_reply_way",
    "_stream",
    "_editor",
})
"""System-prefixed names that ordinary ``set_variable`` may still write."""


def is_system_variable(name: str) -> bool:
    """Check if a variable name is a system name."""
    return name.startswith(SYSTEM_PREFIXES)


def variable_kind(name: str) -> str:
    """Classify a variable name: user, system, metadata or command."""
    if name.startswith("@"):
        return "system"
    if name.startswith("#"):
        return "metadata"
    if name.startswith("_"):
        return "command"
    return "user"


def validate_variable_name(name: str) -> None:
    """Raise VariableError if *name* is not usable as a variable name."""
    if not name:
        raise VariableError("variable name cannot be empty")
    if any(c.isspace() for c in name):
        raise VariableError(f"variable name cannot contain whitespace: {name!r}")


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""


class VariableStore(dict):
    """Dict subclass holding the variable environment.

    Stored values live in the dict itself. Computed system variables
    (``@pwd``, ``@date``...) are not stored; ``get_variable`` evaluates
    them on every read, and stored values never shadow them.
    """

    _computed: dict[str, Callable[[], str]]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._computed = {
            "@pwd": os.getcwd,
            "@user": _current_user,
            "@home": lambda: str(Path.home()),
            "@date": lambda: datetime.now().strftime("%Y-%m-%d"),
            "@time": lambda: datetime.now().strftime("%H:%M:%S"),
            "@os": lambda: f"{platform.system().lower()}/{platform.machine().lower()}",
        }

    def register_computed(self, name: str, getter: Callable[[], str]) -> None:
        """Register a read-only computed system variable."""
        self._computed[name] = getter

    def get_variable(self, name: str) -> Optional[str]:
        """Return the value of *name*, or None if it is not defined."""
        getter = self._computed.get(name)
        if getter is not None:
            return getter()
        return super().get(name)

    def set_variable(self, name: str, value: str) -> None:
        """Set a user variable.

        Raises:
            VariableError: If the name is invalid or reserved for the system.
        """
        validate_variable_name(name)
        if is_system_variable(name) and name not in ALLOWED_GLOBAL_VARIABLES:
            raise VariableError(f"cannot set system variable: {name}")
        self[name] = value

    def set_system_variable(self, name: str, value: str) -> None:
        """Set a system variable (internal use).

        Raises:
            VariableError: If the name is not system-prefixed or is computed.
        """
        validate_variable_name(name)
        if not is_system_variable(name):
            raise VariableError(
                f"set_system_variable can only set system variables "
                f"(prefixed with @, # or _), got: {name}"
            )
        if name in self._computed:
            raise VariableError(f"cannot overwrite computed variable: {name}")
        self[name] = value

    def all_variables(self) -> dict[str, str]:
        """Return stored and computed variables together."""
        result = dict(self)
        for name, getter in self._computed.items():
            result[name] = getter()
        return result

    def copy(self) -> VariableStore:
        """Create a shallow copy that keeps computed variables."""
        new = VariableStore(super().copy())
        new._computed = dict(self._computed)
        return new

    def to_env_dict(self) -> dict[str, str]:
        """Return a plain dict copy of the stored variables."""
        return dict(self)


@dataclass
class ShellOptions:
    """Shell options."""

    echo_commands: bool = False
    """Echo each executed command line as ``%%> line`` before running it."""

    default_command: str = "send"
    """Command that receives plain text lines."""

    test_mode: bool = False
    """Reported through ``#test_mode``."""


@dataclass
class InterpreterState:
    """Mutable session state shared by the engine and native commands."""

    env: VariableStore = field(default_factory=VariableStore)
    """Variable environment."""

    options: ShellOptions = field(default_factory=ShellOptions)
    """Shell options."""

    messages: list[str] = field(default_factory=list)
    """Messages handed to the default ``send`` command."""

    stdout: list[str] = field(default_factory=list)
    """Output written by commands during the current top-level call."""

    stderr: list[str] = field(default_factory=list)
    """Diagnostics written by commands during the current top-level call."""


class ExecutionState(Enum):
    """States of the execution state machine."""

    RECEIVED = "Received"
    INTERPOLATING = "Interpolating"
    PARSING = "Parsing"
    RESOLVING = "Resolving"
    EXECUTING = "Executing"
    SCRIPT_LOADED = "ScriptLoaded"
    SCRIPT_EXECUTING = "ScriptExecuting"
    TRY_ERROR = "TryError"
    COMPLETED = "Completed"
    ERROR = "Error"

    @property
    def is_terminal(self) -> bool:
        return self in (ExecutionState.COMPLETED, ExecutionState.ERROR)

    def __str__(self) -> str:
        return self.value


class CommandKind(Enum):
    """Which source owns a resolved command, in resolution priority order."""

    BUILTIN = "Builtin"
    LIBRARY_SCRIPT = "LibraryScript"
    USER_SCRIPT = "UserScript"


@dataclass(frozen=True)
class ResolvedCommand:
    """A command name resolved to exactly one source.

    ``command`` is set for BUILTIN; ``script_text`` and ``script_origin``
    are set for LIBRARY_SCRIPT and USER_SCRIPT.
    """

    name: str
    kind: CommandKind
    command: Optional["Command"] = None
    script_text: str = ""
    script_origin: str = ""

    @classmethod
    def builtin(cls, name: str, command: "Command") -> ResolvedCommand:
        return cls(name=name, kind=CommandKind.BUILTIN, command=command)

    @classmethod
    def script(cls, name: str, kind: CommandKind, text: str, origin: str) -> ResolvedCommand:
        if kind is CommandKind.BUILTIN:
            raise ValueError("script payload requires a script kind")
        return cls(name=name, kind=kind, script_text=text, script_origin=origin)

    @property
    def is_script(self) -> bool:
        return self.kind is not CommandKind.BUILTIN


@dataclass
class ExecutionFrame:
    """All per-call interpreter state for one ``execute`` invocation."""

    input: str
    """Line currently being processed."""

    state: ExecutionState = ExecutionState.RECEIVED
    """Current state."""

    depth: int = 0
    """Recursion depth.

    Counts nested re-entry (one per saved caller frame) plus every
    interpolation or ``\\try`` re-entry within this frame, so it can exceed
    the frame stack length when the line was interpolated.
    """

    parsed: Optional["ParsedCommand"] = None
    """Parsed command, once Parsing has run."""

    resolved: Optional[ResolvedCommand] = None
    """Resolved command, once Resolving has run."""

    script_lines: list[str] = field(default_factory=list)
    """Logical lines of the loaded script."""

    cursor: int = 0
    """Index of the next script line."""

    script_finished: bool = False
    """Set once every script line has run and parameters are unbound."""

    parameters_bound: bool = False
    """This frame bound the script parameters and must clear them."""

    settled: bool = False
    """Interpolation reached a fixed point for the current input."""

    error: Optional[ShellError] = None
    """Last error."""

    try_mode: bool = False
    """A try-wrapped target is being resolved and run in this frame."""

    try_succeeded: bool = False
    """The try-wrapped target completed without error."""
