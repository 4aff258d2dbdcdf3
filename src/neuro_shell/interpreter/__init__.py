"""Interpreter module for neuro-shell."""

from .conditions import is_truthy
from .errors import (
    CommandExecutionError,
    CommandNotFoundError,
    EmptyInputError,
    ExecutionLimitError,
    ExitError,
    ParseError,
    ScriptLineError,
    ScriptLoadError,
    ShellError,
    StuckStateError,
    VariableError,
)
from .interpolation import CoreInterpolator, has_variables
from .resolver import CommandResolver
from .state_machine import StateMachine, split_script_lines
from .types import (
    ALLOWED_GLOBAL_VARIABLES,
    SYSTEM_PREFIXES,
    CommandKind,
    ExecutionFrame,
    ExecutionState,
    InterpreterState,
    ResolvedCommand,
    ShellOptions,
    VariableStore,
    is_system_variable,
    validate_variable_name,
    variable_kind,
)

__all__ = [
    # Engine
    "StateMachine",
    "split_script_lines",
    "CoreInterpolator",
    "has_variables",
    "CommandResolver",
    "is_truthy",
    # Types
    "ALLOWED_GLOBAL_VARIABLES",
    "SYSTEM_PREFIXES",
    "CommandKind",
    "ExecutionFrame",
    "ExecutionState",
    "InterpreterState",
    "ResolvedCommand",
    "ShellOptions",
    "VariableStore",
    "is_system_variable",
    "validate_variable_name",
    "variable_kind",
    # Errors
    "ShellError",
    "EmptyInputError",
    "ParseError",
    "CommandNotFoundError",
    "ExecutionLimitError",
    "CommandExecutionError",
    "ScriptLineError",
    "StuckStateError",
    "VariableError",
    "ScriptLoadError",
    "ExitError",
]
