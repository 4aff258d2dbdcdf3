"""neuro-shell - a backslash-command scripting shell.

Example usage:
    from neuro_shell import NeuroShell

    shell = NeuroShell()
    shell.run("\\set[name=World]")
    result = shell.run("\\echo Hello, ${name}!")
    print(result.stdout)  # "Hello, World!\\n"
"""

import logging

from .commands import create_command_registry
from .interpreter import (
    CommandExecutionError,
    CommandNotFoundError,
    CommandResolver,
    CoreInterpolator,
    ExecutionLimitError,
    ExitError,
    ScriptLineError,
    ShellError,
    ShellOptions,
    StateMachine,
    VariableStore,
)
from .parser import ParsedCommand, parse_command
from .shell import NeuroShell
from .types import Command, CommandContext, ExecResult, ExecutionLimits, ParseMode

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "NeuroShell",
    "StateMachine",
    "CoreInterpolator",
    "CommandResolver",
    "create_command_registry",
    "parse_command",
    "ParsedCommand",
    "Command",
    "CommandContext",
    "ExecResult",
    "ExecutionLimits",
    "ParseMode",
    "ShellOptions",
    "VariableStore",
    "ShellError",
    "CommandNotFoundError",
    "CommandExecutionError",
    "ExecutionLimitError",
    "ScriptLineError",
    "ExitError",
]
