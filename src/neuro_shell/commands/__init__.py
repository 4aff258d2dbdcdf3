"""Native command catalog for neuro-shell."""

from ..types import Command
from .assert_equal import AssertEqualCommand
from .echo import EchoCommand
from .exit import ExitCommand
from .get import GetCommand
from .get_env import GetEnvCommand
from .help import HelpCommand
from .if_command import IfCommand, IfNotCommand
from .run import RunCommand
from .send import SendCommand
from .set import SetCommand
from .set_env import SetEnvCommand
from .silent import SilentCommand
from .vars import VarsCommand

BUILTIN_COMMANDS = (
    SendCommand,
    EchoCommand,
    SetCommand,
    GetCommand,
    VarsCommand,
    GetEnvCommand,
    SetEnvCommand,
    IfCommand,
    IfNotCommand,
    SilentCommand,
    RunCommand,
    AssertEqualCommand,
    ExitCommand,
    HelpCommand,
)


def create_command_registry() -> dict[str, Command]:
    """Create a fresh registry with every built-in command."""
    registry: dict[str, Command] = {}
    for command_class in BUILTIN_COMMANDS:
        command = command_class()
        registry[command.name] = command
    return registry


__all__ = [
    "BUILTIN_COMMANDS",
    "create_command_registry",
    "SendCommand",
    "EchoCommand",
    "SetCommand",
    "GetCommand",
    "VarsCommand",
    "GetEnvCommand",
    "SetEnvCommand",
    "IfCommand",
    "IfNotCommand",
    "SilentCommand",
    "RunCommand",
    "AssertEqualCommand",
    "ExitCommand",
    "HelpCommand",
]
