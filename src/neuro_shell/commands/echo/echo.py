"""Echo command implementation.

Usage: \\echo[to=var, silent=true, raw=true] message

Print a message and store it in a variable.

Options:
  to      Variable to store the message in (default: _output)
  silent  Store without printing
  raw     Do not interpret escape sequences

Escape sequences: \\n \\t \\r \\\\ \\" \\'
"""

import re

from ...interpreter.errors import VariableError
from ...interpreter.types import is_system_variable
from ...types import CommandContext, ExecResult, ParseMode

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "'": "'"}
_ESCAPE_RE = re.compile(r"\\([ntr\\\"'])")

_BOOL_VALUES = {
    "true": True, "t": True, "1": True,
    "false": False, "f": False, "0": False,
}


def interpret_escapes(text: str) -> str:
    """Replace backslash escape sequences with the characters they name."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(1)], text)


def parse_bool_option(name: str, value: str) -> bool:
    """Parse a true/false option value.

    Raises:
        ValueError: If the value is not a recognised boolean.
    """
    if value == "":
        return False
    try:
        return _BOOL_VALUES[value.lower()]
    except KeyError:
        raise ValueError(
            f"invalid value for {name} option: {value} (must be true or false)"
        ) from None


class EchoCommand:
    """The echo command."""

    name = "echo"
    parse_mode = ParseMode.KEY_VALUE
    description = "Print a message and store it in a variable"
    usage = "\\echo[to=var, silent=true, raw=true] message"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the echo command."""
        if message == "":
            return ExecResult(stdout="", stderr=f"Usage: {self.usage}\n", exit_code=1)

        try:
            silent = parse_bool_option("silent", options.get("silent", ""))
            raw = parse_bool_option("raw", options.get("raw", ""))
        except ValueError as e:
            return ExecResult(stdout="", stderr=f"echo: {e}\n", exit_code=1)

        text = message if raw else interpret_escapes(message)
        target = options.get("to") or "_output"

        try:
            if is_system_variable(target):
                ctx.variables.set_system_variable(target, text)
            else:
                ctx.variables.set_variable(target, text)
        except VariableError as e:
            return ExecResult(
                stdout="",
                stderr=f"echo: failed to store result in variable '{target}': {e}\n",
                exit_code=1,
            )

        if silent:
            return ExecResult(stdout="", stderr="", exit_code=0)
        if not text.endswith("\n"):
            text += "\n"
        return ExecResult(stdout=text, stderr="", exit_code=0)
