"""Set command implementation.

Usage: \\set[name=value, ...]
       \\set name value

Set user variables (or the allowed global switches such as
``_echo_command``).
"""

from ...interpreter.errors import VariableError
from ...types import CommandContext, ExecResult, ParseMode


class SetCommand:
    """The set command."""

    name = "set"
    parse_mode = ParseMode.KEY_VALUE
    description = "Set a variable"
    usage = "\\set[name=value] or \\set name value"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the set command."""
        if options:
            assignments = list(options.items())
        elif message.strip():
            parts = message.strip().split(None, 1)
            assignments = [(parts[0], parts[1] if len(parts) == 2 else "")]
        else:
            return ExecResult(stdout="", stderr=f"Usage: {self.usage}\n", exit_code=1)

        output = []
        for key, value in assignments:
            try:
                ctx.variables.set_variable(key, value)
            except VariableError as e:
                return ExecResult(
                    stdout="".join(output),
                    stderr=f"set: failed to set variable {key}: {e}\n",
                    exit_code=1,
                )
            output.append(f"Setting {key} = {value}\n")

        return ExecResult(stdout="".join(output), stderr="", exit_code=0)
