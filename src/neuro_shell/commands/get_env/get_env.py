"""Get-env command implementation.

Usage: \\get-env[VAR]
       \\get-env VAR

Print a process environment variable as ``VAR = value`` and mirror it
into the ``#os.VAR`` variable. Unset variables read as empty.
"""

import os

from ...types import CommandContext, ExecResult, ParseMode

MIRROR_PREFIX = "#os."


class GetEnvCommand:
    """The get-env command."""

    name = "get-env"
    parse_mode = ParseMode.KEY_VALUE
    description = "Get an environment variable and create #os.VAR"
    usage = "\\get-env[VAR] or \\get-env VAR"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the get-env command."""
        variable = ""
        if options:
            variable = next(iter(options))
        elif message.split():
            variable = message.split()[0]

        if not variable:
            return ExecResult(stdout="", stderr=f"Usage: {self.usage}\n", exit_code=1)

        value = os.environ.get(variable, "")
        ctx.variables.set_system_variable(f"{MIRROR_PREFIX}{variable}", value)
        return ExecResult(stdout=f"{variable} = {value}\n", stderr="", exit_code=0)
