"""Get command implementation.

Usage: \\get[name]
       \\get name

Print a variable as ``name = value`` and store the value in ``_output``.
Undefined variables read as empty.
"""

from ...types import CommandContext, ExecResult, ParseMode


class GetCommand:
    """The get command."""

    name = "get"
    parse_mode = ParseMode.KEY_VALUE
    description = "Get a variable"
    usage = "\\get[name] or \\get name"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the get command."""
        variable = ""
        if options:
            variable = next(iter(options))
        elif message.split():
            variable = message.split()[0]

        if not variable:
            return ExecResult(stdout="", stderr=f"Usage: {self.usage}\n", exit_code=1)

        value = ctx.variables.get_variable(variable) or ""
        ctx.variables.set_system_variable("_output", value)
        return ExecResult(stdout=f"{variable} = {value}\n", stderr="", exit_code=0)
