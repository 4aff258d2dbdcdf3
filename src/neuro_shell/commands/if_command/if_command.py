"""If and if-not command implementations.

Usage: \\if[condition=value] command
       \\if-not[condition=value] command

Evaluate a condition, store the result in ``#if_result`` and run the
command line when the condition holds (``if``) or does not hold
(``if-not``).

Truthy: true, 1, yes, on, enabled and any other non-empty text.
Falsy: false, 0, no, off, disabled and the empty string.
"""

from ...interpreter.conditions import is_truthy
from ...types import CommandContext, ExecResult, ParseMode


async def _run_conditional(
    name: str, options: dict[str, str], message: str, ctx: CommandContext, negate: bool
) -> ExecResult:
    if "condition" not in options:
        return ExecResult(
            stdout="", stderr=f"{name}: condition parameter is required\n", exit_code=1
        )

    result = is_truthy(options["condition"])
    ctx.variables.set_system_variable("#if_result", "true" if result else "false")

    if result == negate or not message.strip() or ctx.exec is None:
        return ExecResult(stdout="", stderr="", exit_code=0)
    return await ctx.exec(message.strip())


class IfCommand:
    """The if command."""

    name = "if"
    parse_mode = ParseMode.KEY_VALUE
    description = "Run a command when a condition is truthy"
    usage = "\\if[condition=value] command"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the if command."""
        return await _run_conditional(self.name, options, message, ctx, negate=False)


class IfNotCommand:
    """The if-not command."""

    name = "if-not"
    parse_mode = ParseMode.KEY_VALUE
    description = "Run a command when a condition is falsy"
    usage = "\\if-not[condition=value] command"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the if-not command."""
        return await _run_conditional(self.name, options, message, ctx, negate=True)
