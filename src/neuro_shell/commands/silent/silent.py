"""Silent command implementation.

Usage: \\silent command

Run a command line and discard its standard output. Bracket content is
not parsed.
"""

from ...types import CommandContext, ExecResult, ParseMode


class SilentCommand:
    """The silent command."""

    name = "silent"
    parse_mode = ParseMode.RAW
    description = "Run a command and discard its output"
    usage = "\\silent command"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the silent command."""
        if not message.strip() or ctx.exec is None:
            return ExecResult(stdout="", stderr="", exit_code=0)

        result = await ctx.exec(message.strip())
        return ExecResult(stdout="", stderr=result.stderr, exit_code=result.exit_code)
