"""Help command implementation.

Usage: \\help [command]

List the available commands, or show the usage of one command.
"""

from ...types import CommandContext, ExecResult, ParseMode


class HelpCommand:
    """The help command."""

    name = "help"
    parse_mode = ParseMode.KEY_VALUE
    description = "Show available commands"
    usage = "\\help [command]"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the help command."""
        target = message.strip().lstrip("\\")
        if target:
            command = ctx.commands.get(target)
            if command is None:
                return ExecResult(
                    stdout="", stderr=f"help: no help for '{target}'\n", exit_code=1
                )
            return ExecResult(
                stdout=f"{command.usage}\n\n{command.description}\n",
                stderr="",
                exit_code=0,
            )

        width = max((len(name) for name in ctx.commands), default=0)
        lines = ["Available commands:"]
        for name in sorted(ctx.commands):
            lines.append(f"  \\{name.ljust(width)}  {ctx.commands[name].description}")
        return ExecResult(stdout="\n".join(lines) + "\n", stderr="", exit_code=0)
