"""Exit command implementation.

Usage: \\exit [code]

Stop the current top-level call (and the REPL) with the given exit code
(default 0). Not catchable by \\try.
"""

from ...interpreter.errors import ExitError
from ...types import CommandContext, ExecResult, ParseMode


class ExitCommand:
    """The exit command."""

    name = "exit"
    parse_mode = ParseMode.KEY_VALUE
    description = "Exit the shell"
    usage = "\\exit [code]"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the exit command."""
        code = message.strip()
        if not code:
            raise ExitError(0)
        try:
            exit_code = int(code)
        except ValueError:
            return ExecResult(
                stdout="",
                stderr=f"exit: {code}: numeric argument required\n",
                exit_code=2,
            )
        raise ExitError(exit_code & 0xFF)
