"""Send command implementation.

Usage: \\send message

Default command for plain text lines. Appends the message to the session
message history and stores it in ``_output``.
"""

from ...types import CommandContext, ExecResult, ParseMode


class SendCommand:
    """The send command."""

    name = "send"
    parse_mode = ParseMode.KEY_VALUE
    description = "Add a message to the session history"
    usage = "\\send message"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the send command."""
        if not message.strip():
            return ExecResult(
                stdout="",
                stderr=f"Usage: {self.usage}\n",
                exit_code=1,
            )

        ctx.state.messages.append(message)
        ctx.variables.set_system_variable("_output", message)
        return ExecResult(stdout="", stderr="", exit_code=0)
