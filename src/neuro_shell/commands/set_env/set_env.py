"""Set-env command implementation.

Usage: \\set-env[VAR=value, ...]
       \\set-env VAR value

Set process environment variables for the rest of the session.
"""

import os

from ...types import CommandContext, ExecResult, ParseMode


class SetEnvCommand:
    """The set-env command."""

    name = "set-env"
    parse_mode = ParseMode.KEY_VALUE
    description = "Set an environment variable"
    usage = "\\set-env[VAR=value] or \\set-env VAR value"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the set-env command."""
        if options:
            assignments = sorted(options.items())
        elif message.strip():
            parts = message.lstrip(" \t").split(" ", 1)
            assignments = [(parts[0], parts[1].lstrip(" \t") if len(parts) == 2 else "")]
        else:
            return ExecResult(stdout="", stderr=f"Usage: {self.usage}\n", exit_code=1)

        output = []
        for key, value in assignments:
            try:
                os.environ[key] = value
            except ValueError as e:
                return ExecResult(
                    stdout="".join(output),
                    stderr=f"set-env: failed to set environment variable {key}: {e}\n",
                    exit_code=1,
                )
            output.append(f"Setting {key} = {value}\n")

        return ExecResult(stdout="".join(output), stderr="", exit_code=0)
