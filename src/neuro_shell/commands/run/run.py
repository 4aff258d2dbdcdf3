"""Run command implementation.

Usage: \\run script_path

Execute a ``.neuro`` file line by line through the engine, in the caller's
variable scope. Relative paths resolve against the working directory.
Execution stops at the first failing line.
"""

from pathlib import Path

from ...interpreter.errors import ExitError
from ...interpreter.state_machine import COMMENT_MARKER, split_script_lines
from ...scripts.sources import SCRIPT_SUFFIX
from ...types import CommandContext, ExecResult, ParseMode


class RunCommand:
    """The run command."""

    name = "run"
    parse_mode = ParseMode.RAW
    description = "Execute a NeuroShell script file"
    usage = "\\run script_path"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the run command."""
        script_path = message.strip()
        if not script_path:
            return ExecResult(
                stdout="",
                stderr=f"script path is required\nUsage: {self.usage}\n",
                exit_code=1,
            )

        path = Path(script_path)
        if path.suffix != SCRIPT_SUFFIX:
            return ExecResult(
                stdout="",
                stderr=f"run: not a {SCRIPT_SUFFIX} file: {script_path}\n",
                exit_code=1,
            )

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            return ExecResult(
                stdout="",
                stderr=f"run: cannot read {script_path}: {e.strerror or e}\n",
                exit_code=1,
            )

        if ctx.exec is None:
            return ExecResult(stdout="", stderr="run: nested execution unavailable\n", exit_code=1)

        stdout = []
        stderr = []
        for line_number, line in enumerate(split_script_lines(text), start=1):
            line = line.strip()
            if not line or line.startswith(COMMENT_MARKER):
                continue
            mark = len(ctx.state.stdout)
            try:
                result = await ctx.exec(line)
            except ExitError:
                # Keep earlier output ahead of whatever the exiting line wrote.
                ctx.state.stdout[mark:mark] = stdout
                raise
            stdout.append(result.stdout)
            if result.exit_code != 0:
                return ExecResult(
                    stdout="".join(stdout),
                    stderr=(
                        f"script line execution failed at line {line_number}: "
                        f"{result.stderr.strip()}\n"
                    ),
                    exit_code=result.exit_code,
                )
            stderr.append(result.stderr)

        return ExecResult(stdout="".join(stdout), stderr="".join(stderr), exit_code=0)
