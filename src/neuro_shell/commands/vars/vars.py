"""Vars command implementation.

Usage: \\vars[pattern=regex, type=kind]

List variables sorted by name.

Options:
  pattern  Only show names matching this regular expression
  type     user, system (@), metadata (#), command (_) or all (default)
"""

import re

from ...interpreter.types import variable_kind
from ...types import CommandContext, ExecResult, ParseMode

VARIABLE_KINDS = ("user", "system", "metadata", "command", "all")


class VarsCommand:
    """The vars command."""

    name = "vars"
    parse_mode = ParseMode.KEY_VALUE
    description = "List variables"
    usage = "\\vars[pattern=regex, type=user|system|metadata|command|all]"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the vars command."""
        kind = (options.get("type") or "all").lower()
        if kind not in VARIABLE_KINDS:
            return ExecResult(
                stdout="",
                stderr=f"vars: invalid type '{kind}' (expected one of: {', '.join(VARIABLE_KINDS)})\n",
                exit_code=1,
            )

        regex = None
        pattern = options.get("pattern", "")
        if pattern:
            try:
                regex = re.compile(pattern)
            except re.error as e:
                return ExecResult(
                    stdout="",
                    stderr=f"vars: invalid regex pattern '{pattern}': {e}\n",
                    exit_code=1,
                )

        lines = []
        for name, value in sorted(ctx.variables.all_variables().items()):
            if kind != "all" and variable_kind(name) != kind:
                continue
            if regex is not None and not regex.search(name):
                continue
            lines.append(f"{name} = {value}")

        return ExecResult(
            stdout="\n".join(lines) + "\n" if lines else "",
            stderr="",
            exit_code=0,
        )
