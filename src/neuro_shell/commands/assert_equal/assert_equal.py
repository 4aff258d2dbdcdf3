"""Assert-equal command implementation.

Usage: \\assert-equal[expect=value, actual=value]

Compare two values. The outcome is stored in ``_assert_result`` (PASS or
FAIL) with the compared values in ``_assert_expected`` and
``_assert_actual``. A mismatch fails the command.
"""

from ...types import CommandContext, ExecResult, ParseMode


class AssertEqualCommand:
    """The assert-equal command."""

    name = "assert-equal"
    parse_mode = ParseMode.KEY_VALUE
    description = "Assert that two values are equal"
    usage = "\\assert-equal[expect=value, actual=value]"

    async def execute(
        self, options: dict[str, str], message: str, ctx: CommandContext
    ) -> ExecResult:
        """Execute the assert-equal command."""
        if "expect" not in options or "actual" not in options:
            return ExecResult(stdout="", stderr=f"Usage: {self.usage}\n", exit_code=1)

        expected = options["expect"]
        actual = options["actual"]
        passed = expected == actual

        ctx.variables.set_system_variable("_assert_result", "PASS" if passed else "FAIL")
        ctx.variables.set_system_variable("_assert_expected", expected)
        ctx.variables.set_system_variable("_assert_actual", actual)

        if passed:
            return ExecResult(stdout="", stderr="", exit_code=0)
        return ExecResult(
            stdout="",
            stderr=f"assertion failed: expected '{expected}', got '{actual}'\n",
            exit_code=1,
        )
