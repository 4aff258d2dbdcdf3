"""Tests for if, if-not, assert-equal, exit, run and help."""

import pytest

from neuro_shell import NeuroShell
from neuro_shell.interpreter import is_truthy


class TestTruthiness:
    """Condition evaluation rules."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "on", "Enabled", " yes ", "hello", "🌟"])
    def test_truthy(self, value):
        assert is_truthy(value)

    @pytest.mark.parametrize("value", ["false", "False", "0", "no", "off", "disabled", "", "   ", None])
    def test_falsy(self, value):
        assert not is_truthy(value)


class TestIfCommand:
    """Test the if command."""

    @pytest.mark.asyncio
    async def test_runs_when_true(self):
        shell = NeuroShell()
        result = await shell.exec("\\if[condition=true] \\echo ran")
        assert result.stdout == "ran\n"
        assert shell.env.get_variable("#if_result") == "true"

    @pytest.mark.asyncio
    async def test_skips_when_false(self):
        shell = NeuroShell()
        result = await shell.exec("\\if[condition=0] \\echo ran")
        assert result.stdout == ""
        assert result.exit_code == 0
        assert shell.env.get_variable("#if_result") == "false"

    @pytest.mark.asyncio
    async def test_condition_from_variable(self):
        shell = NeuroShell(env={"debug": "on"})
        result = await shell.exec("\\if[condition=${debug}] \\echo debugging")
        assert result.stdout == "debugging\n"

    @pytest.mark.asyncio
    async def test_undefined_variable_is_false(self):
        shell = NeuroShell()
        result = await shell.exec("\\if[condition=${missing}] \\echo ran")
        assert result.stdout == ""

    @pytest.mark.asyncio
    async def test_condition_required(self):
        shell = NeuroShell()
        result = await shell.exec("\\if \\echo ran")
        assert result.exit_code == 1
        assert "condition parameter is required" in result.stderr

    @pytest.mark.asyncio
    async def test_nested_plain_text(self):
        shell = NeuroShell()
        await shell.exec("\\if[condition=yes] a message")
        assert shell.messages == ["a message"]


class TestIfNotCommand:
    """Test the if-not command."""

    @pytest.mark.asyncio
    async def test_runs_when_false(self):
        shell = NeuroShell()
        result = await shell.exec("\\if-not[condition=no] \\echo ran")
        assert result.stdout == "ran\n"
        assert shell.env.get_variable("#if_result") == "false"

    @pytest.mark.asyncio
    async def test_skips_when_true(self):
        shell = NeuroShell()
        result = await shell.exec("\\if-not[condition=yes] \\echo ran")
        assert result.stdout == ""


class TestAssertEqualCommand:
    """Test the assert-equal command."""

    @pytest.mark.asyncio
    async def test_pass(self):
        shell = NeuroShell(env={"x": "5"})
        result = await shell.exec("\\assert-equal[expect=5, actual=${x}]")
        assert result.exit_code == 0
        assert shell.env.get_variable("_assert_result") == "PASS"
        assert shell.env.get_variable("_assert_expected") == "5"
        assert shell.env.get_variable("_assert_actual") == "5"

    @pytest.mark.asyncio
    async def test_fail(self):
        shell = NeuroShell()
        result = await shell.exec("\\assert-equal[expect=a, actual=b]")
        assert result.exit_code == 1
        assert "expected 'a', got 'b'" in result.stderr
        assert shell.env.get_variable("_assert_result") == "FAIL"

    @pytest.mark.asyncio
    async def test_fail_inside_try(self):
        shell = NeuroShell()
        result = await shell.exec("\\try \\assert-equal[expect=a, actual=b]")
        assert result.exit_code == 0
        assert shell.env.get_variable("_status") == "1"

    @pytest.mark.asyncio
    async def test_missing_options(self):
        shell = NeuroShell()
        result = await shell.exec("\\assert-equal[expect=a]")
        assert result.exit_code == 1
        assert "Usage" in result.stderr


class TestExitCommand:
    """Test the exit command."""

    @pytest.mark.asyncio
    async def test_exit_default(self):
        shell = NeuroShell()
        result = await shell.exec("\\exit")
        assert result.exit_code == 0
        assert shell.exited

    @pytest.mark.asyncio
    async def test_exit_code(self):
        shell = NeuroShell()
        result = await shell.exec("\\exit 42")
        assert result.exit_code == 42

    @pytest.mark.asyncio
    async def test_exit_from_script_keeps_output(self):
        shell = NeuroShell(scripts={"quit": "\\echo bye\n\\exit 7\n\\echo never"})
        result = await shell.exec("\\quit")
        assert result.stdout == "bye\n"
        assert result.exit_code == 7
        assert shell.env.get_variable("_0") == ""

    @pytest.mark.asyncio
    async def test_non_numeric(self):
        shell = NeuroShell()
        result = await shell.exec("\\exit soon")
        assert result.exit_code == 1
        assert "numeric argument required" in result.stderr
        assert not shell.exited


class TestHelpCommand:
    """Test the help command."""

    @pytest.mark.asyncio
    async def test_lists_commands(self):
        shell = NeuroShell()
        result = await shell.exec("\\help")
        assert result.stdout.startswith("Available commands:\n")
        for name in ("echo", "set", "get", "vars", "if-not", "assert-equal"):
            assert f"\\{name}" in result.stdout

    @pytest.mark.asyncio
    async def test_command_usage(self):
        shell = NeuroShell()
        result = await shell.exec("\\help \\echo")
        assert result.stdout.startswith("\\echo[to=var")

    @pytest.mark.asyncio
    async def test_unknown_command(self):
        shell = NeuroShell()
        result = await shell.exec("\\help nope")
        assert result.exit_code == 1
        assert "no help for 'nope'" in result.stderr


class TestRunCommand:
    """Test the run command."""

    @pytest.mark.asyncio
    async def test_runs_file_in_caller_scope(self, tmp_path):
        script = tmp_path / "setup.neuro"
        script.write_text("%% setup\n\\set[x=1]\n\n\\echo x=${x}\n")
        shell = NeuroShell()
        result = await shell.exec(f"\\run {script}")
        assert result.exit_code == 0
        assert result.stdout == "Setting x = 1\nx=1\n"
        assert shell.env.get_variable("x") == "1"

    @pytest.mark.asyncio
    async def test_continuation_lines(self, tmp_path):
        script = tmp_path / "long.neuro"
        script.write_text("\\echo one ...\n  two\n")
        shell = NeuroShell()
        result = await shell.exec(f"\\run {script}")
        assert result.stdout == "one two\n"

    @pytest.mark.asyncio
    async def test_stops_at_failing_line(self, tmp_path):
        script = tmp_path / "broken.neuro"
        script.write_text("\\echo ok\n\\missing\n\\echo never\n")
        shell = NeuroShell()
        result = await shell.exec(f"\\run {script}")
        assert result.exit_code == 1
        assert result.stdout == "ok\n"
        assert (
            "script line execution failed at line 2: command not found: missing"
            in result.stderr
        )

    @pytest.mark.asyncio
    async def test_requires_path(self):
        shell = NeuroShell()
        result = await shell.exec("\\run")
        assert result.exit_code == 1
        assert "script path is required" in result.stderr

    @pytest.mark.asyncio
    async def test_requires_neuro_suffix(self, tmp_path):
        script = tmp_path / "notes.txt"
        script.write_text("\\echo hi\n")
        shell = NeuroShell()
        result = await shell.exec(f"\\run {script}")
        assert result.exit_code == 1
        assert "not a .neuro file" in result.stderr
        assert result.stdout == ""

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        shell = NeuroShell()
        result = await shell.exec(f"\\run {tmp_path / 'nope.neuro'}")
        assert result.exit_code == 1
        assert "cannot read" in result.stderr

    @pytest.mark.asyncio
    async def test_try_run(self, tmp_path):
        shell = NeuroShell()
        result = await shell.exec(f"\\try \\run {tmp_path / 'nope.neuro'}")
        assert result.exit_code == 0
        assert shell.env.get_variable("_status") == "1"

    @pytest.mark.asyncio
    async def test_exit_inside_file(self, tmp_path):
        script = tmp_path / "quit.neuro"
        script.write_text("\\echo before\n\\exit 5\n\\echo after\n")
        shell = NeuroShell()
        result = await shell.exec(f"\\run {script}")
        assert result.exit_code == 5
        assert result.stdout == "before\n"
        assert shell.exited
