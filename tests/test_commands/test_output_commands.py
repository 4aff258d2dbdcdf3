"""Tests for send, echo and silent."""

import pytest

from neuro_shell import NeuroShell
from neuro_shell.commands.echo.echo import interpret_escapes, parse_bool_option


class TestSendCommand:
    """Test the send command."""

    @pytest.mark.asyncio
    async def test_plain_text_is_sent(self):
        shell = NeuroShell()
        result = await shell.exec("hello world")
        assert result.exit_code == 0
        assert result.stdout == ""
        assert shell.messages == ["hello world"]
        assert shell.env.get_variable("_output") == "hello world"

    @pytest.mark.asyncio
    async def test_explicit_send(self):
        shell = NeuroShell()
        await shell.exec("\\send first")
        await shell.exec("\\send second")
        assert shell.messages == ["first", "second"]
        assert shell.env.get_variable("#message_count") == "2"

    @pytest.mark.asyncio
    async def test_empty_send_fails(self):
        shell = NeuroShell()
        result = await shell.exec("\\send")
        assert result.exit_code == 1
        assert "Usage" in result.stderr
        assert shell.messages == []


class TestEchoCommand:
    """Test the echo command."""

    @pytest.mark.asyncio
    async def test_echo(self):
        shell = NeuroShell()
        result = await shell.exec("\\echo hello")
        assert result.stdout == "hello\n"
        assert result.exit_code == 0
        assert shell.env.get_variable("_output") == "hello"

    @pytest.mark.asyncio
    async def test_escapes(self):
        shell = NeuroShell()
        result = await shell.exec("\\echo a\\tb\\nc")
        assert result.stdout == "a\tb\nc\n"

    @pytest.mark.asyncio
    async def test_raw(self):
        shell = NeuroShell()
        result = await shell.exec("\\echo[raw=true] a\\nb")
        assert result.stdout == "a\\nb\n"

    @pytest.mark.asyncio
    async def test_trailing_newline_not_doubled(self):
        shell = NeuroShell()
        result = await shell.exec("\\echo done\\n")
        assert result.stdout == "done\n"

    @pytest.mark.asyncio
    async def test_store_in_variable(self):
        shell = NeuroShell()
        result = await shell.exec("\\echo[to=greeting, silent=true] hi")
        assert result.stdout == ""
        assert shell.env.get_variable("greeting") == "hi"

    @pytest.mark.asyncio
    async def test_store_in_protected_variable_fails(self):
        shell = NeuroShell()
        result = await shell.exec("\\echo[to=@pwd] hi")
        assert result.exit_code == 1
        assert "failed to store result" in result.stderr

    @pytest.mark.asyncio
    async def test_invalid_silent_value(self):
        shell = NeuroShell()
        result = await shell.exec("\\echo[silent=maybe] hi")
        assert result.exit_code == 1
        assert "invalid value for silent option" in result.stderr

    @pytest.mark.asyncio
    async def test_empty_message_fails(self):
        shell = NeuroShell()
        result = await shell.exec("\\echo")
        assert result.exit_code == 1
        assert "Usage" in result.stderr

    def test_interpret_escapes_single_pass(self):
        assert interpret_escapes("\\\\n") == "\\n"
        assert interpret_escapes("\\\"q\\'") == "\"q'"
        assert interpret_escapes("\\x") == "\\x"

    def test_parse_bool_option(self):
        assert parse_bool_option("raw", "TRUE") is True
        assert parse_bool_option("raw", "0") is False
        assert parse_bool_option("raw", "") is False
        with pytest.raises(ValueError):
            parse_bool_option("raw", "yes please")


class TestSilentCommand:
    """Test the silent command."""

    @pytest.mark.asyncio
    async def test_discards_output(self):
        shell = NeuroShell()
        result = await shell.exec("\\silent \\echo secret")
        assert result.stdout == ""
        assert result.exit_code == 0
        assert shell.env.get_variable("_output") == "secret"

    @pytest.mark.asyncio
    async def test_bracket_content_is_not_parsed(self):
        shell = NeuroShell()
        result = await shell.exec("\\silent[anything, \"goes] \\echo x")
        assert result.exit_code == 0
        assert result.stdout == ""

    @pytest.mark.asyncio
    async def test_failure_still_reported(self):
        shell = NeuroShell()
        result = await shell.exec("\\silent \\missing")
        assert result.exit_code == 1
        assert "command not found: missing" in result.stderr

    @pytest.mark.asyncio
    async def test_empty_is_noop(self):
        shell = NeuroShell()
        result = await shell.exec("\\silent")
        assert result.exit_code == 0
