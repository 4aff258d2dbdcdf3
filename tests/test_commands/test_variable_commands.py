"""Tests for set, get and vars."""

import pytest

from neuro_shell import NeuroShell


class TestSetCommand:
    """Test the set command."""

    @pytest.mark.asyncio
    async def test_bracket_form(self):
        shell = NeuroShell()
        result = await shell.exec("\\set[a=1, b=two words]")
        assert result.exit_code == 0
        assert result.stdout == "Setting a = 1\nSetting b = two words\n"
        assert shell.env.get_variable("a") == "1"
        assert shell.env.get_variable("b") == "two words"

    @pytest.mark.asyncio
    async def test_message_form(self):
        shell = NeuroShell()
        await shell.exec("\\set name Ada Lovelace")
        assert shell.env.get_variable("name") == "Ada Lovelace"

    @pytest.mark.asyncio
    async def test_message_form_without_value(self):
        shell = NeuroShell()
        await shell.exec("\\set flag")
        assert shell.env.get_variable("flag") == ""

    @pytest.mark.asyncio
    async def test_allowed_global(self):
        shell = NeuroShell()
        result = await shell.exec("\\set[_style=dark]")
        assert result.exit_code == 0
        assert shell.env.get_variable("_style") == "dark"

    @pytest.mark.asyncio
    async def test_system_variable_rejected(self):
        shell = NeuroShell()
        result = await shell.exec("\\set[_status=0]")
        assert result.exit_code == 1
        assert "cannot set system variable: _status" in result.stderr
        assert shell.env.get_variable("_status") is None

    @pytest.mark.asyncio
    async def test_usage(self):
        shell = NeuroShell()
        result = await shell.exec("\\set")
        assert result.exit_code == 1
        assert "Usage" in result.stderr

    @pytest.mark.asyncio
    async def test_value_with_equals_and_quotes(self):
        shell = NeuroShell()
        await shell.exec("\\set[url=\"a=b, c\"]")
        assert shell.env.get_variable("url") == "a=b, c"


class TestGetCommand:
    """Test the get command."""

    @pytest.mark.asyncio
    async def test_bracket_form(self):
        shell = NeuroShell(env={"color": "blue"})
        result = await shell.exec("\\get[color]")
        assert result.stdout == "color = blue\n"
        assert shell.env.get_variable("_output") == "blue"

    @pytest.mark.asyncio
    async def test_message_form(self):
        shell = NeuroShell(env={"color": "blue"})
        result = await shell.exec("\\get color")
        assert result.stdout == "color = blue\n"

    @pytest.mark.asyncio
    async def test_undefined_is_empty(self):
        shell = NeuroShell()
        result = await shell.exec("\\get nothing")
        assert result.exit_code == 0
        assert result.stdout == "nothing = \n"

    @pytest.mark.asyncio
    async def test_computed_variable(self):
        shell = NeuroShell()
        result = await shell.exec("\\get #message_count")
        assert result.stdout == "#message_count = 0\n"

    @pytest.mark.asyncio
    async def test_usage(self):
        shell = NeuroShell()
        result = await shell.exec("\\get")
        assert result.exit_code == 1


class TestVarsCommand:
    """Test the vars command."""

    @pytest.mark.asyncio
    async def test_lists_sorted(self):
        shell = NeuroShell(env={"b": "2", "a": "1"})
        result = await shell.exec("\\vars[type=user]")
        assert result.stdout == "a = 1\nb = 2\n"

    @pytest.mark.asyncio
    async def test_pattern(self):
        shell = NeuroShell(env={"apple": "1", "banana": "2", "apricot": "3"})
        result = await shell.exec("\\vars[pattern=^ap, type=user]")
        assert result.stdout == "apple = 1\napricot = 3\n"

    @pytest.mark.asyncio
    async def test_system_type(self):
        shell = NeuroShell(env={"a": "1"})
        result = await shell.exec("\\vars[type=system]")
        names = [line.split(" = ")[0] for line in result.stdout.splitlines()]
        assert "@pwd" in names
        assert "@date" in names
        assert "a" not in names

    @pytest.mark.asyncio
    async def test_metadata_type(self):
        shell = NeuroShell()
        result = await shell.exec("\\vars[type=metadata]")
        assert "#test_mode = false" in result.stdout

    @pytest.mark.asyncio
    async def test_all_includes_everything(self):
        shell = NeuroShell(env={"a": "1"})
        result = await shell.exec("\\vars")
        assert "a = 1" in result.stdout
        assert "@user = " in result.stdout

    @pytest.mark.asyncio
    async def test_invalid_type(self):
        shell = NeuroShell()
        result = await shell.exec("\\vars[type=bogus]")
        assert result.exit_code == 1
        assert "invalid type" in result.stderr

    @pytest.mark.asyncio
    async def test_invalid_pattern(self):
        shell = NeuroShell()
        result = await shell.exec("\\vars[pattern=(]")
        assert result.exit_code == 1
        assert "invalid regex" in result.stderr

    @pytest.mark.asyncio
    async def test_no_matches(self):
        shell = NeuroShell()
        result = await shell.exec("\\vars[pattern=^zzz]")
        assert result.stdout == ""
        assert result.exit_code == 0
