"""Main NeuroShell class - the primary API for neuro-shell.

Example usage:
    from neuro_shell import NeuroShell

    # Synchronous usage (for REPL, scripts)
    shell = NeuroShell()
    result = shell.run("\\echo hello world")
    print(result.stdout)  # "hello world\\n"

    # Async usage (for async applications)
    shell = NeuroShell()
    result = await shell.exec("\\echo hello world")
    print(result.stdout)  # "hello world\\n"

    # With user scripts
    shell = NeuroShell(scripts={"greet": "\\echo Hello, ${_1}!"})
    result = shell.run("\\greet World")

    # With execution limits
    shell = NeuroShell(limits=ExecutionLimits(max_recursion_depth=10))
"""

import asyncio
import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Mapping, Optional

import nest_asyncio  # type: ignore[import-untyped]

from .commands import create_command_registry
from .interpreter import (
    CommandResolver,
    ExitError,
    InterpreterState,
    ShellError,
    ShellOptions,
    StateMachine,
    VariableStore,
)
from .scripts import (
    ChainedScriptSource,
    DirectoryScriptSource,
    InMemoryScriptSource,
    LibraryScriptSource,
)
from .types import Command, ExecResult, ExecutionLimits

logger = logging.getLogger(__name__)


class NeuroShell:
    """Main NeuroShell interpreter class.

    Owns one variable environment, one execution engine and the output
    buffers for a session. Lines are executed one at a time against the
    same environment, so variables set by one call are visible to the next.
    """

    def __init__(
        self,
        *,
        env: Optional[Mapping[str, str]] = None,
        scripts: Optional[Mapping[str, str]] = None,
        script_dirs: Optional[Iterable[str | Path]] = None,
        commands: Optional[dict[str, Command]] = None,
        limits: Optional[ExecutionLimits] = None,
        options: Optional[ShellOptions] = None,
    ):
        """Initialize the shell.

        Args:
            env: Initial variables.
            scripts: User scripts held in memory, by name.
            script_dirs: Directories searched for ``<name>.neuro`` user scripts.
            commands: Custom command registry. If not provided, uses built-in commands.
            limits: Execution limits.
            options: Shell options (echo, default command, test mode).
        """
        self._limits = limits or ExecutionLimits()
        self._commands = commands if commands is not None else create_command_registry()
        self._options = options or ShellOptions()
        self._initial_env = dict(env or {})

        self._library = LibraryScriptSource()
        self._memory_scripts = InMemoryScriptSource(scripts)
        self._script_dirs = DirectoryScriptSource(script_dirs or [])

        self._exited = False
        self._engine = self._create_engine()

    def _create_engine(self) -> StateMachine:
        variables = VariableStore(self._initial_env)
        state = InterpreterState(env=variables, options=replace(self._options))
        variables.register_computed("#message_count", lambda: str(len(state.messages)))
        variables.register_computed(
            "#test_mode", lambda: "true" if state.options.test_mode else "false"
        )

        resolver = CommandResolver(
            self._commands,
            library=self._library,
            user=ChainedScriptSource([self._memory_scripts, self._script_dirs]),
        )
        return StateMachine(state, resolver, self._limits)

    @property
    def engine(self) -> StateMachine:
        """Get the execution engine."""
        return self._engine

    @property
    def env(self) -> VariableStore:
        """Get the variable environment."""
        return self._engine.state.env

    @property
    def messages(self) -> list[str]:
        """Get the session message history."""
        return self._engine.state.messages

    @property
    def commands(self) -> dict[str, Command]:
        """Get the command registry."""
        return self._commands

    @property
    def exited(self) -> bool:
        """Whether the last call ended with \\exit."""
        return self._exited

    def add_script(self, name: str, text: str) -> None:
        """Register an in-memory user script."""
        self._memory_scripts.add(name, text)

    def add_script_directory(self, directory: str | Path) -> None:
        """Append a directory to the user-script search path."""
        self._script_dirs.add_directory(directory)

    async def exec(self, line: str) -> ExecResult:
        """Execute one line.

        Args:
            line: A command line or plain text.

        Returns:
            ExecResult with stdout, stderr, exit_code, and final env.
        """
        state = self._engine.state
        state.stdout.clear()
        state.stderr.clear()
        self._exited = False

        try:
            await self._engine.execute(line)
        except ShellError as error:
            logger.debug("Line failed: %s", error)
            return self._collect(1, f"neuro: {error}\n")
        except ExitError as error:
            self._exited = True
            return self._collect(error.exit_code)
        return self._collect(0)

    def _collect(self, exit_code: int, stderr: str = "") -> ExecResult:
        state = self._engine.state
        result = ExecResult(
            stdout="".join(state.stdout),
            stderr="".join(state.stderr) + stderr,
            exit_code=exit_code,
            env=state.env.to_env_dict(),
        )
        state.stdout.clear()
        state.stderr.clear()
        return result

    def run(self, line: str) -> ExecResult:
        """Execute one line synchronously.

        This is a convenience wrapper around exec() that works in any context,
        including Jupyter notebooks and async frameworks.

        Example:
            >>> shell = NeuroShell()
            >>> result = shell.run("\\\\echo Hello, World!")
            >>> print(result.stdout)
            Hello, World!
        """
        try:
            asyncio.get_running_loop()
            # Already inside an event loop (Jupyter, async framework, etc.)
            nest_asyncio.apply()
        except RuntimeError:
            # No running event loop, asyncio.run() will work fine
            pass
        return asyncio.run(self.exec(line))

    def reset(self) -> None:
        """Reset the environment, message history and engine to initial values."""
        self._engine = self._create_engine()
