"""Execution State Machine.

Drives one input line through a fixed set of states until it completes or
fails:

    Received -> Interpolating -> Received        (until the line is settled)
    Received -> Parsing -> Resolving
    Resolving -> Executing -> Completed          (native command)
    Resolving -> ScriptLoaded -> ScriptExecuting -> Completed
    Resolving -> Received                        (``\\try`` target)
    any -> TryError -> Completed                 (failure inside ``\\try``)
    any -> Error

All per-call state lives in an ``ExecutionFrame``. Re-entry (script lines,
nested commands) pushes the caller's frame and runs a fresh child frame at
``depth + 1``, so each nesting level is isolated and bounded by the
recursion limit.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..parser import parse_command
from ..types import CommandContext, ExecResult, ExecutionLimits, ParseMode
from .conditions import is_truthy
from .errors import (
    CommandExecutionError,
    EmptyInputError,
    ExecutionLimitError,
    ParseError,
    ScriptLineError,
    ShellError,
    StuckStateError,
    VariableError,
)
from .interpolation import CoreInterpolator, has_variables
from .resolver import CommandResolver
from .types import ExecutionFrame, ExecutionState, InterpreterState

logger = logging.getLogger(__name__)

TRY_COMMAND = "try"
COMMENT_MARKER = "%%"
CONTINUATION_MARKER = "..."
ECHO_PREFIX = "%%> "

STATUS_VARIABLE = "_status"
ERROR_VARIABLE = "_error"
SCRIPT_PARAMETERS = ("_0", "_1", "_*", "_@")


def split_script_lines(text: str) -> list[str]:
    """Split script text into logical lines.

    A physical line whose trimmed form ends with ``...`` continues onto the
    next one. The pieces of a continued line are trimmed, stripped of the
    marker and joined with a single space. Blank and comment lines are kept
    so line numbers in errors stay meaningful.
    """
    physical = text.splitlines()
    lines: list[str] = []
    i = 0
    while i < len(physical):
        if not physical[i].strip().endswith(CONTINUATION_MARKER):
            lines.append(physical[i])
            i += 1
            continue

        pieces: list[str] = []
        while i < len(physical):
            piece = physical[i].strip()
            i += 1
            if piece.endswith(CONTINUATION_MARKER):
                pieces.append(piece[: -len(CONTINUATION_MARKER)].strip())
            else:
                pieces.append(piece)
                break
        lines.append(" ".join(p for p in pieces if p))
    return lines


class StateMachine:
    """Execution engine for NeuroShell lines."""

    def __init__(
        self,
        state: InterpreterState,
        resolver: CommandResolver,
        limits: Optional[ExecutionLimits] = None,
    ):
        self._state = state
        self._resolver = resolver
        self._limits = limits or ExecutionLimits()
        self._interpolator = CoreInterpolator(
            state.env, self._limits.max_interpolation_iterations
        )
        self._frames: list[ExecutionFrame] = []
        self._frame: Optional[ExecutionFrame] = None
        self._handlers: dict[ExecutionState, Callable] = {
            ExecutionState.RECEIVED: self._process_received,
            ExecutionState.INTERPOLATING: self._process_interpolating,
            ExecutionState.PARSING: self._process_parsing,
            ExecutionState.RESOLVING: self._process_resolving,
            ExecutionState.EXECUTING: self._process_executing,
            ExecutionState.SCRIPT_LOADED: self._process_script_loaded,
            ExecutionState.SCRIPT_EXECUTING: self._process_script_executing,
            ExecutionState.TRY_ERROR: self._process_try_error,
        }

    @property
    def state(self) -> InterpreterState:
        return self._state

    @property
    def resolver(self) -> CommandResolver:
        return self._resolver

    @property
    def interpolator(self) -> CoreInterpolator:
        return self._interpolator

    @property
    def limits(self) -> ExecutionLimits:
        return self._limits

    @property
    def frame_depth(self) -> int:
        """Number of caller frames saved on the frame stack."""
        return len(self._frames)

    @property
    def current_frame(self) -> Optional[ExecutionFrame]:
        return self._frame

    async def execute(self, line: str) -> None:
        """Run *line* to completion.

        When called while another line is executing (a script line or a
        nested command), the caller's frame is saved and restored
        afterwards, whatever the outcome.

        Raises:
            ShellError: If the line fails outside of a ``\\try``.
            ExitError: If a command requested that the shell exit.
        """
        parent = self._frame
        if parent is None:
            frame = ExecutionFrame(input=line)
        else:
            self._check_depth(parent.depth)
            frame = ExecutionFrame(input=line, depth=parent.depth + 1)
            self._frames.append(parent)

        self._frame = frame
        logger.debug("Execute at depth %d: %r", frame.depth, line)
        try:
            await self._run(frame)
        finally:
            self._frame = self._frames.pop() if parent is not None else None

    async def _run(self, frame: ExecutionFrame) -> None:
        try:
            while not frame.state.is_terminal:
                current = frame.state
                cursor = frame.cursor
                try:
                    await self._handlers[current](frame)
                except ShellError as error:
                    frame.error = error
                    if frame.try_mode:
                        logger.debug("Captured error in try: %s", error)
                        frame.state = ExecutionState.TRY_ERROR
                        continue
                    frame.state = ExecutionState.ERROR
                    break

                next_state = self._next_state(frame)
                # ScriptExecuting loops on itself, one line per pass.
                if next_state is current and frame.cursor == cursor:
                    logger.error("State machine stuck in %s", current)
                    raise StuckStateError(current)
                logger.debug("%s -> %s", current, next_state)
                frame.state = next_state
        finally:
            self._unbind_script_parameters(frame)

        if frame.try_succeeded:
            frame.try_succeeded = False
            self._record_try_status(None)

        if frame.state is ExecutionState.ERROR and frame.error is not None:
            logger.debug("Execution failed at depth %d: %s", frame.depth, frame.error)
            raise frame.error

    def _next_state(self, frame: ExecutionFrame) -> ExecutionState:
        state = frame.state
        if state is ExecutionState.RECEIVED:
            if not frame.settled and has_variables(frame.input):
                return ExecutionState.INTERPOLATING
            return ExecutionState.PARSING
        if state is ExecutionState.INTERPOLATING:
            return ExecutionState.RECEIVED
        if state is ExecutionState.PARSING:
            return ExecutionState.RESOLVING
        if state is ExecutionState.RESOLVING:
            if frame.parsed is not None and frame.parsed.name == TRY_COMMAND:
                if frame.try_mode and frame.resolved is None and not frame.settled:
                    return ExecutionState.RECEIVED
                return self._complete(frame)
            if frame.resolved is None:
                return ExecutionState.ERROR
            if frame.resolved.is_script:
                return ExecutionState.SCRIPT_LOADED
            return ExecutionState.EXECUTING
        if state is ExecutionState.EXECUTING:
            return self._complete(frame)
        if state is ExecutionState.SCRIPT_LOADED:
            return ExecutionState.SCRIPT_EXECUTING
        if state is ExecutionState.SCRIPT_EXECUTING:
            if frame.script_finished:
                return self._complete(frame)
            return ExecutionState.SCRIPT_EXECUTING
        if state is ExecutionState.TRY_ERROR:
            return ExecutionState.COMPLETED
        return ExecutionState.ERROR

    def _complete(self, frame: ExecutionFrame) -> ExecutionState:
        if frame.try_mode:
            frame.try_mode = False
            frame.try_succeeded = True
        return ExecutionState.COMPLETED

    # State handlers

    async def _process_received(self, frame: ExecutionFrame) -> None:
        if not frame.input.strip():
            raise EmptyInputError()

    async def _process_interpolating(self, frame: ExecutionFrame) -> None:
        self._check_depth(frame.depth)
        expanded, changed = self._interpolator.interpolate_command_line(frame.input)
        if not changed:
            frame.settled = True
            return
        frame.depth += 1
        frame.input = expanded

    async def _process_parsing(self, frame: ExecutionFrame) -> None:
        parsed = parse_command(
            frame.input,
            default_command=self._default_command(),
            parse_mode_for=self._parse_mode_for,
        )
        if parsed is None or not parsed.name:
            raise ParseError(frame.input)
        frame.parsed = parsed
        frame.resolved = None

    async def _process_resolving(self, frame: ExecutionFrame) -> None:
        parsed = frame.parsed
        if parsed.name == TRY_COMMAND:
            target = parsed.message.strip()
            if not target:
                # An empty try succeeds trivially.
                self._record_try_status(None)
                frame.settled = True
                return
            self._check_depth(frame.depth)
            frame.depth += 1
            frame.try_mode = True
            frame.input = target
            frame.settled = False
            return
        frame.resolved = self._resolver.resolve(parsed.name)

    async def _process_executing(self, frame: ExecutionFrame) -> None:
        parsed = frame.parsed
        command = frame.resolved.command
        if self._echo_enabled():
            self._state.stdout.append(f"{ECHO_PREFIX}{frame.input.strip()}\n")

        try:
            result = await command.execute(
                dict(parsed.options), parsed.message, self._command_context(frame)
            )
        except CommandExecutionError:
            raise
        except ShellError as error:
            raise CommandExecutionError(parsed.name, str(error)) from error

        if result.stdout:
            self._state.stdout.append(result.stdout)
        if result.exit_code != 0:
            raise CommandExecutionError(
                parsed.name, result.stderr.strip(), result.exit_code
            )
        if result.stderr:
            self._state.stderr.append(result.stderr)

    async def _process_script_loaded(self, frame: ExecutionFrame) -> None:
        resolved = frame.resolved
        logger.debug(
            "Loaded %s script %s from %s",
            resolved.kind.value, resolved.name, resolved.script_origin,
        )
        self._bind_script_parameters(frame)
        frame.script_lines = split_script_lines(resolved.script_text)
        frame.cursor = 0
        frame.script_finished = False

    async def _process_script_executing(self, frame: ExecutionFrame) -> None:
        if frame.cursor >= len(frame.script_lines):
            self._unbind_script_parameters(frame)
            frame.script_finished = True
            return

        line_number = frame.cursor + 1
        line = frame.script_lines[frame.cursor].strip()
        frame.cursor += 1
        if not line or line.startswith(COMMENT_MARKER):
            return

        logger.debug("%s line %d: %r", frame.resolved.name, line_number, line)
        try:
            await self.execute(line)
        except ShellError as error:
            raise ScriptLineError(line_number, error) from error

    async def _process_try_error(self, frame: ExecutionFrame) -> None:
        self._record_try_status(frame.error)
        frame.error = None
        frame.try_mode = False

    # Helpers

    def _bind_script_parameters(self, frame: ExecutionFrame) -> None:
        env = self._state.env
        parsed = frame.parsed
        frame.parameters_bound = True

        env.set_system_variable("_0", parsed.name)
        env.set_system_variable("_1", parsed.message)
        env.set_system_variable("_*", parsed.message)
        env.set_system_variable(
            "_@", " ".join(f"{key}={value}" for key, value in parsed.options.items())
        )
        for key, value in parsed.options.items():
            try:
                env.set_variable(key, value)
            except VariableError as error:
                logger.warning("Ignoring script option %r: %s", key, error)

    def _unbind_script_parameters(self, frame: ExecutionFrame) -> None:
        if not frame.parameters_bound:
            return
        frame.parameters_bound = False
        for name in SCRIPT_PARAMETERS:
            self._state.env.set_system_variable(name, "")

    def _check_depth(self, depth: int) -> None:
        if depth >= self._limits.max_recursion_depth:
            raise ExecutionLimitError(
                f"recursion limit exceeded ({self._limits.max_recursion_depth})"
            )

    def _record_try_status(self, error: Optional[ShellError]) -> None:
        env = self._state.env
        if error is None:
            env.set_system_variable(STATUS_VARIABLE, "0")
            env.set_system_variable(ERROR_VARIABLE, "")
        else:
            env.set_system_variable(STATUS_VARIABLE, "1")
            env.set_system_variable(ERROR_VARIABLE, str(error))

    def _default_command(self) -> str:
        return (
            self._state.env.get_variable("_default_command")
            or self._state.options.default_command
        )

    def _echo_enabled(self) -> bool:
        if self._state.options.echo_commands:
            return True
        return is_truthy(self._state.env.get_variable("_echo_command"))

    def _parse_mode_for(self, name: str) -> ParseMode:
        command = self._resolver.commands.get(name)
        return getattr(command, "parse_mode", ParseMode.KEY_VALUE)

    def _command_context(self, frame: ExecutionFrame) -> CommandContext:
        return CommandContext(
            variables=self._state.env,
            state=self._state,
            commands=self._resolver.commands,
            exec=self._exec_nested,
            parsed=frame.parsed,
        )

    async def _exec_nested(self, line: str) -> ExecResult:
        """Run *line* as a nested command and return its captured output."""
        stdout_mark = len(self._state.stdout)
        stderr_mark = len(self._state.stderr)
        exit_code = 0
        try:
            await self.execute(line)
        except ShellError as error:
            self._state.stderr.append(f"{error}\n")
            exit_code = 1

        stdout = "".join(self._state.stdout[stdout_mark:])
        stderr = "".join(self._state.stderr[stderr_mark:])
        del self._state.stdout[stdout_mark:]
        del self._state.stderr[stderr_mark:]
        return ExecResult(stdout=stdout, stderr=stderr, exit_code=exit_code)
