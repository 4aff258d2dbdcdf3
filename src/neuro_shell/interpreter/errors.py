"""Interpreter errors.

Every failure the engine can report is a ``ShellError``; those are the
errors a ``\\try`` line captures into status variables. ``ExitError`` is
deliberately outside that hierarchy: ``\\exit`` ends the top-level call
even from inside a script or a try.
"""


class ShellError(Exception):
    """Base class for engine failures."""


class EmptyInputError(ShellError):
    """A blank line reached the Received state."""

    def __init__(self) -> None:
        super().__init__("empty input received")


class ParseError(ShellError):
    """The parser produced no command."""

    def __init__(self, text: str) -> None:
        super().__init__(f"failed to parse command: {text}")
        self.text = text


class CommandNotFoundError(ShellError):
    """No native command, library script or user script has this name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"command not found: {name}")
        self.name = name


class ExecutionLimitError(ShellError):
    """An execution limit was exceeded."""

    def __init__(self, message: str, limit_type: str = "recursion") -> None:
        super().__init__(message)
        self.limit_type = limit_type


class CommandExecutionError(ShellError):
    """A native command reported failure."""

    def __init__(self, name: str, detail: str, exit_code: int = 1) -> None:
        detail = detail.strip() or f"exit code {exit_code}"
        super().__init__(f"\\{name} failed: {detail}")
        self.name = name
        self.detail = detail
        self.exit_code = exit_code


class ScriptLineError(ShellError):
    """A script line failed; carries the 1-based line number."""

    def __init__(self, line_number: int, cause: Exception) -> None:
        super().__init__(f"script line execution failed at line {line_number}: {cause}")
        self.line_number = line_number
        self.cause = cause


class StuckStateError(ShellError):
    """The state machine tried to transition into the state it was already in."""

    def __init__(self, state: object) -> None:
        super().__init__(f"state machine stuck in state: {state}")
        self.state = state


class VariableError(ShellError):
    """A variable name was rejected."""


class ScriptLoadError(ShellError):
    """A script source listed a script but could not load it."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"failed to load script {name}: {reason}")
        self.name = name
        self.reason = reason


class ExitError(Exception):
    """Raised by ``\\exit`` to stop execution."""

    def __init__(self, exit_code: int = 0) -> None:
        super().__init__(f"exit {exit_code}")
        self.exit_code = exit_code
