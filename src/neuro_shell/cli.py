"""Typer entrypoint for the neuro command-line shell."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from .interpreter import ShellOptions
from .scripts import SCRIPT_SUFFIX
from .shell import NeuroShell
from .types import ExecResult, ExecutionLimits

app = typer.Typer(
    help="NeuroShell - a backslash-command scripting shell",
    no_args_is_help=True,
    add_completion=False,
)

err_console = Console(stderr=True, highlight=False, emoji=False)

PROMPT = "neuro> "


@dataclass
class CLIContext:
    """Settings shared by every subcommand."""

    recursion_limit: int = 50
    echo_commands: bool = False
    script_path: list[Path] = field(default_factory=list)

    def create_shell(self) -> NeuroShell:
        return NeuroShell(
            script_dirs=self.script_path,
            limits=ExecutionLimits(max_recursion_depth=self.recursion_limit),
            options=ShellOptions(echo_commands=self.echo_commands),
        )


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _emit(result: ExecResult) -> None:
    if result.stdout:
        typer.echo(result.stdout, nl=False)
    if result.stderr:
        err_console.print(
            result.stderr.rstrip("\n"), style="red", markup=False, soft_wrap=True
        )


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "WARNING", "--log-level", envvar="NEURO_LOG_LEVEL", help="Logging level"
    ),
    recursion_limit: int = typer.Option(
        50,
        "--recursion-limit",
        envvar="NEURO_RECURSION_LIMIT",
        min=1,
        help="Maximum nesting depth for interpolation, scripts and nested commands",
    ),
    echo_commands: bool = typer.Option(
        False,
        "--echo-commands/--no-echo-commands",
        envvar="NEURO_ECHO_COMMANDS",
        help="Echo each command line as '%%> line' before running it",
    ),
    script_path: Optional[List[Path]] = typer.Option(
        None,
        "--script-path",
        "-s",
        envvar="NEURO_SCRIPT_PATH",
        help="Directory searched for user scripts (repeatable)",
    ),
) -> None:
    """Configure shared CLI options."""
    _configure_logging(log_level)
    ctx.obj = CLIContext(
        recursion_limit=recursion_limit,
        echo_commands=echo_commands,
        script_path=list(script_path or []),
    )


@app.command("exec")
def exec_lines(
    ctx: typer.Context,
    lines: List[str] = typer.Argument(..., help="Lines to execute, in order"),
) -> None:
    """Execute lines in one shell, stopping at the first failure."""
    shell = ctx.obj.create_shell()
    exit_code = 0
    for line in lines:
        result = shell.run(line)
        _emit(result)
        exit_code = result.exit_code
        if exit_code != 0:
            break
    raise typer.Exit(exit_code)


@app.command("run")
def run_file(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    message: str = typer.Argument("", help="Message passed to the script as ${_1}"),
) -> None:
    """Run a .neuro file as a user script."""
    if file.suffix != SCRIPT_SUFFIX:
        err_console.print(f"neuro: expected a {SCRIPT_SUFFIX} file: {file}", style="red")
        raise typer.Exit(2)

    shell = ctx.obj.create_shell()
    shell.add_script_directory(file.resolve().parent)
    line = f"\\{file.stem} {message}".rstrip()
    result = shell.run(line)
    _emit(result)
    raise typer.Exit(result.exit_code)


@app.command("repl")
def repl(ctx: typer.Context) -> None:
    """Read and execute lines interactively until EOF or \\exit."""
    shell = ctx.obj.create_shell()
    console = Console(highlight=False)
    exit_code = 0
    while True:
        try:
            line = console.input(PROMPT)
        except EOFError:
            break
        except KeyboardInterrupt:
            console.print()
            continue
        if not line.strip():
            continue

        result = shell.run(line)
        _emit(result)
        exit_code = result.exit_code
        if shell.exited:
            break
    raise typer.Exit(exit_code)


if __name__ == "__main__":
    app()
