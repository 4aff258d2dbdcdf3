"""Script sources.

A script source answers two questions for the resolver: does a script
with this name exist, and what is its text. Library scripts ship inside
the package; user scripts come from directories on disk or from an
in-memory mapping.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Iterable, Mapping, Optional, Protocol

from ..interpreter.errors import ScriptLoadError

logger = logging.getLogger(__name__)

SCRIPT_SUFFIX = ".neuro"


def _script_filename(name: str) -> str:
    return name if name.endswith(SCRIPT_SUFFIX) else name + SCRIPT_SUFFIX


def _is_safe_name(name: str) -> bool:
    return bool(name) and "/" not in name and "\\" not in name and name not in (".", "..")


class ScriptSource(Protocol):
    """Protocol for script sources."""

    def exists(self, name: str) -> bool:
        """Check if a script with this name exists."""
        ...

    def load(self, name: str) -> tuple[str, str]:
        """Load a script.

        Returns:
            The script text and its origin path.

        Raises:
            ScriptLoadError: If the script cannot be read.
        """
        ...

    def names(self) -> list[str]:
        """List the script names this source provides."""
        ...


class LibraryScriptSource:
    """Scripts bundled with the distribution under ``neuro_shell/scripts/library``."""

    def __init__(self, package: str = "neuro_shell.scripts", directory: str = "library"):
        self._root = resources.files(package).joinpath(directory)
        self._directory = directory

    def exists(self, name: str) -> bool:
        if not _is_safe_name(name):
            return False
        return self._root.joinpath(_script_filename(name)).is_file()

    def load(self, name: str) -> tuple[str, str]:
        filename = _script_filename(name)
        try:
            text = self._root.joinpath(filename).read_text(encoding="utf-8")
        except (FileNotFoundError, OSError) as error:
            raise ScriptLoadError(name, str(error)) from error
        return text, f"embedded://{self._directory}/{filename}"

    def names(self) -> list[str]:
        if not self._root.is_dir():
            return []
        return sorted(
            entry.name[: -len(SCRIPT_SUFFIX)]
            for entry in self._root.iterdir()
            if entry.is_file() and entry.name.endswith(SCRIPT_SUFFIX)
        )


class DirectoryScriptSource:
    """User scripts found as ``<dir>/<name>.neuro``, first directory wins."""

    def __init__(self, directories: Iterable[str | Path]):
        self._directories = [Path(d).expanduser() for d in directories]

    @property
    def directories(self) -> list[Path]:
        return list(self._directories)

    def add_directory(self, directory: str | Path) -> None:
        """Append a directory to the search path."""
        self._directories.append(Path(directory).expanduser())

    def _find(self, name: str) -> Optional[Path]:
        if not _is_safe_name(name):
            return None
        filename = _script_filename(name)
        for directory in self._directories:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        return None

    def exists(self, name: str) -> bool:
        return self._find(name) is not None

    def load(self, name: str) -> tuple[str, str]:
        path = self._find(name)
        if path is None:
            raise ScriptLoadError(name, "no such script")
        try:
            return path.read_text(encoding="utf-8"), str(path)
        except (OSError, UnicodeDecodeError) as error:
            raise ScriptLoadError(name, str(error)) from error

    def names(self) -> list[str]:
        found: set[str] = set()
        for directory in self._directories:
            if directory.is_dir():
                found.update(p.stem for p in directory.glob(f"*{SCRIPT_SUFFIX}") if p.is_file())
        return sorted(found)


class InMemoryScriptSource:
    """Scripts held in a name -> text mapping."""

    def __init__(self, scripts: Optional[Mapping[str, str]] = None):
        self._scripts: dict[str, str] = dict(scripts or {})

    def add(self, name: str, text: str) -> None:
        """Add or replace a script."""
        self._scripts[name] = text

    def exists(self, name: str) -> bool:
        return name in self._scripts

    def load(self, name: str) -> tuple[str, str]:
        try:
            return self._scripts[name], f"memory://{name}"
        except KeyError:
            raise ScriptLoadError(name, "no such script") from None

    def names(self) -> list[str]:
        return sorted(self._scripts)


class ChainedScriptSource:
    """Several sources sharing one resolution slot, earlier sources first."""

    def __init__(self, sources: Iterable[ScriptSource]):
        self._sources = list(sources)

    def exists(self, name: str) -> bool:
        return any(source.exists(name) for source in self._sources)

    def load(self, name: str) -> tuple[str, str]:
        for source in self._sources:
            if source.exists(name):
                return source.load(name)
        raise ScriptLoadError(name, "no such script")

    def names(self) -> list[str]:
        found: set[str] = set()
        for source in self._sources:
            found.update(source.names())
        return sorted(found)
