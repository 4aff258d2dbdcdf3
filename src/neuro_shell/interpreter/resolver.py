"""Command Resolver.

Resolves a command name against three sources in strict priority order,
first match wins:

1. Native commands in the registry
2. Library scripts bundled with the distribution
3. User scripts
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from .errors import CommandNotFoundError, ScriptLoadError
from .types import CommandKind, ResolvedCommand

if TYPE_CHECKING:
    from ..scripts import ScriptSource
    from ..types import Command

logger = logging.getLogger(__name__)


class CommandResolver:
    """Priority resolver over native commands, library scripts and user scripts."""

    def __init__(
        self,
        commands: dict[str, "Command"],
        library: Optional["ScriptSource"] = None,
        user: Optional["ScriptSource"] = None,
    ):
        self._commands = commands
        self._library = library
        self._user = user

    @property
    def commands(self) -> dict[str, "Command"]:
        return self._commands

    def resolve(self, name: str) -> ResolvedCommand:
        """Resolve *name* to exactly one source.

        Raises:
            CommandNotFoundError: If no source owns the name.
        """
        command = self._commands.get(name)
        if command is not None:
            logger.debug("Resolved %s to native command", name)
            return ResolvedCommand.builtin(name, command)

        for kind, source in (
            (CommandKind.LIBRARY_SCRIPT, self._library),
            (CommandKind.USER_SCRIPT, self._user),
        ):
            if source is None or not source.exists(name):
                continue
            try:
                text, origin = source.load(name)
            except ScriptLoadError as error:
                logger.warning("Failed to load %s script %s: %s", kind.value, name, error.reason)
                continue
            logger.debug("Resolved %s to %s script at %s", name, kind.value, origin)
            return ResolvedCommand.script(name, kind, text, origin)

        logger.debug("Command not found: %s", name)
        raise CommandNotFoundError(name)
