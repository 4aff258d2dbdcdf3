"""Script sources for neuro-shell."""

from .sources import (
    SCRIPT_SUFFIX,
    ChainedScriptSource,
    DirectoryScriptSource,
    InMemoryScriptSource,
    LibraryScriptSource,
    ScriptSource,
)

__all__ = [
    "SCRIPT_SUFFIX",
    "ScriptSource",
    "LibraryScriptSource",
    "DirectoryScriptSource",
    "InMemoryScriptSource",
    "ChainedScriptSource",
]
