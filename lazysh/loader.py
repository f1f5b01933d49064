"""Turn analysed init commands into a lazy-loading start script."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from lazysh.relations import Relations, analyze
from lazysh.shells import Shell


@dataclass
class Loader:
    """An init command and the names that should trigger it."""

    init_cmd: str
    relations: Relations = field(default_factory=Relations)


def create_loader(shell: Shell, cmd: str) -> Loader:
    """Analyse ``cmd`` in ``shell`` and build its loader."""
    return Loader(init_cmd=cmd, relations=analyze(shell, cmd))


def format_loader(shell: Shell, loader: Loader, idx: int) -> str:
    """Script lines that defer ``loader``'s init command until one of its names is used."""
    alias_function = f"__lazysh_command_alias_{idx}"
    names = [*loader.relations.aliases, *loader.relations.commands]
    lines = [shell.format_command_alias_function(alias_function, names)]
    lines.extend(
        shell.format_alias(alias, loader.init_cmd, alias_function)
        for alias in loader.relations.aliases
    )
    lines.extend(
        shell.format_command(command, loader.init_cmd, alias_function)
        for command in loader.relations.commands
    )
    return "\n".join(lines)


def format_loaders(shell: Shell, loaders: Sequence[Loader]) -> str:
    """The whole start script for ``loaders``."""
    return "\n".join(
        format_loader(shell, loader, idx) for idx, loader in enumerate(loaders)
    )