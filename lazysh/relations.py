"""Find the aliases, functions and commands that an init command adds to a shell."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field

from lazysh.shells import Shell


@dataclass
class Env:
    """Aliases, functions and PATH entries of a shell session."""

    aliases: dict[str, str] = field(default_factory=dict)
    functions: dict[str, str] = field(default_factory=dict)
    path: list[str] = field(default_factory=list)


@dataclass
class Relations:
    """Names an init command brings in: aliases and functions, and PATH commands."""

    aliases: list[str] = field(default_factory=list)
    commands: list[str] = field(default_factory=list)


def load_env(shell: Shell, prefix: str) -> Env:
    """Environment of ``shell`` after running ``prefix``."""
    return Env(
        aliases=shell.aliases(prefix),
        functions=shell.functions(prefix),
        path=shell.path(prefix),
    )


def _changed(before: dict[str, str], after: dict[str, str]) -> dict[str, str]:
    return {
        key: value
        for key, value in after.items()
        if key not in before or before[key] != value
    }


def compare_envs(before: Env, after: Env) -> Env:
    """What ``after`` adds to or changes from ``before``."""
    return Env(
        aliases=_changed(before.aliases, after.aliases),
        functions=_changed(before.functions, after.functions),
        path=[entry for entry in after.path if entry not in before.path],
    )


def explore_path(path: Iterable[str]) -> list[str]:
    """Names of the non-directory entries in every readable PATH directory except ``.``."""
    bins: list[str] = []
    for entry in path:
        if entry == ".":
            continue
        try:
            with os.scandir(entry) as scanned:
                items = sorted(scanned, key=lambda item: item.name)
        except OSError:
            continue
        bins.extend(item.name for item in items if not item.is_dir(follow_symlinks=False))
    return bins


def analyze(shell: Shell, cmd: str) -> Relations:
    """Run ``cmd`` in ``shell`` and report what it adds to the environment."""
    prefix = shell.make_prefix(cmd)
    before = load_env(shell, "")
    after = load_env(shell, prefix)
    difference = compare_envs(before, after)

    aliases = dict.fromkeys([*difference.aliases, *difference.functions])
    commands = dict.fromkeys(explore_path(difference.path))
    return Relations(aliases=list(aliases), commands=list(commands))