"""Command-line options and detection of the user's login shell."""

from __future__ import annotations

import argparse
import getpass
import os
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from lazysh.shells import Bash, Shell, ShellError, shell_for_name


@dataclass
class Options:
    """Whether to re-analyse unconditionally, and which shell to target."""

    force_analyze: bool = False
    shell: Shell = field(default_factory=Bash)


def _current_user_name() -> str:
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return str(os.getuid())


def fetch_shell() -> str:
    """Name of the current user's login shell from the passwd database."""
    uid = os.getuid()
    try:
        completed = subprocess.run(
            ["getent", "passwd", str(uid)],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise ShellError(
            f"Failed to fetch shell for user {_current_user_name()}: {exc}"
        ) from exc
    fields = completed.stdout.strip("\n").split(":")
    if len(fields) < 7:
        raise ShellError(f"Malformed passwd entry for uid {uid}")
    return PurePosixPath(fields[6]).name


def parse_options(argv: Sequence[str] | None = None) -> Options:
    """Parse ``argv``; without a shell argument the login shell is used."""
    parser = argparse.ArgumentParser(prog="lazysh")
    parser.add_argument(
        "-f",
        dest="force_analyze",
        action="store_true",
        help="force to analyze init commands",
    )
    parser.add_argument("args", nargs="*", help="shell to generate the script for")
    parsed = parser.parse_args(argv)

    name = parsed.args[0] if parsed.args else fetch_shell()
    return Options(force_analyze=parsed.force_analyze, shell=shell_for_name(name))