"""Shell adapters: inspect a shell's environment and format lazy-loading stubs."""

from __future__ import annotations

import os
import re
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence


class ShellError(RuntimeError):
    """Raised when a shell cannot be run or its output cannot be used."""


_BASH_ALIAS = re.compile(r"alias ([^ ]+)='(.+)'")
_BASH_FUNCTION = re.compile(r"([^ \n]+) *\(\) *\n\{ *((?:\n[^}].*)+)\n\}")
_ZSH_ALIAS = re.compile(r"^(.+)=(.+)$")
_ZSH_FUNCTION = re.compile(r"([^ \n]+) *\(\) *\{ *((?:\n[^}].*)+)\n\}")
_FISH_ALIAS = re.compile(r"alias ([^ ]+) ([^ ]+)")


def _execute(argv: Sequence[str], env: Mapping[str, str], cmd: str) -> str:
    try:
        completed = subprocess.run(
            list(argv),
            env=dict(env),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise ShellError(f"Failed to run {cmd}: {exc}") from exc
    return completed.stdout.strip("\n")


def _parse_alias_lines(regex: re.Pattern[str], output: str) -> dict[str, str]:
    aliases: dict[str, str] = {}
    for line in output.split("\n"):
        if not line:
            continue
        match = regex.search(line)
        if match:
            aliases[match[1]] = match[2]
    return aliases


def _parse_definitions(regex: re.Pattern[str], output: str) -> dict[str, str]:
    return {match[1]: match[2] for match in regex.finditer(output)}


def _posix_stub(name: str, cmd: str, alias_function: str) -> str:
    return f"{name}() {{ {alias_function};{cmd};{name} $@; }}"


def _posix_alias_function(name: str, aliases: Sequence[str]) -> str:
    body = ";".join(f"{alias} () {{ command {alias} $@; }}" for alias in aliases) or ":"
    return f"{name}() {{ {body}; }}"


def _inherited_env() -> dict[str, str]:
    return {**os.environ, "DISABLE_LAZY": "1"}


class Shell(ABC):
    """A shell whose aliases, functions and PATH can be inspected."""

    name = ""
    extension = ""

    @abstractmethod
    def run(self, cmd: str) -> str:
        """Run ``cmd`` in a fresh shell and return its output without surrounding newlines."""

    def make_prefix(self, cmd: str) -> str:
        """Script prefix that runs ``cmd`` with its output sent to stderr."""
        return cmd + " 1>&2\n"

    def aliases(self, prefix: str) -> dict[str, str]:
        return self.parse_aliases(self.run(prefix + "alias"))

    def functions(self, prefix: str) -> dict[str, str]:
        return self.parse_functions(self.run(prefix + "declare -f"))

    def path(self, prefix: str) -> list[str]:
        return self.parse_path(self.run(prefix + "echo $PATH"))

    @abstractmethod
    def parse_aliases(self, output: str) -> dict[str, str]:
        """Map alias names to their definitions from the ``alias`` listing."""

    def parse_functions(self, output: str) -> dict[str, str]:
        """Map function names to their bodies from a ``declare -f`` listing."""
        raise NotImplementedError(f"{type(self).__name__} has no declare -f listing")

    @abstractmethod
    def parse_path(self, output: str) -> list[str]:
        """Split the printed PATH into its entries."""

    @abstractmethod
    def format_alias(self, name: str, cmd: str, alias_function: str) -> str:
        """Stub for an alias or function that runs the init command on first use."""

    @abstractmethod
    def format_command(self, name: str, cmd: str, alias_function: str) -> str:
        """Stub for a PATH command that runs the init command on first use."""

    @abstractmethod
    def format_command_alias_function(self, name: str, aliases: Sequence[str]) -> str:
        """Function that replaces every stub with a plain call to the real command."""


class Bash(Shell):
    name = "bash"
    extension = ".bash"

    def run(self, cmd: str) -> str:
        return _execute(["bash", "--norc", "-c", cmd], _inherited_env(), cmd)

    def parse_aliases(self, output: str) -> dict[str, str]:
        return _parse_alias_lines(_BASH_ALIAS, output)

    def parse_functions(self, output: str) -> dict[str, str]:
        return _parse_definitions(_BASH_FUNCTION, output)

    def parse_path(self, output: str) -> list[str]:
        return output.split(":")

    def format_alias(self, name: str, cmd: str, alias_function: str) -> str:
        return _posix_stub(name, cmd, alias_function)

    def format_command(self, name: str, cmd: str, alias_function: str) -> str:
        return _posix_stub(name, cmd, alias_function)

    def format_command_alias_function(self, name: str, aliases: Sequence[str]) -> str:
        return _posix_alias_function(name, aliases)


class Zsh(Shell):
    name = "zsh"
    extension = ".zsh"

    def run(self, cmd: str) -> str:
        return _execute(["zsh", "--no-rcs", "-c", cmd], _inherited_env(), cmd)

    def parse_aliases(self, output: str) -> dict[str, str]:
        return _parse_alias_lines(_ZSH_ALIAS, output)

    def parse_functions(self, output: str) -> dict[str, str]:
        return _parse_definitions(_ZSH_FUNCTION, output)

    def parse_path(self, output: str) -> list[str]:
        return output.split(":")

    def format_alias(self, name: str, cmd: str, alias_function: str) -> str:
        return _posix_stub(name, cmd, alias_function)

    def format_command(self, name: str, cmd: str, alias_function: str) -> str:
        return _posix_stub(name, cmd, alias_function)

    def format_command_alias_function(self, name: str, aliases: Sequence[str]) -> str:
        return _posix_alias_function(name, aliases)


class Fish(Shell):
    name = "fish"
    extension = ".fish"

    def run(self, cmd: str) -> str:
        # fish is started with only the marker variable, not the caller's environment.
        return _execute(["fish", "-Nc", cmd], {"DISABLE_LAZY": "1"}, cmd)

    def functions(self, prefix: str) -> dict[str, str]:
        names = self.parse_function_names(self.run(prefix + "functions"))
        script = " && ".join(f"functions --details {name}" for name in names)
        return self.parse_function_details(names, self.run(prefix + script))

    def parse_aliases(self, output: str) -> dict[str, str]:
        return _parse_alias_lines(_FISH_ALIAS, output)

    def parse_function_names(self, output: str) -> list[str]:
        return output.split("\n")

    def parse_function_details(self, names: Sequence[str], output: str) -> dict[str, str]:
        details = output.split("\n")
        if len(details) > len(names):
            raise ShellError(
                f"got {len(details)} function details for {len(names)} functions"
            )
        return dict(zip(names, details))

    def parse_path(self, output: str) -> list[str]:
        return output.split(" ")

    def format_alias(self, name: str, cmd: str, alias_function: str) -> str:
        return f"function {name};{alias_function};{cmd};{name} $argv;end"

    def format_command(self, name: str, cmd: str, alias_function: str) -> str:
        return f"function {name};{alias_function};{cmd};{name} $argv;end"

    def format_command_alias_function(self, name: str, aliases: Sequence[str]) -> str:
        body = ";".join(f'alias {alias}="command {alias}"' for alias in aliases)
        return f"function {name};{body};end"


_SHELLS: dict[str, type[Shell]] = {"bash": Bash, "zsh": Zsh, "fish": Fish}


def shell_for_name(name: str) -> Shell:
    """Shell for ``name``; unknown names fall back to bash."""
    return _SHELLS.get(name, Bash)()