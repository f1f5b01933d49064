# lazysh

Shell start-up is often slowed down by init commands such as
`eval "$(pyenv init -)"` or `source ~/.nvm/nvm.sh`. lazysh defers them: it
works out which aliases, functions and `PATH` commands each init command adds,
and writes a script of small stub functions. The first time you call one of
those names, the stubs are replaced by plain calls to the real commands, the
init command runs, and your call goes through.

Supported shells: bash, zsh and fish.

## Installation

```sh
pip install .
```

This installs the `lazysh` command. To run the tests:

```sh
pip install ".[test]"
pytest
```

## Usage

Feed your init commands to `lazysh` on standard input, one per line (empty
lines are skipped), and source the script whose path it prints:

```sh
# ~/.bashrc
source "$(lazysh bash <<'EOF'
eval "$(pyenv init -)"
source ~/.nvm/nvm.sh
EOF
)"
```

For fish:

```fish
# ~/.config/fish/config.fish
source (printf '%s\n' 'zoxide init fish | source' | lazysh fish)
```

The shell name is the first positional argument. Without it, lazysh looks up
your login shell with `getent passwd`. Any name other than `bash`, `zsh` or
`fish` falls back to bash.

### How the analysis works

For each init command, lazysh starts the shell without its start-up files
(`bash --norc`, `zsh --no-rcs`, `fish -N`) twice: once as is, and once after
running the init command with its output sent to standard error. It then
compares:

- aliases and functions that are new or whose definition changed, and
- `PATH` entries that were added; every non-directory entry in those
  directories becomes a command to wrap (the entry `.` is ignored).

While the analysis runs, `DISABLE_LAZY=1` is set in the shells lazysh starts,
so your configuration can check for it and avoid recursion. bash and zsh
inherit the rest of your environment; fish is started with `DISABLE_LAZY=1`
as its only variable.

### Caching

The generated script is stored in the `lazysh` directory under your user
cache directory (`$XDG_CACHE_HOME`, else `~/.cache`; `~/Library/Caches` on
macOS), as `start.bash`, `start.zsh` or `start.fish`, together with an MD5 sum
of the input in `start.<ext>.sum`. A later call with the same input only
prints the path to the cached script. To analyse again anyway, pass `-f`:

```sh
lazysh -f zsh < init-commands.txt
```

### Output and exit status

Only the script path is written to standard output; it is printed even when
the analysis fails. Messages go to standard error with a `lazysh:` prefix. If
a shell cannot be run or a file cannot be written, the error is reported
there and `lazysh` exits with status 1.

## Use from Python

The pieces are available as modules:

- `lazysh.shells`: `Bash`, `Zsh`, `Fish` and `shell_for_name(name)`; each
  shell can list its aliases, functions and `PATH`, and format stubs.
- `lazysh.relations`: `analyze(shell, cmd)` returns a `Relations` with the
  `aliases` and `commands` an init command brings in.
- `lazysh.loader`: `create_loader(shell, cmd)` and
  `format_loaders(shell, loaders)` build the start script text.
- `lazysh.cache`: `load_cache(shell, cache_dir)` and `compute_sum(data)`.
- `lazysh.cli`: `Cli` and `main(argv)`, the command itself.

```python
from lazysh.loader import create_loader, format_loaders
from lazysh.shells import shell_for_name

shell = shell_for_name("bash")
print(format_loaders(shell, [create_loader(shell, 'eval "$(pyenv init -)"')]))
```

## What it does not do

- It does not remove stale scripts or checksums from the cache directory.
- Detecting the login shell needs `getent`; where it is missing, pass the
  shell name explicitly.
- Only bash, zsh and fish are understood.