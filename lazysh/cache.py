"""Location and contents of the generated start script and its input checksum."""

from __future__ import annotations

import hashlib
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from lazysh.shells import Shell


def compute_sum(data: bytes) -> bytes:
    """MD5 digest of ``data``."""
    return hashlib.md5(data).digest()


def _user_cache_dir() -> Path:
    if sys.platform == "win32":
        local = os.environ.get("LocalAppData")
        if not local:
            raise OSError("%LocalAppData% is not defined")
        return Path(local)
    if sys.platform == "darwin":
        home = os.environ.get("HOME")
        if not home:
            raise OSError("$HOME is not defined")
        return Path(home) / "Library" / "Caches"
    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg:
        if not os.path.isabs(xdg):
            raise OSError("path in $XDG_CACHE_HOME is relative")
        return Path(xdg)
    home = os.environ.get("HOME")
    if not home:
        raise OSError("neither $XDG_CACHE_HOME nor $HOME are defined")
    return Path(home) / ".cache"


def _write(path: Path, data: bytes) -> None:
    fd = os.open(path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o777)
    with os.fdopen(fd, "wb") as handle:
        handle.write(data)


@dataclass(frozen=True)
class Cache:
    """Paths of the cached start script and of the checksum it was built from."""

    root_dir: Path
    script_path: Path
    sum_path: Path

    def check_sum(self, digest: bytes) -> bool:
        """True if the stored checksum equals ``digest``; a missing file never matches."""
        try:
            stored = self.sum_path.read_bytes()
        except FileNotFoundError:
            return False
        except PermissionError:
            return False
        return stored == digest

    def write_script(self, data: str) -> None:
        _write(self.script_path, data.encode())

    def write_sum(self, digest: bytes) -> None:
        _write(self.sum_path, digest)


def load_cache(shell: Shell, cache_dir: str | os.PathLike[str] | None = None) -> Cache:
    """Cache under ``cache_dir`` (the user cache directory by default) for ``shell``."""
    base = Path(cache_dir) if cache_dir is not None else _user_cache_dir()
    root = base / "lazysh"
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass
    script = root / f"start{shell.extension}"
    return Cache(
        root_dir=root,
        script_path=script,
        sum_path=root / f"start{shell.extension}.sum",
    )