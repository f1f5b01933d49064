"""Command entry point: build or reuse the lazy-loading start script."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import BinaryIO, TextIO

from lazysh.cache import Cache, compute_sum, load_cache
from lazysh.loader import create_loader, format_loaders
from lazysh.logsetup import LOGGER_NAME, configure_logging
from lazysh.options import Options, parse_options
from lazysh.shells import ShellError

logger = logging.getLogger(LOGGER_NAME)


@dataclass
class Cli:
    """State of one run: options, cache location and the init commands read."""

    options: Options | None = None
    cache: Cache | None = None
    digest: bytes = b""
    input: str = ""
    cache_dir: str | os.PathLike[str] | None = None

    def load(
        self,
        argv: Sequence[str] | None = None,
        stdin: BinaryIO | TextIO | None = None,
    ) -> None:
        """Parse options, locate the cache and read the init commands from ``stdin``."""
        self.options = parse_options(argv)
        self.cache = load_cache(self.options.shell, self.cache_dir)
        stream = stdin if stdin is not None else sys.stdin.buffer
        data = stream.read()
        if isinstance(data, str):
            data = data.encode()
        self.input = data.decode(errors="surrogateescape")
        self.digest = compute_sum(data)

    def _require(self) -> tuple[Options, Cache]:
        if self.options is None or self.cache is None:
            raise RuntimeError("load() must be called first")
        return self.options, self.cache

    def run(self) -> None:
        """Regenerate the script if needed, then print its path."""
        options, cache = self._require()
        try:
            if options.force_analyze or not cache.check_sum(self.digest):
                self.analyze()
        finally:
            print(cache.script_path)

    def analyze(self) -> None:
        """Write a fresh script and record the checksum of its input."""
        _, cache = self._require()
        logger.info("Analyzing. This might take some time.")
        self.generate_script()
        cache.write_sum(self.digest)

    def generate_script(self) -> None:
        """Analyse each non-empty input line and write the resulting script."""
        options, cache = self._require()
        loaders = [
            create_loader(options.shell, line)
            for line in self.input.split("\n")
            if line
        ]
        cache.write_script(format_loaders(options.shell, loaders))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; returns the process exit status."""
    configure_logging()
    cli = Cli()
    try:
        cli.load(argv)
        cli.run()
    except (ShellError, OSError) as exc:
        logger.info("%s", exc)
        return 1
    return 0