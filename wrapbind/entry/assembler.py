"""Entry-point assembler — hand-authored prefix for the working ``entry.c``."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import structlog

from wrapbind.core.config import BuildConfig
from wrapbind.entry.propagator import read_source, write_source
from wrapbind.exceptions import ConfigError
from wrapbind.models.document import EntryPointDocument

log = structlog.get_logger("wrapbind.entry")

DEFAULT_ENTRY_NAME = "entry.c"
DEFAULT_ENTRY_PREFIX = "/* wrapbind entry point: include vendor headers above the marker. */\n"


class EntryPointAssembler:
    """
    Write the working entry point and hand back an append handle.

    Prefix source, in order:
        1. the configured override file (must be readable)
        2. ``entry.c`` shipped next to the vendor CMake project
        3. DEFAULT_ENTRY_PREFIX
    Any previously generated suffix in the source is discarded.
    """

    def __init__(self, config: BuildConfig) -> None:
        self.config = config

    def load_prefix(self) -> str:
        config = self.config
        path: Path | None
        if config.entry_override is not None:
            path = config.entry_override
        else:
            shipped = config.vendor_project / DEFAULT_ENTRY_NAME
            path = shipped if shipped.is_file() else None

        if path is None:
            text = DEFAULT_ENTRY_PREFIX
        else:
            try:
                text = read_source(path)
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigError(f"Cannot read entry point source {path}: {e}") from e

        log.info("entry.prefix", source=str(path) if path else "built-in")
        return EntryPointDocument.split(text, config.marker).prefix

    def assemble(self) -> tuple[Path, TextIO]:
        path = self.config.entry_path
        path.parent.mkdir(parents=True, exist_ok=True)
        write_source(path, self.load_prefix())
        return path, path.open("a", encoding="utf-8", newline="")
