"""Generated-code propagator — commit wrappers to the entry point and mirrors."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

import structlog

from wrapbind.models.document import MARKER, EntryPointDocument

log = structlog.get_logger("wrapbind.entry")


@dataclass
class PropagationResult:
    path: Path
    ok: bool
    error: str | None = None


def read_source(path: Path) -> str:
    """Read *path* with line endings left untouched."""
    with path.open(encoding="utf-8", newline="") as f:
        return f.read()


def write_source(path: Path, text: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)


def patch_text(text: str, code: str, marker: str = MARKER) -> str:
    """Replace everything after the first marker with *code*.

    Without a marker the whole text is kept as prefix.
    """
    return EntryPointDocument.split(text, marker).with_generated(code).render()


class GeneratedCodePropagator:
    def __init__(self, marker: str = MARKER) -> None:
        self.marker = marker

    def write_entry(self, handle: TextIO, code: str) -> None:
        """Append marker + code to the entry point opened by the assembler."""
        with handle:
            handle.write(self.marker + code)

    def patch_file(self, path: Path, code: str) -> None:
        text = read_source(path)
        write_source(path, patch_text(text, code, self.marker))

    def mirror(self, paths: Iterable[Path], code: str) -> list[PropagationResult]:
        """Patch each mirror independently; a failing file never stops the rest."""
        results = []
        for path in paths:
            try:
                self.patch_file(path, code)
            except (OSError, UnicodeDecodeError) as e:
                log.warning("mirror.failed", path=str(path), error=str(e))
                results.append(PropagationResult(path=path, ok=False, error=str(e)))
                continue
            log.info("mirror.patched", path=str(path))
            results.append(PropagationResult(path=path, ok=True))
        return results
