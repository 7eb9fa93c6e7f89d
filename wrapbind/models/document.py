"""Two-segment model for files holding hand-authored and generated code."""

from __future__ import annotations

from dataclasses import dataclass

MARKER = "\n\n\n/// Generated Code\n\n"


@dataclass(frozen=True)
class EntryPointDocument:
    """
    A source file split at the first marker occurrence.

    ``prefix`` is everything before the marker and is never touched by
    regeneration; ``generated`` is everything after it.
    """

    prefix: str
    generated: str = ""
    marker: str = MARKER

    @classmethod
    def split(cls, text: str, marker: str = MARKER) -> EntryPointDocument:
        # str.partition is literal and stops at the first occurrence
        prefix, sep, generated = text.partition(marker)
        return cls(prefix=prefix, generated=generated if sep else "", marker=marker)

    def with_generated(self, code: str) -> EntryPointDocument:
        return EntryPointDocument(prefix=self.prefix, generated=code, marker=self.marker)

    def render(self) -> str:
        return self.prefix + self.marker + self.generated
