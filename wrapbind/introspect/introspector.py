"""Header introspector — parse the entry point and synthesize wrappers."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from wrapbind.introspect.source import ClangDeclarationSource, DeclarationSource
from wrapbind.introspect.synthesis import collect_functions, render_code, synthesize
from wrapbind.models.declarations import WRAPPER_PREFIX, WrapperFunction
from wrapbind.models.toolchain import CompileOptionSet

log = structlog.get_logger("wrapbind.introspect")

SourceFactory = Callable[[Path, Sequence[str]], DeclarationSource]


@dataclass
class IntrospectionResult:
    """Generated code plus the exact arguments the headers were parsed with."""

    code: str
    wrappers: list[WrapperFunction] = field(default_factory=list)
    clang_args: list[str] = field(default_factory=list)

    @property
    def wrapper_names(self) -> list[str]:
        return [w.name for w in self.wrappers]


class HeaderIntrospector:
    def __init__(
        self,
        source_factory: SourceFactory = ClangDeclarationSource,
        prefix: str = WRAPPER_PREFIX,
        normalize_paths: bool = False,
    ) -> None:
        self.source_factory = source_factory
        self.prefix = prefix
        self.normalize_paths = normalize_paths

    def introspect(self, entry_path: Path, options: CompileOptionSet) -> IntrospectionResult:
        args = options.clang_args()
        source = self.source_factory(entry_path, args)
        functions = collect_functions(
            source.declarations(), options.scope(normalize=self.normalize_paths)
        )
        wrappers = synthesize(functions, self.prefix)
        log.info("introspect.done", entry=str(entry_path), wrappers=len(wrappers))
        return IntrospectionResult(
            code=render_code(wrappers),
            wrappers=wrappers,
            clang_args=args,
        )
