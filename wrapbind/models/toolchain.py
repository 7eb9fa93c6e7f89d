"""Data models for compile options and include scoping."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Definition:
    """A preprocessor definition, ``NAME`` or ``NAME=VALUE``."""

    name: str
    value: str | None = None

    @classmethod
    def parse(cls, text: str) -> Definition:
        name, sep, value = text.partition("=")
        return cls(name=name, value=value if sep else None)

    def __str__(self) -> str:
        if self.value is None:
            return self.name
        return f"{self.name}={self.value}"


@dataclass(frozen=True)
class CompileOptionSet:
    """Include directories and definitions needed to parse vendor headers."""

    include_dirs: tuple[str, ...]  # explicit (vendor) directories
    definitions: tuple[Definition, ...]
    target: str
    implicit_include_dirs: tuple[str, ...] = ()  # compiler's system directories

    def clang_args(self) -> list[str]:
        """``-I`` explicit, ``-D`` definitions, ``-I`` implicit, in that order."""
        args = [f"-I{path}" for path in self.include_dirs]
        args.extend(f"-D{definition}" for definition in self.definitions)
        args.extend(f"-I{path}" for path in self.implicit_include_dirs)
        return args

    def scope(self, normalize: bool = False) -> IncludeScope:
        return IncludeScope(directories=self.include_dirs, normalize=normalize)


@dataclass(frozen=True)
class IncludeScope:
    """Explicit include directories whose declarations get wrapped.

    Matching is a literal string prefix test, so ``/sdk/inc`` also matches
    ``/sdk/include/x.h``. With ``normalize`` both sides go through
    ``os.path.realpath`` and a directory only matches itself or paths below
    it.
    """

    directories: tuple[str, ...]
    normalize: bool = False
    _resolved: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.normalize:
            resolved = tuple(os.path.realpath(d) for d in self.directories)
        else:
            resolved = tuple(self.directories)
        object.__setattr__(self, "_resolved", resolved)

    def contains(self, path: str) -> bool:
        if not self.normalize:
            return any(path.startswith(directory) for directory in self._resolved)
        path = os.path.realpath(path)
        return any(
            path == directory or path.startswith(directory.rstrip(os.sep) + os.sep)
            for directory in self._resolved
        )
