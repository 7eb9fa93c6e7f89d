"""Core request type and abstract base class for binding generators."""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import structlog

from wrapbind.exceptions import BindingGenerationError
from wrapbind.toolchain.process import run_tool

log = structlog.get_logger("wrapbind.bindings")


@dataclass(frozen=True)
class BindingRequest:
    """
    Everything a generator needs to see the headers exactly as the
    introspector did. ``clang_args`` must be the introspection arguments,
    unmodified.
    """

    header: Path
    clang_args: tuple[str, ...]
    implicit_include_dirs: tuple[str, ...]
    target: str
    name_filter: str  # regex, e.g. "wrapped_.*"
    out_dir: Path

    def tool_args(self) -> list[str]:
        """Introspection args, implicit includes again, then the target triple."""
        return [
            *self.clang_args,
            *(f"-I{path}" for path in self.implicit_include_dirs),
            f"--target={self.target}",
        ]


class BindingGenerator(ABC):
    """
    Drives one external binding generator.
    Subclasses only describe the command line; running it is shared.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier, e.g. 'bindgen'."""
        ...

    @property
    @abstractmethod
    def output_name(self) -> str:
        """File name of the generated bindings inside ``out_dir``."""
        ...

    @property
    @abstractmethod
    def executables(self) -> list[str]:
        """Executables that must be on PATH."""
        ...

    @abstractmethod
    def command(self, request: BindingRequest, output: Path) -> list[str]: ...

    def check_prerequisites(self) -> list[str]:
        """Return missing executables (empty = can run)."""
        return [exe for exe in self.executables if shutil.which(exe) is None]

    def generate(self, request: BindingRequest) -> Path:
        output = request.out_dir / self.output_name
        run_tool(self.command(request, output), BindingGenerationError)
        if not output.is_file():
            raise BindingGenerationError(f"{self.name} did not produce {output}")
        log.info("bindings.done", backend=self.name, output=str(output))
        return output
