"""rust-bindgen backend — Rust ``extern "C"`` declarations for the wrappers."""

from __future__ import annotations

from pathlib import Path

from wrapbind.bindings.base import BindingGenerator, BindingRequest


class BindgenGenerator(BindingGenerator):
    def __init__(self, executable: str = "bindgen", ctypes_prefix: str = "cty") -> None:
        self.executable = executable
        self.ctypes_prefix = ctypes_prefix

    @property
    def name(self) -> str:
        return "bindgen"

    @property
    def output_name(self) -> str:
        return "bindings.rs"

    @property
    def executables(self) -> list[str]:
        return [self.executable]

    def command(self, request: BindingRequest, output: Path) -> list[str]:
        return [
            self.executable,
            str(request.header),
            "-o",
            str(output),
            "--use-core",
            "--ctypes-prefix",
            self.ctypes_prefix,
            "--allowlist-function",
            request.name_filter,
            "--",
            *request.tool_args(),
        ]
