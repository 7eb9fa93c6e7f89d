"""ctypesgen backend — a Python ctypes module for the wrappers.

ctypesgen runs its own preprocessor; clang is used so the ``--target``
argument is understood and the headers resolve as they did for libclang.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from wrapbind.bindings.base import BindingGenerator, BindingRequest


class CtypesgenGenerator(BindingGenerator):
    def __init__(self, executable: str = "ctypesgen", preprocessor: str = "clang") -> None:
        self.executable = executable
        self.preprocessor = preprocessor

    @property
    def name(self) -> str:
        return "ctypesgen"

    @property
    def output_name(self) -> str:
        return "bindings.py"

    @property
    def executables(self) -> list[str]:
        return [self.executable, self.preprocessor]

    def command(self, request: BindingRequest, output: Path) -> list[str]:
        cpp = shlex.join([self.preprocessor, "-E", *request.tool_args()])
        return [
            self.executable,
            str(request.header),
            "-o",
            str(output),
            "--include-symbols",
            request.name_filter,
            "--cpp",
            cpp,
        ]
