"""CMake drivers — vendor project configuration and the final compile/link."""

from __future__ import annotations

from pathlib import Path

import structlog

from wrapbind.core.config import BuildConfig
from wrapbind.exceptions import CompileError, WrapbindError
from wrapbind.toolchain.probe import select_compiler
from wrapbind.toolchain.process import run_tool

log = structlog.get_logger("wrapbind.toolchain.cmake")


class CMakeRunner:
    """Thin wrapper over ``cmake -S/-B`` and ``cmake --build``."""

    def __init__(self, cmake: str = "cmake") -> None:
        self.cmake = cmake

    def configure(
        self,
        source_dir: Path,
        build_dir: Path,
        defines: dict[str, str],
        error: type[WrapbindError],
    ) -> None:
        build_dir.mkdir(parents=True, exist_ok=True)
        cmd = [self.cmake, "-S", str(source_dir), "-B", str(build_dir)]
        cmd.extend(f"-D{name}={value}" for name, value in defines.items())
        run_tool(cmd, error)

    def build(self, build_dir: Path, target: str, error: type[WrapbindError]) -> None:
        run_tool([self.cmake, "--build", str(build_dir), "--target", target], error)


def vendor_defines(config: BuildConfig) -> dict[str, str]:
    """Cache variables for configuring the vendor project for the real target."""
    defines = {
        "ENTRY_POINT": str(config.entry_path),
        "CMAKE_BUILD_TYPE": config.build_type,
        "CMAKE_C_COMPILER": select_compiler(config.target, config.cc),
    }
    for raw in config.cmake_defines:
        name, _, value = raw.partition("=")
        defines[name] = value
    return defines


class CompileLinkDriver:
    """Compile the finalized entry point against the vendor library."""

    def __init__(self, config: BuildConfig, runner: CMakeRunner | None = None) -> None:
        self.config = config
        self.runner = runner or CMakeRunner(config.cmake)

    def build(self) -> Path:
        """Configure and build target ``all``; returns the build directory."""
        config = self.config
        self.runner.configure(
            config.vendor_project, config.build_dir, vendor_defines(config), CompileError
        )
        self.runner.build(config.build_dir, "all", CompileError)
        log.info("compile.done", build_dir=str(config.build_dir))
        return config.build_dir
