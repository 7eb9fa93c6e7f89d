"""Build description extractor — include dirs and definitions from CMake metadata.

The vendor project is configured (never built) for the real target, then a
small host-side CMake project reads the vendor target's DependInfo.cmake
and writes its include path and definition lists as colon-delimited files.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from wrapbind.core.config import BuildConfig
from wrapbind.exceptions import BuildDescriptionError
from wrapbind.models.toolchain import CompileOptionSet, Definition
from wrapbind.toolchain.cmake import CMakeRunner, vendor_defines

log = structlog.get_logger("wrapbind.toolchain.describe")

DEPEND_PROJECT = Path(__file__).resolve().parent.parent / "cmake" / "depend"


def read_colon_list(path: Path) -> list[str]:
    """Read a colon-delimited file, stripping entries and dropping empty ones."""
    try:
        text = path.read_text()
    except OSError as e:
        raise BuildDescriptionError(f"Failed to read {path}: {e}") from e
    return [entry.strip() for entry in text.split(":") if entry.strip()]


def read_include_dirs(path: Path, build_dir: Path) -> list[str]:
    """Include entries are relative to the vendor build dir unless absolute."""
    return [str(build_dir / entry) for entry in read_colon_list(path)]


def read_definitions(path: Path) -> list[Definition]:
    return [Definition.parse(entry) for entry in read_colon_list(path)]


class BuildDescriptionExtractor:
    def __init__(
        self,
        config: BuildConfig,
        runner: CMakeRunner | None = None,
        depend_project: Path = DEPEND_PROJECT,
    ) -> None:
        self.config = config
        self.runner = runner or CMakeRunner(config.cmake)
        self.depend_project = depend_project

    def extract(self, implicit_include_dirs: list[str] | None = None) -> CompileOptionSet:
        config = self.config

        # 1. Vendor project for the real target: metadata only
        self.runner.configure(
            config.vendor_project,
            config.build_dir,
            vendor_defines(config),
            BuildDescriptionError,
        )
        if not config.depend_info_path.is_file():
            raise BuildDescriptionError(
                f"DependInfo.cmake not found at {config.depend_info_path} "
                f"(is '{config.vendor_target}' the vendor target name?)"
            )

        # 2. Host-side reader re-emits the dependency metadata as data files
        build_dir = config.depend_dir / "build"
        self.runner.configure(
            self.depend_project,
            build_dir,
            {
                "DEPENDINFO_PATH": str(config.depend_info_path),
                "INCLUDE_PATH_FILE": str(config.include_path_file),
                "DEFINITIONS_FILE": str(config.definitions_file),
            },
            BuildDescriptionError,
        )
        self.runner.build(build_dir, "write", BuildDescriptionError)

        # 3. Back to data
        include_dirs = read_include_dirs(config.include_path_file, config.build_dir)
        definitions = read_definitions(config.definitions_file)
        log.info(
            "describe.done",
            include_dirs=len(include_dirs),
            definitions=len(definitions),
        )
        return CompileOptionSet(
            include_dirs=tuple(include_dirs),
            definitions=tuple(definitions),
            target=config.target,
            implicit_include_dirs=tuple(implicit_include_dirs or ()),
        )
