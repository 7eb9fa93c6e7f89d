"""Tests for BuildDescriptionExtractor — CMake calls go to a fake runner."""

from __future__ import annotations

from pathlib import Path

import pytest

from wrapbind.core.config import BuildConfig
from wrapbind.exceptions import BuildDescriptionError
from wrapbind.models.toolchain import Definition
from wrapbind.toolchain.describe import (
    DEPEND_PROJECT,
    BuildDescriptionExtractor,
    read_colon_list,
    read_definitions,
    read_include_dirs,
)


class FakeRunner:
    """Records CMake calls and writes what the real projects would write."""

    def __init__(
        self,
        config: BuildConfig,
        include_path: str = "",
        definitions: str = "",
        depend_info: bool = True,
        write_outputs: bool = True,
    ) -> None:
        self.config = config
        self.include_path = include_path
        self.definitions = definitions
        self.depend_info = depend_info
        self.write_outputs = write_outputs
        self.calls: list[tuple] = []

    def configure(self, source_dir, build_dir, defines, error):
        self.calls.append(("configure", Path(source_dir), Path(build_dir), dict(defines), error))
        if Path(source_dir) == self.config.vendor_project and self.depend_info:
            self.config.depend_info_path.parent.mkdir(parents=True, exist_ok=True)
            self.config.depend_info_path.write_text("set(CMAKE_C_TARGET_INCLUDE_PATH)\n")

    def build(self, build_dir, target, error):
        self.calls.append(("build", Path(build_dir), target, error))
        if target == "write" and self.write_outputs:
            self.config.include_path_file.write_text(self.include_path)
            self.config.definitions_file.write_text(self.definitions)


class TestColonFiles:
    def test_read_colon_list_strips_and_drops_empty(self, tmp_path: Path):
        f = tmp_path / "list"
        f.write_text(" a : b::c\n")
        assert read_colon_list(f) == ["a", "b", "c"]

    def test_empty_file(self, tmp_path: Path):
        f = tmp_path / "list"
        f.write_text("")
        assert read_colon_list(f) == []
        assert read_definitions(f) == []

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(BuildDescriptionError):
            read_colon_list(tmp_path / "missing")

    def test_include_dirs_relative_to_build_dir(self, tmp_path: Path):
        f = tmp_path / "include_path"
        f.write_text("../sdk/src/common/include:/opt/sdk/include")
        build = tmp_path / "build"
        assert read_include_dirs(f, build) == [
            str(build / "../sdk/src/common/include"),
            "/opt/sdk/include",
        ]

    def test_definitions(self, tmp_path: Path):
        f = tmp_path / "definitions"
        f.write_text("PICO_BOARD=\"pico\":PICO_ON_DEVICE=1:LIB_PICO_STDLIB")
        assert read_definitions(f) == [
            Definition("PICO_BOARD", '"pico"'),
            Definition("PICO_ON_DEVICE", "1"),
            Definition("LIB_PICO_STDLIB"),
        ]


class TestBuildDescriptionExtractor:
    def test_extract(self, build_config: BuildConfig):
        runner = FakeRunner(
            build_config,
            include_path="/sdk/src/rp2_common/hardware_gpio/include:/sdk/src/common/pico_base/include",
            definitions="PICO_ON_DEVICE=1:NDEBUG",
        )
        options = BuildDescriptionExtractor(build_config, runner=runner).extract(["/usr/arm/include"])

        assert options.include_dirs == (
            "/sdk/src/rp2_common/hardware_gpio/include",
            "/sdk/src/common/pico_base/include",
        )
        assert options.definitions == (Definition("PICO_ON_DEVICE", "1"), Definition("NDEBUG"))
        assert options.implicit_include_dirs == ("/usr/arm/include",)
        assert options.target == "thumbv6m-none-eabi"

    def test_call_sequence(self, build_config: BuildConfig):
        runner = FakeRunner(build_config)
        BuildDescriptionExtractor(build_config, runner=runner).extract()

        vendor, depend, build = runner.calls
        assert vendor[0] == "configure"
        assert vendor[1] == build_config.vendor_project
        assert vendor[2] == build_config.build_dir
        assert vendor[3]["ENTRY_POINT"] == str(build_config.entry_path)
        assert vendor[3]["CMAKE_C_COMPILER"] == "arm-none-eabi-gcc"

        assert depend[0] == "configure"
        assert depend[1] == DEPEND_PROJECT
        assert depend[3] == {
            "DEPENDINFO_PATH": str(
                build_config.out_dir / "build" / "CMakeFiles" / "pico.dir" / "DependInfo.cmake"
            ),
            "INCLUDE_PATH_FILE": str(build_config.out_dir / "include_path"),
            "DEFINITIONS_FILE": str(build_config.out_dir / "definitions"),
        }
        # host-side reader: no target compiler forced on it
        assert "CMAKE_C_COMPILER" not in depend[3]

        assert build[0] == "build"
        assert build[2] == "write"

    def test_errors_are_build_description_errors(self, build_config: BuildConfig):
        runner = FakeRunner(build_config)
        BuildDescriptionExtractor(build_config, runner=runner).extract()
        assert all(call[-1] is BuildDescriptionError for call in runner.calls)

    def test_missing_depend_info(self, build_config: BuildConfig):
        runner = FakeRunner(build_config, depend_info=False)
        with pytest.raises(BuildDescriptionError, match="DependInfo.cmake"):
            BuildDescriptionExtractor(build_config, runner=runner).extract()
        assert len(runner.calls) == 1

    def test_missing_outputs(self, build_config: BuildConfig):
        runner = FakeRunner(build_config, write_outputs=False)
        with pytest.raises(BuildDescriptionError, match="include_path"):
            BuildDescriptionExtractor(build_config, runner=runner).extract()

    def test_depend_project_shipped(self):
        assert (DEPEND_PROJECT / "CMakeLists.txt").is_file()
        assert (DEPEND_PROJECT / "write.cmake").is_file()
