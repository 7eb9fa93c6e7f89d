"""Pipeline configuration, populated once at start-up and passed to every phase."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from wrapbind.exceptions import ConfigError
from wrapbind.models.declarations import WRAPPER_PREFIX
from wrapbind.models.document import MARKER

DEFAULT_VENDOR_PROJECT = "cmake_vendor"
DEFAULT_VENDOR_TARGET = "vendor"
DEFAULT_BACKEND = "bindgen"


def parse_path_list(raw: str | None) -> tuple[Path, ...]:
    """Split a colon-delimited path list, ignoring empty segments."""
    if not raw:
        return ()
    return tuple(Path(p.strip()) for p in raw.split(":") if p.strip())


@dataclass(frozen=True)
class BuildConfig:
    target: str
    out_dir: Path
    vendor_project: Path = Path(DEFAULT_VENDOR_PROJECT)
    vendor_target: str = DEFAULT_VENDOR_TARGET
    entry_override: Path | None = None
    mirrors: tuple[Path, ...] = ()
    backend: str = DEFAULT_BACKEND
    cc: str | None = None
    cmake: str = "cmake"
    cmake_defines: tuple[str, ...] = ()  # extra NAME=VALUE for the vendor project
    build_type: str = "Release"
    normalize_paths: bool = False
    compile: bool = True
    generate_bindings: bool = True
    wrapper_prefix: str = WRAPPER_PREFIX
    marker: str = MARKER

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BuildConfig:
        """Build a config from TARGET / OUT_DIR / WRAPBIND_* variables."""
        env = os.environ if environ is None else environ

        target = env.get("TARGET")
        if not target:
            raise ConfigError("TARGET is not set")
        out_dir = env.get("OUT_DIR")
        if not out_dir:
            raise ConfigError("OUT_DIR is not set")

        override = env.get("WRAPBIND_ENTRY_OVERRIDE")
        return cls(
            target=target,
            out_dir=Path(out_dir),
            vendor_project=Path(env.get("WRAPBIND_VENDOR_PROJECT", DEFAULT_VENDOR_PROJECT)),
            vendor_target=env.get("WRAPBIND_VENDOR_TARGET", DEFAULT_VENDOR_TARGET),
            entry_override=Path(override) if override else None,
            mirrors=parse_path_list(env.get("WRAPBIND_MIRRORS")),
            backend=env.get("WRAPBIND_BACKEND", DEFAULT_BACKEND),
            cc=env.get("CC") or None,
        )

    # ── derived paths ──

    @property
    def entry_path(self) -> Path:
        return self.out_dir / "entry.c"

    @property
    def build_dir(self) -> Path:
        return self.out_dir / "build"

    @property
    def depend_dir(self) -> Path:
        return self.out_dir / "depend"

    @property
    def depend_info_path(self) -> Path:
        return self.build_dir / "CMakeFiles" / f"{self.vendor_target}.dir" / "DependInfo.cmake"

    @property
    def include_path_file(self) -> Path:
        return self.out_dir / "include_path"

    @property
    def definitions_file(self) -> Path:
        return self.out_dir / "definitions"

    @property
    def name_filter(self) -> str:
        return f"{self.wrapper_prefix}.*"
