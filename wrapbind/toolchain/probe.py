"""Toolchain probe — implicit system include directories of a C compiler."""

from __future__ import annotations

import subprocess
from pathlib import Path

import structlog

from wrapbind.exceptions import ToolchainError

log = structlog.get_logger("wrapbind.toolchain.probe")

HOST_COMPILER = "gcc"

# Bare-metal triples and the cross compiler that ships their system headers
CROSS_COMPILERS: dict[str, str] = {
    "thumbv6m-none-eabi": "arm-none-eabi-gcc",
    "thumbv7m-none-eabi": "arm-none-eabi-gcc",
    "thumbv7em-none-eabi": "arm-none-eabi-gcc",
    "thumbv7em-none-eabihf": "arm-none-eabi-gcc",
    "thumbv8m.main-none-eabihf": "arm-none-eabi-gcc",
    "riscv32imac-unknown-none-elf": "riscv32-unknown-elf-gcc",
    "riscv32imc-unknown-none-elf": "riscv32-unknown-elf-gcc",
}

_SEARCH_LIST_START = "#include <...> search starts here:"


def select_compiler(target: str, override: str | None = None) -> str:
    """Explicit override, else the cross compiler for *target*, else the host gcc."""
    if override:
        return override
    return CROSS_COMPILERS.get(target, HOST_COMPILER)


def parse_search_dirs(diagnostics: str) -> list[str]:
    """
    Extract the ``#include <...>`` search list from ``cc -v -E`` stderr.

    Reading stops at the first line that is not an existing path, which
    covers both ``End of search list.`` and trailing compiler remarks.
    """
    lines = iter(diagnostics.split("\n"))
    for line in lines:
        if line.strip() == _SEARCH_LIST_START:
            break
    else:
        return []

    dirs = []
    for line in lines:
        candidate = line.strip()
        if not candidate or not Path(candidate).exists():
            break
        dirs.append(candidate)
    return dirs


class ToolchainProbe:
    """Ask the target's C compiler where it looks for system headers."""

    def __init__(self, cc: str | None = None) -> None:
        self._cc = cc

    def compiler_for(self, target: str) -> str:
        return select_compiler(target, self._cc)

    def implicit_include_dirs(self, target: str) -> list[str]:
        cc = self.compiler_for(target)
        cmd = [cc, "-xc", "-v", "-E", "-"]
        try:
            result = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise ToolchainError(f"Failed to execute {cc}: {e}") from e

        if result.returncode != 0:
            log.warning("probe.compiler_exit", cc=cc, returncode=result.returncode)

        dirs = parse_search_dirs(result.stderr or "")
        if not dirs:
            log.warning("probe.no_search_list", cc=cc, target=target)
        else:
            log.info("probe.done", cc=cc, target=target, dirs=len(dirs))
        return dirs
