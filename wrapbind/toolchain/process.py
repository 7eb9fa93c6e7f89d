"""Blocking subprocess helper shared by the toolchain drivers."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

import structlog

from wrapbind.exceptions import WrapbindError

log = structlog.get_logger("wrapbind.toolchain")


def run_tool(
    cmd: Sequence[str],
    error: type[WrapbindError],
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run *cmd* to completion, raising *error* on spawn failure or non-zero exit.

    No timeout: a hung tool stalls the pipeline.
    """
    cmd = [str(c) for c in cmd]
    log.info("tool.run", cmd=" ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, cwd=cwd)
    except OSError as e:
        raise error(f"Failed to spawn {cmd[0]}: {e}") from e

    if result.returncode != 0:
        raise error(
            f"{Path(cmd[0]).name} failed (rc={result.returncode}): "
            f"{(result.stderr or result.stdout)[-1000:]}"
        )
    return result
