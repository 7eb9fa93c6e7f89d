"""CLI entry point: wrapbind.

Subcommands:
    wrapbind run                       # Full pipeline (TARGET / OUT_DIR from env)
    wrapbind probe --target T          # Print the compiler's implicit include dirs
    wrapbind wrappers entry.c -I inc   # Print wrappers for an entry file
    wrapbind patch code.c a.c b.c      # Mirror generated code into files
"""

from __future__ import annotations

import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import NoReturn

import click

from wrapbind.core.config import BuildConfig
from wrapbind.core.logging import setup_logging
from wrapbind.exceptions import WrapbindError
from wrapbind.models.declarations import WRAPPER_PREFIX
from wrapbind.models.toolchain import CompileOptionSet, Definition

_STATUS_ICONS = {
    "completed": "+",
    "failed": "!",
    "skipped": "-",
    "running": "~",
    "pending": ".",
}


def _fail(phase: str, error: Exception) -> NoReturn:
    click.echo(f"Error ({phase}): {error}", err=True)
    sys.exit(1)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """wrapbind: expose header-only C functions to a binding generator."""
    setup_logging(verbose)


@main.command("run")
@click.option("--target", default=None, help="Target triple [env: TARGET]")
@click.option(
    "--out-dir", default=None, type=click.Path(path_type=Path),
    help="Working/output directory [env: OUT_DIR]",
)
@click.option(
    "--vendor-project", default=None, type=click.Path(path_type=Path),
    help="Vendor CMake project directory [env: WRAPBIND_VENDOR_PROJECT]",
)
@click.option(
    "--vendor-target", default=None,
    help="Vendor CMake target [env: WRAPBIND_VENDOR_TARGET]",
)
@click.option(
    "--entry-override", default=None, type=click.Path(path_type=Path),
    help="Hand-authored entry point prefix [env: WRAPBIND_ENTRY_OVERRIDE]",
)
@click.option(
    "--mirrors", default=None,
    help="Colon-delimited files that receive the generated code too [env: WRAPBIND_MIRRORS]",
)
@click.option(
    "--backend", default=None,
    help="Binding backend: bindgen or ctypesgen [env: WRAPBIND_BACKEND]",
)
@click.option("--cc", default=None, help="C compiler used for probing [env: CC]")
@click.option("--cmake", default="cmake", help="CMake executable")
@click.option("-D", "--define", "defines", multiple=True, help="Extra NAME=VALUE for the vendor project")
@click.option("--build-type", default="Release", help="CMAKE_BUILD_TYPE")
@click.option("--normalize-paths", is_flag=True, help="Resolve paths before include scoping")
@click.option("--no-compile", is_flag=True, help="Skip compiling the entry point")
@click.option("--no-bindings", is_flag=True, help="Skip the binding generator")
def run(
    target: str | None,
    out_dir: Path | None,
    vendor_project: Path | None,
    vendor_target: str | None,
    entry_override: Path | None,
    mirrors: str | None,
    backend: str | None,
    cc: str | None,
    cmake: str,
    defines: tuple[str, ...],
    build_type: str,
    normalize_paths: bool,
    no_compile: bool,
    no_bindings: bool,
) -> None:
    """Run the whole pipeline once.

    Options left unset fall back to their environment variable.
    """
    from wrapbind.pipeline import BindingPipeline

    # command-line values shadow the environment; BuildConfig.from_env reads both
    given = {
        "TARGET": target,
        "OUT_DIR": out_dir,
        "WRAPBIND_VENDOR_PROJECT": vendor_project,
        "WRAPBIND_VENDOR_TARGET": vendor_target,
        "WRAPBIND_ENTRY_OVERRIDE": entry_override,
        "WRAPBIND_MIRRORS": mirrors,
        "WRAPBIND_BACKEND": backend,
        "CC": cc,
    }
    environ = dict(os.environ)
    environ.update({name: str(value) for name, value in given.items() if value is not None})
    try:
        config = replace(
            BuildConfig.from_env(environ),
            cmake=cmake,
            cmake_defines=defines,
            build_type=build_type,
            normalize_paths=normalize_paths,
            compile=not no_compile,
            generate_bindings=not no_bindings,
        )
    except WrapbindError as e:
        _fail(e.phase, e)

    pipeline = BindingPipeline(config)
    try:
        result = pipeline.run()
    except WrapbindError as e:
        _fail(pipeline.progress.failed_phase() or e.phase, e)

    click.echo(f"Entry point: {result.entry_path}")
    click.echo(f"Wrappers: {len(result.wrapper_names)}")
    if result.bindings_path:
        click.echo(f"Bindings: {result.bindings_path}")
    for mirror in result.mirror_results:
        state = "ok" if mirror.ok else f"failed: {mirror.error}"
        click.echo(f"Mirror {mirror.path}: {state}")

    summary = pipeline.progress.get_summary()
    click.echo(f"\nPipeline summary (total: {summary['total_duration']}s):")
    for p in summary["phases"]:
        icon = _STATUS_ICONS.get(p["status"], "?")
        duration = f" ({p['duration']}s)" if p["duration"] else ""
        detail = f" - {p['detail']}" if p["detail"] else ""
        click.echo(f"  [{icon}] {p['phase']}{duration}{detail}")


@main.command("probe")
@click.option("--target", envvar="TARGET", required=True, help="Target triple")
@click.option("--cc", envvar="CC", default=None, help="C compiler override")
def probe(target: str, cc: str | None) -> None:
    """Print the implicit include directories of the target's C compiler."""
    from wrapbind.toolchain.probe import ToolchainProbe

    toolchain = ToolchainProbe(cc or None)
    try:
        dirs = toolchain.implicit_include_dirs(target)
    except WrapbindError as e:
        _fail(e.phase, e)
    click.echo(f"Compiler: {toolchain.compiler_for(target)}")
    for d in dirs:
        click.echo(d)


@main.command("wrappers")
@click.argument("entry_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-I", "--include", "includes", multiple=True, help="In-scope include directory")
@click.option("-D", "--define", "defines", multiple=True, help="NAME or NAME=VALUE")
@click.option("--system-include", "system_includes", multiple=True, help="Implicit include directory")
@click.option("--target", default="", help="Target triple (informational)")
@click.option("--prefix", default=WRAPPER_PREFIX, help="Wrapper name prefix")
@click.option("--normalize-paths", is_flag=True, help="Resolve paths before include scoping")
def wrappers(
    entry_file: Path,
    includes: tuple[str, ...],
    defines: tuple[str, ...],
    system_includes: tuple[str, ...],
    target: str,
    prefix: str,
    normalize_paths: bool,
) -> None:
    """Parse ENTRY_FILE and print the wrappers it would get."""
    from wrapbind.introspect.introspector import HeaderIntrospector

    options = CompileOptionSet(
        include_dirs=includes,
        definitions=tuple(Definition.parse(d) for d in defines),
        target=target,
        implicit_include_dirs=system_includes,
    )
    introspector = HeaderIntrospector(prefix=prefix, normalize_paths=normalize_paths)
    try:
        result = introspector.introspect(entry_file, options)
    except WrapbindError as e:
        _fail(e.phase, e)
    click.echo(result.code, nl=False)


@main.command("patch")
@click.argument("code_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("files", nargs=-1, type=click.Path(path_type=Path))
def patch(code_file: Path, files: tuple[Path, ...]) -> None:
    """Replace the generated section of FILES with the contents of CODE_FILE."""
    from wrapbind.entry.propagator import GeneratedCodePropagator, read_source

    code = read_source(code_file)
    for result in GeneratedCodePropagator().mirror(files, code):
        state = "patched" if result.ok else f"failed: {result.error}"
        click.echo(f"{result.path}: {state}")


if __name__ == "__main__":
    main()
