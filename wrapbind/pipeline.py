"""Binding pipeline — probe, describe, introspect, propagate, compile, bind."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from wrapbind.bindings.base import BindingGenerator, BindingRequest
from wrapbind.bindings.registry import GeneratorRegistry, create_default_registry
from wrapbind.core.config import BuildConfig
from wrapbind.entry.assembler import EntryPointAssembler
from wrapbind.entry.propagator import GeneratedCodePropagator, PropagationResult
from wrapbind.exceptions import BindingGenerationError
from wrapbind.introspect.introspector import HeaderIntrospector
from wrapbind.progress import ProgressTracker
from wrapbind.toolchain.cmake import CompileLinkDriver
from wrapbind.toolchain.describe import BuildDescriptionExtractor
from wrapbind.toolchain.probe import ToolchainProbe

log = structlog.get_logger("wrapbind.pipeline")


@dataclass
class PipelineResult:
    """Pipeline return value."""

    entry_path: Path
    code: str
    wrapper_names: list[str]
    clang_args: list[str]
    bindings_path: Path | None = None
    mirror_results: list[PropagationResult] = field(default_factory=list)


class BindingPipeline:
    """
    Run every phase once, in order. Each phase reads files written by the
    previous one, so a failure aborts the run; only mirror patching is
    allowed to fail per file.

    Phase 1: ToolchainProbe.implicit_include_dirs()
    Phase 2: EntryPointAssembler.assemble()
    Phase 3: BuildDescriptionExtractor.extract()
    Phase 4: HeaderIntrospector.introspect()
    Phase 5: GeneratedCodePropagator (entry point + mirrors)
    Phase 6: CompileLinkDriver.build()
    Phase 7: BindingGenerator.generate()
    """

    def __init__(
        self,
        config: BuildConfig,
        probe: ToolchainProbe | None = None,
        extractor: BuildDescriptionExtractor | None = None,
        assembler: EntryPointAssembler | None = None,
        introspector: HeaderIntrospector | None = None,
        propagator: GeneratedCodePropagator | None = None,
        compiler: CompileLinkDriver | None = None,
        registry: GeneratorRegistry | None = None,
    ) -> None:
        self.config = config
        self.probe = probe or ToolchainProbe(config.cc)
        self.extractor = extractor or BuildDescriptionExtractor(config)
        self.assembler = assembler or EntryPointAssembler(config)
        self.introspector = introspector or HeaderIntrospector(
            prefix=config.wrapper_prefix, normalize_paths=config.normalize_paths
        )
        self.propagator = propagator or GeneratedCodePropagator(config.marker)
        self.compiler = compiler or CompileLinkDriver(config)
        self.registry = registry or create_default_registry()
        self.progress = ProgressTracker()

    def run(self) -> PipelineResult:
        config = self.config
        progress = ProgressTracker()
        self.progress = progress  # expose last run's progress for callers
        log.info("pipeline.start", target=config.target, out_dir=str(config.out_dir))

        # Unknown backends and missing tools fail before any tool runs
        generator: BindingGenerator | None = None
        if config.generate_bindings:
            generator = self.registry.create(config.backend)
            missing = generator.check_prerequisites()
            if missing:
                raise BindingGenerationError(
                    f"{generator.name} backend needs {', '.join(missing)} on PATH"
                )

        config.out_dir.mkdir(parents=True, exist_ok=True)

        with progress.track("probe") as p:
            implicit_dirs = self.probe.implicit_include_dirs(config.target)
            p.detail = f"cc={self.probe.compiler_for(config.target)}, dirs={len(implicit_dirs)}"

        with progress.track("assemble") as p:
            entry_path, handle = self.assembler.assemble()
            p.detail = str(entry_path)

        try:
            with progress.track("describe") as p:
                options = self.extractor.extract(implicit_dirs)
                p.detail = (
                    f"includes={len(options.include_dirs)}, "
                    f"definitions={len(options.definitions)}"
                )

            with progress.track("introspect") as p:
                introspection = self.introspector.introspect(entry_path, options)
                p.detail = f"wrappers={len(introspection.wrappers)}"
        except BaseException:
            handle.close()
            raise

        with progress.track("propagate") as p:
            self.propagator.write_entry(handle, introspection.code)
            mirror_results = self.propagator.mirror(config.mirrors, introspection.code)
            failed = sum(1 for r in mirror_results if not r.ok)
            p.detail = f"mirrors={len(mirror_results)}, failed={failed}"

        if config.compile:
            with progress.track("compile") as p:
                p.detail = str(self.compiler.build())
        else:
            progress.skip_phase("compile", "disabled")

        bindings_path = None
        if generator is not None:
            with progress.track("bindings") as p:
                request = BindingRequest(
                    header=entry_path,
                    clang_args=tuple(introspection.clang_args),
                    implicit_include_dirs=tuple(options.implicit_include_dirs),
                    target=config.target,
                    name_filter=config.name_filter,
                    out_dir=config.out_dir,
                )
                bindings_path = generator.generate(request)
                p.detail = str(bindings_path)
        else:
            progress.skip_phase("bindings", "disabled")

        log.info("pipeline.done", wrappers=len(introspection.wrappers))
        return PipelineResult(
            entry_path=entry_path,
            code=introspection.code,
            wrapper_names=introspection.wrapper_names,
            clang_args=introspection.clang_args,
            bindings_path=bindings_path,
            mirror_results=mirror_results,
        )
