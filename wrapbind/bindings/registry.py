"""Binding generator registry — name-based backend lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import structlog

from wrapbind.bindings.base import BindingGenerator
from wrapbind.exceptions import ConfigError

log = structlog.get_logger("wrapbind.bindings")


@dataclass
class GeneratorDescriptor:
    """Backend declaration."""

    name: str
    factory: Callable[[], BindingGenerator]


class GeneratorRegistry:
    def __init__(self) -> None:
        self._generators: dict[str, GeneratorDescriptor] = {}

    def register(self, descriptor: GeneratorDescriptor) -> None:
        self._generators[descriptor.name] = descriptor
        log.debug("registry.registered", backend=descriptor.name)

    def get(self, name: str) -> GeneratorDescriptor | None:
        return self._generators.get(name)

    def names(self) -> list[str]:
        return sorted(self._generators)

    def create(self, name: str) -> BindingGenerator:
        desc = self.get(name)
        if desc is None:
            raise ConfigError(
                f"Unknown binding backend '{name}' (known: {', '.join(self.names())})"
            )
        return desc.factory()


def create_default_registry() -> GeneratorRegistry:
    """Registry with bindgen (default) and ctypesgen."""
    from wrapbind.bindings.bindgen import BindgenGenerator
    from wrapbind.bindings.ctypesgen import CtypesgenGenerator

    registry = GeneratorRegistry()
    registry.register(GeneratorDescriptor(name="bindgen", factory=BindgenGenerator))
    registry.register(GeneratorDescriptor(name="ctypesgen", factory=CtypesgenGenerator))
    return registry
