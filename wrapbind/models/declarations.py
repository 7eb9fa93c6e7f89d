"""Data models for introspected declarations and synthesized wrappers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

WRAPPER_PREFIX = "wrapped_"

# element type followed by one or more bracketed dimensions
_ARRAY_TYPE = re.compile(r"^(?P<element>[^()\[\]]*?)\s*(?P<dims>(?:\[[^\[\]]*\])+)$")


@dataclass(frozen=True)
class Parameter:
    type_name: str  # display name, e.g. "const char *"
    name: str
    array_dims: str = ""  # e.g. "[4]"; follows the name in a declarator

    @classmethod
    def from_spelling(cls, type_spelling: str, name: str) -> Parameter:
        """Split an array spelling like ``int[4]`` so the name goes before ``[4]``."""
        match = _ARRAY_TYPE.match(type_spelling)
        if match is None:
            return cls(type_name=type_spelling, name=name)
        return cls(type_name=match["element"], name=name, array_dims=match["dims"])

    def declarator(self) -> str:
        return f"{self.type_name} {self.name}{self.array_dims}"


@dataclass(frozen=True)
class DeclarationInfo:
    """
    Frontend-neutral view of one top-level declaration.
    Any field the frontend could not resolve is None.
    """

    kind: str  # "function", "variable", "typedef", "struct", ...
    name: str | None
    file: str | None  # presumed source file
    result_type: str | None = None
    canonical_result_type: str | None = None
    parameters: tuple[Parameter, ...] = ()
    is_variadic: bool = False


@dataclass(frozen=True)
class FunctionDeclaration:
    """A function declaration found under an in-scope include directory."""

    name: str
    return_type: str
    parameters: tuple[Parameter, ...] = field(default_factory=tuple)
    canonical_return_type: str = ""
    is_variadic: bool = False
    file: str = ""

    @property
    def returns_void(self) -> bool:
        return (self.canonical_return_type or self.return_type) == "void"


@dataclass(frozen=True)
class WrapperFunction:
    """Externally linkable function forwarding to a FunctionDeclaration."""

    target: FunctionDeclaration
    prefix: str = WRAPPER_PREFIX

    @property
    def name(self) -> str:
        return self.prefix + self.target.name

    def render(self) -> str:
        params = ", ".join(p.declarator() for p in self.target.parameters)
        args = ", ".join(p.name for p in self.target.parameters)
        ret = "" if self.target.returns_void else "return "
        return (
            f"{self.target.return_type} {self.name}({params}) "
            f"{{ {ret}{self.target.name}({args}); }}"
        )
