"""Wrapper synthesis — in-scope function declarations to forwarding C wrappers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

import structlog

from wrapbind.exceptions import DeclarationError
from wrapbind.models.declarations import (
    WRAPPER_PREFIX,
    DeclarationInfo,
    FunctionDeclaration,
    Parameter,
    WrapperFunction,
)
from wrapbind.models.toolchain import IncludeScope

log = structlog.get_logger("wrapbind.introspect")


def _named_parameters(params: Iterable[Parameter]) -> tuple[Parameter, ...]:
    """Unnamed prototype parameters get ``__arg<N>`` so they can be forwarded."""
    return tuple(
        p if p.name else replace(p, name=f"__arg{i}")
        for i, p in enumerate(params)
    )


def collect_functions(
    declarations: Iterable[DeclarationInfo],
    scope: IncludeScope,
) -> list[FunctionDeclaration]:
    """
    Keep function declarations located under *scope*, in source order.

    Raises DeclarationError for a declaration with no location, or an
    in-scope function with no name or result type.
    """
    functions: list[FunctionDeclaration] = []
    seen: set[str] = set()

    for decl in declarations:
        if decl.file is None:
            raise DeclarationError("location", decl.name or "<anonymous>")
        if not scope.contains(decl.file):
            log.debug("introspect.ignored", kind=decl.kind, name=decl.name, file=decl.file)
            continue
        if decl.kind != "function":
            continue
        if not decl.name:
            raise DeclarationError("name", f"function in {decl.file}")
        if decl.result_type is None:
            raise DeclarationError("result type", decl.name)
        # prototype followed by a definition
        if decl.name in seen:
            continue
        seen.add(decl.name)

        functions.append(
            FunctionDeclaration(
                name=decl.name,
                return_type=decl.result_type,
                parameters=_named_parameters(decl.parameters),
                canonical_return_type=decl.canonical_result_type or "",
                is_variadic=decl.is_variadic,
                file=decl.file,
            )
        )
    return functions


def synthesize(
    functions: Iterable[FunctionDeclaration],
    prefix: str = WRAPPER_PREFIX,
) -> list[WrapperFunction]:
    wrappers = []
    for fn in functions:
        if fn.is_variadic:
            log.warning("introspect.variadic", name=fn.name, detail="forwarding fixed arguments only")
        wrappers.append(WrapperFunction(target=fn, prefix=prefix))
    return wrappers


def render_code(wrappers: Iterable[WrapperFunction]) -> str:
    return "".join(w.render() + "\n" for w in wrappers)
