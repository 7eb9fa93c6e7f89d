"""Declaration sources — enumerate top-level declarations of a translation unit."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog
from clang.cindex import (
    Cursor,
    CursorKind,
    Diagnostic,
    Index,
    LibclangError,
    TranslationUnit,
    TranslationUnitLoadError,
    TypeKind,
)

from wrapbind.exceptions import ParseError
from wrapbind.models.declarations import DeclarationInfo, Parameter

log = structlog.get_logger("wrapbind.introspect")

_KIND_NAMES: dict[CursorKind, str] = {
    CursorKind.FUNCTION_DECL: "function",
    CursorKind.VAR_DECL: "variable",
    CursorKind.TYPEDEF_DECL: "typedef",
    CursorKind.STRUCT_DECL: "struct",
    CursorKind.UNION_DECL: "union",
    CursorKind.ENUM_DECL: "enum",
}


@runtime_checkable
class DeclarationSource(Protocol):
    """Anything that can list the top-level declarations of a parsed file."""

    def declarations(self) -> Iterable[DeclarationInfo]: ...


class ClangDeclarationSource:
    """libclang-backed source. Function bodies are skipped while parsing."""

    def __init__(self, path: Path, args: Sequence[str], index: Index | None = None) -> None:
        self.path = path
        self.args = list(args)
        self._index = index

    def parse(self) -> TranslationUnit:
        try:
            index = self._index or Index.create()
            tu = index.parse(
                str(self.path),
                args=self.args,
                options=TranslationUnit.PARSE_SKIP_FUNCTION_BODIES,
            )
        except LibclangError as e:
            raise ParseError(f"libclang is not available: {e}") from e
        except TranslationUnitLoadError as e:
            raise ParseError(f"libclang failed to parse {self.path}: {e}") from e

        fatal = []
        for diag in tu.diagnostics:
            if diag.severity >= Diagnostic.Fatal:
                fatal.append(_format_diagnostic(diag))
            elif diag.severity >= Diagnostic.Error:
                log.warning("introspect.diagnostic", message=_format_diagnostic(diag))
        if fatal:
            raise ParseError(f"Fatal errors parsing {self.path}: {'; '.join(fatal[:5])}")
        return tu

    def declarations(self) -> Iterable[DeclarationInfo]:
        tu = self.parse()
        for cursor in tu.cursor.get_children():
            yield to_declaration_info(cursor)


def to_declaration_info(cursor: Cursor) -> DeclarationInfo:
    """Project a libclang cursor onto a DeclarationInfo.

    Builtin declarations (``__builtin_va_list`` and friends) have no file;
    they get an empty path so scoping discards them.
    """
    # Spelling location: the Python bindings expose no presumed location,
    # so `#line` directives do not move a declaration in or out of scope.
    location_file = cursor.location.file
    kind = _KIND_NAMES.get(cursor.kind, cursor.kind.name.lower())

    if cursor.kind != CursorKind.FUNCTION_DECL:
        return DeclarationInfo(
            kind=kind,
            name=cursor.spelling or None,
            file=location_file.name if location_file else "",
        )

    result_type = cursor.result_type
    if result_type.kind == TypeKind.INVALID:
        spelling = canonical = None
    else:
        spelling = result_type.spelling
        canonical = result_type.get_canonical().spelling

    params = tuple(
        Parameter.from_spelling(child.type.spelling, child.spelling)
        for child in cursor.get_children()
        if child.kind == CursorKind.PARM_DECL
    )
    fn_type = cursor.type
    variadic = fn_type.kind == TypeKind.FUNCTIONPROTO and fn_type.is_function_variadic()

    return DeclarationInfo(
        kind=kind,
        name=cursor.spelling or None,
        file=location_file.name if location_file else "",
        result_type=spelling,
        canonical_result_type=canonical,
        parameters=params,
        is_variadic=variadic,
    )


def _format_diagnostic(diag: Diagnostic) -> str:
    loc = diag.location
    where = f"{loc.file.name}:{loc.line}" if loc.file else "<unknown>"
    return f"{where}: {diag.spelling}"
