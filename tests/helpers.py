"""Test doubles shared across wrapbind tests."""

from __future__ import annotations

from pathlib import Path

from wrapbind.models.declarations import DeclarationInfo, Parameter


def function_decl(
    name: str,
    result_type: str,
    params: list[tuple[str, str]] | None = None,
    file: str | None = "/sdk/include/hal.h",
    canonical: str | None = None,
    variadic: bool = False,
) -> DeclarationInfo:
    return DeclarationInfo(
        kind="function",
        name=name,
        file=file,
        result_type=result_type,
        canonical_result_type=canonical if canonical is not None else result_type,
        parameters=tuple(Parameter.from_spelling(t, n) for t, n in params or []),
        is_variadic=variadic,
    )


class FakeDeclarationSource:
    """DeclarationSource over a fixed list; keeps the args it was built with."""

    def __init__(self, path: Path, args, declarations: list[DeclarationInfo]) -> None:
        self.path = path
        self.args = list(args)
        self._declarations = declarations

    def declarations(self):
        return iter(self._declarations)


def fake_source_factory(declarations: list[DeclarationInfo]):
    created: list[FakeDeclarationSource] = []

    def factory(path, args):
        source = FakeDeclarationSource(path, args, declarations)
        created.append(source)
        return source

    factory.created = created  # type: ignore[attr-defined]
    return factory
