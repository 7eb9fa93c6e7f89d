"""Tests for HeaderIntrospector.

Unit tests use a fake declaration source. Tests marked ``needs_libclang``
parse real files and are skipped when libclang cannot be loaded.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers import fake_source_factory, function_decl

from wrapbind.exceptions import ParseError
from wrapbind.introspect.introspector import HeaderIntrospector
from wrapbind.models.toolchain import CompileOptionSet, Definition


def _libclang_loads() -> bool:
    try:
        from clang.cindex import Index

        Index.create()
    except Exception:
        return False
    return True


needs_libclang = pytest.mark.skipif(not _libclang_loads(), reason="libclang not available")


class TestIntrospectorWithFakeSource:
    def test_args_and_code(self):
        options = CompileOptionSet(
            include_dirs=("/sdk/include",),
            definitions=(Definition("PICO", "1"),),
            target="thumbv6m-none-eabi",
            implicit_include_dirs=("/usr/arm/include",),
        )
        factory = fake_source_factory(
            [
                function_decl("add", "int", [("int", "a"), ("int", "b")]),
                function_decl("printf", "int", [("const char *", "")], file="/usr/arm/include/stdio.h"),
            ]
        )
        result = HeaderIntrospector(source_factory=factory).introspect(Path("entry.c"), options)

        assert result.code == "int wrapped_add(int a, int b) { return add(a, b); }\n"
        assert result.wrapper_names == ["wrapped_add"]
        assert result.clang_args == ["-I/sdk/include", "-DPICO=1", "-I/usr/arm/include"]
        # the frontend sees exactly the returned args
        assert factory.created[0].args == result.clang_args
        assert factory.created[0].path == Path("entry.c")

    def test_custom_prefix(self):
        options = CompileOptionSet(("/sdk/include",), (), "t")
        factory = fake_source_factory([function_decl("f", "void")])
        result = HeaderIntrospector(source_factory=factory, prefix="shim_").introspect(
            Path("entry.c"), options
        )
        assert result.code == "void shim_f() { f(); }\n"

    def test_normalized_scope(self, tmp_path: Path):
        real = tmp_path / "sdk"
        real.mkdir()
        link = tmp_path / "sdk-link"
        link.symlink_to(real)
        options = CompileOptionSet((str(link),), (), "t")
        factory = fake_source_factory([function_decl("f", "int", file=str(real / "f.h"))])

        literal = HeaderIntrospector(source_factory=factory).introspect(Path("e.c"), options)
        normalized = HeaderIntrospector(source_factory=factory, normalize_paths=True).introspect(
            Path("e.c"), options
        )
        assert literal.code == ""
        assert normalized.code == "int wrapped_f() { return f(); }\n"

    def test_deterministic(self):
        options = CompileOptionSet(("/sdk/include",), (), "t")
        decls = [function_decl(f"f{i}", "int", [("int", "x")]) for i in range(20)]
        first = HeaderIntrospector(source_factory=fake_source_factory(decls)).introspect(
            Path("e.c"), options
        )
        second = HeaderIntrospector(source_factory=fake_source_factory(decls)).introspect(
            Path("e.c"), options
        )
        assert first.code == second.code


SDK_HEADER = """\
#pragma once
static inline int add(int a, int b) { return a + b; }
void reset(void);
typedef void nothing_t;
nothing_t sync_all(void);
static inline void fill(int buf[4], int n) { for (int i = 0; i < n; i++) buf[i] = 0; }
int sum(const int v[], int n);
void grid(int g[2][3]);
struct point { int x; int y; };
#if SDK_FEATURE
int feature(const char *name);
#endif
"""

SYSTEM_HEADER = """\
#pragma once
int printf(const char *, ...);
"""


@needs_libclang
class TestIntrospectorWithLibclang:
    @pytest.fixture
    def layout(self, tmp_path: Path, vendor_include: Path):
        (vendor_include / "sdk.h").write_text(SDK_HEADER)
        system = tmp_path / "sys"
        system.mkdir()
        (system / "mystdio.h").write_text(SYSTEM_HEADER)
        out = tmp_path / "out"
        out.mkdir()
        entry = out / "entry.c"
        entry.write_text('#include <mystdio.h>\n#include "sdk.h"\n')
        return entry, vendor_include, system

    def test_wrappers_for_in_scope_functions(self, layout):
        entry, include, system = layout
        options = CompileOptionSet(
            include_dirs=(str(include),),
            definitions=(Definition("SDK_FEATURE", "1"),),
            target="x86_64-unknown-linux-gnu",
            implicit_include_dirs=(str(system),),
        )
        result = HeaderIntrospector().introspect(entry, options)

        assert result.code == (
            "int wrapped_add(int a, int b) { return add(a, b); }\n"
            "void wrapped_reset() { reset(); }\n"
            "nothing_t wrapped_sync_all() { sync_all(); }\n"
            "void wrapped_fill(int buf[4], int n) { fill(buf, n); }\n"
            "int wrapped_sum(const int v[], int n) { return sum(v, n); }\n"
            "void wrapped_grid(int g[2][3]) { grid(g); }\n"
            "int wrapped_feature(const char * name) { return feature(name); }\n"
        )
        assert "printf" not in result.code

    def test_definitions_gate_declarations(self, layout):
        entry, include, system = layout
        options = CompileOptionSet(
            include_dirs=(str(include),),
            definitions=(),
            target="x86_64-unknown-linux-gnu",
            implicit_include_dirs=(str(system),),
        )
        result = HeaderIntrospector().introspect(entry, options)
        assert "wrapped_feature" not in result.code
        assert result.wrapper_names == [
            "wrapped_add",
            "wrapped_reset",
            "wrapped_sync_all",
            "wrapped_fill",
            "wrapped_sum",
            "wrapped_grid",
        ]

    def test_missing_header_is_fatal(self, tmp_path: Path, vendor_include: Path):
        entry = tmp_path / "entry.c"
        entry.write_text('#include "does_not_exist.h"\n')
        options = CompileOptionSet((str(vendor_include),), (), "t")
        with pytest.raises(ParseError):
            HeaderIntrospector().introspect(entry, options)

    def test_line_directive_does_not_move_scope(self, tmp_path: Path, vendor_include: Path):
        (vendor_include / "moved.h").write_text('#line 1 "/elsewhere/generated.h"\nint moved(void);\n')
        entry = tmp_path / "entry.c"
        entry.write_text('#include "moved.h"\n')
        options = CompileOptionSet((str(vendor_include),), (), "t")

        result = HeaderIntrospector().introspect(entry, options)
        assert result.wrapper_names == ["wrapped_moved"]
