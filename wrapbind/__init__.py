"""wrapbind: wrap header-only C functions and drive a binding generator."""

__version__ = "0.1.0"

from wrapbind.core.config import BuildConfig
from wrapbind.exceptions import WrapbindError
from wrapbind.introspect.introspector import HeaderIntrospector, IntrospectionResult
from wrapbind.models.declarations import FunctionDeclaration, WrapperFunction
from wrapbind.models.document import MARKER, EntryPointDocument
from wrapbind.models.toolchain import CompileOptionSet, Definition, IncludeScope
from wrapbind.pipeline import BindingPipeline, PipelineResult

__all__ = [
    "MARKER",
    "BindingPipeline",
    "BuildConfig",
    "CompileOptionSet",
    "Definition",
    "EntryPointDocument",
    "FunctionDeclaration",
    "HeaderIntrospector",
    "IncludeScope",
    "IntrospectionResult",
    "PipelineResult",
    "WrapbindError",
    "WrapperFunction",
]
