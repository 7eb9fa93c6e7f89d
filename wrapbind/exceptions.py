"""Custom exceptions for wrapbind."""


class WrapbindError(Exception):
    """Base exception for all pipeline errors."""

    phase = "pipeline"


class ConfigError(WrapbindError):
    """Raised when required configuration is missing or unreadable."""

    phase = "config"


class ToolchainError(WrapbindError):
    """Raised when the C compiler cannot be spawned."""

    phase = "probe"


class BuildDescriptionError(WrapbindError):
    """Raised when include paths / definitions cannot be extracted."""

    phase = "describe"


class ParseError(WrapbindError):
    """Raised when the compiler frontend fails to parse the entry point."""

    phase = "introspect"


class DeclarationError(ParseError):
    """Raised when a declaration lacks a location, result type, or name."""

    def __init__(self, what: str, declaration: str):
        self.what = what
        self.declaration = declaration
        super().__init__(f"Declaration {declaration!r} has no {what}")


class CompileError(WrapbindError):
    """Raised when compiling the entry point against the vendor library fails."""

    phase = "compile"


class BindingGenerationError(WrapbindError):
    """Raised when the external binding generator fails."""

    phase = "bindings"
