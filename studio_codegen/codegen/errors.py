"""Errors raised while compiling a page to source code.

Every fatal condition aborts the whole compile; there is no partial output.
Non-fatal conditions (dangling node names, unknown property tags) are logged
by the compiler instead of raised.
"""


class CodegenError(Exception):
    """Raised when page code generation fails."""

    pass


class BindingParseError(CodegenError):
    """Raised when a binding template has malformed syntax."""

    def __init__(self, template: str, position: int, reason: str):
        self.template = template
        self.position = position
        self.reason = reason
        super().__init__(f"Invalid binding {template!r} at position {position}: {reason}")


class BindingFormatError(CodegenError):
    """Raised when a bound expression uses an unknown formatting directive."""

    pass


class UnresolvedInterpolationError(CodegenError):
    """Raised when formatting an expression that still has unresolved references."""

    pass


class ComponentNotFoundError(CodegenError):
    """Raised when a bound node has no component definition."""

    pass


class ArgTypeContractError(CodegenError):
    """Raised when a binding violates a component's argument contract."""

    pass


class ArgTypeNotFoundError(ArgTypeContractError):
    """Raised when a bound property is not declared by the component."""

    pass


class UncontrolledPropertyError(ArgTypeContractError):
    """Raised when binding to a property the component does not expose as controlled."""

    pass


class UnsupportedBindingError(CodegenError):
    """Raised for property values the compiler cannot bind yet (e.g. bound queries)."""

    pass


class ImportsSealedError(CodegenError):
    """Raised when the import table is used out of its add/seal/render order."""

    pass


class BindingCycleError(CodegenError):
    """Raised when derived values depend on each other in a cycle."""

    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        super().__init__(f"Derived state cycle: {' -> '.join(cycle)}")
