"""Lexical scopes for collision-free identifier allocation."""

from __future__ import annotations

from .naming import RESERVED_WORDS, to_identifier


class Scope:
    """A namespace of generated identifiers, optionally nested in a parent scope.

    Scopes only grow during a compile. Every allocation checks this scope and
    all enclosing scopes, so a name handed out here never shadows one handed
    out by an ancestor.

    Usage:
        module_scope = Scope()
        module_scope.create_unique_binding("inputValue")  # "inputValue"
        module_scope.create_unique_binding("inputValue")  # "inputValue1"
    """

    def __init__(self, parent: Scope | None = None) -> None:
        self.parent = parent
        self._bindings: set[str] = set()

    def has_binding(self, name: str) -> bool:
        """Whether `name` is taken in this scope or any enclosing one."""
        if name in self._bindings:
            return True
        return self.parent is not None and self.parent.has_binding(name)

    def create_unique_binding(self, suggested_name: str) -> str:
        """Allocate an identifier based on `suggested_name`.

        Invalid characters are replaced and reserved words are never returned.
        Collisions are resolved by appending 1, 2, 3, ... to the suggestion.
        """
        base = to_identifier(suggested_name)
        name = base
        index = 1
        while name in RESERVED_WORDS or self.has_binding(name):
            name = f"{base}{index}"
            index += 1
        self._bindings.add(name)
        return name

    def create_child(self) -> Scope:
        """Create a nested scope whose allocations avoid everything visible here."""
        return Scope(self)

    @property
    def bindings(self) -> frozenset[str]:
        """Identifiers allocated directly in this scope."""
        return frozenset(self._bindings)
