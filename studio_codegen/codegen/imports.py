"""Module dependency table for the generated module's import header."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field

from .errors import ImportsSealedError
from .scope import Scope

logger = logging.getLogger(__name__)

NAMESPACE = "*"
DEFAULT = "default"


@dataclass
class ModuleImports:
    """All symbols imported from one source module."""

    source: str
    default: str | None = None
    namespace: str | None = None
    named: dict[str, str] = field(default_factory=dict)

    def get(self, imported: str) -> str | None:
        """Local alias for `imported`, if it was already registered."""
        if imported == DEFAULT:
            return self.default
        if imported == NAMESPACE:
            return self.namespace
        return self.named.get(imported)

    def set(self, imported: str, alias: str) -> None:
        if imported == DEFAULT:
            self.default = alias
        elif imported == NAMESPACE:
            self.namespace = alias
        else:
            self.named[imported] = alias


class Imports:
    """Deduplicates module imports and assigns scope-unique local aliases.

    Entries are keyed by (source, imported symbol) where the symbol is
    "*", "default" or a named export. The table is mutable until `seal()` is
    called once; after that only `render()` is allowed.
    """

    def __init__(self, scope: Scope) -> None:
        self.scope = scope
        self._modules: dict[str, ModuleImports] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def add(self, source: str, imported: str, suggested_alias: str | None = None) -> str:
        """Register an import and return the local alias to reference it by.

        Raises:
            ImportsSealedError: If the table was already sealed.
        """
        if self._sealed:
            raise ImportsSealedError(
                f"Can't add import of {imported!r} from {source!r} after the imports were sealed"
            )

        module = self._modules.get(source)
        if module is None:
            module = ModuleImports(source=source)
            self._modules[source] = module

        existing = module.get(imported)
        if existing is not None:
            return existing

        alias = self.scope.create_unique_binding(suggested_alias or imported)
        module.set(imported, alias)
        logger.debug(f"Registered import {imported!r} from {source!r} as {alias}")
        return alias

    def seal(self) -> None:
        """Freeze the table. Further `add()` calls are programming errors."""
        self._sealed = True

    def render(self) -> str:
        """Render one import declaration per source module, in registration order.

        Raises:
            ImportsSealedError: If the table was not sealed yet.
        """
        if not self._sealed:
            raise ImportsSealedError("Imports must be sealed before they are rendered")
        lines: list[str] = []
        for module in self._modules.values():
            lines.extend(_render_module(module))
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self._modules)


def _render_module(module: ModuleImports) -> list[str]:
    source = json.dumps(module.source)
    named = ", ".join(
        imported if alias == imported else f"{imported} as {alias}"
        for imported, alias in module.named.items()
    )

    head = [module.default] if module.default else []
    if module.namespace:
        head.append(f"* as {module.namespace}")
        # a namespace import can't share a declaration with named imports
        lines = [f"import {', '.join(head)} from {source};"]
        if named:
            lines.append(f"import {{ {named} }} from {source};")
        return lines

    if named:
        head.append(f"{{ {named} }}")
    return [f"import {', '.join(head)} from {source};"]
