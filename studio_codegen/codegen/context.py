"""Compilation context for page code generation.

Owns every lookup table of one compile: the document index, the module scope,
the import table, reactive state cells, derived value cells, the reference
accessor map and the data loaders. A context is created per compile and never
reused.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from studio_codegen.models.components import (
    ArgTypeDefinition,
    ComponentCatalog,
    ComponentDefinition,
    PropValueType,
)
from studio_codegen.models.dom import (
    ConstProp,
    DerivedStateNode,
    DomIndex,
    PageNode,
    StudioDom,
    StudioNode,
)

from .expressions import UNDEFINED
from .imports import Imports
from .naming import camel_case
from .scope import Scope
from .visitors import ComponentLookup, PropTypesLookup

logger = logging.getLogger(__name__)

REACT_MODULE = "react"
RUNTIME_MODULE = "@mui/studio-core/runtime"
APP_COMPONENT_NAME = "App"


@dataclass
class StateHook:
    """A reactive state cell backing one controlled (node, property) pair."""

    node_id: str
    prop: str
    state: str
    set_state: str
    default_value: Any = None
    has_default: bool = False


@dataclass
class DataLoader:
    """A data query the generated module loads, and the variable holding its result."""

    query_id: str
    variable: str


@dataclass
class CompilationContext:
    """Accumulation context for all compilation artifacts of one page.

    Used by state_collector, prop_resolver, node_renderer and hooks to register
    and look up what the generated module declares.
    """

    dom: StudioDom
    page: PageNode
    components: ComponentCatalog
    editor: bool = False

    # name and placement lookups, snapshotted when the compile starts
    dom_index: DomIndex = field(init=False)
    module_scope: Scope = field(default_factory=Scope)
    imports: Imports = field(init=False)

    # "<nodeId>.<prop>" -> state cell
    state_hooks: dict[str, StateHook] = field(default_factory=dict)
    # derived state node id -> identifier of its memoized value
    memo_hooks: dict[str, str] = field(default_factory=dict)
    # derived state node id -> ids of derived state nodes its props reference
    derived_dependencies: dict[str, list[str]] = field(default_factory=dict)
    # binding reference ("input.value") -> accessor expression ("inputValue")
    accessors: dict[str, str] = field(default_factory=dict)
    data_loaders: list[DataLoader] = field(default_factory=list)

    react_alias: str = field(init=False)
    runtime_alias: str = field(init=False)
    app_name: str = field(init=False)

    def __post_init__(self) -> None:
        self.dom_index = self.dom.build_index()
        self.imports = Imports(self.module_scope)
        self.react_alias = self.add_import(REACT_MODULE, "default", "React")
        self.runtime_alias = (
            self.add_import(RUNTIME_MODULE, "*", "__studioRuntime") if self.editor else UNDEFINED
        )
        self.app_name = self.module_scope.create_unique_binding(APP_COMPONENT_NAME)
        self._component_lookup = ComponentLookup(self.components)
        self._prop_types_lookup = PropTypesLookup(self._component_lookup)

    # =========================================================================
    # Components
    # =========================================================================

    def get_component_definition(self, node: StudioNode) -> ComponentDefinition | None:
        return self._component_lookup.visit(node)

    def get_prop_types(self, node: StudioNode) -> dict[str, PropValueType]:
        return self._prop_types_lookup.visit(node)

    # =========================================================================
    # Imports and data loaders
    # =========================================================================

    def add_import(self, source: str, imported: str, suggested_name: str | None = None) -> str:
        """Add an import to the page module. Returns the local alias to reference it by."""
        return self.imports.add(source, imported, suggested_name or imported)

    def use_data_loader(self, query_id: str) -> str:
        """Register a data loader for `query_id`, once per distinct query id.

        Returns the variable holding the query result.
        """
        for loader in self.data_loaders:
            if loader.query_id == query_id:
                return loader.variable
        variable = self.module_scope.create_unique_binding(query_id)
        self.data_loaders.append(DataLoader(query_id=query_id, variable=variable))
        logger.debug(f"Registered data loader for query {query_id!r} as {variable}")
        return variable

    # =========================================================================
    # Reactive state
    # =========================================================================

    def get_state_hook(self, node_id: str, prop: str) -> StateHook | None:
        return self.state_hooks.get(f"{node_id}.{prop}")

    def add_state_hook(
        self,
        node_id: str,
        node_name: str,
        prop: str,
        arg_type: ArgTypeDefinition,
        initial: ConstProp | None = None,
    ) -> StateHook:
        """Allocate the state cell for (node, prop), deduplicated. First registration wins.

        The cell starts from `initial` when given, else from the declared default.
        """
        state_id = f"{node_id}.{prop}"
        hook = self.state_hooks.get(state_id)
        if hook is None:
            state = self.module_scope.create_unique_binding(camel_case(node_name, prop))
            set_state = self.module_scope.create_unique_binding(camel_case("set", node_name, prop))
            hook = StateHook(
                node_id=node_id,
                prop=prop,
                state=state,
                set_state=set_state,
                default_value=initial.value if initial is not None else arg_type.default_value,
                has_default=initial is not None or arg_type.has_default,
            )
            self.state_hooks[state_id] = hook
            logger.debug(f"Allocated state [{state}, {set_state}] for {state_id}")
        return hook

    def add_derived_value(self, node: DerivedStateNode) -> tuple[str, bool]:
        """Allocate the memoized value for a derived state node, deduplicated by node id.

        Returns the identifier and whether it was newly allocated.
        """
        existing = self.memo_hooks.get(node.id)
        if existing is not None:
            return existing, False
        identifier = self.module_scope.create_unique_binding(node.name)
        self.memo_hooks[node.id] = identifier
        self.derived_dependencies.setdefault(node.id, [])
        logger.debug(f"Allocated derived value {identifier} for {node.id}")
        return identifier, True

    def add_derived_dependency(self, node_id: str, dependency_id: str) -> None:
        """Record that derived node `node_id` reads derived node `dependency_id`."""
        dependencies = self.derived_dependencies.setdefault(node_id, [])
        if dependency_id not in dependencies:
            dependencies.append(dependency_id)

    # =========================================================================
    # Accessors
    # =========================================================================

    def set_accessor(self, reference: str, accessor: str) -> None:
        self.accessors[reference] = accessor

    def get_accessor(self, reference: str) -> str | None:
        return self.accessors.get(reference)
