"""Visitors resolving a node to its component definition and property types."""

from __future__ import annotations

from studio_codegen.models.components import ComponentCatalog, ComponentDefinition, PropValueType
from studio_codegen.models.dom import DerivedStateNode, ElementNode, PageNode

from .base import NodeVisitor

PAGE_COMPONENT = "Page"


class ComponentLookup(NodeVisitor[ComponentDefinition | None]):
    """Finds the component definition that renders a node.

    Pages render with the catalog's "Page" component, elements with their own
    component. Derived state is never rendered as a component.
    """

    def __init__(self, components: ComponentCatalog) -> None:
        self.components = components

    def visit_PageNode(self, node: PageNode) -> ComponentDefinition | None:
        return self.components.get(PAGE_COMPONENT)

    def visit_ElementNode(self, node: ElementNode) -> ComponentDefinition | None:
        return self.components.get(node.component)

    def visit_DerivedStateNode(self, node: DerivedStateNode) -> ComponentDefinition | None:
        return None


class PropTypesLookup(NodeVisitor[dict[str, PropValueType]]):
    """Declared property types of a node: component arguments or derived-state arguments."""

    def __init__(self, components: ComponentLookup) -> None:
        self.components = components

    def visit_PageNode(self, node: PageNode) -> dict[str, PropValueType]:
        return self._from_component(node)

    def visit_ElementNode(self, node: ElementNode) -> dict[str, PropValueType]:
        return self._from_component(node)

    def visit_DerivedStateNode(self, node: DerivedStateNode) -> dict[str, PropValueType]:
        return dict(node.arg_types)

    def _from_component(self, node: PageNode | ElementNode) -> dict[str, PropValueType]:
        component = self.components.visit(node)
        if component is None:
            return {}
        return {
            name: arg_type.type_def
            for name, arg_type in component.arg_types.items()
            if arg_type is not None
        }
