"""Node renderer: renders a node and its children into JSX.

The renderer is also the render context handed to component render functions,
which use it to register imports and to render their resolved props.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from studio_codegen.models.dom import ElementNode, PageNode

from . import expressions
from .expressions import NULL, PropExpression, ResolvedProps
from .prop_resolver import resolve_props

if TYPE_CHECKING:
    from .context import CompilationContext

ELEMENT_TYPE = "element"
SLOT_CONTROL = "slot"
SLOTS_CONTROL = "slots"


class NodeRenderer:
    """Renders page and element nodes, children before parents.

    In editor mode every rendered node is wrapped in a runtime marker carrying
    its node id, and element slots are wrapped in placeholders so the editor
    can target empty and populated slots alike.
    """

    def __init__(self, ctx: CompilationContext) -> None:
        self.ctx = ctx

    @property
    def editor(self) -> bool:
        return self.ctx.editor

    # =========================================================================
    # Render context API for component render functions
    # =========================================================================

    def add_import(self, source: str, imported: str, suggested_name: str | None = None) -> str:
        """Add an import to the page module. Returns the identifier to reference it by."""
        return self.ctx.add_import(source, imported, suggested_name)

    def render_component(self, name: str, resolved_props: ResolvedProps) -> str:
        return expressions.render_component(name, resolved_props)

    def render_props(self, resolved_props: ResolvedProps) -> str:
        return expressions.render_props(resolved_props)

    def render_props_as_object(self, resolved_props: ResolvedProps) -> str:
        return expressions.render_props_as_object(resolved_props)

    def render_js_expression(self, expr: PropExpression | None) -> str:
        return expressions.render_js_expression(expr)

    def render_jsx_content(self, expr: PropExpression | None) -> str:
        return expressions.render_jsx_content(expr)

    # =========================================================================
    # Node rendering
    # =========================================================================

    def render_root(self, page: PageNode) -> str:
        """Render the page to inline as the return value of a React component.

        Example: `function App() { return ${RESULT}; }`
        """
        return self.render_js_expression(self.render_node(page))

    def render_node(self, node: PageNode | ElementNode) -> PropExpression:
        """Render a node. Nodes without a component definition render as null."""
        component = self.ctx.get_component_definition(node)
        if component is None:
            return expressions.expression(NULL)

        node_children = self.render_node_children(node)
        resolved_props = resolve_props(node, node_children, self.ctx)
        rendered = component.render(self, resolved_props)

        if self.editor:
            rendered = self._wrap(
                f"{self.ctx.runtime_alias}.RuntimeStudioNode",
                f"nodeId={json.dumps(node.id)}",
                rendered,
            )
        return PropExpression(type="jsxElement", value=rendered)

    def render_node_children(self, node: PageNode | ElementNode) -> ResolvedProps:
        """Render each child slot of `node`: one child as is, several as a fragment."""
        result: ResolvedProps = {}

        for prop, children in self.ctx.dom_index.get_child_nodes(node).items():
            if len(children) == 1:
                result[prop] = self.render_node(children[0])
            elif len(children) > 1:
                result[prop] = PropExpression(
                    type="jsxFragment",
                    value="\n".join(
                        self.render_jsx_content(self.render_node(child)) for child in children
                    ),
                )

        component = self.ctx.get_component_definition(node)
        if self.editor and component is not None:
            for prop, arg_type in component.arg_types.items():
                if arg_type is None or arg_type.type_def.type != ELEMENT_TYPE:
                    continue
                control = arg_type.control.type if arg_type.control else None
                if control == SLOTS_CONTROL:
                    result[prop] = self._render_slot("Slots", prop, result.get(prop))
                elif control == SLOT_CONTROL:
                    result[prop] = self._render_slot("Placeholder", prop, result.get(prop))

        return result

    def _render_slot(
        self, marker: str, prop: str, existing: PropExpression | None
    ) -> PropExpression:
        value = self._wrap(
            f"{self.ctx.runtime_alias}.{marker}",
            f"prop={json.dumps(prop)}",
            self.render_jsx_content(existing),
        )
        return PropExpression(type="jsxElement", value=value)

    @staticmethod
    def _wrap(tag: str, attributes: str, content: str) -> str:
        return f"<{tag} {attributes}>{content}</{tag}>"
