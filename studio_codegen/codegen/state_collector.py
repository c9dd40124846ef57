"""State collector for discovering every binding in a page before rendering.

Walks all descendants of the page once and, for each reference a property
makes to another node, allocates what the generated module needs to read it:

1. Element targets: a reactive state cell for the (node, property) pair
2. Derived state targets: a memoized derived value per node

Every reference is mapped to the accessor expression used at render time.
This pass must complete before any node is rendered, since a node may bind to
state owned by a node that appears later in the tree.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from studio_codegen.models.dom import (
    BindingProp,
    BoundExpressionProp,
    ConstProp,
    DerivedStateNode,
    ElementNode,
    PageNode,
    StudioNode,
)

from . import bindings
from .errors import ArgTypeNotFoundError, ComponentNotFoundError, UncontrolledPropertyError

if TYPE_CHECKING:
    from .context import CompilationContext

logger = logging.getLogger(__name__)


# =============================================================================
# Public API
# =============================================================================


def collect_all_state(ctx: CompilationContext) -> None:
    """Collect state cells, derived values and accessors for the whole page.

    Derived state nodes live outside the page tree; when one is first
    referenced its own properties are collected as well, so bindings it
    depends on get their state allocated too.

    Args:
        ctx: Compilation context to register state into.

    Raises:
        BindingParseError: If a bound expression template is malformed.
        ComponentNotFoundError: If a bound element has no component definition.
        ArgTypeNotFoundError: If the bound property isn't declared by the component.
        UncontrolledPropertyError: If the bound property isn't controllable.
    """
    for node in ctx.dom_index.get_descendants(ctx.page):
        _collect_node(node, ctx)


def collect_interpolation(
    reference: str, ctx: CompilationContext, owner: StudioNode | None = None
) -> None:
    """Process a single `<nodeName>.<path>` reference.

    Args:
        reference: The dotted reference as written in the binding.
        ctx: Compilation context.
        owner: The node whose property holds the reference.
    """
    node_name, *path = reference.split(".")
    node_id = ctx.dom_index.get_node_id_by_name(node_name)

    if node_id is None:
        logger.warning(f'Can\'t find node with name "{node_name}"')
        return

    node = ctx.dom.get_node(node_id)

    match node:
        case ElementNode():
            accessor = _collect_element_state(node, path, ctx)
        case DerivedStateNode():
            accessor = _collect_derived_state(node, path, ctx)
            if isinstance(owner, DerivedStateNode):
                ctx.add_derived_dependency(owner.id, node.id)
        case PageNode():
            logger.warning(f'Can\'t bind to page "{node_name}" in "{reference}"')
            return

    ctx.set_accessor(reference, accessor)


# =============================================================================
# Internal: per-node collection
# =============================================================================


def _collect_node(node: StudioNode, ctx: CompilationContext) -> None:
    for prop in node.props.values():
        if isinstance(prop, BoundExpressionProp):
            parsed = bindings.parse(prop.value)
            for reference in bindings.get_interpolations(parsed):
                collect_interpolation(reference, ctx, owner=node)
        elif isinstance(prop, BindingProp):
            collect_interpolation(prop.value, ctx, owner=node)


def _collect_element_state(node: ElementNode, path: list[str], ctx: CompilationContext) -> str:
    """Allocate (or reuse) the state cell for the bound element property.

    The first path segment names the property, the rest is appended to the
    state identifier: "input.value.length" -> "inputValue.length". An authored
    constant on the property becomes the cell's initial value.
    """
    prop, *sub_path = path or [""]

    hook = ctx.get_state_hook(node.id, prop)
    if hook is None:
        component = ctx.get_component_definition(node)
        if component is None:
            raise ComponentNotFoundError(f'Can\'t find component for node "{node.id}"')

        arg_type = component.arg_types.get(prop) if prop else None
        if arg_type is None:
            raise ArgTypeNotFoundError(f'Can\'t find argType for "{node.name}.{prop}"')

        if not arg_type.is_controlled:
            raise UncontrolledPropertyError(f'"{node.name}.{prop}" is not a controlled property')

        authored = node.props.get(prop)
        initial = authored if isinstance(authored, ConstProp) else None
        hook = ctx.add_state_hook(node.id, node.name, prop, arg_type, initial)

    return ".".join([hook.state, *sub_path])


def _collect_derived_state(node: DerivedStateNode, path: list[str], ctx: CompilationContext) -> str:
    """Allocate (or reuse) the derived value, collecting the node's own bindings once."""
    identifier, created = ctx.add_derived_value(node)
    if created:
        _collect_node(node, ctx)
    return ".".join([identifier, *path])
