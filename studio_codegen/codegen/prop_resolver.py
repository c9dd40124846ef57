"""Property resolver: turns a node's properties into renderable expressions.

Three sources are merged, in order, into one resolved property set:

1. User props     - constants, direct bindings and bound expressions
2. State wiring   - controlled props read their state cell, change props write it
3. Default values - declared defaults for anything still unresolved

Resolved child content passed in by the renderer takes precedence over all of them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from studio_codegen.models.dom import (
    BindingProp,
    BoundExpressionProp,
    ConstProp,
    StudioNode,
)

from . import bindings
from .errors import UnsupportedBindingError
from .expressions import SPREAD_PROP, UNDEFINED, ResolvedProps, expression, literal

if TYPE_CHECKING:
    from studio_codegen.models.components import ComponentDefinition

    from .context import CompilationContext

logger = logging.getLogger(__name__)

DATA_QUERY_TYPE = "dataQuery"


# =============================================================================
# Public API
# =============================================================================


def resolve_props(
    node: StudioNode,
    resolved_children: ResolvedProps,
    ctx: CompilationContext,
) -> ResolvedProps:
    """Resolve a node's properties to expressions we can render in the code.

    This sets up data binding and data loaders where necessary.

    Args:
        node: The node whose properties to resolve.
        resolved_children: Already rendered child content, keyed by slot name.
        ctx: Compilation context with the accessors collected for the page.

    Returns:
        The resolved props, starting with `resolved_children`.

    Raises:
        UnsupportedBindingError: If a query-typed property isn't a constant.
        BindingParseError: If a bound expression template is malformed.
    """
    result: ResolvedProps = dict(resolved_children)

    _resolve_user_props(node, result, ctx)

    component = ctx.get_component_definition(node)
    if component is not None:
        _resolve_state_hooks(node, component, result, set(resolved_children), ctx)
        _resolve_default_values(component, result)

    return result


# =============================================================================
# Internal: resolution phases
# =============================================================================


def _resolve_user_props(node: StudioNode, result: ResolvedProps, ctx: CompilationContext) -> None:
    prop_types = ctx.get_prop_types(node)

    for prop_name, prop_value in node.props.items():
        prop_type = prop_types.get(prop_name)
        if prop_type is None or prop_value is None or prop_name in result:
            continue

        if prop_type.type == DATA_QUERY_TYPE:
            if not isinstance(prop_value, ConstProp):
                raise UnsupportedBindingError(
                    f'Binding query property "{node.name}.{prop_name}" is not supported yet'
                )
            if prop_value.value and isinstance(prop_value.value, str):
                variable = ctx.use_data_loader(prop_value.value)
                _append_spread(result, f"{{...{variable}}}")
        elif isinstance(prop_value, ConstProp):
            result[prop_name] = literal(prop_value.value)
        elif isinstance(prop_value, BoundExpressionProp):
            parsed = bindings.parse(prop_value.value)
            # Resolve each referenced node value to its variable in code
            resolved = bindings.resolve(parsed, lambda ref: ctx.get_accessor(ref) or UNDEFINED)
            result[prop_name] = expression(bindings.format(resolved, prop_value.format))
        elif isinstance(prop_value, BindingProp):
            result[prop_name] = expression(ctx.get_accessor(prop_value.value) or UNDEFINED)
        else:
            logger.warning(
                f'Unknown prop type "{prop_value.type}" for "{node.name}.{prop_name}", omitting it'
            )


def _resolve_state_hooks(
    node: StudioNode,
    component: ComponentDefinition,
    result: ResolvedProps,
    child_props: set[str],
    ctx: CompilationContext,
) -> None:
    for prop_name, arg_type in component.arg_types.items():
        if arg_type is None or prop_name in child_props:
            continue

        hook = ctx.get_state_hook(node.id, prop_name)
        if hook is None:
            continue

        result[prop_name] = expression(hook.state)

        if arg_type.on_change_prop:
            if arg_type.on_change_handler:
                params = ", ".join(arg_type.on_change_handler.params)
                value_getter = arg_type.on_change_handler.value_getter
                result[arg_type.on_change_prop] = expression(
                    f"({params}) => {hook.set_state}({value_getter})"
                )
            else:
                result[arg_type.on_change_prop] = expression(hook.set_state)


def _resolve_default_values(component: ComponentDefinition, result: ResolvedProps) -> None:
    for prop_name, arg_type in component.arg_types.items():
        if arg_type is None or not arg_type.has_default or prop_name in result:
            continue
        default_prop_name = arg_type.default_value_prop or prop_name
        if default_prop_name not in result:
            result[default_prop_name] = literal(arg_type.default_value)


def _append_spread(result: ResolvedProps, spread: str) -> None:
    existing = result.get(SPREAD_PROP)
    result[SPREAD_PROP] = expression(f"{existing.value} {spread}" if existing else spread)
