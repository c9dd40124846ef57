"""Declaration blocks of the generated component body.

- State hooks:        one React.useState per reactive state cell
- Derived state:      one React.useMemo per referenced derived state node
- Data loader hooks:  one useDataQuery per registered query

Derived state and data loaders may register imports, so they must be rendered
before the import table is sealed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from studio_codegen.models.dom import assert_is_derived_state

from .errors import BindingCycleError
from .expressions import (
    SPREAD_PROP,
    UNDEFINED,
    js_literal,
    render_js_expression,
    render_props_as_object,
)
from .naming import camel_case
from .prop_resolver import resolve_props

if TYPE_CHECKING:
    from .context import CompilationContext

DATA_QUERY_MODULE = "@mui/studio-core"
DATA_QUERY_HOOK = "useDataQuery"


def derived_state_module(node_id: str) -> str:
    """Module holding the getter function of a derived state node."""
    return f"../derivedState/{node_id}.ts"


def render_state_hooks(ctx: CompilationContext) -> list[str]:
    lines = []
    for hook in ctx.state_hooks.values():
        default_value = js_literal(hook.default_value) if hook.has_default else UNDEFINED
        lines.append(
            f"const [{hook.state}, {hook.set_state}] = {ctx.react_alias}.useState({default_value});"
        )
    return lines


def render_derived_state_hooks(ctx: CompilationContext) -> list[str]:
    """Render memoized derived values, each after the derived values it reads.

    Each value recomputes only when one of its resolved dependencies changes.

    Raises:
        BindingCycleError: If derived values depend on each other in a cycle.
    """
    lines = []
    for node_id in order_derived_values(ctx):
        node = assert_is_derived_state(ctx.dom.get_node(node_id))
        resolved_props = resolve_props(node, {}, ctx)
        resolved_props.pop(SPREAD_PROP, None)

        params = render_props_as_object(resolved_props)
        deps = ", ".join(render_js_expression(expr) for expr in resolved_props.values())
        getter = ctx.add_import(
            derived_state_module(node.id), "default", camel_case(node.name, "getter")
        )
        lines.append(
            f"const {ctx.memo_hooks[node_id]} = {ctx.react_alias}.useMemo("
            f"() => {getter}({params}), [{deps}]);"
        )
    return lines


def render_data_loader_hooks(ctx: CompilationContext) -> list[str]:
    if not ctx.data_loaders:
        return []

    use_data_query = ctx.add_import(DATA_QUERY_MODULE, DATA_QUERY_HOOK, DATA_QUERY_HOOK)
    return [
        f"const {loader.variable} = {use_data_query}({js_literal(loader.query_id)});"
        for loader in ctx.data_loaders
    ]


def order_derived_values(ctx: CompilationContext) -> list[str]:
    """Derived node ids in allocation order, dependencies first.

    Raises:
        BindingCycleError: If the dependency graph has a cycle.
    """
    ordered: list[str] = []
    done: set[str] = set()
    visiting: list[str] = []

    def visit(node_id: str) -> None:
        if node_id in done:
            return
        if node_id in visiting:
            cycle = visiting[visiting.index(node_id) :] + [node_id]
            raise BindingCycleError([ctx.dom.get_node(item).name for item in cycle])
        visiting.append(node_id)
        for dependency in ctx.derived_dependencies.get(node_id, []):
            visit(dependency)
        visiting.pop()
        done.add(node_id)
        ordered.append(node_id)

    for node_id in ctx.memo_hooks:
        visit(node_id)
    return ordered
