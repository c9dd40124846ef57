"""Built-in component catalog.

Maps component names to definitions rendering Material UI components. Each
render function registers the imports it needs through the render context.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from studio_codegen.codegen.expressions import CHILDREN_PROP, PropExpression, ResolvedProps
from studio_codegen.models.components import (
    ArgControlSpec,
    ArgTypeDefinition,
    ComponentDefinition,
    OnChangeHandler,
    PropValueType,
)

if TYPE_CHECKING:
    from studio_codegen.codegen.node_renderer import NodeRenderer

MUI_MATERIAL = "@mui/material"
MUI_DATA_GRID = "@mui/x-data-grid"

EVENT_VALUE_HANDLER = OnChangeHandler(params=["event"], value_getter="event.target.value")


def _arg(type_name: str, **kwargs) -> ArgTypeDefinition:
    return ArgTypeDefinition(type_def=PropValueType(type=type_name), **kwargs)


def _slots() -> ArgTypeDefinition:
    return _arg("element", control=ArgControlSpec(type="slots"))


def _slot() -> ArgTypeDefinition:
    return _arg("element", control=ArgControlSpec(type="slot"))


def _controlled_string(**kwargs) -> ArgTypeDefinition:
    return _arg(
        "string",
        default_value="",
        on_change_prop="onChange",
        on_change_handler=EVENT_VALUE_HANDLER,
        **kwargs,
    )


def _as_children(resolved_props: ResolvedProps, prop: str) -> ResolvedProps:
    """Move `prop` to the children position."""
    props = dict(resolved_props)
    value = props.pop(prop, None)
    if value is not None:
        props[CHILDREN_PROP] = value
    return props


# =============================================================================
# Render functions
# =============================================================================


def _render_page(ctx: NodeRenderer, resolved_props: ResolvedProps) -> str:
    container = ctx.add_import(MUI_MATERIAL, "Container", "Container")
    return ctx.render_component(container, resolved_props)


def _render_stack(ctx: NodeRenderer, resolved_props: ResolvedProps) -> str:
    stack = ctx.add_import(MUI_MATERIAL, "Stack", "Stack")
    return ctx.render_component(stack, resolved_props)


def _render_paper(ctx: NodeRenderer, resolved_props: ResolvedProps) -> str:
    paper = ctx.add_import(MUI_MATERIAL, "Paper", "Paper")
    return ctx.render_component(paper, resolved_props)


def _render_button(ctx: NodeRenderer, resolved_props: ResolvedProps) -> str:
    button = ctx.add_import(MUI_MATERIAL, "Button", "Button")
    return ctx.render_component(button, _as_children(resolved_props, "label"))


def _render_text_field(ctx: NodeRenderer, resolved_props: ResolvedProps) -> str:
    text_field = ctx.add_import(MUI_MATERIAL, "TextField", "TextField")
    return ctx.render_component(text_field, resolved_props)


def _render_select(ctx: NodeRenderer, resolved_props: ResolvedProps) -> str:
    text_field = ctx.add_import(MUI_MATERIAL, "TextField", "TextField")
    menu_item = ctx.add_import(MUI_MATERIAL, "MenuItem", "MenuItem")

    props = dict(resolved_props)
    options = ctx.render_js_expression(props.pop("options", None))
    props["select"] = PropExpression(type="expression", value="true")
    props[CHILDREN_PROP] = PropExpression(
        type="jsxFragment",
        value=(
            f"{{({options} ?? []).map((option) => "
            f"<{menu_item} key={{option}} value={{option}}>{{option}}</{menu_item}>)}}"
        ),
    )
    return ctx.render_component(text_field, props)


def _render_typography(ctx: NodeRenderer, resolved_props: ResolvedProps) -> str:
    typography = ctx.add_import(MUI_MATERIAL, "Typography", "Typography")
    return ctx.render_component(typography, _as_children(resolved_props, "value"))


def _render_data_grid(ctx: NodeRenderer, resolved_props: ResolvedProps) -> str:
    data_grid = ctx.add_import(MUI_DATA_GRID, "DataGrid", "DataGrid")
    grid = ctx.render_component(data_grid, resolved_props)
    return f'<div style={{{{ height: 350, width: "100%" }}}}>{grid}</div>'


# =============================================================================
# Registry
# =============================================================================

BUILTIN_COMPONENTS: dict[str, ComponentDefinition] = {
    "Page": ComponentDefinition(
        arg_types={"children": _slots()},
        render=_render_page,
        description="Page root container",
    ),
    "Stack": ComponentDefinition(
        arg_types={
            "direction": _arg("string", default_value="column"),
            "gap": _arg("number", default_value=2),
            "alignItems": _arg("string"),
            "children": _slots(),
        },
        render=_render_stack,
        description="One-dimensional layout",
    ),
    "Paper": ComponentDefinition(
        arg_types={
            "elevation": _arg("number", default_value=1),
            "children": _slot(),
        },
        render=_render_paper,
        description="Surface holding a single child",
    ),
    "Button": ComponentDefinition(
        arg_types={
            "label": _arg("string", default_value="Button text"),
            "variant": _arg("string", default_value="contained"),
            "fullWidth": _arg("boolean"),
            "disabled": _arg("boolean"),
        },
        render=_render_button,
        description="Clickable button",
    ),
    "TextField": ComponentDefinition(
        arg_types={
            "value": _controlled_string(),
            "label": _arg("string"),
            "variant": _arg("string", default_value="outlined"),
            "fullWidth": _arg("boolean"),
        },
        render=_render_text_field,
        description="Text input",
    ),
    "Select": ComponentDefinition(
        arg_types={
            "value": _controlled_string(),
            "label": _arg("string"),
            "options": _arg("array", default_value=[]),
            "fullWidth": _arg("boolean"),
        },
        render=_render_select,
        description="Dropdown picking one of a list of options",
    ),
    "Typography": ComponentDefinition(
        arg_types={
            "value": _arg("string", default_value="", default_value_prop="children"),
            "variant": _arg("string", default_value="body1"),
        },
        render=_render_typography,
        description="Text",
    ),
    "DataGrid": ComponentDefinition(
        arg_types={
            "dataQuery": _arg("dataQuery"),
            "rows": _arg("array"),
            "columns": _arg("array"),
            "density": _arg("string", default_value="compact"),
        },
        render=_render_data_grid,
        description="Table of rows loaded from a data query",
    ),
}
