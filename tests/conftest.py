"""Shared test fixtures and document builders."""

from typing import Any

import pytest

from studio_codegen.codegen import render_page_code
from studio_codegen.codegen.context import CompilationContext
from studio_codegen.codegen.registries import BUILTIN_COMPONENTS
from studio_codegen.models.components import ComponentCatalog, PropValueType
from studio_codegen.models.dom import (
    BindingProp,
    BoundExpressionProp,
    ConstProp,
    DerivedStateNode,
    ElementNode,
    PageNode,
    StudioDom,
    StudioNode,
)
from studio_codegen.models.render import RenderPageConfig

PAGE_ID = "page"


# =============================================================================
# Property builders
# =============================================================================


def const(value: Any) -> ConstProp:
    return ConstProp(value=value)


def binding(reference: str) -> BindingProp:
    return BindingProp(value=reference)


def bound(template: str, format: str | None = None) -> BoundExpressionProp:
    return BoundExpressionProp(value=template, format=format)


# =============================================================================
# Node builders
# =============================================================================


def page_node(node_id: str = PAGE_ID, name: str | None = None, props: dict | None = None) -> PageNode:
    return PageNode(id=node_id, name=name or node_id, props=props or {})


def element(
    node_id: str,
    component: str,
    *,
    name: str | None = None,
    parent_id: str | None = PAGE_ID,
    parent_prop: str | None = "children",
    parent_index: str | None = "a0",
    props: dict | None = None,
) -> ElementNode:
    """Element node placed in the page by default. Name defaults to the id."""
    return ElementNode(
        id=node_id,
        name=name or node_id,
        component=component,
        parent_id=parent_id,
        parent_prop=parent_prop,
        parent_index=parent_index,
        props=props or {},
    )


def derived(
    node_id: str,
    *,
    name: str | None = None,
    props: dict | None = None,
    arg_types: dict[str, str] | None = None,
) -> DerivedStateNode:
    """Derived state node. `arg_types` maps argument names to type names."""
    return DerivedStateNode(
        id=node_id,
        name=name or node_id,
        props=props or {},
        arg_types={arg: PropValueType(type=type_name) for arg, type_name in (arg_types or {}).items()},
    )


def make_dom(*nodes: StudioNode) -> StudioDom:
    """Document holding `nodes`, with a default page prepended if none is given."""
    if not any(isinstance(node, PageNode) for node in nodes):
        nodes = (page_node(), *nodes)
    return StudioDom.from_nodes(nodes)


def make_ctx(
    dom: StudioDom,
    page_id: str = PAGE_ID,
    editor: bool = False,
    components: ComponentCatalog | None = None,
) -> CompilationContext:
    return CompilationContext(
        dom=dom,
        page=dom.get_node(page_id),
        components=BUILTIN_COMPONENTS if components is None else components,
        editor=editor,
    )


def render(dom: StudioDom, page_id: str = PAGE_ID, **config: Any) -> str:
    """Compile a page and return the module source."""
    return render_page_code(dom, page_id, RenderPageConfig(**config)).code


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def input_and_button_dom() -> StudioDom:
    """A text input and a button whose label greets the input's value."""
    return make_dom(
        element("input", "TextField", parent_index="a0"),
        element(
            "button",
            "Button",
            parent_index="a1",
            props={"label": bound("Hello {{input.value}}")},
        ),
    )
