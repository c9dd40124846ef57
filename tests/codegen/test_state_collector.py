"""Tests for state_collector module.

Tests collect_all_state for allocating state cells and derived values from
bindings, and collect_interpolation for the per-reference edge cases.
"""

from __future__ import annotations

import logging

import pytest

from studio_codegen.codegen.errors import (
    ArgTypeNotFoundError,
    BindingParseError,
    ComponentNotFoundError,
    UncontrolledPropertyError,
)
from studio_codegen.codegen.registries import BUILTIN_COMPONENTS
from studio_codegen.codegen.state_collector import collect_all_state, collect_interpolation
from studio_codegen.models.components import (
    ArgTypeDefinition,
    ComponentDefinition,
    OnChangeHandler,
    PropValueType,
)
from tests.conftest import binding, bound, derived, element, make_ctx, make_dom

# =============================================================================
# Element state
# =============================================================================


class TestElementState:
    """Test state cells for bound element properties."""

    def test_bound_expression_allocates_state(self, input_and_button_dom):
        ctx = make_ctx(input_and_button_dom)

        collect_all_state(ctx)

        hook = ctx.get_state_hook("input", "value")
        assert hook is not None
        assert (hook.state, hook.set_state) == ("inputValue", "setInputValue")
        assert ctx.get_accessor("input.value") == "inputValue"

    def test_direct_binding_allocates_state(self):
        dom = make_dom(
            element("input", "TextField", parent_index="a0"),
            element("text", "Typography", parent_index="a1", props={"value": binding("input.value")}),
        )
        ctx = make_ctx(dom)

        collect_all_state(ctx)

        assert ctx.get_accessor("input.value") == "inputValue"

    def test_sub_path_is_appended_to_state(self):
        dom = make_dom(
            element("input", "TextField", parent_index="a0"),
            element(
                "text",
                "Typography",
                parent_index="a1",
                props={"value": bound("{{ input.value.length }} chars")},
            ),
        )
        ctx = make_ctx(dom)

        collect_all_state(ctx)

        assert ctx.get_accessor("input.value.length") == "inputValue.length"
        assert list(ctx.state_hooks) == ["input.value"]

    def test_same_pair_bound_twice_allocates_one_cell(self):
        dom = make_dom(
            element("input", "TextField", parent_index="a0"),
            element("a", "Typography", parent_index="a1", props={"value": binding("input.value")}),
            element("b", "Typography", parent_index="a2", props={"value": bound("{{input.value}}!")}),
            element("c", "Button", parent_index="a3", props={"label": bound("{{input.value}}")}),
        )
        ctx = make_ctx(dom)

        collect_all_state(ctx)

        assert len(ctx.state_hooks) == 1

    def test_unknown_component_is_fatal(self):
        dom = make_dom(
            element("mystery", "Mystery", parent_index="a0"),
            element("text", "Typography", parent_index="a1", props={"value": binding("mystery.value")}),
        )

        with pytest.raises(ComponentNotFoundError, match='Can\'t find component for node "mystery"'):
            collect_all_state(make_ctx(dom))

    def test_undeclared_property_is_fatal(self):
        dom = make_dom(
            element("input", "TextField", parent_index="a0"),
            element("text", "Typography", parent_index="a1", props={"value": binding("input.nope")}),
        )

        with pytest.raises(ArgTypeNotFoundError, match='Can\'t find argType for "input.nope"'):
            collect_all_state(make_ctx(dom))

    def test_uncontrolled_property_is_fatal(self):
        dom = make_dom(
            element("input", "TextField", parent_index="a0"),
            element("text", "Typography", parent_index="a1", props={"value": binding("input.label")}),
        )

        with pytest.raises(UncontrolledPropertyError, match='"input.label" is not a controlled'):
            collect_all_state(make_ctx(dom))

    def test_handler_without_change_property_is_fatal(self):
        handler = OnChangeHandler(params=["next"], value_getter="next")
        components = {
            "Knob": ComponentDefinition(
                arg_types={
                    "value": ArgTypeDefinition(
                        type_def=PropValueType(type="number"), on_change_handler=handler
                    ),
                },
                render=lambda ctx, props: "<Knob />",
            )
        }
        dom = make_dom(
            element("knob", "Knob", parent_index="a0"),
            element("text", "Typography", parent_index="a1", props={"value": bound("{{knob.value}}")}),
        )
        ctx = make_ctx(dom, components={**BUILTIN_COMPONENTS, **components})

        with pytest.raises(UncontrolledPropertyError, match='"knob.value" is not a controlled'):
            collect_all_state(ctx)
        assert ctx.state_hooks == {}

    def test_malformed_template_is_fatal(self):
        dom = make_dom(
            element("text", "Typography", props={"value": bound("{{ input.value")}),
        )

        with pytest.raises(BindingParseError):
            collect_all_state(make_ctx(dom))


# =============================================================================
# Tolerated references
# =============================================================================


class TestToleratedReferences:
    """Test references that are logged and skipped."""

    def test_missing_node_logs_warning(self, caplog):
        dom = make_dom(element("text", "Typography", props={"value": bound("Hi {{missing.value}}")}))
        ctx = make_ctx(dom)

        with caplog.at_level(logging.WARNING):
            collect_all_state(ctx)

        assert 'Can\'t find node with name "missing"' in caplog.text
        assert ctx.get_accessor("missing.value") is None
        assert ctx.state_hooks == {}

    def test_page_reference_logs_warning(self, caplog):
        dom = make_dom(element("text", "Typography", props={"value": binding("page.title")}))
        ctx = make_ctx(dom)

        with caplog.at_level(logging.WARNING):
            collect_all_state(ctx)

        assert 'Can\'t bind to page "page"' in caplog.text
        assert ctx.accessors == {}

    def test_collect_interpolation_directly(self):
        dom = make_dom(element("input", "TextField"))
        ctx = make_ctx(dom)

        collect_interpolation("input.value", ctx)

        assert ctx.get_accessor("input.value") == "inputValue"


# =============================================================================
# Derived state
# =============================================================================


class TestDerivedState:
    """Test derived values referenced from bindings."""

    def test_derived_reference_allocates_value(self):
        dom = make_dom(
            element("text", "Typography", props={"value": binding("total")}),
            derived("total-id", name="total"),
        )
        ctx = make_ctx(dom)

        collect_all_state(ctx)

        assert ctx.memo_hooks == {"total-id": "total"}
        assert ctx.get_accessor("total") == "total"

    def test_derived_sub_path_is_kept(self):
        dom = make_dom(
            element("text", "Typography", props={"value": binding("stats.count")}),
            derived("stats"),
        )
        ctx = make_ctx(dom)

        collect_all_state(ctx)

        assert ctx.get_accessor("stats.count") == "stats.count"

    def test_derived_props_are_collected_once_referenced(self):
        """State read only by a derived node is still allocated."""
        dom = make_dom(
            element("input", "TextField", parent_index="a0"),
            element("text", "Typography", parent_index="a1", props={"value": binding("greeting")}),
            derived(
                "greeting",
                props={"name": binding("input.value")},
                arg_types={"name": "string"},
            ),
        )
        ctx = make_ctx(dom)

        collect_all_state(ctx)

        assert ctx.get_accessor("input.value") == "inputValue"
        assert ctx.derived_dependencies["greeting"] == []

    def test_unreferenced_derived_node_is_ignored(self):
        dom = make_dom(
            element("input", "TextField"),
            derived("unused", props={"name": binding("input.value")}, arg_types={"name": "string"}),
        )
        ctx = make_ctx(dom)

        collect_all_state(ctx)

        assert ctx.memo_hooks == {}
        assert ctx.state_hooks == {}

    def test_derived_to_derived_dependency_is_recorded(self):
        dom = make_dom(
            element("text", "Typography", props={"value": binding("total")}),
            derived("total", props={"base": binding("subtotal")}, arg_types={"base": "number"}),
            derived("subtotal"),
        )
        ctx = make_ctx(dom)

        collect_all_state(ctx)

        assert list(ctx.memo_hooks) == ["total", "subtotal"]
        assert ctx.derived_dependencies["total"] == ["subtotal"]


# =============================================================================
# Two-phase discipline
# =============================================================================


def test_binding_order_independence():
    """Binding before or after the target node yields the same accessors."""
    label = {"label": bound("{{input.value}}")}
    input_first = make_dom(
        element("input", "TextField", parent_index="a0"),
        element("button", "Button", parent_index="a1", props=label),
    )
    button_first = make_dom(
        element("input", "TextField", parent_index="a1"),
        element("button", "Button", parent_index="a0", props=label),
    )

    first = make_ctx(input_first)
    second = make_ctx(button_first)
    collect_all_state(first)
    collect_all_state(second)

    assert [node.id for node in input_first.get_descendants(first.page)] == ["input", "button"]
    assert [node.id for node in button_first.get_descendants(second.page)] == ["button", "input"]
    assert first.accessors == second.accessors == {"input.value": "inputValue"}
