"""Resolved property expressions and their JS/JSX renderings."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal

# Resolved-props key for verbatim JSX spread attributes, e.g. "{...users}"
SPREAD_PROP = "$spread"
CHILDREN_PROP = "children"

UNDEFINED = "undefined"
NULL = "null"


@dataclass(frozen=True)
class PropExpression:
    """A piece of generated code and the syntactic position it can be used in.

    - expression: a JS expression
    - jsxElement: a JSX element, usable both as expression and as JSX content
    - jsxFragment: JSX content that needs `<>...</>` to become an expression
    """

    type: Literal["expression", "jsxElement", "jsxFragment"]
    value: str


ResolvedProps = dict[str, PropExpression]


def expression(value: str) -> PropExpression:
    return PropExpression(type="expression", value=value)


def js_literal(value: Any) -> str:
    """Serialize a JSON-compatible value as a JS literal expression."""
    return json.dumps(value)


def literal(value: Any) -> PropExpression:
    return expression(js_literal(value))


def render_js_expression(expr: PropExpression | None) -> str:
    """Render an expression usable e.g. as the right-hand side of an assignment.

    Example: `const hello = ${RESULT}`
    """
    if expr is None:
        return UNDEFINED
    if expr.type == "jsxFragment":
        return f"<>{expr.value}</>"
    return expr.value


def render_jsx_content(expr: PropExpression | None) -> str:
    """Render an expression to inline as children of a JSX element.

    Example: `<Hello>${RESULT}</Hello>`
    """
    if expr is None:
        return ""
    if expr.type in ("jsxElement", "jsxFragment"):
        return expr.value
    return f"{{{render_js_expression(expr)}}}"


def render_props(resolved_props: ResolvedProps) -> str:
    """Render resolved props as JSX attributes.

    Example: `<Hello ${RESULT} />`
    """
    attributes = []
    for name, expr in resolved_props.items():
        if name == SPREAD_PROP:
            attributes.append(expr.value)
        else:
            attributes.append(f"{name}={{{render_js_expression(expr)}}}")
    return " ".join(attributes)


def render_props_as_object(resolved_props: ResolvedProps) -> str:
    """Render resolved props as a JS object literal.

    Example: `const hello = ${RESULT}` gives `const hello = {"foo": "bar"}`
    Spread markers are JSX-only and are left out.
    """
    pairs = []
    for name, expr in resolved_props.items():
        if name != SPREAD_PROP:
            pairs.append(f"{json.dumps(name)}: {render_js_expression(expr)}")
    return f"{{{', '.join(pairs)}}}"


def render_component(name: str, resolved_props: ResolvedProps) -> str:
    """Render a JSX element for component `name`, children as JSX content."""
    props = {key: value for key, value in resolved_props.items() if key != CHILDREN_PROP}
    children = resolved_props.get(CHILDREN_PROP)
    attributes = render_props(props)
    opening = f"{name} {attributes}" if attributes else name
    if children is None:
        return f"<{opening} />"
    return f"<{opening}>{render_jsx_content(children)}</{name}>"
