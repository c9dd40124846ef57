"""Binding expression service.

A bound property holds a template such as ``"Hello {{input.value}}"``. The
compiler uses this module as a pure-function contract:

1. parse(template)                -> ParsedExpression
2. get_interpolations(parsed)     -> references in source order
3. resolve(parsed, lookup)        -> ResolvedExpression (references -> identifiers)
4. format(resolved, format_hint)  -> JS expression text
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .errors import BindingFormatError, BindingParseError, UnresolvedInterpolationError

OPEN = "{{"
CLOSE = "}}"

# <nodeName>.<path>; path segments after the node name may be array indices
REFERENCE_PATTERN = re.compile(r"^[A-Za-z_$][\w$]*(?:\.[\w$]+)*$")


class BindingFormat(str, Enum):
    """Formatting directives for bound expressions."""

    DEFAULT = "default"
    STRING_LITERAL = "stringLiteral"
    NUMBER = "number"


@dataclass(frozen=True)
class TextPart:
    """Literal text between interpolations."""

    value: str


@dataclass(frozen=True)
class InterpolationPart:
    """A `{{ reference }}` interpolation."""

    reference: str


@dataclass(frozen=True)
class ParsedExpression:
    parts: tuple[TextPart | InterpolationPart, ...]


@dataclass(frozen=True)
class ResolvedInterpolation:
    """An interpolation together with the code it resolved to (None if unresolved)."""

    reference: str
    code: str | None


@dataclass(frozen=True)
class ResolvedExpression:
    parts: tuple[TextPart | ResolvedInterpolation, ...]


def parse(template: str) -> ParsedExpression:
    """Parse a binding template into text and interpolation parts.

    Raises:
        BindingParseError: On unterminated, empty, nested or invalid interpolations.
    """
    parts: list[TextPart | InterpolationPart] = []
    position = 0
    while position < len(template):
        start = template.find(OPEN, position)
        if start < 0:
            parts.append(TextPart(template[position:]))
            break
        if start > position:
            parts.append(TextPart(template[position:start]))

        end = template.find(CLOSE, start + len(OPEN))
        if end < 0:
            raise BindingParseError(template, start, "unterminated interpolation")

        content = template[start + len(OPEN) : end]
        if OPEN in content:
            raise BindingParseError(template, start, "nested interpolation")
        reference = content.strip()
        if not reference:
            raise BindingParseError(template, start, "empty interpolation")
        if not REFERENCE_PATTERN.match(reference):
            raise BindingParseError(template, start, f"invalid reference {reference!r}")

        parts.append(InterpolationPart(reference))
        position = end + len(CLOSE)
    return ParsedExpression(parts=tuple(parts))


def get_interpolations(parsed: ParsedExpression) -> list[str]:
    """References of all interpolations, in source order."""
    return [part.reference for part in parsed.parts if isinstance(part, InterpolationPart)]


def resolve(parsed: ParsedExpression, lookup: Callable[[str], str | None]) -> ResolvedExpression:
    """Substitute each interpolation with the identifier `lookup` returns for it."""
    parts: list[TextPart | ResolvedInterpolation] = []
    for part in parsed.parts:
        if isinstance(part, InterpolationPart):
            parts.append(ResolvedInterpolation(part.reference, lookup(part.reference)))
        else:
            parts.append(part)
    return ResolvedExpression(parts=tuple(parts))


def format(resolved: ResolvedExpression, format_hint: str | None = None) -> str:  # noqa: A001
    """Serialize a resolved expression to JS expression text.

    Raises:
        BindingFormatError: If `format_hint` is not a known directive.
        UnresolvedInterpolationError: If an interpolation has no resolved code.
    """
    try:
        directive = BindingFormat(format_hint or BindingFormat.DEFAULT)
    except ValueError:
        raise BindingFormatError(f"Unknown binding format {format_hint!r}") from None

    for part in resolved.parts:
        if isinstance(part, ResolvedInterpolation) and part.code is None:
            raise UnresolvedInterpolationError(f"Unresolved interpolation {part.reference!r}")

    match directive:
        case BindingFormat.STRING_LITERAL:
            return _template_literal(resolved)
        case BindingFormat.NUMBER:
            return f"Number({_default_expression(resolved)})"
        case BindingFormat.DEFAULT:
            return _default_expression(resolved)


def _default_expression(resolved: ResolvedExpression) -> str:
    parts = resolved.parts
    if len(parts) == 1 and isinstance(parts[0], ResolvedInterpolation):
        return parts[0].code
    if all(isinstance(part, TextPart) for part in parts):
        return json.dumps("".join(part.value for part in parts))
    return _template_literal(resolved)


def _template_literal(resolved: ResolvedExpression) -> str:
    out = ["`"]
    for part in resolved.parts:
        if isinstance(part, TextPart):
            out.append(_escape_template(part.value))
        else:
            out.append(f"${{{part.code}}}")
    out.append("`")
    return "".join(out)


def _escape_template(s: str) -> str:
    """Escape for template literal strings."""
    return (
        s.replace("\\", "\\\\")
        .replace("`", "\\`")
        .replace("${", "\\${")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
