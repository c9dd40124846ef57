"""Naming helpers for generated identifiers."""

from __future__ import annotations

import re

_INVALID_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_$]")

# ECMAScript reserved words plus globals we never want to shadow
RESERVED_WORDS = frozenset(
    {
        "await",
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "implements",
        "import",
        "in",
        "instanceof",
        "interface",
        "let",
        "new",
        "null",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "static",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "yield",
        "undefined",
        "NaN",
        "Infinity",
        "arguments",
        "eval",
    }
)


def capitalize(value: str) -> str:
    """Upper-case the first character, leave the rest untouched."""
    return value[:1].upper() + value[1:]


def camel_case(*parts: str) -> str:
    """Join parts into a camelCase name.

    The first part is kept as is, following parts are capitalized:
    camel_case("set", "input", "value") == "setInputValue".
    """
    if not parts:
        return ""
    first, *rest = parts
    return first + "".join(capitalize(part) for part in rest)


def to_identifier(value: str) -> str:
    """Turn an arbitrary string into a syntactically valid JS identifier."""
    name = _INVALID_IDENTIFIER_CHARS.sub("_", value)
    if not name:
        return "_"
    if name[0].isdigit():
        return f"_{name}"
    return name
