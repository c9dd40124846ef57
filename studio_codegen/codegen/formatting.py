"""Output normalisation for `pretty` mode.

This is a whitespace-level formatter, not a JS pretty-printer: it drops blank
lines and trailing whitespace, separates the import header from the body and
re-indents every line by its bracket depth. Lines that continue a multi-line
template literal are literal content and pass through untouched.
"""

from __future__ import annotations

INDENT = "  "

_OPENERS = "([{"
_CLOSERS = ")]}"
_QUOTES = "\"'`"
_TEMPLATE_QUOTE = "`"


def format_code(code: str) -> str:
    """Normalise whitespace and indentation of generated module text."""
    lines: list[str] = []
    depth = 0
    previous_import = False
    quote: str | None = None

    for raw_line in code.splitlines():
        if quote is not None:
            lines.append(raw_line)
            delta, quote = _scan(raw_line, quote)
            depth = max(depth + delta, 0)
            continue

        line = raw_line.strip()
        if not line:
            continue

        is_import = line.startswith("import ")
        if previous_import and not is_import:
            lines.append("")
        previous_import = is_import

        indent = max(depth - _leading_closers(line), 0)
        delta, quote = _scan(line, None)
        if quote is not None:
            # trailing whitespace belongs to the open literal
            line = raw_line.lstrip()
        lines.append(f"{INDENT * indent}{line}")
        depth = max(depth + delta, 0)

    return "\n".join(lines) + "\n"


def _leading_closers(line: str) -> int:
    count = 0
    for char in line:
        if char not in _CLOSERS:
            break
        count += 1
    return count


def _scan(line: str, quote: str | None) -> tuple[int, str | None]:
    """Net bracket depth change of a line, ignoring string and template literals.

    `quote` is the literal open at the start of the line. Returns the delta and
    the literal still open at its end; only template literals span lines.
    """
    delta = 0
    escaped = False
    for char in line:
        if quote is not None:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            delta += 1
        elif char in _CLOSERS:
            delta -= 1
    if quote != _TEMPLATE_QUOTE:
        quote = None
    return delta, quote
