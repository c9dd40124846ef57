"""Tests for the binding expression service."""

import pytest

from studio_codegen.codegen import bindings
from studio_codegen.codegen.bindings import InterpolationPart, TextPart
from studio_codegen.codegen.errors import (
    BindingFormatError,
    BindingParseError,
    UnresolvedInterpolationError,
)

IDENTIFIERS = {"input.value": "inputValue", "total": "total", "rows.0.name": "rows[0].name"}


def _format(template: str, format_hint: str | None = None) -> str:
    parsed = bindings.parse(template)
    resolved = bindings.resolve(parsed, IDENTIFIERS.get)
    return bindings.format(resolved, format_hint)


# =============================================================================
# parse / get_interpolations
# =============================================================================


class TestParse:
    """Test template parsing."""

    def test_text_only(self):
        """Plain text is a single text part."""
        parsed = bindings.parse("Hello")
        assert parsed.parts == (TextPart("Hello"),)

    def test_text_and_interpolation(self):
        """Text and interpolations keep their source order."""
        parsed = bindings.parse("Hello {{input.value}}!")
        assert parsed.parts == (
            TextPart("Hello "),
            InterpolationPart("input.value"),
            TextPart("!"),
        )

    def test_whitespace_inside_braces_is_ignored(self):
        """`{{ a.b }}` references `a.b`."""
        parsed = bindings.parse("{{  input.value  }}")
        assert bindings.get_interpolations(parsed) == ["input.value"]

    def test_interpolations_in_source_order(self):
        """All references are returned, duplicates included."""
        parsed = bindings.parse("{{b.x}} and {{a.y}} and {{b.x}}")
        assert bindings.get_interpolations(parsed) == ["b.x", "a.y", "b.x"]

    def test_no_interpolations(self):
        """Text-only templates have no references."""
        assert bindings.get_interpolations(bindings.parse("static")) == []

    def test_empty_template(self):
        """An empty template has no parts."""
        assert bindings.parse("").parts == ()

    def test_array_index_segments(self):
        """Path segments after the node name may be numeric."""
        parsed = bindings.parse("{{ rows.0.name }}")
        assert bindings.get_interpolations(parsed) == ["rows.0.name"]

    def test_unterminated_interpolation(self):
        """A missing `}}` is a parse error at the opening braces."""
        with pytest.raises(BindingParseError, match="unterminated") as exc_info:
            bindings.parse("Hi {{input.value")
        assert exc_info.value.position == 3

    def test_empty_interpolation(self):
        """`{{ }}` is a parse error."""
        with pytest.raises(BindingParseError, match="empty interpolation"):
            bindings.parse("a {{ }} b")

    def test_nested_interpolation(self):
        """`{{` inside an interpolation is a parse error."""
        with pytest.raises(BindingParseError, match="nested interpolation"):
            bindings.parse("{{ a {{ b.c }} }}")

    def test_invalid_reference(self):
        """Only dotted identifier paths are references."""
        with pytest.raises(BindingParseError, match="invalid reference"):
            bindings.parse("{{ a.value + 1 }}")

    def test_reference_starting_with_digit(self):
        """The node name must be an identifier."""
        with pytest.raises(BindingParseError, match="invalid reference"):
            bindings.parse("{{ 1a.value }}")


# =============================================================================
# resolve / format
# =============================================================================


class TestFormat:
    """Test formatting resolved expressions to JS."""

    def test_lone_interpolation_is_bare_expression(self):
        """A template that is one interpolation renders as that expression."""
        assert _format("{{input.value}}") == "inputValue"

    def test_text_only_is_string_literal(self):
        """Text-only templates render as a JSON string literal."""
        assert _format('Say "hi"') == '"Say \\"hi\\""'

    def test_mixed_is_template_literal(self):
        """Text plus interpolations render as a template literal."""
        assert _format("Hello {{input.value}}!") == "`Hello ${inputValue}!`"

    def test_string_literal_directive(self):
        """stringLiteral always produces a template literal."""
        assert _format("{{total}}", "stringLiteral") == "`${total}`"

    def test_number_directive(self):
        """number wraps the default rendering in Number()."""
        assert _format("{{total}}", "number") == "Number(total)"
        assert _format("{{total}}0", "number") == "Number(`${total}0`)"

    def test_resolved_path_is_substituted(self):
        """Interpolations are replaced with the looked-up code."""
        assert _format("{{ rows.0.name }}") == "rows[0].name"

    def test_template_text_is_escaped(self):
        """Backticks, `${` and backslashes in text can't break out of the literal."""
        assert _format("a`b${c}\\ {{total}}") == "`a\\`b\\${c}\\\\ ${total}`"

    def test_template_newlines_are_escaped(self):
        """Line breaks in text are escaped in template literals."""
        assert _format("line\n{{total}}") == "`line\\n${total}`"

    def test_unknown_directive(self):
        """An unknown directive is a format error."""
        with pytest.raises(BindingFormatError, match="Unknown binding format 'currency'"):
            _format("{{total}}", "currency")

    def test_unresolved_interpolation(self):
        """Formatting a reference the lookup didn't resolve is an error."""
        with pytest.raises(UnresolvedInterpolationError, match="missing.value"):
            _format("Hi {{missing.value}}")

    def test_resolve_calls_lookup_per_interpolation(self):
        """resolve asks the lookup for every interpolation in order."""
        seen = []

        def lookup(reference):
            seen.append(reference)
            return reference.replace(".", "_")

        parsed = bindings.parse("{{a.x}}-{{b.y}}")
        resolved = bindings.resolve(parsed, lookup)

        assert seen == ["a.x", "b.y"]
        assert bindings.format(resolved) == "`${a_x}-${b_y}`"
