"""
End-to-end behaviour of parse + render.
"""

import pytest

from sauce import (
    ModifierRegistry,
    ParseError,
    ParseErrorReason,
    RenderError,
    RenderErrorReason,
    parse,
    render,
)


class TestRenderingLaws:

    @pytest.mark.parametrize("text", [
        "",
        "plain",
        "multi\nline\n\ttext",
        "braces { } }} single {",
        "pipes | and: colons, commas",
        "unicode: привет, 日本語",
    ])
    def test_text_without_markers_is_unchanged(self, registry, text):
        assert render(parse(text), {"x": "ignored"}, registry) == text

    def test_empty_template(self, registry):
        assert render(parse(""), {}, registry) == ""

    def test_upper(self, registry):
        assert render(parse("{{x|upper}}"), {"x": "ab"}, registry) == "AB"

    def test_custom_override_of_builtin(self, registry):
        registry.register_modifier("upper", lambda value, args, context: str(value).lower())

        assert render(parse("{{x|upper}}"), {"x": "AB"}, registry) == "ab"

    def test_chain_order_symmetric_pair(self, registry):
        assert render(parse("{{x|upper|truncate:2}}"), {"x": "hello"}, registry) == "HE"
        assert render(parse("{{x|truncate:2|upper}}"), {"x": "hello"}, registry) == "HE"

    def test_chain_order_default_before_transform(self, registry):
        """default runs first, then the substituted value is clipped"""
        assert render(parse("{{missing|default:abc|truncate:1}}"), {}, registry) == "a"

    def test_chain_order_default_after_transform(self, registry):
        """truncate keeps absence, so default substitutes the full literal"""
        assert render(parse("{{missing|truncate:1|default:abc}}"), {}, registry) == "abc"

    def test_missing_variable(self, registry):
        assert render(parse("{{missing}}"), {}, registry) == ""

    def test_missing_variable_with_default(self, registry):
        assert render(parse("{{missing|default:N/A}}"), {}, registry) == "N/A"

    def test_unknown_modifier(self, registry):
        with pytest.raises(RenderError) as exc_info:
            render(parse("{{x|doesNotExist}}"), {"x": "a"}, registry)

        assert exc_info.value.reason == RenderErrorReason.UNKNOWN_MODIFIER
        assert exc_info.value.modifier == "doesNotExist"

    def test_unterminated_placeholder(self):
        with pytest.raises(ParseError) as exc_info:
            parse("{{x")

        assert exc_info.value.reason == ParseErrorReason.UNTERMINATED_PLACEHOLDER
        assert exc_info.value.position == 0

    def test_escaped_marker_renders_literally(self, render_source):
        assert render_source("Use {{{{ name }} for {{ what }}", what="names") == "Use {{ name }} for names"

    def test_empty_registry_rejects_builtins(self):
        with pytest.raises(RenderError):
            render(parse("{{x|upper}}"), {"x": "a"}, ModifierRegistry())
