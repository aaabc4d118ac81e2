"""
Tests for the render context.
"""

from dataclasses import dataclass

import pytest

from sauce.context import RenderContext, as_render_context
from sauce.values import ABSENT, is_empty, to_text


@dataclass
class Address:
    city: str


@dataclass
class User:
    name: str
    address: Address
    _secret: str = "hidden"

    def greet(self):
        return "hi"


class Broken:

    @property
    def missing(self):
        raise AttributeError("missing")

    @property
    def value(self):
        raise RuntimeError("boom")


class TestRenderContext:

    def setup_method(self):
        self.context = RenderContext({
            "name": "Ada",
            "nothing": None,
            "user": User("Ada", Address("London")),
            "items": ["zero", "one"],
            "nested": {"a": {"b": 1}},
            "dotted.key": "literal",
        })

    def test_simple_lookup(self):
        assert self.context.lookup("name") == "Ada"

    def test_missing(self):
        assert self.context.lookup("missing") is ABSENT
        assert self.context.lookup("nested.a.missing") is ABSENT

    def test_none_is_absent(self):
        assert self.context.lookup("nothing") is ABSENT

    def test_nested_mapping(self):
        assert self.context.lookup("nested.a.b") == 1

    def test_sequence_index(self):
        assert self.context.lookup("items.1") == "one"
        assert self.context.lookup("items.5") is ABSENT
        assert self.context.lookup("items.first") is ABSENT

    def test_attributes(self):
        assert self.context.lookup("user.address.city") == "London"

    def test_private_and_callable_attributes_hidden(self):
        assert self.context.lookup("user._secret") is ABSENT
        assert self.context.lookup("user.greet") is ABSENT
        assert self.context.lookup("name.upper") is ABSENT

    def test_property_attribute_error_is_absent(self):
        context = RenderContext({"obj": Broken()})

        assert context.lookup("obj.missing") is ABSENT

    def test_property_errors_propagate(self):
        context = RenderContext({"obj": Broken()})

        with pytest.raises(RuntimeError, match="boom"):
            context.lookup("obj.value")

    def test_literal_dotted_key_wins(self):
        assert self.context.lookup("dotted.key") == "literal"

    def test_read_only(self):
        with pytest.raises(TypeError):
            self.context["name"] = "Bob"

    def test_copy_of_values(self):
        values = {"x": 1}
        context = RenderContext(values)
        values["x"] = 2

        assert context.lookup("x") == 1

    def test_mapping_protocol(self):
        context = RenderContext({"a": 1, "b": 2})

        assert len(context) == 2
        assert sorted(context) == ["a", "b"]
        assert context["a"] == 1

    def test_with_values(self):
        context = RenderContext({"a": 1, "b": 2}, locale="fr_FR")
        merged = context.with_values({"b": 3})

        assert dict(merged) == {"a": 1, "b": 3}
        assert merged.locale == "fr_FR"
        assert context["b"] == 2

    def test_as_render_context(self):
        assert as_render_context(self.context) is self.context
        assert isinstance(as_render_context({"a": 1}), RenderContext)
        assert len(as_render_context(None)) == 0


class TestValues:

    def test_absent_is_falsy_singleton(self):
        assert not ABSENT
        assert type(ABSENT)() is ABSENT
        assert repr(ABSENT) == "ABSENT"

    @pytest.mark.parametrize("value,expected", [
        (ABSENT, True),
        (None, True),
        ("", True),
        (" ", False),
        (0, False),
        (False, False),
        ([], False),
    ])
    def test_is_empty(self, value, expected):
        assert is_empty(value) is expected

    @pytest.mark.parametrize("value,expected", [
        (ABSENT, ""),
        (None, ""),
        (True, "true"),
        (False, "false"),
        (7, "7"),
        ("text", "text"),
    ])
    def test_to_text(self, value, expected):
        assert to_text(value) == expected
