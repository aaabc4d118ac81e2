"""
Tests for the modifier registry.
"""

import pytest

from sauce.errors import RegistryFrozenError
from sauce.modifiers.builtins import BUILTIN_MODIFIERS
from sauce.modifiers.registry import ModifierRegistry


def shout(value, args, context):
    return f"{value}!"


class TestModifierRegistry:

    def setup_method(self):
        self.registry = ModifierRegistry.with_builtins()

    def test_empty_registry(self):
        registry = ModifierRegistry()
        assert len(registry) == 0
        assert registry.resolve("upper") is None

    def test_with_builtins(self):
        assert self.registry.names() == sorted(BUILTIN_MODIFIERS)
        for name in ("upper", "lower", "default", "truncate", "escape"):
            assert name in self.registry
            assert self.registry.resolve(name) is BUILTIN_MODIFIERS[name]

    def test_resolve_unknown(self):
        assert self.registry.resolve("doesNotExist") is None
        assert "doesNotExist" not in self.registry

    def test_register_new_modifier(self):
        self.registry.register_modifier("shout", shout)

        assert self.registry.resolve("shout") is shout

    def test_override_builtin(self):
        """Last registration for a name wins"""
        def first(value, args, context):
            return "first"

        def second(value, args, context):
            return "second"

        self.registry.register_modifier("upper", first)
        self.registry.register_modifier("upper", second)

        assert self.registry.resolve("upper") is second

    def test_decorator(self):
        @self.registry.modifier()
        def reverse(value, args, context):
            return str(value)[::-1]

        @self.registry.modifier("rev2")
        def another(value, args, context):
            return value

        assert self.registry.resolve("reverse") is reverse
        assert self.registry.resolve("rev2") is another
        assert "another" not in self.registry

    @pytest.mark.parametrize("name", ["", "1up", "with space", "a-b", "a.b", None])
    def test_invalid_names(self, name):
        with pytest.raises(ValueError):
            self.registry.register_modifier(name, shout)

    def test_non_callable(self):
        with pytest.raises(TypeError):
            self.registry.register_modifier("broken", "not a function")

    def test_unregister(self):
        self.registry.unregister_modifier("upper")
        assert self.registry.resolve("upper") is None

        with pytest.raises(KeyError):
            self.registry.unregister_modifier("upper")

    def test_registries_are_independent(self):
        other = ModifierRegistry.with_builtins()
        self.registry.register_modifier("shout", shout)
        self.registry.unregister_modifier("lower")

        assert "shout" not in other
        assert "lower" in other

    def test_freeze(self):
        frozen = self.registry.freeze()

        assert frozen is self.registry
        assert self.registry.is_frozen
        assert self.registry.resolve("upper") is not None

        with pytest.raises(RegistryFrozenError):
            self.registry.register_modifier("shout", shout)
        with pytest.raises(RegistryFrozenError):
            self.registry.unregister_modifier("upper")

    def test_copy_is_mutable_and_independent(self):
        self.registry.freeze()
        copy = self.registry.copy()

        assert not copy.is_frozen
        copy.register_modifier("shout", shout)
        assert "shout" in copy
        assert "shout" not in self.registry

    def test_constructor_mapping(self):
        registry = ModifierRegistry({"shout": shout})
        assert registry.names() == ["shout"]
