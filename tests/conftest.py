from typing import Any, Callable

import pytest

from sauce.modifiers.registry import ModifierRegistry
from sauce.render.renderer import render
from sauce.template.parser import parse


@pytest.fixture
def registry() -> ModifierRegistry:
    """Fresh registry with the built-in modifiers."""
    return ModifierRegistry.with_builtins()


@pytest.fixture
def render_source(registry: ModifierRegistry) -> Callable[..., str]:
    """Parses and renders a template source against the `registry` fixture."""
    def _render(source: str, **values: Any) -> str:
        return render(parse(source), values, registry)
    return _render
