"""
Sauce — шаблонизатор строк с цепочками модификаторов.

Исходный текст компилируется в неизменяемый Template, который
рендерится с контекстом и явно переданным реестром модификаторов:

    template = parse("Hello, {{ name | upper }}!")
    render(template, {"name": "ada"}, ModifierRegistry.with_builtins())
"""

from __future__ import annotations

from .config import SauceConfig, load_config
from .context import RenderContext
from .engine import Sauce
from .errors import (
    SauceUserError,
    ParseError,
    ParseErrorReason,
    RenderError,
    RenderErrorReason,
    ModifierError,
    ModifierArgumentError,
    ConfigError,
    RegistryFrozenError,
)
from .modifiers import ModifierRegistry, string_modifier
from .render import TemplateRenderer, render
from .template import Markers, Template, TemplateParser, TextNode, VariableNode, ModifierCall, parse
from .values import ABSENT

__all__ = [
    "ABSENT",
    "ConfigError",
    "Markers",
    "ModifierArgumentError",
    "ModifierCall",
    "ModifierError",
    "ModifierRegistry",
    "ParseError",
    "ParseErrorReason",
    "RegistryFrozenError",
    "RenderContext",
    "RenderError",
    "RenderErrorReason",
    "Sauce",
    "SauceConfig",
    "SauceUserError",
    "Template",
    "TemplateParser",
    "TemplateRenderer",
    "TextNode",
    "VariableNode",
    "load_config",
    "parse",
    "render",
    "string_modifier",
]
