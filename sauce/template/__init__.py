"""
Компиляция шаблонов: лексер, парсер и модель узлов.
"""

from __future__ import annotations

from .markers import Markers, DEFAULT_MARKERS
from .nodes import Template, TemplateNode, TextNode, VariableNode, ModifierCall
from .parser import TemplateParser, parse, DEFAULT_MAX_CHAIN_LENGTH

__all__ = [
    "Markers",
    "DEFAULT_MARKERS",
    "Template",
    "TemplateNode",
    "TextNode",
    "VariableNode",
    "ModifierCall",
    "TemplateParser",
    "parse",
    "DEFAULT_MAX_CHAIN_LENGTH",
]
