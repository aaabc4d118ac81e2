"""
Модификаторы: встроенные функции и реестр.
"""

from __future__ import annotations

from .builtins import BUILTIN_MODIFIERS, ModifierFunc, string_modifier
from .registry import ModifierRegistry

__all__ = ["BUILTIN_MODIFIERS", "ModifierFunc", "ModifierRegistry", "string_modifier"]
