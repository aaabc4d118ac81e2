"""
Рендеринг скомпилированных шаблонов.
"""

from __future__ import annotations

from .renderer import TemplateRenderer, render

__all__ = ["TemplateRenderer", "render"]
