"""
Рендерер скомпилированных шаблонов.

Проходит по узлам шаблона, разрешает переменные в контексте и
сворачивает цепочки модификаторов слева направо.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from ..context import RenderContext, as_render_context
from ..errors import ModifierError, RenderError, RenderErrorReason
from ..modifiers.registry import ModifierRegistry
from ..template.nodes import Template, TextNode, VariableNode
from ..values import to_text

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """
    Рендерер шаблонов, связанный с реестром модификаторов.

    Рендеринг атомарен: при ошибке исключение выбрасывается до того,
    как какой-либо вывод покинет рендерер.
    """

    def __init__(self, registry: Optional[ModifierRegistry] = None):
        """
        Args:
            registry: Реестр модификаторов (по умолчанию - новый реестр со встроенными)
        """
        self.registry = registry if registry is not None else ModifierRegistry.with_builtins()

    def render(self, template: Template, context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Рендерит шаблон в строку.

        Args:
            template: Скомпилированный шаблон
            context: Значения переменных (словарь или RenderContext)

        Returns:
            Результат рендеринга

        Raises:
            RenderError: При неизвестном модификаторе или ошибке модификатора
        """
        render_ctx = as_render_context(context)
        output: List[str] = []

        for node in template.nodes:
            if isinstance(node, TextNode):
                output.append(node.text)
            elif isinstance(node, VariableNode):
                output.append(to_text(self.evaluate(node, render_ctx)))
            else:
                raise TypeError(f"Unsupported template node: {type(node).__name__}")

        result = "".join(output)
        logger.debug(f"Rendered {len(template.nodes)} nodes into {len(result)} characters")
        return result

    def evaluate(self, node: VariableNode, context: RenderContext) -> Any:
        """
        Вычисляет значение плейсхолдера до преобразования в строку.

        Returns:
            Итоговое значение цепочки (может быть ABSENT)
        """
        value = context.lookup(node.name)

        for call in node.modifiers:
            func = self.registry.resolve(call.name)
            if func is None:
                raise RenderError(RenderErrorReason.UNKNOWN_MODIFIER, call.name)
            try:
                value = func(value, call.args, context)
            except (ModifierError, ValueError) as e:
                raise RenderError(RenderErrorReason.MODIFIER_FAILED, call.name, str(e)) from e

        return value


def render(
    template: Template,
    context: Optional[Mapping[str, Any]] = None,
    registry: Optional[ModifierRegistry] = None,
) -> str:
    """
    Удобная функция для рендеринга шаблона.

    Raises:
        RenderError: При неизвестном модификаторе или ошибке модификатора
    """
    return TemplateRenderer(registry).render(template, context)


__all__ = ["TemplateRenderer", "render"]
