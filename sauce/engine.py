"""
Фасад шаблонизатора.

Связывает исходный текст, конфигурацию и реестр модификаторов.
Шаблон компилируется лениво при первом рендере и кэшируется до
изменения исходного текста или конфигурации.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .config import SauceConfig, DEFAULT_CONFIG
from .context import as_render_context
from .modifiers.registry import ModifierRegistry
from .render.renderer import TemplateRenderer
from .template.nodes import Template
from .template.parser import TemplateParser

logger = logging.getLogger(__name__)


class Sauce:
    """
    Шаблон вместе с настройками и реестром модификаторов.

    Пример:
        sauce = Sauce("Hello, {{ name | default:stranger }}!")
        sauce.render(name="Ada")
    """

    def __init__(
        self,
        source: str = "",
        registry: Optional[ModifierRegistry] = None,
        config: Optional[SauceConfig] = None,
    ):
        self._source = source
        self._config = config if config is not None else DEFAULT_CONFIG
        self._template: Optional[Template] = None
        self.registry = registry if registry is not None else ModifierRegistry.with_builtins()

    @property
    def source(self) -> str:
        return self._source

    @source.setter
    def source(self, value: str) -> None:
        self._source = value
        self._template = None

    @property
    def config(self) -> SauceConfig:
        return self._config

    @config.setter
    def config(self, value: Optional[SauceConfig]) -> None:
        self._config = value if value is not None else DEFAULT_CONFIG
        self._template = None

    @property
    def template(self) -> Template:
        """
        Скомпилированный шаблон (компилируется при первом обращении).

        Raises:
            ParseError: При синтаксической ошибке в исходном тексте
        """
        if self._template is None:
            parser = TemplateParser(self._config.markers, self._config.max_chain_length)
            self._template = parser.parse(self._source)
            logger.debug(f"Compiled template ({len(self._source)} characters)")
        return self._template

    def render(self, context: Optional[Mapping[str, Any]] = None, **values: Any) -> str:
        """
        Рендерит шаблон.

        Args:
            context: Значения переменных
            **values: Дополнительные значения, перекрывающие context

        Raises:
            ParseError: При синтаксической ошибке в исходном тексте
            RenderError: При неизвестном модификаторе или ошибке модификатора
        """
        render_ctx = as_render_context(context)
        if values:
            render_ctx = render_ctx.with_values(values)
        return TemplateRenderer(self.registry).render(self.template, render_ctx)


__all__ = ["Sauce"]
