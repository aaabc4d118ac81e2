"""
Контекст рендеринга.

Неизменяемое представление словаря значений, переданного в render().
Создаётся заново на каждый вызов и не разделяется между рендерами.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Sequence

from .values import ABSENT


class RenderContext(Mapping[str, Any]):
    """
    Контекст рендеринга с поиском значений по пути.

    Путь "user.name" сначала ищется как буквальный ключ, затем
    по сегментам: ключи словарей, индексы последовательностей
    и публичные атрибуты объектов.

    Attributes:
        locale: Локаль для модификаторов, которым она нужна
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None, locale: Optional[str] = None):
        self._values: Mapping[str, Any] = MappingProxyType(dict(values or {}))
        self.locale = locale

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"RenderContext({dict(self._values)!r}, locale={self.locale!r})"

    def lookup(self, name: str) -> Any:
        """
        Возвращает значение по пути или ABSENT.

        None на любом шаге пути также даёт ABSENT. Отсутствующий атрибут
        даёт ABSENT, а любое другое исключение из свойства объекта
        пробрасывается как есть: это ошибка кода, а не шаблона.
        """
        if name in self._values:
            value = self._values[name]
            return ABSENT if value is None else value

        current: Any = self._values
        for segment in name.split("."):
            current = _step(current, segment)
            if current is ABSENT or current is None:
                return ABSENT
        return current

    def with_values(self, values: Mapping[str, Any]) -> "RenderContext":
        """Новый контекст, где values перекрывают текущие значения."""
        merged = dict(self._values)
        merged.update(values)
        return RenderContext(merged, locale=self.locale)


def _step(container: Any, segment: str) -> Any:
    """Один шаг поиска по пути."""
    if isinstance(container, Mapping):
        return container.get(segment, ABSENT)

    if isinstance(container, Sequence) and not isinstance(container, (str, bytes)):
        if not segment.isdigit():
            return ABSENT
        index = int(segment)
        return container[index] if index < len(container) else ABSENT

    if segment.startswith("_"):
        return ABSENT
    value = getattr(container, segment, ABSENT)
    if callable(value):
        return ABSENT
    return value


def as_render_context(context: Optional[Mapping[str, Any]]) -> RenderContext:
    """Оборачивает произвольный словарь в RenderContext (если это ещё не он)."""
    if isinstance(context, RenderContext):
        return context
    return RenderContext(context)


__all__ = ["RenderContext", "as_render_context"]
