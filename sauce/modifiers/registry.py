"""
Реестр модификаторов.

Отображение имени модификатора в функцию. Встроенные модификаторы
устанавливаются фабрикой with_builtins(), пользовательские регистрируются
явно и перекрывают одноимённые (побеждает последняя регистрация).

Реестр не синхронизирован: регистрация должна завершиться до начала
конкурентных рендеров. freeze() закрепляет это соглашение.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional

from .builtins import BUILTIN_MODIFIERS, ModifierFunc
from ..errors import RegistryFrozenError
from ..template.nodes import is_identifier

logger = logging.getLogger(__name__)


class ModifierRegistry:
    """
    Реестр модификаторов, передаваемый в каждый вызов render().

    Глобального реестра нет: несколько независимых конфигураций
    могут сосуществовать и тестироваться изолированно.
    """

    def __init__(self, modifiers: Optional[Mapping[str, ModifierFunc]] = None):
        self._modifiers: Dict[str, ModifierFunc] = {}
        self._frozen = False

        for name, func in (modifiers or {}).items():
            self.register_modifier(name, func)

    @classmethod
    def with_builtins(cls) -> "ModifierRegistry":
        """Создаёт реестр со всеми встроенными модификаторами."""
        return cls(BUILTIN_MODIFIERS)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "ModifierRegistry":
        """Запрещает дальнейшие изменения реестра."""
        self._frozen = True
        logger.debug(f"Modifier registry frozen with {len(self._modifiers)} modifiers")
        return self

    def register_modifier(self, name: str, func: ModifierFunc) -> None:
        """
        Устанавливает или перекрывает модификатор.

        Args:
            name: Имя модификатора (идентификатор)
            func: Функция (value, args, context) -> value

        Raises:
            ValueError: Если имя не является идентификатором
            TypeError: Если func не вызываемый объект
            RegistryFrozenError: Если реестр заморожен
        """
        self._check_mutable()
        if not isinstance(name, str) or not is_identifier(name):
            raise ValueError(f"Invalid modifier name: {name!r}")
        if not callable(func):
            raise TypeError(f"Modifier '{name}' must be callable, got {type(func).__name__}")

        if name in self._modifiers:
            logger.debug(f"Modifier '{name}' overrides existing registration")
        self._modifiers[name] = func

    def modifier(self, name: Optional[str] = None) -> Callable[[ModifierFunc], ModifierFunc]:
        """
        Декоратор для регистрации модификатора.

        Без имени используется имя функции.
        """
        def decorator(func: ModifierFunc) -> ModifierFunc:
            self.register_modifier(name or func.__name__, func)
            return func
        return decorator

    def unregister_modifier(self, name: str) -> None:
        """
        Удаляет модификатор.

        Raises:
            KeyError: Если модификатор не зарегистрирован
        """
        self._check_mutable()
        if name not in self._modifiers:
            raise KeyError(f"Modifier '{name}' is not registered")
        del self._modifiers[name]

    def resolve(self, name: str) -> Optional[ModifierFunc]:
        """Возвращает функцию модификатора или None, если он не найден."""
        return self._modifiers.get(name)

    def names(self) -> List[str]:
        """Имена зарегистрированных модификаторов в алфавитном порядке."""
        return sorted(self._modifiers)

    def copy(self) -> "ModifierRegistry":
        """Незамороженная копия реестра."""
        return ModifierRegistry(self._modifiers)

    def __contains__(self, name: object) -> bool:
        return name in self._modifiers

    def __len__(self) -> int:
        return len(self._modifiers)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Modifier registry is frozen")


__all__ = ["ModifierRegistry"]
