"""
Иерархия исключений шаблонизатора.

Все ожидаемые ошибки, которые пользователь может исправить (синтаксис
шаблона, неизвестный модификатор, неверный конфиг), наследуются от
SauceUserError.

Ошибки программирования НЕ наследуются от SauceUserError и пробрасываются
со своими трейсбеками.
"""

from __future__ import annotations

import enum
from typing import Optional


class SauceUserError(Exception):
    """Базовый класс для всех пользовательских ошибок Sauce."""
    pass


class ParseErrorReason(enum.Enum):
    """Коды причин синтаксических ошибок."""
    UNTERMINATED_PLACEHOLDER = "UnterminatedPlaceholder"
    EMPTY_VARIABLE_NAME = "EmptyVariableName"
    INVALID_VARIABLE_NAME = "InvalidVariableName"
    MALFORMED_MODIFIER_SYNTAX = "MalformedModifierSyntax"
    CHAIN_TOO_LONG = "ChainTooLong"


class ParseError(SauceUserError):
    """
    Ошибка синтаксического анализа шаблона.

    Attributes:
        reason: Код причины
        position: Смещение (в символах) в исходном тексте
        line: Номер строки (начиная с 1)
        column: Номер колонки (начиная с 1)
        byte_offset: Смещение в байтах UTF-8
    """

    def __init__(self, reason: ParseErrorReason, message: str, source: str, position: int):
        self.reason = reason
        self.message = message
        self.position = position

        prefix = source[:position]
        self.line = prefix.count("\n") + 1
        self.column = position - (prefix.rfind("\n") + 1) + 1
        self.byte_offset = len(prefix.encode("utf-8"))

        super().__init__(f"{reason.value}: {message} at {self.line}:{self.column}")


class RenderErrorReason(enum.Enum):
    """Коды причин ошибок рендеринга."""
    UNKNOWN_MODIFIER = "UnknownModifier"
    MODIFIER_FAILED = "ModifierFailed"


class RenderError(SauceUserError):
    """
    Ошибка рендеринга. Рендеринг атомарен: при ошибке частичный вывод не возвращается.
    """

    def __init__(self, reason: RenderErrorReason, modifier: str, detail: Optional[str] = None):
        self.reason = reason
        self.modifier = modifier
        self.detail = detail

        message = f"{reason.value}({modifier!r})"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class ModifierError(SauceUserError):
    """
    Ошибка, которую модификатор сообщает о своих входных данных.

    Рендерер превращает её в RenderError с причиной MODIFIER_FAILED.
    """
    pass


class ModifierArgumentError(ModifierError):
    """Неверное количество или формат аргументов модификатора."""
    pass


class ConfigError(SauceUserError):
    """Ошибка в конфигурации sauce.yaml."""
    pass


class RegistryFrozenError(RuntimeError):
    """Попытка изменить замороженный реестр модификаторов."""
    pass


__all__ = [
    "SauceUserError",
    "ParseErrorReason",
    "ParseError",
    "RenderErrorReason",
    "RenderError",
    "ModifierError",
    "ModifierArgumentError",
    "ConfigError",
    "RegistryFrozenError",
]
