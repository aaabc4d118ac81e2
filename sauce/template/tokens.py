"""
Лексические типы шаблонизатора.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Типы токенов в шаблоне."""

    # Текстовый контент (уже с раскрытыми экранированиями)
    TEXT = "TEXT"

    # Разделители плейсхолдеров
    PLACEHOLDER_START = "PLACEHOLDER_START"  # {{
    PLACEHOLDER_END = "PLACEHOLDER_END"      # }}

    # Содержимое плейсхолдера
    NAME = "NAME"                            # имя переменной или модификатора
    PIPE = "PIPE"                            # |
    COLON = "COLON"                          # :
    COMMA = "COMMA"                          # ,
    ARGUMENT = "ARGUMENT"                    # литерал аргумента

    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.
    """
    type: TokenType
    value: str
    position: int        # Позиция в исходном тексте
    line: int           # Номер строки (начиная с 1)
    column: int         # Номер колонки (начиная с 1)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "Token"]
