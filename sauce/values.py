"""
Значения, проходящие через цепочку модификаторов.
"""

from __future__ import annotations

from typing import Any


class _Absent:
    """Маркер отсутствующей в контексте переменной."""

    _instance = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Any = _Absent()


def is_absent(value: Any) -> bool:
    """None в контексте считается отсутствующим значением."""
    return value is ABSENT or value is None


def is_empty(value: Any) -> bool:
    """Отсутствующее значение или пустая строка."""
    return is_absent(value) or (isinstance(value, str) and value == "")


def to_text(value: Any) -> str:
    """
    Строковая форма значения для вывода.

    Отсутствующее значение превращается в пустую строку,
    булевы значения — в "true"/"false".
    """
    if is_absent(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


__all__ = ["ABSENT", "is_absent", "is_empty", "to_text"]
