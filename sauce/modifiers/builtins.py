"""
Встроенные модификаторы.

Каждый модификатор — чистая функция (value, args, context) -> value,
не меняющая общего состояния. Строковые преобразования пропускают
ABSENT без изменений, чтобы следующий в цепочке default мог его заменить.
"""

from __future__ import annotations

import functools
import html
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Iterable, Sequence
from urllib.parse import quote

from ..errors import ModifierArgumentError, ModifierError
from ..context import RenderContext
from ..values import ABSENT, is_absent, is_empty, to_text

ModifierFunc = Callable[[Any, Sequence[str], RenderContext], Any]

DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_JOIN_SEPARATOR = ", "


def _expect_args(name: str, args: Sequence[str], min_count: int, max_count: int) -> None:
    """Проверяет количество аргументов модификатора."""
    if min_count <= len(args) <= max_count:
        return
    if min_count == max_count:
        expected = f"{min_count}"
    else:
        expected = f"{min_count}..{max_count}"
    raise ModifierArgumentError(f"'{name}' expects {expected} argument(s), got {len(args)}")


def _int_arg(name: str, raw: str) -> int:
    try:
        number = int(raw.strip())
    except ValueError:
        raise ModifierArgumentError(f"'{name}' expects an integer argument, got {raw!r}") from None
    if number < 0:
        raise ModifierArgumentError(f"'{name}' expects a non-negative integer, got {number}")
    return number


def string_modifier(name: str, min_args: int = 0, max_args: int = 0):
    """
    Декоратор для строковых модификаторов.

    Проверяет количество аргументов, пропускает ABSENT и передаёт
    функции строковую форму значения.
    """
    def decorator(func: Callable[[str, Sequence[str]], Any]) -> ModifierFunc:
        @functools.wraps(func)
        def wrapper(value: Any, args: Sequence[str], context: RenderContext) -> Any:
            _expect_args(name, args, min_args, max_args)
            if is_absent(value):
                return ABSENT
            return func(to_text(value), args)
        return wrapper
    return decorator


@string_modifier("upper")
def upper(value: str, args: Sequence[str]) -> str:
    return value.upper()


@string_modifier("lower")
def lower(value: str, args: Sequence[str]) -> str:
    return value.lower()


@string_modifier("capitalize")
def capitalize(value: str, args: Sequence[str]) -> str:
    return value.capitalize()


@string_modifier("title")
def title(value: str, args: Sequence[str]) -> str:
    return value.title()


@string_modifier("trim")
def trim(value: str, args: Sequence[str]) -> str:
    return value.strip()


@string_modifier("escape")
def escape(value: str, args: Sequence[str]) -> str:
    """HTML-экранирование (&, <, >, кавычки)."""
    return html.escape(value, quote=True)


@string_modifier("urlencode")
def urlencode(value: str, args: Sequence[str]) -> str:
    return quote(value, safe="")


@string_modifier("replace", min_args=2, max_args=2)
def replace(value: str, args: Sequence[str]) -> str:
    old, new = args
    if not old:
        raise ModifierArgumentError("'replace' expects a non-empty search string")
    return value.replace(old, new)


@string_modifier("truncate", min_args=1, max_args=2)
def truncate(value: str, args: Sequence[str]) -> str:
    """
    Обрезает строку до n символов: truncate:n или truncate:n,suffix.

    Суффикс добавляется только если строка была обрезана.
    """
    limit = _int_arg("truncate", args[0])
    if len(value) <= limit:
        return value
    suffix = args[1] if len(args) > 1 else ""
    return value[:limit] + suffix


def default(value: Any, args: Sequence[str], context: RenderContext) -> Any:
    """Подставляет литерал, если значение отсутствует или пусто."""
    _expect_args("default", args, 1, 1)
    if is_empty(value):
        return args[0]
    return value


def join(value: Any, args: Sequence[str], context: RenderContext) -> Any:
    """Склеивает элементы последовательности через разделитель (по умолчанию ", ")."""
    _expect_args("join", args, 0, 1)
    if is_absent(value):
        return ABSENT
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return to_text(value)
    separator = args[0] if args else DEFAULT_JOIN_SEPARATOR
    return separator.join(to_text(item) for item in value)


def format_date(value: Any, args: Sequence[str], context: RenderContext) -> Any:
    """
    Форматирует дату через strftime.

    Принимает date/datetime, строку в ISO 8601 или UNIX-время (UTC).
    """
    _expect_args("date", args, 0, 1)
    if is_absent(value):
        return ABSENT

    fmt = args[0] if args else DEFAULT_DATE_FORMAT
    if isinstance(value, (datetime, date)):
        moment = value
    elif isinstance(value, bool):
        raise ModifierError("'date' cannot format a boolean value")
    elif isinstance(value, (int, float)):
        try:
            moment = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ModifierError(f"'date' timestamp {value!r} is out of range") from None
    elif isinstance(value, str):
        try:
            moment = datetime.fromisoformat(value.strip())
        except ValueError:
            raise ModifierError(f"'date' cannot parse {value!r} as an ISO 8601 date") from None
    else:
        raise ModifierError(f"'date' cannot format value of type {type(value).__name__}")

    return moment.strftime(fmt)


BUILTIN_MODIFIERS: Dict[str, ModifierFunc] = {
    "upper": upper,
    "lower": lower,
    "capitalize": capitalize,
    "title": title,
    "trim": trim,
    "escape": escape,
    "urlencode": urlencode,
    "replace": replace,
    "truncate": truncate,
    "default": default,
    "join": join,
    "date": format_date,
}


__all__ = [
    "ModifierFunc",
    "BUILTIN_MODIFIERS",
    "string_modifier",
]
