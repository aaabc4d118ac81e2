"""
Узлы скомпилированного шаблона.

Шаблон — плоская неизменяемая последовательность узлов двух видов:
TextNode (литеральный текст) и VariableNode (переменная с цепочкой модификаторов).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple, Union

from .markers import Markers, DEFAULT_MARKERS

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")
_BARE_ARGUMENT_RE = re.compile(r"[^\s\"',|\\]+(?:[ \t]+[^\s\"',|\\]+)*\Z")


@dataclass(frozen=True)
class TemplateNode:
    """Базовый класс для всех узлов шаблона."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """
    Обычный текстовый контент в шаблоне.

    Выводится в результат как есть.
    """
    text: str


@dataclass(frozen=True)
class ModifierCall:
    """Вызов модификатора: имя и аргументы в порядке записи."""
    name: str
    args: Tuple[str, ...] = ()


@dataclass(frozen=True)
class VariableNode(TemplateNode):
    """
    Плейсхолдер {{ name | mod:arg }}.

    Attributes:
        name: Путь к значению в контексте ("user.name", "items.0")
        modifiers: Цепочка модификаторов, применяется слева направо
        position: Смещение плейсхолдера в исходном тексте (не участвует в сравнении)
    """
    name: str
    modifiers: Tuple[ModifierCall, ...] = ()
    position: int = field(default=0, compare=False)

    @property
    def path(self) -> Tuple[str, ...]:
        """Сегменты пути к значению."""
        return tuple(self.name.split("."))


@dataclass(frozen=True)
class Template:
    """
    Скомпилированный шаблон.

    Неизменяем после создания, поэтому может кэшироваться и
    рендериться конкурентно с разными контекстами.
    """
    nodes: Tuple[Union[TextNode, VariableNode], ...] = ()
    source: str = field(default="", compare=False)

    def __iter__(self) -> Iterator[TemplateNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def variables(self) -> List[str]:
        """Имена переменных в порядке первого использования."""
        seen: List[str] = []
        for node in self.nodes:
            if isinstance(node, VariableNode) and node.name not in seen:
                seen.append(node.name)
        return seen

    def modifier_names(self) -> List[str]:
        """Имена модификаторов в порядке первого использования."""
        seen: List[str] = []
        for node in self.nodes:
            if isinstance(node, VariableNode):
                for call in node.modifiers:
                    if call.name not in seen:
                        seen.append(call.name)
        return seen

    def to_source(self, markers: Markers = DEFAULT_MARKERS) -> str:
        """
        Каноническое представление шаблона.

        Текст экранируется, плейсхолдеры нормализуются к виду
        "{{ name | mod:arg }}". Результат разбирается обратно в тот же шаблон.
        """
        parts: List[str] = []
        for node in self.nodes:
            if isinstance(node, TextNode):
                parts.append(node.text.replace(markers.open, markers.escape))
            elif isinstance(node, VariableNode):
                parts.append(_format_placeholder(node, markers))
        return "".join(parts)


def _format_argument(arg: str, markers: Markers) -> str:
    if _BARE_ARGUMENT_RE.match(arg) and not set(arg) & set(markers.open + markers.close):
        return arg
    escaped = arg.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _format_placeholder(node: VariableNode, markers: Markers) -> str:
    chain = [node.name]
    for call in node.modifiers:
        if call.args:
            chain.append(f"{call.name}:{','.join(_format_argument(a, markers) for a in call.args)}")
        else:
            chain.append(call.name)
    return f"{markers.open} {' | '.join(chain)} {markers.close}"


def is_identifier(name: str) -> bool:
    """Проверяет, что строка является допустимым идентификатором."""
    return bool(_IDENTIFIER_RE.match(name))


__all__ = [
    "TemplateNode",
    "TextNode",
    "ModifierCall",
    "VariableNode",
    "Template",
    "is_identifier",
]
