"""
Парсер шаблонов.

Преобразует последовательность токенов в неизменяемый Template.

Грамматика плейсхолдера:
placeholder → OPEN name chain CLOSE
name        → IDENT ("." (IDENT | DIGITS))*
chain       → ("|" IDENT (":" ARGUMENT ("," ARGUMENT)*)?)*
"""

from __future__ import annotations

import logging
import re
from typing import List

from .lexer import TemplateLexer
from .markers import Markers, DEFAULT_MARKERS
from .nodes import Template, TemplateNode, TextNode, VariableNode, ModifierCall, is_identifier
from .tokens import Token, TokenType
from ..errors import ParseError, ParseErrorReason

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHAIN_LENGTH = 32

_PATH_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(?:\.(?:[A-Za-z_][A-Za-z0-9_]*|[0-9]+))*\Z")


class TemplateParser:
    """
    Парсер шаблонов с рекурсивным спуском.

    Не зависит ни от реестра модификаторов, ни от контекста: результат
    является чистой функцией исходного текста и настроек синтаксиса.
    """

    def __init__(self, markers: Markers = DEFAULT_MARKERS, max_chain_length: int = DEFAULT_MAX_CHAIN_LENGTH):
        if max_chain_length < 1:
            raise ValueError(f"max_chain_length must be positive, got {max_chain_length}")
        self.markers = markers
        self.max_chain_length = max_chain_length

        self._source = ""
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, source: str) -> Template:
        """
        Парсит исходный текст в шаблон.

        Args:
            source: Исходный текст шаблона

        Returns:
            Скомпилированный шаблон

        Raises:
            ParseError: При синтаксической ошибке
        """
        self._source = source
        self._tokens = TemplateLexer(source, self.markers).tokenize()
        self._position = 0

        nodes: List[TemplateNode] = []
        while not self._is_at_end():
            current = self._current_token()

            if current.type == TokenType.TEXT:
                self._advance()
                self._append_text(nodes, current.value)
            elif current.type == TokenType.PLACEHOLDER_START:
                nodes.append(self._parse_placeholder())
            else:
                raise self._error(
                    ParseErrorReason.MALFORMED_MODIFIER_SYNTAX,
                    f"Unexpected token at top level: {current.type.name}",
                    current,
                )

        logger.debug(f"Parsed template with {len(nodes)} nodes")
        return Template(nodes=tuple(nodes), source=source)

    @staticmethod
    def _append_text(nodes: List[TemplateNode], text: str) -> None:
        """Добавляет текст, объединяя его с предыдущим текстовым узлом."""
        if nodes and isinstance(nodes[-1], TextNode):
            nodes[-1] = TextNode(text=nodes[-1].text + text)
        else:
            nodes.append(TextNode(text=text))

    def _parse_placeholder(self) -> VariableNode:
        """Парсит плейсхолдер: имя переменной и цепочку модификаторов."""
        start = self._consume(TokenType.PLACEHOLDER_START, "Expected placeholder")

        current = self._current_token()
        if current.type != TokenType.NAME:
            raise self._error(ParseErrorReason.EMPTY_VARIABLE_NAME, "Expected variable name", current)

        name_token = self._advance()
        if not _PATH_RE.match(name_token.value):
            raise self._error(
                ParseErrorReason.INVALID_VARIABLE_NAME,
                f"Invalid variable name {name_token.value!r}",
                name_token,
            )

        modifiers: List[ModifierCall] = []
        while self._match(TokenType.PIPE):
            pipe = self._previous_token()
            modifiers.append(self._parse_modifier_call())
            if len(modifiers) > self.max_chain_length:
                raise self._error(
                    ParseErrorReason.CHAIN_TOO_LONG,
                    f"Modifier chain exceeds {self.max_chain_length} calls",
                    pipe,
                )

        current = self._current_token()
        if current.type != TokenType.PLACEHOLDER_END:
            raise self._error(
                ParseErrorReason.MALFORMED_MODIFIER_SYNTAX,
                f"Unexpected {current.value!r} in placeholder",
                current,
            )
        self._advance()

        return VariableNode(name=name_token.value, modifiers=tuple(modifiers), position=start.position)

    def _parse_modifier_call(self) -> ModifierCall:
        """Парсит вызов модификатора после "|": name или name:arg1,arg2."""
        current = self._current_token()
        if current.type != TokenType.NAME:
            raise self._error(
                ParseErrorReason.MALFORMED_MODIFIER_SYNTAX,
                "Expected modifier name after '|'",
                current,
            )
        name_token = self._advance()
        if not is_identifier(name_token.value):
            raise self._error(
                ParseErrorReason.MALFORMED_MODIFIER_SYNTAX,
                f"Invalid modifier name {name_token.value!r}",
                name_token,
            )

        args: List[str] = []
        if self._match(TokenType.COLON):
            args.append(self._consume(TokenType.ARGUMENT, "Expected modifier argument").value)
            while self._match(TokenType.COMMA):
                args.append(self._consume(TokenType.ARGUMENT, "Expected modifier argument").value)

        return ModifierCall(name=name_token.value, args=tuple(args))

    # Вспомогательные методы для работы с токенами

    def _current_token(self) -> Token:
        """Возвращает текущий токен без продвижения позиции."""
        return self._tokens[min(self._position, len(self._tokens) - 1)]

    def _previous_token(self) -> Token:
        return self._tokens[self._position - 1]

    def _is_at_end(self) -> bool:
        """Проверяет, достигли ли мы конца токенов."""
        return self._current_token().type == TokenType.EOF

    def _advance(self) -> Token:
        """Продвигает позицию и возвращает предыдущий токен."""
        token = self._current_token()
        if not self._is_at_end():
            self._position += 1
        return token

    def _match(self, token_type: TokenType) -> bool:
        """Проверяет и потребляет токен указанного типа."""
        if self._current_token().type == token_type:
            self._advance()
            return True
        return False

    def _consume(self, token_type: TokenType, error_message: str) -> Token:
        """Потребляет токен указанного типа или выбрасывает ошибку."""
        current = self._current_token()
        if current.type == token_type:
            return self._advance()
        raise self._error(ParseErrorReason.MALFORMED_MODIFIER_SYNTAX, error_message, current)

    def _error(self, reason: ParseErrorReason, message: str, token: Token) -> ParseError:
        return ParseError(reason, message, self._source, token.position)


def parse(
    source: str,
    markers: Markers = DEFAULT_MARKERS,
    max_chain_length: int = DEFAULT_MAX_CHAIN_LENGTH,
) -> Template:
    """
    Удобная функция для компиляции шаблона.

    Raises:
        ParseError: При синтаксической ошибке
    """
    return TemplateParser(markers, max_chain_length).parse(source)


__all__ = ["TemplateParser", "parse", "DEFAULT_MAX_CHAIN_LENGTH"]
