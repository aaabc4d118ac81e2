"""
Лексический анализатор шаблонов.

Разбивает исходный текст на токены с учётом двух контекстов:
- обычный текст (с экранированием удвоенным открывающим разделителем)
- содержимое плейсхолдера {{ ... }}: имена, "|", ":", ",", аргументы
"""

from __future__ import annotations

from typing import List

from .markers import Markers, DEFAULT_MARKERS
from .tokens import Token, TokenType
from ..errors import ParseError, ParseErrorReason

_WHITESPACE = " \t\r\n"
_QUOTES = "\"'"
_NAME_STOP = _WHITESPACE + "|:,"


class TemplateLexer:
    """
    Лексический анализатор шаблонов.

    Текстовые фрагменты, идущие подряд (включая раскрытые экранирования),
    объединяются в один TEXT-токен.
    """

    def __init__(self, text: str, markers: Markers = DEFAULT_MARKERS):
        self.text = text
        self.markers = markers
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

        self._tokens: List[Token] = []
        # Начало текущего плейсхолдера (для диагностики незакрытых)
        self._placeholder_start = 0

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь исходный текст и возвращает список токенов.

        Raises:
            ParseError: При незакрытом плейсхолдере или неверном содержимом
        """
        self._tokens = []
        escape = self.markers.escape
        opener = self.markers.open

        text_parts: List[str] = []
        text_start = (self.position, self.line, self.column)

        while self.position < self.length:
            if not text_parts:
                text_start = (self.position, self.line, self.column)

            # Экранированный открывающий разделитель
            if self.text.startswith(escape, self.position):
                text_parts.append(opener)
                self._advance(len(escape))
                continue

            if self.text.startswith(opener, self.position):
                if text_parts:
                    self._tokens.append(Token(TokenType.TEXT, "".join(text_parts), *text_start))
                    text_parts = []
                self._tokenize_placeholder()
                continue

            # Обычный текст до следующего открывающего разделителя
            text_end = self.text.find(opener, self.position)
            if text_end < 0:
                text_end = self.length
            text_parts.append(self.text[self.position:text_end])
            self._advance(text_end - self.position)

        if text_parts:
            self._tokens.append(Token(TokenType.TEXT, "".join(text_parts), *text_start))

        self._tokens.append(Token(TokenType.EOF, "", self.position, self.line, self.column))
        return self._tokens

    def _advance(self, count: int) -> None:
        """
        Перемещает позицию на указанное количество символов,
        обновляя номера строк и колонок.
        """
        chunk = self.text[self.position:self.position + count]
        newlines = chunk.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(chunk) - chunk.rfind("\n")
        else:
            self.column += len(chunk)
        self.position += len(chunk)

    def _emit(self, token_type: TokenType, value: str, position: int, line: int, column: int) -> None:
        self._tokens.append(Token(token_type, value, position, line, column))

    def _error(self, reason: ParseErrorReason, message: str, position: int) -> ParseError:
        return ParseError(reason, message, self.text, position)

    def _unterminated(self) -> ParseError:
        return self._error(
            ParseErrorReason.UNTERMINATED_PLACEHOLDER,
            f"Placeholder is not closed with {self.markers.close!r}",
            self._placeholder_start,
        )

    def _skip_whitespace(self) -> None:
        start = self.position
        end = start
        while end < self.length and self.text[end] in _WHITESPACE:
            end += 1
        if end > start:
            self._advance(end - start)

    def _tokenize_placeholder(self) -> None:
        """Токенизирует плейсхолдер от открывающего до закрывающего разделителя."""
        opener = self.markers.open
        closer = self.markers.close

        self._placeholder_start = self.position
        self._emit(TokenType.PLACEHOLDER_START, opener, self.position, self.line, self.column)
        self._advance(len(opener))

        in_arguments = False
        while True:
            self._skip_whitespace()
            if self.position >= self.length:
                raise self._unterminated()

            start = (self.position, self.line, self.column)

            if self.text.startswith(closer, self.position):
                self._emit(TokenType.PLACEHOLDER_END, closer, *start)
                self._advance(len(closer))
                return

            if self.text.startswith(opener, self.position):
                raise self._error(
                    ParseErrorReason.MALFORMED_MODIFIER_SYNTAX,
                    "Nested placeholders are not allowed",
                    self.position,
                )

            char = self.text[self.position]

            if char == "|":
                self._emit(TokenType.PIPE, char, *start)
                self._advance(1)
                in_arguments = False
            elif char == ":" and not in_arguments:
                self._emit(TokenType.COLON, char, *start)
                self._advance(1)
                in_arguments = True
                self._tokenize_argument()
            elif char == "," and in_arguments:
                self._emit(TokenType.COMMA, char, *start)
                self._advance(1)
                self._tokenize_argument()
            elif in_arguments:
                raise self._error(
                    ParseErrorReason.MALFORMED_MODIFIER_SYNTAX,
                    f"Unexpected text after argument: {char!r}",
                    self.position,
                )
            elif char == ",":
                # Запятая вне списка аргументов: ошибку сообщит парсер
                self._emit(TokenType.COMMA, char, *start)
                self._advance(1)
            else:
                self._tokenize_name()

    def _tokenize_name(self) -> None:
        """Читает имя переменной или модификатора (проверяется парсером)."""
        start = (self.position, self.line, self.column)
        end = self.position
        while end < self.length:
            if self.text[end] in _NAME_STOP:
                break
            if self.text.startswith(self.markers.close, end) or self.text.startswith(self.markers.open, end):
                break
            end += 1
        value = self.text[self.position:end]
        self._advance(end - self.position)
        self._emit(TokenType.NAME, value, *start)

    def _tokenize_argument(self) -> None:
        """
        Читает один аргумент модификатора сразу после ":" или ",".

        Дословно сохраняется только аргумент в кавычках (с обработкой
        обратного слеша). Голый аргумент читается до ",", "|" или закрывающего
        разделителя, пробелы по краям отбрасываются, внутренние остаются.
        """
        self._skip_whitespace()
        if self.position >= self.length:
            raise self._unterminated()

        start = (self.position, self.line, self.column)
        char = self.text[self.position]

        if char in _QUOTES:
            self._emit(TokenType.ARGUMENT, self._read_quoted(char), *start)
            return

        end = self.position
        while end < self.length:
            if self.text[end] in ",|" or self.text.startswith(self.markers.close, end):
                break
            if self.text.startswith(self.markers.open, end):
                raise self._error(
                    ParseErrorReason.MALFORMED_MODIFIER_SYNTAX,
                    "Nested placeholders are not allowed",
                    end,
                )
            end += 1
        else:
            raise self._unterminated()

        value = self.text[self.position:end].rstrip(_WHITESPACE)
        if not value:
            raise self._error(
                ParseErrorReason.MALFORMED_MODIFIER_SYNTAX,
                "Expected modifier argument",
                self.position,
            )
        self._advance(end - self.position)
        self._emit(TokenType.ARGUMENT, value, *start)

    def _read_quoted(self, quote: str) -> str:
        """Читает строку в кавычках, начиная с открывающей кавычки."""
        parts: List[str] = []
        pos = self.position + 1
        while pos < self.length:
            char = self.text[pos]
            if char == "\\" and pos + 1 < self.length:
                parts.append(self.text[pos + 1])
                pos += 2
                continue
            if char == quote:
                self._advance(pos + 1 - self.position)
                return "".join(parts)
            parts.append(char)
            pos += 1
        raise self._unterminated()


def tokenize_template(text: str, markers: Markers = DEFAULT_MARKERS) -> List[Token]:
    """
    Удобная функция для токенизации шаблона.

    Args:
        text: Исходный текст шаблона
        markers: Разделители плейсхолдеров

    Returns:
        Список токенов

    Raises:
        ParseError: При ошибке лексического анализа
    """
    lexer = TemplateLexer(text, markers)
    return lexer.tokenize()


__all__ = ["TemplateLexer", "tokenize_template"]
