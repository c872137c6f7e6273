"""Pull-based JSON tokenizer with line/column tracking.

The Link Set parser consumes JSON as a flat stream of tokens instead of
loading the whole document into dicts and lists. This keeps the parser a
single forward pass and lets every structural error point at the exact
position where the document went wrong.

String literals are decoded with ``json.decoder.scanstring`` so escape
handling matches the standard library decoder exactly.
"""

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, NoReturn, Optional, Tuple

from .exceptions import ParsingException


class TokenType(str, Enum):
    """JSON token types."""
    START_OBJECT = 'start_object'
    END_OBJECT = 'end_object'
    START_ARRAY = 'start_array'
    END_ARRAY = 'end_array'
    PROPERTY_NAME = 'property_name'
    VALUE_STRING = 'value_string'
    VALUE_NUMBER = 'value_number'
    VALUE_TRUE = 'value_true'
    VALUE_FALSE = 'value_false'
    VALUE_NULL = 'value_null'


SCALAR_TOKENS = frozenset({
    TokenType.VALUE_STRING,
    TokenType.VALUE_NUMBER,
    TokenType.VALUE_TRUE,
    TokenType.VALUE_FALSE,
    TokenType.VALUE_NULL,
})


@dataclass(frozen=True)
class JsonToken:
    """Single JSON token with its 1-based source position."""
    type: TokenType
    value: Optional[str]     # Decoded string, number text or literal text
    line: int
    column: int

    @property
    def is_scalar(self) -> bool:
        return self.type in SCALAR_TOKENS

    def describe(self) -> str:
        """Short human readable form used in error messages."""
        if self.type in (TokenType.PROPERTY_NAME, TokenType.VALUE_STRING):
            return f"{self.type.value} '{self.value}'"
        return self.type.value


class _Expect(Enum):
    VALUE = 'value'
    VALUE_OR_END = 'value_or_end'      # right after '['
    KEY = 'key'                        # after ',' inside an object
    KEY_OR_END = 'key_or_end'          # right after '{'
    COLON = 'colon'
    COMMA_OR_END = 'comma_or_end'
    DONE = 'done'


_NUMBER = re.compile(r'-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][-+]?\d+)?')
_LITERALS = {
    't': ('true', TokenType.VALUE_TRUE),
    'f': ('false', TokenType.VALUE_FALSE),
    'n': ('null', TokenType.VALUE_NULL),
}
_WHITESPACE = ' \t\r\n'
_OBJECT = '{'
_ARRAY = '['


class JsonTokenStream:
    """Tokenizes a JSON document lazily, validating its grammar on the way.

    Exactly one root value is accepted; trailing content raises. The stream
    is exhausted once ``next_token`` returns None.

    Example:
        stream = JsonTokenStream('{"a": [1, 2]}')
        for token in stream:
            print(token.type, token.value)
    """

    def __init__(self, text: str):
        self._text = text
        self._pos = 0
        self._line = 1
        self._line_start = 0
        self._stack: List[str] = []
        self._expect = _Expect.VALUE
        self._last: Optional[JsonToken] = None
        self.tokens_read = 0

    def __iter__(self) -> Iterator[JsonToken]:
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def current_token(self) -> Optional[JsonToken]:
        return self._last

    def location(self) -> Tuple[int, int]:
        """Position (line, column) of the last token, or of the cursor."""
        if self._last is not None:
            return self._last.line, self._last.column
        return self._line, self._column()

    def next_token(self) -> Optional[JsonToken]:
        """Read the next token.

        Returns:
            Next token or None at the end of a complete document

        Raises:
            ParsingException: On any JSON syntax error or premature end
        """
        while True:
            self._skip_whitespace()
            if self._pos >= len(self._text):
                if self._expect is _Expect.DONE:
                    return None
                self._fail('Unexpected end of input')

            char = self._text[self._pos]
            expect = self._expect

            if expect is _Expect.DONE:
                self._fail(f"Unexpected trailing content '{char}'")

            if expect is _Expect.COLON:
                if char != ':':
                    self._fail(f"Expected ':' but found '{char}'")
                self._advance(1)
                self._expect = _Expect.VALUE
                continue

            if expect is _Expect.COMMA_OR_END:
                if char == ',':
                    self._advance(1)
                    self._expect = _Expect.KEY if self._stack[-1] == _OBJECT else _Expect.VALUE
                    continue
                if char == '}' and self._stack[-1] == _OBJECT:
                    return self._close(TokenType.END_OBJECT)
                if char == ']' and self._stack[-1] == _ARRAY:
                    return self._close(TokenType.END_ARRAY)
                self._fail(f"Expected ',' or closing bracket but found '{char}'")

            if expect in (_Expect.KEY, _Expect.KEY_OR_END):
                if char == '}' and expect is _Expect.KEY_OR_END:
                    return self._close(TokenType.END_OBJECT)
                if char != '"':
                    self._fail(f"Expected property name but found '{char}'")
                token = self._read_string(TokenType.PROPERTY_NAME)
                self._expect = _Expect.COLON
                return token

            # VALUE or VALUE_OR_END
            if char == ']' and expect is _Expect.VALUE_OR_END:
                return self._close(TokenType.END_ARRAY)
            return self._read_value(char)

    def _read_value(self, char: str) -> JsonToken:
        if char == '{':
            token = self._emit(TokenType.START_OBJECT, None, 1)
            self._stack.append(_OBJECT)
            self._expect = _Expect.KEY_OR_END
            return token
        if char == '[':
            token = self._emit(TokenType.START_ARRAY, None, 1)
            self._stack.append(_ARRAY)
            self._expect = _Expect.VALUE_OR_END
            return token
        if char == '"':
            token = self._read_string(TokenType.VALUE_STRING)
        elif char == '-' or char.isdigit():
            match = _NUMBER.match(self._text, self._pos)
            if match is None:
                self._fail(f"Invalid number literal starting with '{char}'")
            token = self._emit(TokenType.VALUE_NUMBER, match.group(), len(match.group()))
        elif char in _LITERALS:
            literal, token_type = _LITERALS[char]
            if not self._text.startswith(literal, self._pos):
                self._fail(f"Invalid literal, expected '{literal}'")
            token = self._emit(token_type, literal, len(literal))
        else:
            self._fail(f"Unexpected character '{char}'")
        self._after_value()
        return token

    def _read_string(self, token_type: TokenType) -> JsonToken:
        try:
            value, end = json.decoder.scanstring(self._text, self._pos + 1, True)
        except json.JSONDecodeError as e:
            raise ParsingException(e.msg, e.lineno, e.colno) from e
        return self._emit(token_type, value, end - self._pos)

    def _close(self, token_type: TokenType) -> JsonToken:
        token = self._emit(token_type, None, 1)
        self._stack.pop()
        self._after_value()
        return token

    def _after_value(self) -> None:
        self._expect = _Expect.COMMA_OR_END if self._stack else _Expect.DONE

    def _emit(self, token_type: TokenType, value: Optional[str], length: int) -> JsonToken:
        token = JsonToken(token_type, value, self._line, self._column())
        self._advance(length)
        self._last = token
        self.tokens_read += 1
        return token

    def _advance(self, length: int) -> None:
        # Raw newlines only occur in whitespace, strings reject control characters
        self._pos += length

    def _skip_whitespace(self) -> None:
        text = self._text
        while self._pos < len(text) and text[self._pos] in _WHITESPACE:
            if text[self._pos] == '\n':
                self._line += 1
                self._line_start = self._pos + 1
            self._pos += 1

    def _column(self) -> int:
        return self._pos - self._line_start + 1

    def _fail(self, message: str) -> NoReturn:
        raise ParsingException(message, self._line, self._column())
