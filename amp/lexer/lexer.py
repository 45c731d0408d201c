"""
Amp Lexer - turns source text into tokens, one at a time.

The lexer pulls characters from a Cursor and produces a Token per call to
next_token(). Malformed input does not stop it: bad characters, oversized
integers and unterminated strings come back as error tokens and the caller
decides what to do with them.

Identifiers are letters and underscores only. A digit ends an identifier,
so `x1` scans as IDENTIFIER(x) followed by INTEGER(1).
"""

import logging
import string
from typing import Iterator, List

from .cursor import Cursor
from .tokens import (
    Token, TokenType, KEYWORDS, SINGLE_CHAR_TOKENS, EQUALS_SUFFIX_TOKENS,
    MAX_INTEGER, EOF_TOKEN, make_token
)
from .errors import (
    LexerError, create_invalid_character_error, create_integer_overflow_error,
    create_unterminated_string_error
)


logger = logging.getLogger(__name__)

DIGITS = frozenset(string.digits)
IDENTIFIER_CHARS = frozenset(string.ascii_letters + "_")
MAX_INTEGER_DIGITS = len(str(MAX_INTEGER))


class Lexer:
    """
    Amp lexical analyzer.

    Scans lazily: each next_token() call consumes exactly one token from the
    cursor. peek_token() scans ahead and restores the position, so it can be
    called any number of times without consuming anything.
    """

    def __init__(self, source: str):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string (ASCII)
        """
        self.source = source
        self.cursor = Cursor(source)

    def next_token(self) -> Token:
        """Scan and consume the next token."""
        cursor = self.cursor
        cursor.skip_whitespace()

        if cursor.exhausted():
            return EOF_TOKEN

        current_char = cursor.current()

        if current_char in SINGLE_CHAR_TOKENS:
            cursor.skip(1)
            return make_token(SINGLE_CHAR_TOKENS[current_char])

        if current_char in EQUALS_SUFFIX_TOKENS:
            return self._tokenize_operator(current_char)

        if current_char in DIGITS:
            return self._tokenize_integer()

        if current_char in IDENTIFIER_CHARS:
            return self._tokenize_identifier_or_keyword()

        if current_char == '"':
            return self._tokenize_string()

        cursor.skip(1)
        return Token(TokenType.INVALID, current_char, current_char)

    def peek_token(self) -> Token:
        """Scan the next token without consuming it."""
        self.cursor.save()
        try:
            return self.next_token()
        finally:
            self.cursor.restore()

    def rewind(self, n: int):
        """Un-consume the last n characters."""
        self.cursor.rewind(n)

    def is_at_end(self) -> bool:
        """Check whether only whitespace (or nothing) is left."""
        self.cursor.save()
        try:
            self.cursor.skip_whitespace()
            return self.cursor.exhausted()
        finally:
            self.cursor.restore()

    def tokenize(self) -> List[Token]:
        """
        Tokenize the rest of the source.

        Returns:
            List of tokens including the EOF token
        """
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to, but not including, EOF."""
        while True:
            token = self.next_token()
            if token.type == TokenType.EOF:
                return
            yield token

    def _tokenize_operator(self, first: str) -> Token:
        """Tokenize ! < > = and their '=' suffixed forms."""
        single, double = EQUALS_SUFFIX_TOKENS[first]
        if self.cursor.peek_next() == "=":
            self.cursor.skip(2)
            return make_token(double)
        self.cursor.skip(1)
        return make_token(single)

    def _tokenize_integer(self) -> Token:
        """Tokenize a run of ASCII digits."""
        cursor = self.cursor
        start = cursor.offset
        while not cursor.exhausted() and cursor.current() in DIGITS:
            cursor.advance()

        lexeme = self.source[start:cursor.offset]
        significant = lexeme.lstrip("0")
        # int() refuses very long digit strings, so bound the length first
        if len(significant) > MAX_INTEGER_DIGITS or int(lexeme) > MAX_INTEGER:
            logger.debug("integer literal %s overflows 64 bits", lexeme)
            return Token(TokenType.INVALID_NUMBER, lexeme, lexeme)

        return Token(TokenType.INTEGER, lexeme, int(lexeme))

    def _tokenize_identifier_or_keyword(self) -> Token:
        """Tokenize an identifier or keyword."""
        cursor = self.cursor
        start = cursor.offset
        while not cursor.exhausted() and cursor.current() in IDENTIFIER_CHARS:
            cursor.advance()

        lexeme = self.source[start:cursor.offset]
        token_type = KEYWORDS.get(lexeme)
        if token_type is None:
            return Token(TokenType.IDENTIFIER, lexeme, lexeme)
        return make_token(token_type)

    def _tokenize_string(self) -> Token:
        """Tokenize a double quoted string literal (no escapes)."""
        cursor = self.cursor
        start = cursor.offset
        cursor.advance()  # Skip opening quote

        while not cursor.exhausted() and cursor.current() != '"':
            cursor.advance()

        if cursor.exhausted():
            lexeme = self.source[start:]
            return Token(TokenType.UNTERMINATED_STRING, lexeme, lexeme)

        cursor.advance()  # Skip closing quote
        lexeme = self.source[start:cursor.offset]
        return Token(TokenType.STRING, lexeme, lexeme[1:-1])


def lexical_error_for(token: Token) -> LexerError:
    """Build the exception matching an error token."""
    if token.type == TokenType.INVALID:
        return create_invalid_character_error(token.value)
    if token.type == TokenType.INVALID_NUMBER:
        return create_integer_overflow_error(token.value)
    if token.type == TokenType.UNTERMINATED_STRING:
        return create_unterminated_string_error(token.value)
    raise ValueError(f"{token!r} is not an error token")


def tokenize_string(source: str) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string

    Returns:
        List of tokens ending with EOF

    Raises:
        LexerError: for the first error token in the source
    """
    tokens = Lexer(source).tokenize()

    for token in tokens:
        if token.is_error:
            raise lexical_error_for(token)

    return tokens


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source)
