"""
Amp Lexer Package

Implements the lexical analyzer (tokenizer) for the Amp language.

Key Features:
- Rewindable Cursor with a saved-position stack
- One token per call, with non-destructive peek
- Error tokens instead of exceptions for malformed input
- ASCII only; anything else is an invalid character
"""

from .tokens import Token, TokenType, KEYWORDS, MAX_INTEGER
from .cursor import Cursor
from .lexer import Lexer, tokenize_string, tokenize_file, lexical_error_for
from .errors import (
    AmpError, LexerError, InvalidCharacterError, IntegerOverflowError,
    UnterminatedStringError, Diagnostic
)

__all__ = [
    "Cursor",
    "Lexer",
    "Token",
    "TokenType",
    "KEYWORDS",
    "MAX_INTEGER",
    "tokenize_string",
    "tokenize_file",
    "lexical_error_for",
    "AmpError",
    "LexerError",
    "InvalidCharacterError",
    "IntegerOverflowError",
    "UnterminatedStringError",
    "Diagnostic",
]
