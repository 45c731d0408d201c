"""
Amp Language Front End

Turns Amp source text into an abstract syntax tree. Amp is a small
expression language with let bindings, first-class functions, if/else
expressions and integer, boolean and string literals.

Architecture:
    amp/
    ├── lexer/           # Cursor, tokens and the lexical analyzer
    ├── parser/          # Syntax analysis and AST nodes
    ├── config.py        # Per-parse configuration
    ├── logging_config.py
    └── cli.py           # `amp` command and interactive prompt
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import ParserConfiguration
from .lexer import Lexer, Token, TokenType, AmpError, LexerError, tokenize_string
from .parser import Parser, ParseResult, ParseError, parse, parse_with_recovery

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "ParserConfiguration",
    "ParseResult",
    "Token",
    "TokenType",

    # Convenience functions
    "parse",
    "parse_with_recovery",
    "tokenize_string",

    # Errors
    "AmpError",
    "LexerError",
    "ParseError",

    # Version info
    "__version__",
    "__license__",
]
