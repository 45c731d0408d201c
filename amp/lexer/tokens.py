"""
Token definitions for the Amp lexer.

This module defines every token type the scanner can produce:
- Structural punctuation (braces, brackets, parentheses, comma, semicolon)
- Operators (one and two character)
- Literals (integers, strings) and identifiers
- Keywords
- Error tokens, which the scanner emits instead of raising
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


# Largest value an integer literal may hold (unsigned 64-bit)
MAX_INTEGER = 2 ** 64 - 1


class TokenType(Enum):
    """
    Enumeration of all token types in Amp.

    Organized by category; the set is closed.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input

    # ========================================================================
    # Literals and Identifiers
    # ========================================================================
    INTEGER = auto()                # 42
    STRING = auto()                 # "hello"
    IDENTIFIER = auto()             # variable_name

    # ========================================================================
    # Keywords
    # ========================================================================
    FN = auto()                     # fn
    LET = auto()                    # let
    IF = auto()                     # if
    ELSE = auto()                   # else
    TRUE = auto()                   # true
    FALSE = auto()                  # false
    RETURN = auto()                 # return

    # ========================================================================
    # Operators
    # ========================================================================
    ASSIGN = auto()                 # =
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /
    BANG = auto()                   # !
    LESS_THAN = auto()              # <
    GREATER_THAN = auto()           # >
    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=
    LESS_EQUAL = auto()             # <=
    GREATER_EQUAL = auto()          # >=

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    COMMA = auto()                  # ,
    SEMICOLON = auto()              # ;

    # ========================================================================
    # Error Tokens
    # ========================================================================
    INVALID = auto()                # Unrecognized character
    INVALID_NUMBER = auto()         # Integer literal wider than 64 bits
    UNTERMINATED_STRING = auto()    # String literal without closing quote

    def describe(self) -> str:
        """Human readable name used in diagnostics."""
        spelling = TOKEN_SPELLINGS.get(self)
        if spelling is not None:
            return f"'{spelling}'"
        return _DESCRIPTIONS.get(self, self.name.lower())


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Amp language.

    Tokens are immutable values compared by structure. ``value`` holds the
    semantic payload: the int for INTEGER, the name for IDENTIFIER, the text
    for STRING, the bool for TRUE/FALSE and the offending text for error
    tokens.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any = None

    def __str__(self) -> str:
        if self.type == TokenType.EOF:
            return "end of input"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.value!r})"

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in {
            TokenType.INTEGER, TokenType.STRING,
            TokenType.TRUE, TokenType.FALSE,
        }

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.lexeme in KEYWORDS and self.type == KEYWORDS[self.lexeme]

    @property
    def is_operator(self) -> bool:
        """Check if this token is an operator."""
        return self.type in OPERATOR_TYPES

    @property
    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER

    @property
    def is_error(self) -> bool:
        """Check if the scanner flagged this token as malformed input."""
        return self.type in ERROR_TOKEN_TYPES


# Lookup tables used by the lexer for keyword/operator recognition

KEYWORDS = {
    "fn": TokenType.FN,
    "let": TokenType.LET,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "return": TokenType.RETURN,
}

# Characters that always form a token on their own
SINGLE_CHAR_TOKENS = {
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
}

# Characters that become a two character operator when followed by '='
# first -> (single, double)
EQUALS_SUFFIX_TOKENS = {
    "!": (TokenType.BANG, TokenType.NOT_EQUAL),
    "<": (TokenType.LESS_THAN, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER_THAN, TokenType.GREATER_EQUAL),
    "=": (TokenType.ASSIGN, TokenType.EQUAL),
}

OPERATORS = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "!": TokenType.BANG,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "==": TokenType.EQUAL,
    "!=": TokenType.NOT_EQUAL,
    "<=": TokenType.LESS_EQUAL,
    ">=": TokenType.GREATER_EQUAL,
}

OPERATOR_TYPES = frozenset(OPERATORS.values())

ERROR_TOKEN_TYPES = frozenset({
    TokenType.INVALID,
    TokenType.INVALID_NUMBER,
    TokenType.UNTERMINATED_STRING,
})

# Source spelling of every token type that has a fixed one
TOKEN_SPELLINGS = {
    **{token_type: text for text, token_type in SINGLE_CHAR_TOKENS.items()},
    **{token_type: text for text, token_type in OPERATORS.items()},
    **{token_type: text for text, token_type in KEYWORDS.items()},
}

_DESCRIPTIONS = {
    TokenType.EOF: "end of input",
    TokenType.INTEGER: "integer",
    TokenType.STRING: "string",
    TokenType.IDENTIFIER: "identifier",
    TokenType.INVALID: "invalid character",
    TokenType.INVALID_NUMBER: "invalid number",
    TokenType.UNTERMINATED_STRING: "unterminated string",
}


def make_token(token_type: TokenType) -> Token:
    """Build the token for a type with a fixed spelling (operators, punctuation, keywords)."""
    lexeme = TOKEN_SPELLINGS[token_type]
    if token_type in (TokenType.TRUE, TokenType.FALSE):
        return Token(token_type, lexeme, token_type == TokenType.TRUE)
    return Token(token_type, lexeme)


EOF_TOKEN = Token(TokenType.EOF, "")
