"""
Error handling for the Amp parser.

Grammar errors carry the token that was found and, where a fixed terminal
was required, the token type that was expected. Diagnostics reference
token values only; there is no source position.
"""

from typing import Optional, List

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import AmpError


class ParseError(AmpError):
    """
    Exception raised when the parser encounters a syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message, code=code, help_text=help_text, suggestions=suggestions)
        self.token = token


class UnexpectedTokenError(ParseError):
    """A required terminal is missing at a fixed grammar position."""

    def __init__(self, expected: TokenType, found: Token, **kwargs):
        super().__init__(
            f"Expected {expected.describe()}, found {describe_token(found)}",
            token=found,
            **kwargs
        )
        self.expected = expected
        self.found = found


class MissingExpressionError(ParseError):
    """A position that must hold an expression has no term to start one."""

    def __init__(self, context: str, found: Token, **kwargs):
        super().__init__(
            f"Expected an expression for {context}, found {describe_token(found)}",
            token=found,
            **kwargs
        )
        self.context = context
        self.found = found


class NestingTooDeepError(ParseError):
    """Expressions or blocks nested beyond the configured limit."""

    def __init__(self, limit: int, token: Optional[Token] = None, **kwargs):
        super().__init__(f"Nesting deeper than {limit} levels", token=token, **kwargs)
        self.limit = limit


def describe_token(token: Token) -> str:
    """Render a found token for messages."""
    if token.type == TokenType.EOF:
        return "end of input"
    if token.type in (TokenType.INTEGER, TokenType.IDENTIFIER, TokenType.STRING):
        return f"{token.type.describe()} '{token.lexeme}'"
    return f"'{token.lexeme}'"


class SyntaxErrorRecovery:
    """Suggestions attached to parser diagnostics."""

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            TokenType.SEMICOLON: ["Add a semicolon ';' to end the statement"],
            TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
            TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
            TokenType.LEFT_BRACE: ["Add an opening brace '{' to start a block"],
            TokenType.LEFT_PAREN: ["Add an opening parenthesis '('"],
            TokenType.ASSIGN: ["Add an assignment operator '='"],
            TokenType.IDENTIFIER: ["Use a name made of letters and underscores"],
        }

        return token_suggestions.get(expected, [])

    @staticmethod
    def suggest_for_found(found: Token) -> List[str]:
        """Suggest fixes based on the token that was found instead."""
        if found.type == TokenType.ASSIGN:
            return ["Use '==' for comparison"]
        if found.type in (TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET):
            return ["Array syntax is not supported"]
        if found.type == TokenType.EOF:
            return ["Check for incomplete statements"]
        return []


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P005": "Missing expression",
    "P013": "Nesting too deep",
}


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: TokenType, found: Token) -> UnexpectedTokenError:
    """Create an error for an unexpected token."""
    suggestions = (SyntaxErrorRecovery.suggest_missing_token(expected) +
                   SyntaxErrorRecovery.suggest_for_found(found))

    return UnexpectedTokenError(
        expected,
        found,
        code="P001",
        help_text=f"The parser expected to see {expected.describe()} at this position.",
        suggestions=suggestions or None
    )


def create_missing_expression_error(context: str, found: Token) -> MissingExpressionError:
    """Create an error for a position with no expression."""
    return MissingExpressionError(
        context,
        found,
        code="P005",
        help_text="Expressions start with a literal, a name, '(', '!', '-', 'if' or 'fn'.",
        suggestions=SyntaxErrorRecovery.suggest_for_found(found) or None
    )


def create_nesting_too_deep_error(limit: int, token: Optional[Token] = None) -> NestingTooDeepError:
    """Create an error for input nested past the configured depth."""
    return NestingTooDeepError(
        limit,
        token=token,
        code="P013",
        help_text="Raise ParserConfiguration.max_nesting_depth or flatten the expression.",
    )
