"""
Error handling for the Amp lexer.

Provides the diagnostic record shared by every Amp error and the lexical
error kinds. The scanner itself never raises: it emits error tokens, and
the parser turns them into the exceptions defined here when it reaches
them.
"""

from typing import Optional, List
from dataclasses import dataclass


@dataclass
class Diagnostic:
    """Base record for diagnostics (errors, warnings, info)."""
    message: str
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            result = f"{severity_prefix}[{self.code}]: {self.message}"
        else:
            result = f"{severity_prefix}: {self.message}"

        if self.help_text:
            result += f"\n  help: {self.help_text}"

        if self.suggestions:
            result += "\n  suggestions:"
            for suggestion in self.suggestions:
                result += f"\n    - {suggestion}"

        return result


class AmpError(Exception):
    """
    Root of every error raised while turning Amp source into an AST.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return self.message

    def describe(self) -> str:
        """Full multi-line diagnostic text."""
        return str(self.diagnostic)


class LexerError(AmpError):
    """Raised for malformed lexical input."""


class InvalidCharacterError(LexerError):
    """A character outside the supported ASCII set."""

    def __init__(self, char: str, **kwargs):
        super().__init__(f"Invalid character: {char!r}", **kwargs)
        self.char = char


class IntegerOverflowError(LexerError):
    """An integer literal that does not fit in 64 unsigned bits."""

    def __init__(self, literal: str, **kwargs):
        super().__init__(f"Integer literal too large: {literal}", **kwargs)
        self.literal = literal


class UnterminatedStringError(LexerError):
    """A string literal missing its closing quote."""

    def __init__(self, literal: str, **kwargs):
        super().__init__("Unterminated string literal", **kwargs)
        self.literal = literal


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
    "L002": "Unterminated string literal",
    "L007": "Number literal overflow",
}


# Helper functions for creating common errors
def create_invalid_character_error(char: str) -> InvalidCharacterError:
    """Create an error for an invalid character."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in Amp source code."
    else:
        help_text = f"Non-printable character (U+{ord(char):04X}) is not allowed."

    suggestions = []
    if char == "&":
        suggestions.append("Amp has no '&' operator; nest 'if' expressions instead")
    elif char == "%":
        suggestions.append("Amp has no modulo operator")

    return InvalidCharacterError(
        char,
        code="L001",
        help_text=help_text,
        suggestions=suggestions or None
    )


def create_integer_overflow_error(literal: str) -> IntegerOverflowError:
    """Create an error for an integer literal wider than 64 bits."""
    return IntegerOverflowError(
        literal,
        code="L007",
        help_text="Integer literals must be between 0 and 18446744073709551615.",
    )


def create_unterminated_string_error(literal: str) -> UnterminatedStringError:
    """Create an error for an unterminated string literal."""
    return UnterminatedStringError(
        literal,
        code="L002",
        help_text="String literals must be closed with a matching '\"' quote.",
        suggestions=["Add a closing '\"' quote"]
    )
