"""
Test suite for the Amp lexer.

Tests cover:
- Keywords, identifiers and literals
- One- and two-character operators
- Error tokens for bad characters, numbers and strings
- Non-destructive peeking and rewinding
"""

import unittest
import sys
import os
import tempfile

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from amp.lexer import (
    Lexer, Token, TokenType, MAX_INTEGER, tokenize_string, tokenize_file,
    InvalidCharacterError, IntegerOverflowError, UnterminatedStringError, LexerError
)


class TestLexer(unittest.TestCase):
    """Test cases for the lexer."""

    def _types(self, source: str):
        """Helper returning the token types of a source string."""
        return [token.type for token in Lexer(source).tokenize()]

    def test_let_statement(self):
        """Test a complete let statement."""
        tokens = Lexer("let five = 5;").tokenize()

        self.assertEqual(tokens, [
            Token(TokenType.LET, "let"),
            Token(TokenType.IDENTIFIER, "five", "five"),
            Token(TokenType.ASSIGN, "="),
            Token(TokenType.INTEGER, "5", 5),
            Token(TokenType.SEMICOLON, ";"),
            Token(TokenType.EOF, ""),
        ])

    def test_keywords(self):
        self.assertEqual(self._types("fn let if else true false return"), [
            TokenType.FN, TokenType.LET, TokenType.IF, TokenType.ELSE,
            TokenType.TRUE, TokenType.FALSE, TokenType.RETURN, TokenType.EOF,
        ])

    def test_keyword_prefix_is_identifier(self):
        tokens = Lexer("lets iffy fn_").tokenize()
        self.assertTrue(all(t.is_identifier for t in tokens[:-1]))
        self.assertEqual([t.value for t in tokens[:-1]], ["lets", "iffy", "fn_"])

    def test_boolean_values(self):
        tokens = Lexer("true false").tokenize()
        self.assertIs(tokens[0].value, True)
        self.assertIs(tokens[1].value, False)

    def test_single_character_tokens(self):
        self.assertEqual(self._types("(){}[],;+-*/"), [
            TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN,
            TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
            TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET,
            TokenType.COMMA, TokenType.SEMICOLON,
            TokenType.PLUS, TokenType.MINUS, TokenType.MULTIPLY, TokenType.DIVIDE,
            TokenType.EOF,
        ])

    def test_equals_suffixed_operators(self):
        """Test two-character operators win over their one-character prefix."""
        self.assertEqual(self._types("== != <= >= = ! < >"), [
            TokenType.EQUAL, TokenType.NOT_EQUAL,
            TokenType.LESS_EQUAL, TokenType.GREATER_EQUAL,
            TokenType.ASSIGN, TokenType.BANG,
            TokenType.LESS_THAN, TokenType.GREATER_THAN,
            TokenType.EOF,
        ])

    def test_assign_versus_equal(self):
        self.assertEqual(self._types("a == b = c"), [
            TokenType.IDENTIFIER, TokenType.EQUAL, TokenType.IDENTIFIER,
            TokenType.ASSIGN, TokenType.IDENTIFIER, TokenType.EOF,
        ])

    def test_operators_without_spaces(self):
        self.assertEqual(self._types("a<=-b"), [
            TokenType.IDENTIFIER, TokenType.LESS_EQUAL, TokenType.MINUS,
            TokenType.IDENTIFIER, TokenType.EOF,
        ])

    def test_identifier_stops_at_digit(self):
        """Test x1 scans as an identifier followed by an integer."""
        tokens = Lexer("x1").tokenize()

        self.assertEqual(tokens[0], Token(TokenType.IDENTIFIER, "x", "x"))
        self.assertEqual(tokens[1], Token(TokenType.INTEGER, "1", 1))

    def test_underscore_identifier(self):
        token = Lexer("_private_name").next_token()
        self.assertEqual(token.value, "_private_name")

    def test_integer_limits(self):
        """Test the largest 64-bit value is accepted and one more is not."""
        largest = Lexer("18446744073709551615").next_token()
        self.assertEqual(largest.type, TokenType.INTEGER)
        self.assertEqual(largest.value, MAX_INTEGER)

        overflow = Lexer("18446744073709551616").next_token()
        self.assertEqual(overflow.type, TokenType.INVALID_NUMBER)
        self.assertEqual(overflow.value, "18446744073709551616")

    def test_very_long_integer_overflows(self):
        token = Lexer("9" * 5000).next_token()
        self.assertEqual(token.type, TokenType.INVALID_NUMBER)

    def test_leading_zeros(self):
        token = Lexer("007").next_token()
        self.assertEqual(token.value, 7)
        self.assertEqual(token.lexeme, "007")

    def test_string_literal(self):
        token = Lexer('"hello world"').next_token()

        self.assertEqual(token.type, TokenType.STRING)
        self.assertEqual(token.value, "hello world")
        self.assertEqual(token.lexeme, '"hello world"')

    def test_unterminated_string(self):
        tokens = Lexer('"abc').tokenize()
        self.assertEqual(tokens[0].type, TokenType.UNTERMINATED_STRING)
        self.assertEqual(tokens[1].type, TokenType.EOF)

    def test_invalid_character_does_not_stop_scanning(self):
        tokens = Lexer("@ 1").tokenize()

        self.assertEqual(tokens[0], Token(TokenType.INVALID, "@", "@"))
        self.assertTrue(tokens[0].is_error)
        self.assertEqual(tokens[1].type, TokenType.INTEGER)

    def test_non_ascii_is_invalid(self):
        token = Lexer("é").next_token()
        self.assertEqual(token.type, TokenType.INVALID)

    def test_whitespace_only(self):
        self.assertEqual(self._types(" \n\t "), [TokenType.EOF])
        self.assertTrue(Lexer("   ").is_at_end())
        self.assertFalse(Lexer("  x").is_at_end())

    def test_eof_repeats(self):
        lexer = Lexer("x")
        lexer.next_token()
        self.assertEqual(lexer.next_token().type, TokenType.EOF)
        self.assertEqual(lexer.next_token().type, TokenType.EOF)

    def test_peek_is_idempotent(self):
        """Test peeking any number of times leaves the next token unchanged."""
        lexer = Lexer("foo == 10")

        first = lexer.peek_token()
        second = lexer.peek_token()
        consumed = lexer.next_token()

        self.assertEqual(first, second)
        self.assertEqual(first, consumed)
        self.assertEqual(lexer.next_token().type, TokenType.EQUAL)
        self.assertEqual(lexer.cursor.saved_depth, 0)

    def test_rewind(self):
        lexer = Lexer("abc")
        lexer.next_token()
        lexer.rewind(3)
        self.assertEqual(lexer.next_token().value, "abc")

    def test_iteration_excludes_eof(self):
        tokens = list(Lexer("1 + 2"))
        self.assertEqual(len(tokens), 3)
        self.assertNotIn(TokenType.EOF, [t.type for t in tokens])

    def test_token_properties(self):
        tokens = Lexer('let x = "s" + 1 == true').tokenize()

        self.assertTrue(tokens[0].is_keyword)
        self.assertTrue(tokens[1].is_identifier)
        self.assertTrue(tokens[3].is_literal)
        self.assertTrue(tokens[4].is_operator)
        self.assertTrue(tokens[6].is_operator)
        self.assertTrue(tokens[7].is_literal)

    def test_token_type_describe(self):
        self.assertEqual(TokenType.SEMICOLON.describe(), "';'")
        self.assertEqual(TokenType.LET.describe(), "'let'")
        self.assertEqual(TokenType.EOF.describe(), "end of input")
        self.assertEqual(TokenType.INTEGER.describe(), "integer")


class TestTokenizeString(unittest.TestCase):
    """Test cases for the convenience functions."""

    def test_returns_tokens_with_eof(self):
        tokens = tokenize_string("x;")
        self.assertEqual(tokens[-1].type, TokenType.EOF)
        self.assertEqual(len(tokens), 3)

    def test_invalid_character_raises(self):
        with self.assertRaises(InvalidCharacterError) as ctx:
            tokenize_string("let a = 1 & 2;")

        self.assertEqual(ctx.exception.char, "&")
        self.assertEqual(ctx.exception.code, "L001")
        self.assertIn("ERROR[L001]", ctx.exception.describe())

    def test_overflow_raises(self):
        with self.assertRaises(IntegerOverflowError) as ctx:
            tokenize_string("18446744073709551616")

        self.assertEqual(ctx.exception.literal, "18446744073709551616")
        self.assertIn("too large", str(ctx.exception))
        self.assertEqual(ctx.exception.code, "L007")

    def test_unterminated_string_raises(self):
        with self.assertRaises(UnterminatedStringError):
            tokenize_string('let s = "oops;')

    def test_first_error_wins(self):
        with self.assertRaises(LexerError) as ctx:
            tokenize_string('# 99999999999999999999999')

        self.assertIsInstance(ctx.exception, InvalidCharacterError)

    def test_tokenize_file(self):
        with tempfile.NamedTemporaryFile("w", suffix=".amp", delete=False) as f:
            f.write("return 1;")
            path = f.name

        try:
            tokens = tokenize_file(path)
        finally:
            os.unlink(path)

        self.assertEqual(tokens[0].type, TokenType.RETURN)
        self.assertEqual(tokens[1].value, 1)


if __name__ == "__main__":
    unittest.main()
