"""
Amp Parser Implementation

Recursive descent for statements and blocks, precedence climbing for
binary operators. The parser keeps a (current, peek) pair of tokens pulled
lazily from the lexer; every parse method starts on its first token and
returns with `current` on the first token after the construct.

parse() stops at the first error. parse_with_recovery() keeps going,
recording one error per broken top-level statement.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Dict, List, Optional

from ..config import ParserConfiguration
from ..lexer.errors import AmpError
from ..lexer.lexer import Lexer, lexical_error_for
from ..lexer.tokens import Token, TokenType, EOF_TOKEN
from .ast_nodes import (
    Statement, Expression, LetStatement, ExpressionStatement, ReturnStatement,
    EmptyStatement, IntegerLiteral, StringLiteral, BooleanLiteral, Identifier,
    PrefixExpression, InfixExpression, IfExpression, FunctionLiteral,
    CallExpression, UnknownExpression, is_block_valued
)
from .errors import (
    create_unexpected_token_error, create_missing_expression_error,
    create_nesting_too_deep_error
)


logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Operator binding strength, weakest first."""
    LOWEST = 0
    EQUALS = 1          # ==, !=
    LESS_GREATER = 2    # <, >, <=, >=
    SUM = 3             # +, -
    PRODUCT = 4         # *, /
    PREFIX = 5          # -x, !x
    CALL = 6            # f(x)


# Binding strength of every token that can follow a complete term.
# Anything missing here ends the expression.
PRECEDENCES: Dict[TokenType, Precedence] = {
    TokenType.EQUAL: Precedence.EQUALS,
    TokenType.NOT_EQUAL: Precedence.EQUALS,
    TokenType.LESS_THAN: Precedence.LESS_GREATER,
    TokenType.GREATER_THAN: Precedence.LESS_GREATER,
    TokenType.LESS_EQUAL: Precedence.LESS_GREATER,
    TokenType.GREATER_EQUAL: Precedence.LESS_GREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.MULTIPLY: Precedence.PRODUCT,
    TokenType.DIVIDE: Precedence.PRODUCT,
    TokenType.LEFT_PAREN: Precedence.CALL,
}

# Tokens that end a block without being consumed by it
BLOCK_TERMINATORS = frozenset({TokenType.EOF, TokenType.RIGHT_BRACE, TokenType.ELSE})


@dataclass
class ParseResult:
    """Outcome of a recovering parse."""
    statements: List[Statement]
    errors: List[AmpError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when the statements form a valid program."""
        return not self.errors


class Parser:
    """
    Amp parser.

    A Parser is bound to one source string. Each call to parse() or
    parse_with_recovery() scans the source again from the start, so no
    state leaks from one call to the next.
    """

    def __init__(self, source: str, config: Optional[ParserConfiguration] = None):
        """
        Initialize parser with source text.

        Args:
            source: Amp source code
            config: Parser configuration (defaults apply when omitted)
        """
        self.source = source
        self.config = config or ParserConfiguration()
        self.lexer = Lexer(source)
        self.current: Token = EOF_TOKEN
        self.peek: Token = EOF_TOKEN
        self.errors: List[AmpError] = []

        self._recovering = False
        self._nesting = 0
        self._open_blocks = 0

        self._init_parsing_tables()

    def _init_parsing_tables(self):
        """Initialize the table of primary-term parsers."""

        # Tokens that can start an expression
        self.prefix_parsers: Dict[TokenType, Callable[[], Expression]] = {
            TokenType.INTEGER: self._parse_integer_literal,
            TokenType.STRING: self._parse_string_literal,
            TokenType.TRUE: self._parse_boolean_literal,
            TokenType.FALSE: self._parse_boolean_literal,
            TokenType.IDENTIFIER: self._parse_identifier,
            TokenType.LEFT_PAREN: self._parse_grouped_expression,
            TokenType.BANG: self._parse_prefix_expression,
            TokenType.MINUS: self._parse_prefix_expression,
            TokenType.IF: self._parse_if_expression,
            TokenType.FN: self._parse_function_literal,
        }

    # Entry points

    def parse(self) -> List[Statement]:
        """
        Parse the whole source.

        Returns:
            The top-level statements, in order

        Raises:
            LexerError: for malformed characters, numbers or strings
            ParseError: for grammar errors
            NestingTooDeepError: when nesting exceeds the configured limit or
                the interpreter stack, whichever comes first
        """
        self._start(recovering=False)
        try:
            statements = self.parse_block()
        except RecursionError:
            raise self._interpreter_depth_error() from None

        if self.current.type != TokenType.EOF:
            # A '}' or 'else' with nothing open to close
            raise create_unexpected_token_error(TokenType.EOF, self.current)

        logger.debug("parsed %d statements", len(statements))
        return statements

    def parse_with_recovery(self) -> ParseResult:
        """
        Parse the whole source, collecting errors instead of stopping.

        A statement that fails leaves a placeholder in its slot: an
        EmptyStatement, or a let/return whose value is UnknownExpression
        when only the value was malformed.
        """
        self._start(recovering=True)
        statements: List[Statement] = []

        while self.current.type != TokenType.EOF:
            try:
                if self.current.type in BLOCK_TERMINATORS:
                    raise create_unexpected_token_error(TokenType.EOF, self.current)
                statements.append(self._parse_statement())
            except RecursionError:
                self._record(self._interpreter_depth_error())
                self._nesting = 0
                statements.append(EmptyStatement())
                self._synchronize()
            except AmpError as error:
                self._record(error)
                statements.append(EmptyStatement())
                self._synchronize()

        logger.debug("parsed %d statements with %d errors", len(statements), len(self.errors))
        return ParseResult(statements, list(self.errors))

    def _start(self, recovering: bool):
        self.lexer = Lexer(self.source)
        self.errors = []
        self._recovering = recovering
        self._nesting = 0
        self._open_blocks = 0
        self.current = self.lexer.next_token()
        self.peek = self.lexer.next_token()

    # Statements

    def parse_block(self) -> List[Statement]:
        """
        Parse statements up to EOF, '}' or 'else'.

        The terminator is left for the caller.
        """
        statements = []
        while self.current.type not in BLOCK_TERMINATORS:
            statements.append(self._parse_statement())
        return statements

    def _parse_statement(self) -> Statement:
        """Parse one statement."""
        self._check_current()
        self._trace("statement at %s", self.current)

        token_type = self.current.type
        if token_type == TokenType.LET:
            return self._parse_let_statement()
        if token_type == TokenType.RETURN:
            return self._parse_return_statement()
        if token_type == TokenType.SEMICOLON:
            self._advance()
            return EmptyStatement()
        if token_type == TokenType.IDENTIFIER and self.peek.type == TokenType.ASSIGN:
            # `x = 1;` is a declaration missing its keyword
            error = create_unexpected_token_error(TokenType.LET, self.current)
            error.diagnostic.suggestions = [f"Declare it with 'let {self.current.lexeme} = ...;'"]
            raise error
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> LetStatement:
        """Parse `let IDENT = EXPR ;`."""
        self._expect(TokenType.LET)
        name = self._expect(TokenType.IDENTIFIER).value
        self._expect(TokenType.ASSIGN)

        value = self._parse_value(f"the value of '{name}'")
        if not isinstance(value, UnknownExpression):
            self._expect(TokenType.SEMICOLON)

        return LetStatement(name, value)

    def _parse_return_statement(self) -> ReturnStatement:
        """Parse `return EXPR ;`."""
        self._expect(TokenType.RETURN)

        value = self._parse_value("the return value")
        if not isinstance(value, UnknownExpression):
            self._expect(TokenType.SEMICOLON)

        return ReturnStatement(value)

    def _parse_expression_statement(self) -> ExpressionStatement:
        """
        Parse `EXPR ;`.

        The ';' may be left out before EOF or '}', and after an expression
        that ends with a block.
        """
        expression = self.parse_expression(Precedence.LOWEST, "an expression statement")

        if self.current.type == TokenType.SEMICOLON:
            self._advance()
        elif (self.current.type not in (TokenType.EOF, TokenType.RIGHT_BRACE)
              and not is_block_valued(expression)):
            raise create_unexpected_token_error(TokenType.SEMICOLON, self.current)

        return ExpressionStatement(expression)

    def _parse_value(self, context: str) -> Expression:
        """
        Parse the value of a let/return statement.

        While recovering at top level a malformed value becomes
        UnknownExpression and the rest of the statement is skipped.
        """
        if not (self._recovering and self._open_blocks == 0):
            return self.parse_expression(Precedence.LOWEST, context)

        try:
            return self.parse_expression(Precedence.LOWEST, context)
        except AmpError as error:
            self._record(error)
            self._synchronize()
            return UnknownExpression()

    def _parse_braced_block(self) -> List[Statement]:
        """Parse `{ BLOCK }`."""
        with self._nested():
            self._expect(TokenType.LEFT_BRACE)
            self._open_blocks += 1
            statements = self.parse_block()
            self._expect(TokenType.RIGHT_BRACE)
            self._open_blocks -= 1
        return statements

    # Expressions

    def parse_expression(self, precedence: Precedence = Precedence.LOWEST,
                         context: str = "an expression") -> Expression:
        """
        Parse an expression whose operators all bind tighter than `precedence`.

        Args:
            precedence: Minimum binding strength (exclusive)
            context: What the expression is for, used in error messages
        """
        with self._nested():
            left = self._parse_primary(context)

            while self._current_precedence() > precedence:
                if self.current.type == TokenType.LEFT_PAREN:
                    left = self._parse_call_expression(left)
                else:
                    left = self._parse_infix_expression(left)

            return left

    def _current_precedence(self) -> Precedence:
        self._check_current()
        return PRECEDENCES.get(self.current.type, Precedence.LOWEST)

    def _parse_primary(self, context: str) -> Expression:
        """Parse a literal, name, group, prefix, if or fn term."""
        self._check_current()
        prefix_parser = self.prefix_parsers.get(self.current.type)
        if prefix_parser is None:
            raise create_missing_expression_error(context, self.current)
        return prefix_parser()

    def _parse_integer_literal(self) -> IntegerLiteral:
        token = self._advance()
        return IntegerLiteral(token.value)

    def _parse_string_literal(self) -> StringLiteral:
        token = self._advance()
        return StringLiteral(token.value)

    def _parse_boolean_literal(self) -> BooleanLiteral:
        token = self._advance()
        return BooleanLiteral(token.value)

    def _parse_identifier(self) -> Identifier:
        token = self._advance()
        return Identifier(token.value)

    def _parse_grouped_expression(self) -> Expression:
        """Parse `( EXPR )`."""
        self._expect(TokenType.LEFT_PAREN)
        expression = self.parse_expression(Precedence.LOWEST, "a parenthesized expression")
        self._expect(TokenType.RIGHT_PAREN)
        return expression

    def _parse_prefix_expression(self) -> PrefixExpression:
        """Parse `!EXPR` or `-EXPR`."""
        operator = self._advance()
        operand = self.parse_expression(Precedence.PREFIX, f"the operand of '{operator.lexeme}'")
        return PrefixExpression(operator.lexeme, operand)

    def _parse_infix_expression(self, left: Expression) -> InfixExpression:
        """Fold `left OP right`, with right parsed at OP's precedence."""
        operator = self._advance()
        precedence = PRECEDENCES[operator.type]
        right = self.parse_expression(precedence, f"the right operand of '{operator.lexeme}'")
        self._trace("fold %s at %s", operator.lexeme, precedence.name)
        return InfixExpression(left, operator.lexeme, right)

    def _parse_call_expression(self, function: Expression) -> CallExpression:
        """Parse `( ARG, ARG, ... )` after a callee."""
        self._expect(TokenType.LEFT_PAREN)
        arguments = []

        if self.current.type != TokenType.RIGHT_PAREN:
            while True:
                arguments.append(self.parse_expression(Precedence.LOWEST, "a call argument"))
                if self.current.type != TokenType.COMMA:
                    break
                self._advance()

        self._expect(TokenType.RIGHT_PAREN)
        return CallExpression(function, arguments)

    def _parse_if_expression(self) -> IfExpression:
        """Parse `if ( EXPR ) { BLOCK }` with an optional `else { BLOCK }`."""
        self._expect(TokenType.IF)
        self._expect(TokenType.LEFT_PAREN)
        condition = self.parse_expression(Precedence.LOWEST, "the if condition")
        self._expect(TokenType.RIGHT_PAREN)

        consequence = self._parse_braced_block()

        alternative: List[Statement] = []
        if self.current.type == TokenType.ELSE:
            self._advance()
            alternative = self._parse_braced_block()

        return IfExpression(condition, consequence, alternative)

    def _parse_function_literal(self) -> FunctionLiteral:
        """Parse `fn ( PARAM, ... ) { BLOCK }`."""
        self._expect(TokenType.FN)
        self._expect(TokenType.LEFT_PAREN)
        parameters = []

        if self.current.type != TokenType.RIGHT_PAREN:
            while True:
                parameters.append(self._expect(TokenType.IDENTIFIER).value)
                if self.current.type != TokenType.COMMA:
                    break
                self._advance()

        self._expect(TokenType.RIGHT_PAREN)
        body = self._parse_braced_block()
        return FunctionLiteral(parameters, body)

    # Utility methods

    def _advance(self) -> Token:
        """Consume and return the current token."""
        token = self.current
        lookahead = self.lexer.next_token()
        self.current = self.peek
        self.peek = lookahead
        self._trace("advance: current=%s peek=%s", self.current, self.peek)
        return token

    def _expect(self, token_type: TokenType) -> Token:
        """Consume a token of the given type or raise."""
        self._check_current()
        if self.current.type != token_type:
            raise create_unexpected_token_error(token_type, self.current)
        return self._advance()

    def _check_current(self):
        """Raise the lexical error for a scanner error token."""
        if self.current.is_error:
            raise lexical_error_for(self.current)

    @contextmanager
    def _nested(self):
        """Count one level of expression/block nesting."""
        if self._nesting >= self.config.max_nesting_depth:
            raise create_nesting_too_deep_error(self.config.max_nesting_depth, self.current)
        self._nesting += 1
        try:
            yield
        finally:
            self._nesting -= 1

    def _interpreter_depth_error(self) -> AmpError:
        """The nesting error for input that ran out of interpreter stack first."""
        logger.debug("interpreter recursion limit hit below max_nesting_depth=%d",
                     self.config.max_nesting_depth)
        return create_nesting_too_deep_error(self.config.max_nesting_depth, self.current)

    def _record(self, error: AmpError):
        logger.debug("recovering from %s", error)
        self.errors.append(error)

    def _synchronize(self):
        """
        Skip to the next statement boundary after an error.

        Leaves every block that was open when the error was raised, then
        stops just past the next ';' (or the '}' that closed those blocks).
        """
        depth = self._open_blocks
        self._open_blocks = 0

        while self.current.type != TokenType.EOF:
            token_type = self.current.type
            self._advance()

            if token_type == TokenType.LEFT_BRACE:
                depth += 1
            elif token_type == TokenType.RIGHT_BRACE:
                depth = max(depth - 1, 0)
                if depth == 0 and self.current.type != TokenType.ELSE:
                    if self.current.type == TokenType.SEMICOLON:
                        self._advance()
                    return
            elif token_type == TokenType.SEMICOLON and depth == 0:
                return

    def _trace(self, message: str, *args):
        if not self.config.tracing:
            return
        text = message % args if args else message
        if self.config.trace is not None:
            self.config.trace(text)
        if self.config.debug_mode:
            logger.debug(text)


def parse(source: str, config: Optional[ParserConfiguration] = None) -> List[Statement]:
    """
    Parse Amp source into its top-level statements.

    Raises:
        AmpError: the first lexical or grammar error
    """
    return Parser(source, config).parse()


def parse_with_recovery(source: str, config: Optional[ParserConfiguration] = None) -> ParseResult:
    """Parse Amp source, collecting every statement-level error."""
    return Parser(source, config).parse_with_recovery()
