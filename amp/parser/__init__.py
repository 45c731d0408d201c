"""
Amp Parser Package

Implements a precedence-climbing recursive descent parser for the Amp
language. Produces a list of statement nodes per source text.

Key Features:
- One precedence table drives all binary operators
- Calls bind tighter than every other operator
- Configurable nesting limit instead of interpreter stack overflows
- Optional error recovery with one error per broken statement
"""

from .ast_nodes import *
from .parser import Parser, ParseResult, Precedence, PRECEDENCES, parse, parse_with_recovery
from .errors import (
    ParseError, UnexpectedTokenError, MissingExpressionError, NestingTooDeepError
)

__all__ = [
    # Core parser
    "Parser", "ParseResult", "Precedence", "PRECEDENCES",
    "parse", "parse_with_recovery",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "Statement", "Expression",
    "LetStatement", "ExpressionStatement", "ReturnStatement", "EmptyStatement",
    "IntegerLiteral", "StringLiteral", "BooleanLiteral", "Identifier",
    "PrefixExpression", "InfixExpression", "IfExpression", "FunctionLiteral",
    "CallExpression", "UnknownExpression", "walk", "is_block_valued",

    # Error handling
    "ParseError", "UnexpectedTokenError", "MissingExpressionError", "NestingTooDeepError",
]
