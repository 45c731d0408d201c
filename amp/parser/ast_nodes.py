"""
Abstract Syntax Tree node definitions for Amp.

Two closed families of nodes: statements and expressions. Nodes are
dataclasses, so two trees compare equal when they have the same shape and
payloads. Every node owns its children; there is no sharing and no parent
pointer.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Iterator, List


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Statements
    LET_STATEMENT = "LetStatement"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    RETURN_STATEMENT = "ReturnStatement"
    EMPTY_STATEMENT = "EmptyStatement"

    # Expressions
    INTEGER_LITERAL = "IntegerLiteral"
    STRING_LITERAL = "StringLiteral"
    BOOLEAN_LITERAL = "BooleanLiteral"
    IDENTIFIER = "Identifier"
    PREFIX_EXPRESSION = "PrefixExpression"
    INFIX_EXPRESSION = "InfixExpression"
    IF_EXPRESSION = "IfExpression"
    FUNCTION_LITERAL = "FunctionLiteral"
    CALL_EXPRESSION = "CallExpression"
    UNKNOWN_EXPRESSION = "UnknownExpression"


def _visitor_method_name(node_type: ASTNodeType) -> str:
    snake = re.sub(r'(?<!^)(?=[A-Z])', '_', node_type.value).lower()
    return f"visit_{snake}"


class ASTVisitor:
    """
    Visitor over AST nodes.

    visit() dispatches on the node type to visit_<snake_case_name>, e.g.
    visit_infix_expression. Node types without a handler go to
    generic_visit, which raises so that no node kind is silently skipped.
    """

    def visit(self, node: 'ASTNode') -> Any:
        method = getattr(self, _visitor_method_name(node.node_type), None)
        if method is None:
            return self.generic_visit(node)
        return method(node)

    def generic_visit(self, node: 'ASTNode') -> Any:
        raise NotImplementedError(
            f"{self.__class__.__name__} has no handler for {node.node_type.value}"
        )


class ASTNode(ABC):
    """Base class for all AST nodes."""

    node_type: ClassVar[ASTNodeType]

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes, in source order."""


# ============================================================================
# Statements
# ============================================================================

class Statement(ASTNode):
    """Base class for statements."""


class Expression(ASTNode):
    """Base class for expressions."""


@dataclass
class LetStatement(Statement):
    """`let name = value;`"""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.LET_STATEMENT
    name: str
    value: Expression

    def __post_init__(self):
        if self.value is None:
            raise ValueError(f"let statement for {self.name!r} needs a value")

    def children(self) -> List[ASTNode]:
        return [self.value]


@dataclass
class ExpressionStatement(Statement):
    """An expression evaluated for its value."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.EXPRESSION_STATEMENT
    expression: Expression

    def children(self) -> List[ASTNode]:
        return [self.expression]


@dataclass
class ReturnStatement(Statement):
    """`return value;`"""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.RETURN_STATEMENT
    value: Expression

    def __post_init__(self):
        if self.value is None:
            raise ValueError("return statement needs a value")

    def children(self) -> List[ASTNode]:
        return [self.value]


@dataclass
class EmptyStatement(Statement):
    """
    No-op placeholder.

    Produced for a lone `;`, and by recovery parsing for a statement that
    could not be parsed at all.
    """
    node_type: ClassVar[ASTNodeType] = ASTNodeType.EMPTY_STATEMENT

    def children(self) -> List[ASTNode]:
        return []


# ============================================================================
# Expressions
# ============================================================================

@dataclass
class IntegerLiteral(Expression):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.INTEGER_LITERAL
    value: int

    def children(self) -> List[ASTNode]:
        return []


@dataclass
class StringLiteral(Expression):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.STRING_LITERAL
    value: str

    def children(self) -> List[ASTNode]:
        return []


@dataclass
class BooleanLiteral(Expression):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.BOOLEAN_LITERAL
    value: bool

    def children(self) -> List[ASTNode]:
        return []


@dataclass
class Identifier(Expression):
    """Reference to a name. Not resolved against any scope."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.IDENTIFIER
    name: str

    def children(self) -> List[ASTNode]:
        return []


@dataclass
class PrefixExpression(Expression):
    """`!operand` or `-operand`."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.PREFIX_EXPRESSION
    operator: str
    operand: Expression

    def children(self) -> List[ASTNode]:
        return [self.operand]


@dataclass
class InfixExpression(Expression):
    """Binary operation: arithmetic, comparison or equality."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.INFIX_EXPRESSION
    left: Expression
    operator: str
    right: Expression

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


@dataclass
class IfExpression(Expression):
    """
    `if (condition) { consequence } else { alternative }`.

    alternative is an empty list when there is no else branch.
    """
    node_type: ClassVar[ASTNodeType] = ASTNodeType.IF_EXPRESSION
    condition: Expression
    consequence: List[Statement] = field(default_factory=list)
    alternative: List[Statement] = field(default_factory=list)

    def children(self) -> List[ASTNode]:
        return [self.condition, *self.consequence, *self.alternative]


@dataclass
class FunctionLiteral(Expression):
    """`fn(a, b) { body }`"""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.FUNCTION_LITERAL
    parameters: List[str] = field(default_factory=list)
    body: List[Statement] = field(default_factory=list)

    def children(self) -> List[ASTNode]:
        return list(self.body)


@dataclass
class CallExpression(Expression):
    """`function(arguments...)`"""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.CALL_EXPRESSION
    function: Expression
    arguments: List[Expression] = field(default_factory=list)

    def children(self) -> List[ASTNode]:
        return [self.function, *self.arguments]


@dataclass
class UnknownExpression(Expression):
    """
    Stand-in for an expression that failed to parse.

    Only recovery parsing produces it; a strict parse raises instead.
    """
    node_type: ClassVar[ASTNodeType] = ASTNodeType.UNKNOWN_EXPRESSION

    def children(self) -> List[ASTNode]:
        return []


def walk(node: ASTNode) -> Iterator[ASTNode]:
    """Yield node and all of its descendants, depth first in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


def is_block_valued(expression: Expression) -> bool:
    """Check if an expression's source text ends with a closing brace."""
    if isinstance(expression, (IfExpression, FunctionLiteral)):
        return True
    if isinstance(expression, PrefixExpression):
        return is_block_valued(expression.operand)
    if isinstance(expression, InfixExpression):
        return is_block_valued(expression.right)
    return False
