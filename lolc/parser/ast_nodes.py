"""
Abstract Syntax Tree node definitions for lolc.

The tree is small and closed: literals, typed literals, binary expressions
(including the synthetic `let` binding), lambdas, blocks and the module
root. Every node records the location of the first token of the production
that built it. Nodes compare structurally and ignore locations, so a tree
parsed from re-printed source equals the original.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, List

from ..lexer.tokens import SourceLocation, TokenType


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""
    LITERAL = "Literal"
    TYPED_LITERAL = "TypedLiteral"
    EXPRESSION = "Expression"
    LAMBDA = "Lambda"
    BLOCK = "Block"
    MODULE = "Module"


class ASTVisitor:
    """
    Visitor base class.

    `visit` dispatches to `visit_<node type>` (e.g. `visit_typed_literal`),
    falling back to `generic_visit`.
    """

    def visit(self, node: "ASTNode") -> Any:
        method = getattr(self, f"visit_{node.node_type.name.lower()}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: "ASTNode") -> Any:
        raise NotImplementedError(f"{self.__class__.__name__} cannot visit {node.node_type.value}")


class ASTNode(ABC):
    """Base class for all AST nodes."""

    node_type: ClassVar[ASTNodeType]
    location: SourceLocation

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List["ASTNode"]:
        """Get all child nodes, in source order."""

    @abstractmethod
    def label(self) -> str:
        """One-line description used by `dump`."""

    def __str__(self) -> str:
        return f"{self.node_type.value}@{self.location}"


@dataclass
class Literal(ASTNode):
    """A bare identifier or number."""
    text: str
    location: SourceLocation = field(default_factory=SourceLocation, compare=False)

    node_type: ClassVar[ASTNodeType] = ASTNodeType.LITERAL

    def children(self) -> List[ASTNode]:
        return []

    def label(self) -> str:
        return f"Literal {self.text!r}"


@dataclass
class TypedLiteral(ASTNode):
    """A literal annotated with a type name, e.g. `a: int`."""
    name: str
    type_name: str
    location: SourceLocation = field(default_factory=SourceLocation, compare=False)

    node_type: ClassVar[ASTNodeType] = ASTNodeType.TYPED_LITERAL

    def children(self) -> List[ASTNode]:
        return []

    def label(self) -> str:
        return f"TypedLiteral {self.name!r}: {self.type_name!r}"


@dataclass
class Expression(ASTNode):
    """
    Binary arithmetic, or the `let` binding form.

    For `let`, `left` is the bound name (Literal or TypedLiteral) and
    `right` the value.
    """
    op: TokenType
    left: ASTNode
    right: ASTNode
    location: SourceLocation = field(default_factory=SourceLocation, compare=False)

    node_type: ClassVar[ASTNodeType] = ASTNodeType.EXPRESSION

    @property
    def is_binding(self) -> bool:
        return self.op is TokenType.LET

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]

    def label(self) -> str:
        return f"Expression {self.op.name}"


@dataclass
class Block(ASTNode):
    """Curly-brace block; statements run in order."""
    statements: List[ASTNode]
    location: SourceLocation = field(default_factory=SourceLocation, compare=False)

    node_type: ClassVar[ASTNodeType] = ASTNodeType.BLOCK

    def children(self) -> List[ASTNode]:
        return list(self.statements)

    def label(self) -> str:
        return "Block"


@dataclass
class Lambda(ASTNode):
    """Function literal: `fn(a: int): int { ... }`."""
    return_type: str
    params: List[TypedLiteral]
    body: Block
    location: SourceLocation = field(default_factory=SourceLocation, compare=False)

    node_type: ClassVar[ASTNodeType] = ASTNodeType.LAMBDA

    def children(self) -> List[ASTNode]:
        return [*self.params, self.body]

    def label(self) -> str:
        return f"Lambda -> {self.return_type!r}"


@dataclass
class Module(ASTNode):
    """Root node of a parsed source file."""
    statements: List[ASTNode]
    location: SourceLocation = field(default_factory=SourceLocation, compare=False)

    node_type: ClassVar[ASTNodeType] = ASTNodeType.MODULE

    def children(self) -> List[ASTNode]:
        return list(self.statements)

    def label(self) -> str:
        return "Module"


def dump(node: ASTNode, indent: str = "  ") -> str:
    """
    Render a tree as indented text, one node per line, each prefixed with
    its `[line:column]` location.
    """
    lines: List[str] = []

    def walk(current: ASTNode, depth: int):
        lines.append(f"{indent * depth}[{current.location}] {current.label()}")
        for child in current.children():
            walk(child, depth + 1)

    walk(node, 0)
    return "\n".join(lines)
