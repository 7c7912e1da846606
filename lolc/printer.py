"""
Source printer: turns an AST back into lolc source text.

Parentheses are only added where precedence needs them. All binary operators
are left associative, so a right operand at the same level is wrapped. Tokens
are separated by whitespace wherever two punctuation characters of the same
category would otherwise merge into one snippet (`((`, `))`).
"""

from .lexer.tokens import OPERATOR_TEXT
from .parser.ast_nodes import (
    ASTNode, ASTVisitor, Block, Expression, Lambda, Literal, Module, TypedLiteral
)
from .parser.parser import BINARY_PRECEDENCE


class SourcePrinter(ASTVisitor):
    """Serializes AST nodes; blocks are indented one level per nesting depth."""

    def __init__(self, indent: str = "    "):
        self.indent = indent
        self.depth = 0

    def visit_module(self, node: Module) -> str:
        if not node.statements:
            return ""
        return "\n".join(self._statement(statement) for statement in node.statements) + "\n"

    def visit_literal(self, node: Literal) -> str:
        return node.text

    def visit_typed_literal(self, node: TypedLiteral) -> str:
        return f"{node.name}: {node.type_name}"

    def visit_expression(self, node: Expression) -> str:
        if node.is_binding:
            return f"let {self.visit(node.left)} = {self.visit(node.right)}"

        level = BINARY_PRECEDENCE[node.op]
        left = self._operand(node.left, level, right_side=False)
        right = self._operand(node.right, level, right_side=True)
        return f"{left} {OPERATOR_TEXT[node.op]} {right}"

    def visit_block(self, node: Block) -> str:
        if not node.statements:
            return "{ }"

        self.depth += 1
        body = [f"{self.indent * self.depth}{self._statement(statement)}"
                for statement in node.statements]
        self.depth -= 1
        closing = f"{self.indent * self.depth}}}"
        return "{\n" + "\n".join(body) + "\n" + closing

    def visit_lambda(self, node: Lambda) -> str:
        params = ", ".join(self.visit(param) for param in node.params)
        return f"fn({params}): {node.return_type} {self.visit(node.body)}"

    def _statement(self, node: ASTNode) -> str:
        return f"{self.visit(node)};"

    def _operand(self, node: ASTNode, level: int, right_side: bool) -> str:
        text = self.visit(node)
        if isinstance(node, Expression) and not node.is_binding:
            inner = BINARY_PRECEDENCE[node.op]
            if inner < level or (right_side and inner == level):
                return _parenthesize(text)
        return text


def _parenthesize(text: str) -> str:
    opening = "( " if text.startswith("(") else "("
    closing = " )" if text.endswith(")") else ")"
    return f"{opening}{text}{closing}"


def to_source(node: ASTNode) -> str:
    """Serialize a tree to source that parses back to an equal tree."""
    return SourcePrinter().visit(node)
