"""
lolc Parser Package

Implements a recursive descent parser with precedence climbing for the lolc
language. Produces a small, closed AST whose nodes all carry the location
of their first token.

Key Features:
- Lookahead-1 parsing over a lazily pulled token stream
- Precedence climbing for additive, multiplicative and power operators
- Strict and optional type annotations
- Located "expected X, found Y" diagnostics, no recovery
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, ASTVisitor, Block, Expression, Lambda, Literal,
    Module, TypedLiteral, dump
)
from .parser import Parser, Precedence, parse, parse_string
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "Precedence", "parse", "parse_string",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor",
    "Literal", "TypedLiteral", "Expression", "Lambda", "Block", "Module",
    "dump",

    # Error handling
    "ParseError",
]
