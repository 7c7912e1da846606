"""
Token definitions for the lolc lexer.

This module defines the closed set of token types the language knows about:
- Operators and punctuation (`+ - * / % ** , : ; = ( ) { }`)
- Keywords (`let`, `fn`), which are classified like operators
- Literals (any run of alphanumeric characters: identifiers and numbers alike)

It also holds the character categories used by the segmenter and the
source location attached to every token.
"""

from enum import Enum, auto
from dataclasses import dataclass


class TokenType(Enum):
    """
    Enumeration of all token types.

    Every member except LITERAL is an operator tag.
    """

    # Arithmetic operators
    ADD = auto()                    # +
    SUB = auto()                    # -
    MUL = auto()                    # *
    DIV = auto()                    # /
    MOD = auto()                    # %
    POW = auto()                    # ** (left associative)

    # Keywords
    LET = auto()                    # let
    FN = auto()                     # fn

    # Punctuation
    COMMA = auto()                  # ,
    COLON = auto()                  # :
    SEMICOLON = auto()              # ;
    ASSIGN = auto()                 # =
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }

    # Identifiers and numbers
    LITERAL = auto()


class CharCategory(Enum):
    """Lexical category of a single source character."""
    WHITESPACE = auto()
    ALPHANUMERIC = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    SEMICOLON = auto()
    COLON = auto()
    ASSIGN = auto()
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()
    COMMA = auto()
    OTHER = auto()
    NON_ASCII = auto()


@dataclass(frozen=True)
class SourceLocation:
    """
    Position of a token or AST node.

    `line` is 1-based, `column` is the 0-based index of the snippet within
    its line (not a character offset). The default (0, 0) marks a synthetic
    or unknown position.
    """
    line: int = 0
    column: int = 0

    @property
    def is_known(self) -> bool:
        return self.line > 0

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Token:
    """A classified lexical unit with its location."""
    type: TokenType
    lexeme: str
    location: SourceLocation

    def __str__(self) -> str:
        return f"{self.type.name}({self.lexeme!r})"

    @property
    def is_operator(self) -> bool:
        return self.type is not TokenType.LITERAL

    @property
    def is_literal(self) -> bool:
        return self.type is TokenType.LITERAL

    def describe(self) -> str:
        """Human wording of the token, used in "found ..." messages."""
        if self.is_literal:
            return f"literal '{self.lexeme}'"
        return f"'{self.lexeme}'"


# Exact-text lookup, consulted before the alphanumeric literal rule so that
# keywords never become literals.
OPERATORS = {
    "+": TokenType.ADD,
    "-": TokenType.SUB,
    "*": TokenType.MUL,
    "/": TokenType.DIV,
    "%": TokenType.MOD,
    "**": TokenType.POW,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    "=": TokenType.ASSIGN,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "let": TokenType.LET,
    "fn": TokenType.FN,
}

# Reverse table, used when printing operators back to source
OPERATOR_TEXT = {token_type: text for text, token_type in OPERATORS.items()}

PUNCTUATION_CATEGORIES = {
    '(': CharCategory.LEFT_PAREN,
    ')': CharCategory.RIGHT_PAREN,
    '{': CharCategory.LEFT_BRACE,
    '}': CharCategory.RIGHT_BRACE,
    ';': CharCategory.SEMICOLON,
    ':': CharCategory.COLON,
    '=': CharCategory.ASSIGN,
    '+': CharCategory.PLUS,
    '-': CharCategory.MINUS,
    '*': CharCategory.STAR,
    '/': CharCategory.SLASH,
    '%': CharCategory.PERCENT,
    ',': CharCategory.COMMA,
}

# ASCII whitespace only; other control characters are OTHER
WHITESPACE_CHARS = " \t\n\r\x0b\x0c"

COMMENT_MARKER = "//"
