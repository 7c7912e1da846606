"""
lolc Lexer Package

Implements the lexical front end of the lolc language: a category-based
segmenter that cuts each line into snippets, and a pull-based tokenizer that
classifies snippets into located tokens.

Key Features:
- Line-at-a-time, demand-driven tokenization
- Per-token (line, column) locations, column being the snippet index
- `//` end-of-line comments
- First-error-wins error reporting with a terminal error state
"""

from .tokens import Token, TokenType, SourceLocation, CharCategory
from .lexer import (
    Snippet, Tokenizer, TokenizerState, classify_char, classify_snippet,
    slice_into_snippets, split_source, tokenize, tokenize_string
)
from .errors import TokenError

__all__ = [
    "Tokenizer",
    "TokenizerState",
    "Token",
    "TokenType",
    "SourceLocation",
    "CharCategory",
    "Snippet",
    "TokenError",
    "classify_char",
    "classify_snippet",
    "slice_into_snippets",
    "split_source",
    "tokenize",
    "tokenize_string",
]
