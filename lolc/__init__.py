"""
lolc: front end of the lol expression/function language

Turns source text into a located token stream and then into an AST, and
renders caret-annotated diagnostics when either stage fails.

Architecture:
    lolc/
    ├── lexer/           # Segmentation and tokenization
    ├── parser/          # Recursive descent parser and AST
    ├── errors.py        # Located error envelope
    ├── diagnostics.py   # Snippet renderer
    ├── printer.py       # AST back to source
    ├── compile.py       # lines -> tokens -> Module
    └── cli.py           # Command line entry point

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Tokenizer, Token, TokenType, SourceLocation, TokenError
from .parser import Parser, ParseError, Module, dump, parse, parse_string
from .errors import CompilerError, LocalizedError, LocalizedSourcedError
from .compile import compile_file, compile_lines
from .printer import to_source

__all__ = [
    # Core classes
    "Tokenizer",
    "Parser",
    "Token",
    "TokenType",
    "SourceLocation",
    "Module",

    # Pipeline
    "compile_lines",
    "compile_file",
    "parse",
    "parse_string",
    "dump",
    "to_source",

    # Errors
    "CompilerError",
    "TokenError",
    "ParseError",
    "LocalizedError",
    "LocalizedSourcedError",

    # Version info
    "__version__",
    "__license__",
]
