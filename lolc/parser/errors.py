"""
Error handling for the lolc parser.

Syntax errors are reported as `ParseError`. The parser never recovers: the
first error aborts the parse, carrying the location of the token that
caused it.
"""

from typing import Optional

from ..errors import CompilerError
from ..lexer.tokens import Token, SourceLocation


class ParseError(CompilerError):
    """
    Raised when the token sequence does not match the grammar at the current
    position, including a premature end of input.
    """

    kind = "ParseError"

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        token: Optional[Token] = None,
        code: str = "P001",
    ):
        super().__init__(message, code)
        self.location = location or SourceLocation()
        self.token = token


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P010": "Unexpected end of input",
    "P020": "Nesting too deep",
}


def expected_found(expected: str, found: Optional[Token]) -> ParseError:
    """
    Create an "expected X, found Y" error.

    Args:
        expected: Wording of what the grammar wanted at this position
        found: The offending token, or None at end of input
    """
    if found is None:
        return ParseError(
            message=f"Expected {expected}, found end of input",
            code="P010",
        )

    return ParseError(
        message=f"Expected {expected}, found {found.describe()}",
        location=found.location,
        token=found,
        code="P001",
    )


def nesting_too_deep(location: SourceLocation) -> ParseError:
    """Create an error for input nested past the interpreter's recursion limit."""
    return ParseError(
        message="Expression nested too deeply",
        location=location,
        code="P020",
    )
