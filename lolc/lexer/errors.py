"""
Error handling for the lolc lexer.

Lexical failures are reported as `TokenError`, a leaf failure that the
tokenizer wraps with the location of the offending snippet.
"""

from ..errors import CompilerError


class TokenError(CompilerError):
    """
    Raised when a snippet is not a recognized operator or keyword and is not
    all-alphanumeric, or when the source contains a non-ASCII character.
    """

    kind = "TokenizerError"

    def __init__(self, message: str, code: str = "L001", position: int = -1):
        super().__init__(message, code)
        # Character offset within the line, when known
        self.position = position


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid token",
    "L002": "Non-ASCII character",
}


def create_invalid_token_error(snippet: str, position: int = -1) -> TokenError:
    """Create an error for a snippet that cannot be classified."""
    return TokenError(
        message=f"Invalid token: {snippet}",
        code="L001",
        position=position,
    )


def create_non_ascii_error(char: str, position: int) -> TokenError:
    """Create an error for a character outside the ASCII range."""
    return TokenError(
        message=f"non-ASCII character at position {position} (U+{ord(char):04X})",
        code="L002",
        position=position,
    )
