"""
lolc lexer: splits lines into snippets and classifies them into tokens.

Segmentation is purely category based. Consecutive characters of the same
category form one snippet, so `**` and `foo42` come out whole while `((`
also stays a single (invalid) snippet. Whitespace runs are dropped and a
snippet containing `//` ends the line.

The tokenizer pulls one line at a time, only when its consumer asks for the
next token, and stops for good at the first lexical error.
"""

import io
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Deque, Iterable, Iterator, List, Optional, Tuple

from ..errors import LocalizedError
from .tokens import (
    Token, TokenType, SourceLocation, CharCategory, OPERATORS,
    PUNCTUATION_CATEGORIES, COMMENT_MARKER, WHITESPACE_CHARS
)
from .errors import TokenError, create_invalid_token_error, create_non_ascii_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snippet:
    """A maximal run of same-category characters and its offset in the line."""
    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def classify_char(char: str) -> CharCategory:
    """Return the lexical category of a single character."""
    if not char.isascii():
        return CharCategory.NON_ASCII
    if char in WHITESPACE_CHARS:
        return CharCategory.WHITESPACE
    if char.isalnum():
        return CharCategory.ALPHANUMERIC
    return PUNCTUATION_CATEGORIES.get(char, CharCategory.OTHER)


def slice_into_snippets(line: str, strict: bool = True) -> Iterator[Snippet]:
    """
    Split one line into snippets, left to right.

    Args:
        line: A single line of source text, without its newline
        strict: Raise on non-ASCII text instead of yielding it as a snippet

    Yields:
        Non-empty, non-overlapping snippets

    Raises:
        TokenError: On a non-ASCII character before any comment marker (strict only)
    """
    pos = 0
    length = len(line)

    while pos < length:
        start = pos
        category = classify_char(line[pos])
        pos += 1
        while pos < length and classify_char(line[pos]) is category:
            pos += 1

        if category is CharCategory.WHITESPACE:
            continue

        text = line[start:pos]
        # Only slash runs can hold the marker; `///` counts as well
        if COMMENT_MARKER in text:
            return
        if category is CharCategory.NON_ASCII and strict:
            raise create_non_ascii_error(text[0], start)

        yield Snippet(text, start)


def classify_snippet(text: str, position: int = -1) -> Tuple[TokenType, str]:
    """
    Classify a snippet into a token type.

    Operators and keywords are matched first; anything else made entirely of
    alphanumeric characters is a literal.

    Raises:
        TokenError: If the snippet is neither
    """
    if text in OPERATORS:
        return OPERATORS[text], text
    if text.isalnum():
        return TokenType.LITERAL, text
    raise create_invalid_token_error(text, position)


class TokenizerState(Enum):
    """States of the pull-based tokenizer."""
    READY = auto()      # No buffered tokens; the next pull reads a line
    BUFFERED = auto()   # Emitting the current line's tokens
    ERRORED = auto()    # Terminal; a lexical error was recorded


class Tokenizer:
    """
    Lazy token stream over a sequence of lines.

    Tokens are produced one line at a time. Only the first lexical error is
    kept; once it is recorded the stream ends and later lines are never read.
    The error is handed out by `take_error`, normally after the parser has
    stopped.
    """

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self._buffer: Deque[Token] = deque()
        self._error: Optional[LocalizedError] = None
        self.state = TokenizerState.READY
        self.location = SourceLocation()

    def __iter__(self) -> "Tokenizer":
        return self

    def __next__(self) -> Token:
        while True:
            if self.state is TokenizerState.ERRORED:
                raise StopIteration

            if self.state is TokenizerState.BUFFERED:
                token = self._buffer.popleft()
                if not self._buffer:
                    self.state = TokenizerState.READY
                self.location = token.location
                return token

            line = next(self._lines, None)
            if line is None:
                raise StopIteration
            self._scan_line(line)

    def _scan_line(self, line: str):
        """Tokenize one line into the buffer, or record the first error."""
        line_number = self.location.line + 1
        tokens: List[Token] = []

        try:
            for snippet in slice_into_snippets(line):
                token_type, lexeme = classify_snippet(snippet.text, snippet.start)
                tokens.append(Token(token_type, lexeme, SourceLocation(line_number, len(tokens))))
        except TokenError as error:
            # The failing snippet's index is the number of tokens before it
            self.location = SourceLocation(line_number, len(tokens))
            self._error = error.with_location(self.location)
            self._buffer.clear()
            self.state = TokenizerState.ERRORED
            logger.debug("lexical error at %s: %s", self.location, error.message)
            return

        self.location = SourceLocation(line_number, 0)
        logger.debug("line %d: %d tokens", line_number, len(tokens))
        if tokens:
            self._buffer.extend(tokens)
            self.state = TokenizerState.BUFFERED

    def has_error(self) -> bool:
        """Check if a lexical error is waiting to be taken."""
        return self._error is not None

    def take_error(self) -> Optional[LocalizedError]:
        """Return the recorded lexical error, once; later calls return None."""
        error, self._error = self._error, None
        return error


def split_source(source: str) -> List[str]:
    """Split a string into lines exactly as iterating a text-mode file would."""
    return [line.rstrip("\r\n") for line in io.StringIO(source, newline=None)]


def tokenize(lines: Iterable[str]) -> Tokenizer:
    """Wrap a sequence of newline-stripped lines in a tokenizer."""
    return Tokenizer(lines)


def tokenize_string(source: str) -> List[Token]:
    """
    Convenience function to tokenize a whole source string.

    Args:
        source: Source code string

    Returns:
        List of tokens

    Raises:
        LocalizedError: If lexing fails
    """
    tokenizer = Tokenizer(split_source(source))
    tokens = list(tokenizer)

    error = tokenizer.take_error()
    if error is not None:
        raise error

    return tokens
