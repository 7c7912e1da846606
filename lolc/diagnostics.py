"""
Snippet rendering for located, sourced errors.

Given a source path and a location, the renderer re-reads the file, re-runs
the segmenter over the failing line and prints it between its neighbours,
with a caret line under exactly the failing snippet:

    Error at [line:2,column:3]:
    TokenizerError[L001]: Invalid token: @
    Inside file '/abs/path/main.lol':
    ───┬──────────────────────────────
     1 │ let x = 1;
     2 │ let y = @;
       │         ^
     3 │ x + y;
    ───┴──────────────────────────────

Nothing from the original parse is reused; output depends only on the file
text and the location. Offsets are character offsets, which is exact for
the ASCII sources the lexer accepts.
"""

import logging
from pathlib import Path
from typing import List, Optional

from colorama import Fore, Style

from .config import DiagnosticOptions
from .errors import LocalizedError, LocalizedSourcedError
from .lexer.lexer import Snippet, slice_into_snippets

logger = logging.getLogger(__name__)

RULE = "─"
BAR = "│"


class SnippetUnavailable(Exception):
    """The location does not point at a snippet of the file."""


class _Painter:
    """Applies colorama styles when colour is enabled."""

    def __init__(self, enabled: bool):
        self.enabled = enabled

    def error(self, text: str) -> str:
        if not self.enabled:
            return text
        return f"{Fore.RED}{text}{Style.RESET_ALL}"

    def emphasis(self, text: str) -> str:
        if not self.enabled:
            return text
        return f"{Fore.RED}{Style.BRIGHT}{text}{Style.RESET_ALL}"


def read_source_lines(source_path: str) -> List[str]:
    """Read a file into newline-stripped lines, the same way the compiler reads it."""
    with open(source_path, "r", encoding="utf-8", errors="replace") as f:
        return [line.rstrip("\r\n") for line in f]


def render_error(error: LocalizedError, options: Optional[DiagnosticOptions] = None) -> str:
    """Render any located error; only sourced errors get a snippet."""
    if isinstance(error, LocalizedSourcedError):
        return render_sourced_error(error, options)
    options = options or DiagnosticOptions()
    return _Painter(options.color).error(str(error))


def render_sourced_error(error: LocalizedSourcedError,
                         options: Optional[DiagnosticOptions] = None) -> str:
    """
    Render a sourced error with its snippet.

    Falls back to the plain error text plus a note when the file cannot be
    opened or the location does not point into it.
    """
    options = options or DiagnosticOptions()

    try:
        lines = read_source_lines(error.source_path)
    except OSError as exc:
        logger.debug("cannot reopen %s for rendering: %s", error.source_path, exc)
        return f"{error.plain()}\nCouldn't show snippet, error opening file: {exc}"

    try:
        return render_snippet(error, lines, options)
    except SnippetUnavailable as exc:
        return f"{error.plain()}\nCouldn't show snippet: {exc}"


def locate_snippet(line: str, column: int) -> Snippet:
    """Return the snippet at index `column` of `line`."""
    for index, snippet in enumerate(slice_into_snippets(line, strict=False)):
        if index == column:
            return snippet
    raise SnippetUnavailable(f"no snippet at column {column}")


def render_snippet(error: LocalizedSourcedError, lines: List[str],
                   options: DiagnosticOptions) -> str:
    """Build the framed snippet block from already read source lines."""
    location = error.location
    if not location.is_known:
        raise SnippetUnavailable("the error has no source position")
    if location.line > len(lines):
        raise SnippetUnavailable(f"line {location.line} is past the end of the file")

    number = location.line
    failing = lines[number - 1]
    target = locate_snippet(failing, location.column)

    previous = lines[number - 2] if number >= 2 else None
    following = lines[number] if number < len(lines) else None

    paint = _Painter(options.color)
    pad = len(str(number)) + 1

    def row(gutter: str, text: str) -> str:
        return f"{gutter:>{pad}} {BAR} {text}".rstrip()

    def neighbour(line_number: int, text: Optional[str]) -> str:
        if text is None:
            return row("", "")
        return row(str(line_number), text)

    # Rebuild the failing line from its snippets so the emphasis lands on
    # the same character span the caret points at
    pieces = []
    last = 0
    for index, snippet in enumerate(slice_into_snippets(failing, strict=False)):
        pieces.append(" " * (snippet.start - last))
        if index == location.column:
            pieces.append(paint.emphasis(snippet.text))
        else:
            pieces.append(snippet.text)
        last = snippet.end

    gutter = paint.error(f"{number:>{pad}}")
    carets = paint.error("^" * len(target.text))
    canonical = Path(error.source_path).resolve()

    out = [
        paint.error(error.plain()),
        f"Inside file '{canonical}':",
        f"{RULE * pad}{RULE}┬{RULE * options.rule_width}",
        neighbour(number - 1, previous),
        f"{gutter} {BAR} {''.join(pieces)}".rstrip(),
        f"{'':>{pad}} {BAR} {' ' * target.start}{carets}",
        neighbour(number + 1, following),
        f"{RULE * pad}{RULE}┴{RULE * options.rule_width}",
    ]
    return "\n".join(out)
