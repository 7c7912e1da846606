"""
Located error envelope shared by every compiler stage.

Leaf failures (`TokenError`, `ParseError`) derive from `CompilerError`. When
a failure leaves the stage that raised it, it is wrapped in a
`LocalizedError` that records where it happened. Once the caller knows which
file was being read, `with_source` lifts it to a `LocalizedSourcedError`,
which can render a caret-annotated snippet of that file.
"""

import os
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from .lexer.tokens import SourceLocation


class CompilerError(Exception):
    """Base class for leaf failures raised by the lexer and the parser."""

    kind = "CompilerError"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def with_location(self, location: "SourceLocation") -> "LocalizedError":
        return LocalizedError(self, location)

    def __str__(self) -> str:
        if self.code:
            return f"{self.kind}[{self.code}]: {self.message}"
        return f"{self.kind}: {self.message}"


class LocalizedError(Exception):
    """
    A failure paired with the source position at which it was detected.

    The cause may be any exception; file reading errors are localized at the
    synthetic (0, 0) position.
    """

    def __init__(self, cause: BaseException, location: "SourceLocation"):
        super().__init__(cause, location)
        self.cause = cause
        self.location = location
        self.__cause__ = cause

    def with_source(self, source_path: Union[str, "os.PathLike[str]"]) -> "LocalizedSourcedError":
        return LocalizedSourcedError(self.cause, self.location, source_path)

    def __str__(self) -> str:
        return (f"Error at [line:{self.location.line},column:{self.location.column}]:\n"
                f"{self.cause}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.cause!r}, {self.location!r})"


class LocalizedSourcedError(LocalizedError):
    """A located error bound to the file it came from."""

    def __init__(self, cause: BaseException, location: "SourceLocation",
                 source_path: Union[str, "os.PathLike[str]"]):
        super().__init__(cause, location)
        self.source_path = os.fspath(source_path)

    def plain(self) -> str:
        """The path-less representation, as a bare LocalizedError prints."""
        return LocalizedError.__str__(self)

    def render(self, options=None) -> str:
        """
        Render the framed snippet diagnostic.

        Args:
            options: DiagnosticOptions; defaults to no colour

        Returns:
            The multi-line diagnostic text
        """
        from .diagnostics import render_sourced_error

        return render_sourced_error(self, options)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}({self.cause!r}, {self.location!r}, "
                f"{self.source_path!r})")


def localize(error: BaseException, location: Optional["SourceLocation"] = None) -> LocalizedError:
    """Attach a location to any exception; the default is the synthetic position."""
    from .lexer.tokens import SourceLocation

    if isinstance(error, LocalizedError):
        return error
    return LocalizedError(error, location or SourceLocation())
