"""Diagnostic rendering options."""

import os
from dataclasses import dataclass
from typing import IO, Optional

DEFAULT_RULE_WIDTH = 30


@dataclass
class DiagnosticOptions:
    """How sourced errors are rendered."""
    color: bool = False
    rule_width: int = DEFAULT_RULE_WIDTH


def color_from_environment(stream: Optional[IO] = None) -> bool:
    """Colour is on for terminals, unless NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())
