"""
Front-end pipeline: lines -> tokens -> Module.

Each source gets its own tokenizer/parser pair. The parser pulls tokens from
the tokenizer, which reads a line only when the parser needs the next
token. Once the tokenizer hits a lexical error it ends the stream, so the
parser can only report a bogus end of input. The lexical error is the real
cause and takes priority.
"""

import logging
import os
from typing import Iterable, Iterator, Union

from .errors import LocalizedError, localize
from .lexer.lexer import Tokenizer
from .parser.ast_nodes import Module
from .parser.parser import parse

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def compile_lines(lines: Iterable[str]) -> Module:
    """
    Tokenize and parse a sequence of newline-stripped lines.

    Returns:
        The Module AST

    Raises:
        LocalizedError: The first lexical error, or else the first syntax error
    """
    tokenizer = Tokenizer(lines)

    try:
        module = parse(tokenizer)
    except LocalizedError as parse_error:
        lexical_error = tokenizer.take_error()
        if lexical_error is not None:
            logger.debug("discarding %s, caused by a lexical error", parse_error.cause)
            raise lexical_error from lexical_error.cause
        raise

    # The parse can succeed when the bad line came after the last statement
    lexical_error = tokenizer.take_error()
    if lexical_error is not None:
        raise lexical_error

    return module


def read_lines(source_path: PathLike) -> Iterator[str]:
    """
    Lazily yield the lines of a file without their line endings.

    The file stays open only while lines are being pulled.
    """
    with open(source_path, "r", encoding="utf-8") as f:
        for line in f:
            yield line.rstrip("\r\n")


def compile_file(source_path: PathLike) -> Module:
    """
    Compile a source file.

    Raises:
        LocalizedSourcedError: On lexical, syntax or I/O errors. I/O and
            decoding errors sit at the synthetic (0, 0) location.
    """
    logger.debug("compiling %s", source_path)
    lines = read_lines(source_path)
    try:
        return compile_lines(lines)
    except LocalizedError as error:
        raise error.with_source(source_path) from error.cause
    except (OSError, UnicodeDecodeError) as error:
        raise localize(error).with_source(source_path) from error
    finally:
        lines.close()
