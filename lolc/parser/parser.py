"""
lolc recursive descent parser.

Statements, blocks and lambdas are parsed by plain recursive descent;
arithmetic uses precedence climbing over three levels (additive,
multiplicative, power). Every binary level is left associative, `**`
included. Unary `+`/`-` bind tighter than any binary operator, and a
parenthesized expression restarts at the additive level.

The parser pulls tokens on demand and keeps a single token of lookahead.
There is no error recovery: the first syntax error aborts the parse.
"""

import logging
from enum import IntEnum
from typing import Iterable, Optional, Union

from ..lexer.lexer import split_source
from ..lexer.tokens import Token, TokenType, SourceLocation
from .ast_nodes import ASTNode, Block, Expression, Lambda, Literal, Module, TypedLiteral
from .errors import ParseError, expected_found, nesting_too_deep

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Binary operator precedence levels, lowest first."""
    NONE = 0
    TERM = 1            # +, -
    FACTOR = 2          # *, /, %
    POWER = 3           # **


BINARY_PRECEDENCE = {
    TokenType.ADD: Precedence.TERM,
    TokenType.SUB: Precedence.TERM,
    TokenType.MUL: Precedence.FACTOR,
    TokenType.DIV: Precedence.FACTOR,
    TokenType.MOD: Precedence.FACTOR,
    TokenType.POW: Precedence.POWER,
}


class Parser:
    """
    lolc parser.

    Builds a Module from a token sequence. Raises ParseError, located at the
    offending token, on the first syntax error.
    """

    def __init__(self, tokens: Iterable[Token]):
        """
        Initialize parser with a token sequence.

        Args:
            tokens: Tokens, typically a Tokenizer; consumed lazily
        """
        self._tokens = iter(tokens)
        self._lookahead: Optional[Token] = None
        self._peeked = False
        self._previous: Optional[Token] = None

    def parse(self) -> Module:
        """
        Parse the token stream into an AST.

        Returns:
            Module AST node representing the whole source

        Raises:
            ParseError: On the first syntax error, or when nesting exceeds the
                recursion limit (P020)
        """
        try:
            return self._parse_module()
        except RecursionError:
            location = self._current_location()
            logger.debug("recursion limit reached near %s", location)
            raise nesting_too_deep(location) from None

    # ------------------------------------------------------------------
    # Statements

    def _parse_module(self) -> Module:
        location = self._locate()
        statements = []
        while self._peek() is not None:
            statements.append(self._parse_statement())

        logger.debug("parsed module with %d statements", len(statements))
        return Module(statements, location)

    def _parse_statement(self) -> ASTNode:
        """Parse an assignment or expression, terminated by a semicolon."""
        if self._check(TokenType.LET):
            statement = self._parse_assignment()
        else:
            statement = self._parse_expression()

        self._consume(TokenType.SEMICOLON, "';'")
        return statement

    def _parse_assignment(self) -> Expression:
        """Parse `let name[: type] = expression`."""
        location = self._locate()
        self._consume(TokenType.LET, "'let' keyword")
        name = self._parse_typed_literal(strict=False)
        self._consume(TokenType.ASSIGN, "'='")
        value = self._parse_expression()
        return Expression(TokenType.LET, name, value, location)

    def _parse_block(self) -> Block:
        """Parse a curly brace delimited block of statements."""
        location = self._locate()
        self._consume(TokenType.LEFT_BRACE, "'{'")

        statements = []
        while True:
            token = self._peek()
            if token is None:
                raise expected_found("'}' or statement", None)
            if token.type is TokenType.RIGHT_BRACE:
                self._advance()
                break
            statements.append(self._parse_statement())

        return Block(statements, location)

    def _parse_lambda(self) -> Lambda:
        """Parse `fn(a: type, ...): type { ... }`."""
        location = self._locate()
        self._consume(TokenType.FN, "'fn' keyword")
        self._consume(TokenType.LEFT_PAREN, "'('")

        params = []
        if not self._check(TokenType.RIGHT_PAREN):
            params.append(self._parse_typed_literal(strict=True))
            while self._match(TokenType.COMMA):
                params.append(self._parse_typed_literal(strict=True))
        self._consume(TokenType.RIGHT_PAREN, "',' or ')'")

        self._consume(TokenType.COLON, "':' [return type]")
        return_type = self._consume(TokenType.LITERAL, "literal [return type]").lexeme
        body = self._parse_block()
        return Lambda(return_type, params, body, location)

    def _parse_typed_literal(self, strict: bool) -> Union[Literal, TypedLiteral]:
        """
        Parse `name` or `name: type`.

        Args:
            strict: Require the type annotation (function parameters)
        """
        location = self._locate()
        name = self._consume(TokenType.LITERAL, "literal [name]").lexeme

        if self._match(TokenType.COLON):
            type_name = self._consume(TokenType.LITERAL, "literal [type name]").lexeme
            return TypedLiteral(name, type_name, location)
        if strict:
            raise expected_found("':' [type annotation]", self._peek())
        return Literal(name, location)

    # ------------------------------------------------------------------
    # Expressions

    def _parse_expression(self) -> ASTNode:
        """Parse a block, a lambda or an arithmetic expression."""
        token = self._peek()
        if token is None:
            raise expected_found("expression", None)
        if token.type is TokenType.LEFT_BRACE:
            return self._parse_block()
        if token.type is TokenType.FN:
            return self._parse_lambda()
        return self._parse_arithmetic()

    def _parse_arithmetic(self) -> ASTNode:
        return self._parse_binary(Precedence.TERM)

    def _parse_binary(self, level: int) -> ASTNode:
        """Precedence climbing: operands of `level` bind at `level + 1`."""
        if level > Precedence.POWER:
            return self._parse_atom()

        location = self._locate()
        node = self._parse_binary(level + 1)

        while True:
            token = self._peek()
            if token is None or BINARY_PRECEDENCE.get(token.type) != level:
                break
            self._advance()
            right = self._parse_binary(level + 1)
            node = Expression(token.type, node, right, location)

        return node

    def _parse_atom(self) -> ASTNode:
        """Parse a literal, a unary operator application or a parenthesized expression."""
        location = self._locate()
        token = self._advance()

        if token is None:
            raise expected_found("literal, unary operator or opening parenthesis", None)

        if token.type is TokenType.LITERAL:
            return Literal(token.lexeme, location)
        if token.type is TokenType.SUB:
            # -x is 0 - x
            return Expression(TokenType.SUB, Literal("0", location), self._parse_atom(), location)
        if token.type is TokenType.ADD:
            return self._parse_atom()
        if token.type is TokenType.LEFT_PAREN:
            inner = self._parse_arithmetic()
            self._consume(TokenType.RIGHT_PAREN, "closing parenthesis")
            return inner

        raise expected_found("literal, unary operator or opening parenthesis", token)

    # ------------------------------------------------------------------
    # Token cursor

    def _peek(self) -> Optional[Token]:
        """Look at the next token without consuming it; None at end of input."""
        if not self._peeked:
            self._lookahead = next(self._tokens, None)
            self._peeked = True
        return self._lookahead

    def _advance(self) -> Optional[Token]:
        token = self._peek()
        if token is not None:
            self._previous = token
        self._lookahead = None
        self._peeked = False
        return token

    def _check(self, token_type: TokenType) -> bool:
        token = self._peek()
        return token is not None and token.type is token_type

    def _match(self, token_type: TokenType) -> Optional[Token]:
        if self._check(token_type):
            return self._advance()
        return None

    def _consume(self, token_type: TokenType, expected: str) -> Token:
        """Consume token of expected type or raise error."""
        token = self._advance()
        if token is None or token.type is not token_type:
            raise expected_found(expected, token)
        return token

    def _locate(self) -> SourceLocation:
        token = self._peek()
        return token.location if token is not None else SourceLocation()

    def _current_location(self) -> SourceLocation:
        """Location of the lookahead, else of the last consumed token; never pulls."""
        if self._peeked and self._lookahead is not None:
            return self._lookahead.location
        if self._previous is not None:
            return self._previous.location
        return SourceLocation()


def parse(tokens: Iterable[Token]) -> Module:
    """
    Parse a token sequence into a Module.

    Raises:
        LocalizedError: Wrapping the ParseError, at the offending token's location
    """
    try:
        return Parser(tokens).parse()
    except ParseError as error:
        raise error.with_location(error.location) from error


def parse_string(source: str) -> Module:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string

    Returns:
        Module AST

    Raises:
        LocalizedError: If lexing or parsing fails
    """
    from ..compile import compile_lines

    return compile_lines(split_source(source))

