"""
Test suite for the lolc parser.

Tests cover:
- Statements, let bindings and typed names
- Operator precedence and associativity
- Unary operators
- Blocks and lambdas
- Node locations and the tree dump
- Located syntax errors
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from lolc.errors import LocalizedError
from lolc.lexer import SourceLocation, TokenType, tokenize_string
from lolc.parser import (
    ASTVisitor, Block, Expression, Lambda, Literal, Module, ParseError, Parser,
    TypedLiteral, dump, parse_string
)
from lolc.parser.errors import PARSER_ERROR_CODES


def lit(text):
    return Literal(text)


def binop(op, left, right):
    return Expression(op, left, right)


def let(name, value):
    return Expression(TokenType.LET, name, value)


class TestStatements(unittest.TestCase):
    """Module and statement level parsing."""

    def test_empty_source(self):
        module = parse_string("")
        self.assertEqual(module, Module([]))
        self.assertEqual(module.location, SourceLocation())

    def test_comments_only(self):
        self.assertEqual(parse_string("// nothing here\n\n"), Module([]))

    def test_let_binding(self):
        module = parse_string("let x = 1 + 2 * 3;")
        expected = Module([
            let(lit("x"), binop(TokenType.ADD, lit("1"),
                                binop(TokenType.MUL, lit("2"), lit("3"))))
        ])
        self.assertEqual(module, expected)
        self.assertTrue(module.statements[0].is_binding)

    def test_typed_let_binding(self):
        module = parse_string("let y: int = 4;")
        self.assertEqual(module.statements, [let(TypedLiteral("y", "int"), lit("4"))])

    def test_expression_statement(self):
        self.assertEqual(parse_string("x;").statements, [lit("x")])

    def test_multiple_statements_across_lines(self):
        module = parse_string("let a = 1;\nlet b =\n  a;\na; b;")
        self.assertEqual(module.statements, [
            let(lit("a"), lit("1")),
            let(lit("b"), lit("a")),
            lit("a"),
            lit("b"),
        ])

    def test_let_value_may_be_a_lambda(self):
        module = parse_string("let add = fn(a: int, b: int): int { a + b; };")
        lambda_node = module.statements[0].right
        self.assertIsInstance(lambda_node, Lambda)
        self.assertEqual(lambda_node.params, [TypedLiteral("a", "int"), TypedLiteral("b", "int")])


class TestArithmetic(unittest.TestCase):
    """Precedence climbing over the three binary levels."""

    def expr(self, source):
        return parse_string(source).statements[0]

    def test_parentheses_override_precedence(self):
        self.assertEqual(self.expr("(1 + 2) * 3;"),
                         binop(TokenType.MUL, binop(TokenType.ADD, lit("1"), lit("2")), lit("3")))

    def test_additive_is_left_associative(self):
        self.assertEqual(self.expr("1 - 2 - 3;"),
                         binop(TokenType.SUB, binop(TokenType.SUB, lit("1"), lit("2")), lit("3")))

    def test_multiplicative_operators_share_a_level(self):
        self.assertEqual(self.expr("10 % 3 / 2;"),
                         binop(TokenType.DIV, binop(TokenType.MOD, lit("10"), lit("3")), lit("2")))

    def test_power_is_left_associative(self):
        self.assertEqual(self.expr("2 ** 3 ** 2;"),
                         binop(TokenType.POW, binop(TokenType.POW, lit("2"), lit("3")), lit("2")))

    def test_power_binds_tighter_than_multiplication(self):
        self.assertEqual(self.expr("2 * 3 ** 2;"),
                         binop(TokenType.MUL, lit("2"), binop(TokenType.POW, lit("3"), lit("2"))))

    def test_unary_minus_is_subtraction_from_zero(self):
        self.assertEqual(self.expr("-5;"), binop(TokenType.SUB, lit("0"), lit("5")))

    def test_unary_minus_binds_tighter_than_power(self):
        self.assertEqual(self.expr("-2 ** 2;"),
                         binop(TokenType.POW, binop(TokenType.SUB, lit("0"), lit("2")), lit("2")))

    def test_nested_unary_minus(self):
        self.assertEqual(self.expr("- -5;"),
                         binop(TokenType.SUB, lit("0"), binop(TokenType.SUB, lit("0"), lit("5"))))

    def test_unary_plus_is_dropped(self):
        self.assertEqual(self.expr("+5;"), lit("5"))

    def test_negated_group(self):
        self.assertEqual(self.expr("-(1 + 2);"),
                         binop(TokenType.SUB, lit("0"), binop(TokenType.ADD, lit("1"), lit("2"))))

    def test_spaced_nested_parentheses(self):
        self.assertEqual(self.expr("( (1) );"), lit("1"))


class TestBlocksAndLambdas(unittest.TestCase):
    """Curly-brace blocks and function literals."""

    def test_lambda(self):
        module = parse_string("fn(a: int, b: int): int { a + b; };")
        self.assertEqual(module.statements, [
            Lambda("int",
                   [TypedLiteral("a", "int"), TypedLiteral("b", "int")],
                   Block([binop(TokenType.ADD, lit("a"), lit("b"))]))
        ])

    def test_lambda_without_parameters(self):
        module = parse_string("fn(): unit { };")
        self.assertEqual(module.statements, [Lambda("unit", [], Block([]))])

    def test_nested_blocks(self):
        module = parse_string("{ let a = 1; { a; }; };")
        self.assertEqual(module.statements, [
            Block([let(lit("a"), lit("1")), Block([lit("a")])])
        ])

    def test_lambda_body_spanning_lines(self):
        source = "let f = fn(n: int): int {\n    let m = n * 2;\n    m;\n};"
        lambda_node = parse_string(source).statements[0].right
        self.assertEqual(lambda_node.body.statements, [
            let(lit("m"), binop(TokenType.MUL, lit("n"), lit("2"))),
            lit("m"),
        ])
        self.assertEqual(lambda_node.body.location, SourceLocation(1, 11))


class TestLocations(unittest.TestCase):
    """Nodes record the location of their first token."""

    def test_locations_do_not_affect_equality(self):
        self.assertEqual(Literal("x", SourceLocation(3, 4)), Literal("x"))
        self.assertNotEqual(Literal("x"), Literal("y"))

    def test_binding_locations(self):
        binding = parse_string("let x = 1 + 2;").statements[0]
        self.assertEqual(binding.location, SourceLocation(1, 0))
        self.assertEqual(binding.left.location, SourceLocation(1, 1))
        self.assertEqual(binding.right.location, SourceLocation(1, 3))
        self.assertEqual(binding.right.left.location, SourceLocation(1, 3))
        self.assertEqual(binding.right.right.location, SourceLocation(1, 5))

    def test_value_on_next_line(self):
        binding = parse_string("let x =\n  1;").statements[0]
        self.assertEqual(binding.right.location, SourceLocation(2, 0))

    def test_dump(self):
        self.assertEqual(dump(parse_string("let x = 1;")),
                         "[1:0] Module\n"
                         "  [1:0] Expression LET\n"
                         "    [1:1] Literal 'x'\n"
                         "    [1:3] Literal '1'")

    def test_dump_lambda(self):
        self.assertEqual(dump(parse_string("fn(a: int): int { a; };")),
                         "[1:0] Module\n"
                         "  [1:0] Lambda -> 'int'\n"
                         "    [1:2] TypedLiteral 'a': 'int'\n"
                         "    [1:8] Block\n"
                         "      [1:9] Literal 'a'")


class TestVisitor(unittest.TestCase):
    """Visitor dispatch over the tree."""

    def test_visitor_dispatch(self):
        class LiteralCounter(ASTVisitor):
            def visit_module(self, node):
                return sum(self.visit(child) for child in node.children())

            visit_block = visit_module
            visit_expression = visit_module
            visit_lambda = visit_module

            def visit_literal(self, node):
                return 1

            def visit_typed_literal(self, node):
                return 1

        module = parse_string("let f = fn(a: int): int { a * 2; };")
        self.assertEqual(module.accept(LiteralCounter()), 4)

    def test_unhandled_node_type(self):
        with self.assertRaises(NotImplementedError):
            ASTVisitor().visit(Literal("x"))


class TestSyntaxErrors(unittest.TestCase):
    """The first syntax error aborts the parse with a located ParseError."""

    def assertParseError(self, source, message, location):
        with self.assertRaises(LocalizedError) as ctx:
            parse_string(source)
        error = ctx.exception
        self.assertIsInstance(error.cause, ParseError)
        self.assertEqual(error.cause.message, message)
        self.assertEqual(error.location, location)
        return error

    def test_unterminated_block(self):
        error = self.assertParseError("fn(): int { 1;",
                                      "Expected '}' or statement, found end of input",
                                      SourceLocation())
        self.assertEqual(error.cause.code, "P010")
        self.assertEqual(PARSER_ERROR_CODES[error.cause.code], "Unexpected end of input")

    def test_missing_operand(self):
        error = self.assertParseError(
            "1 + ;", "Expected literal, unary operator or opening parenthesis, found ';'",
            SourceLocation(1, 2))
        self.assertEqual(error.cause.code, "P001")

    def test_missing_assign(self):
        self.assertParseError("let x 1;", "Expected '=', found literal '1'", SourceLocation(1, 2))

    def test_missing_name(self):
        self.assertParseError("let = 3;", "Expected literal [name], found '='", SourceLocation(1, 1))

    def test_missing_semicolon(self):
        self.assertParseError("x", "Expected ';', found end of input", SourceLocation())

    def test_missing_semicolon_before_next_statement(self):
        self.assertParseError("x\nlet y = 1;", "Expected ';', found 'let'", SourceLocation(2, 0))

    def test_parameter_requires_type(self):
        self.assertParseError("fn(a): int { };", "Expected ':' [type annotation], found ')'",
                              SourceLocation(1, 3))

    def test_trailing_comma_in_parameters(self):
        self.assertParseError("fn(a: int,): int { };", "Expected literal [name], found ')'",
                              SourceLocation(1, 6))

    def test_missing_return_type(self):
        self.assertParseError("fn() { };", "Expected ':' [return type], found '{'",
                              SourceLocation(1, 3))

    def test_unclosed_parenthesis(self):
        self.assertParseError("(1 + 2;", "Expected closing parenthesis, found ';'",
                              SourceLocation(1, 4))

    def test_stray_closing_brace(self):
        self.assertParseError(
            "}", "Expected literal, unary operator or opening parenthesis, found '}'",
            SourceLocation(1, 0))

    def test_let_is_not_an_expression(self):
        self.assertParseError(
            "let a = let b = 1;",
            "Expected literal, unary operator or opening parenthesis, found 'let'",
            SourceLocation(1, 3))

    def test_deep_nesting_is_a_located_error(self):
        sources = {
            "parentheses": "( " * 500 + "1" + " )" * 500 + ";",
            "unary minus": "- " * 3000 + "1;",
        }
        for name, source in sources.items():
            with self.subTest(name=name):
                with self.assertRaises(LocalizedError) as ctx:
                    parse_string(source)
                error = ctx.exception
                self.assertIsInstance(error.cause, ParseError)
                self.assertEqual(error.cause.code, "P020")
                self.assertEqual(error.cause.message, "Expression nested too deeply")
                self.assertEqual(error.location.line, 1)
                self.assertGreater(error.location.column, 0)

    def test_moderate_nesting_still_parses(self):
        self.assertEqual(parse_string("( " * 20 + "1" + " )" * 20 + ";").statements, [lit("1")])

    def test_string_and_file_line_numbers_agree(self):
        # Form feed is not a line break for file reads
        self.assertParseError(
            "x;\x0c\n1 +;",
            "Expected literal, unary operator or opening parenthesis, found ';'",
            SourceLocation(2, 2))

    def test_parser_raises_bare_parse_error(self):
        with self.assertRaises(ParseError) as ctx:
            Parser(tokenize_string("1 +")).parse()
        self.assertEqual(ctx.exception.location, SourceLocation())
        self.assertEqual(str(ctx.exception),
                         "ParseError[P010]: Expected literal, unary operator or opening "
                         "parenthesis, found end of input")


if __name__ == '__main__':
    unittest.main()
