#!/usr/bin/env python3
"""
Main test runner for the lolc front end.

Runs a smoke pass over the lexer -> parser -> printer pipeline, then the
unittest suite under tests/.
"""

import sys
import os
import tempfile
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_smoke_tests():
    """Drive every stage once on small programs."""

    print("🚀 lolc Front End Test Suite")
    print("=" * 60)

    try:
        from lolc.lexer.lexer import Tokenizer
        from lolc.parser.parser import Parser
        from lolc.parser.ast_nodes import dump
        from lolc.printer import to_source
        from lolc.compile import compile_file, compile_lines
        from lolc.errors import LocalizedError, LocalizedSourcedError

        print("✅ All lolc modules imported successfully")
        print()

    except ImportError as e:
        print(f"❌ Failed to import lolc modules: {e}")
        return False

    print("Testing simple pipeline...")
    code = [
        "let add = fn(a: int, b: int): int {",
        "    a + b;",
        "};",
        "let x: int = -(1 + 2) * 3 ** 2;   // trailing comment",
    ]

    try:
        print("  🔧 Lexing...")
        tokenizer = Tokenizer(code)
        tokens = list(tokenizer)
        if tokenizer.has_error():
            print(f"     ❌ Lexical error: {tokenizer.take_error()}")
            return False
        print(f"     Generated {len(tokens)} tokens")

        print("  🔧 Parsing...")
        module = Parser(tokens).parse()
        print(f"     Generated AST with {len(module.statements)} statements")

        print("  🔧 Printing...")
        printed = to_source(module)
        if compile_lines(printed.splitlines()) != module:
            print("     ❌ Re-printed source parsed to a different tree")
            return False
        print("     ✅ Re-printed source parses to an equal tree")

    except LocalizedError as e:
        print(f"❌ Pipeline test FAILED:\n{e}")
        return False

    print()
    print("Parsed tree:")
    print("-" * 40)
    print(dump(module))
    print("-" * 40)
    print()

    print("  ❌ Testing error reporting...")
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "broken.lol")
        with open(path, "w", encoding="utf-8") as f:
            f.write("let x = 1;\nlet y = @;\nx + y;\n")

        try:
            compile_file(path)
        except LocalizedSourcedError as e:
            print("     ✅ Caught expected error:")
            for line in str(e).splitlines():
                print(f"        {line}")
        else:
            print("     ❌ Expected a lexical error but got none")
            return False

    print()
    return True


def run_unit_tests():
    """Discover and run the unittest suite."""
    print("🧪 Running unit tests...")
    print("-" * 40)
    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=1).run(suite)
    return result.wasSuccessful()


def run_all_tests():
    if not run_smoke_tests():
        return False
    if not run_unit_tests():
        print("❌ Unit tests FAILED")
        return False

    print()
    print("🎉 All tests PASSED!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
