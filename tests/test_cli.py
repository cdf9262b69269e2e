"""
Tests for the sexpc command-line tool
=====================================

These tests drive the click command through CliRunner and check output
and exit codes.
"""

import pytest
from click.testing import CliRunner

from sexpc import __version__
from sexpc.cli.sexpc import main
from sexpc.cli.errors import ExitCode


@pytest.fixture
def runner():
    return CliRunner()


# =============================================================================
# Basic Invocation Tests
# =============================================================================

class TestCLIBasics:
    """Tests for help, version and the demo program."""

    def test_cli_help(self, runner):
        """--help describes the tool."""
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Compile call-syntax source" in result.output

    def test_cli_version(self, runner):
        """--version reports the package version."""
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_demo_program(self, runner):
        """With no input, the demo program is compiled."""
        result = runner.invoke(main, [])
        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == "add(2, subtract(4, 2));\n"


# =============================================================================
# Input and Output Tests
# =============================================================================

class TestCLIInput:
    """Tests for the different input sources."""

    def test_expr(self, runner):
        """-e compiles the given source string."""
        result = runner.invoke(main, ["-e", '(greet "hi")'])
        assert result.exit_code == 0
        assert result.output == 'greet("hi");\n'

    def test_input_file(self, runner, tmp_path):
        """A file argument is compiled to stdout."""
        source = tmp_path / "prog.lisp"
        source.write_text("(a)\n(b 1)\n")
        result = runner.invoke(main, [str(source)])
        assert result.exit_code == 0
        assert result.output == "a();\nb(1);\n"

    def test_stdin(self, runner):
        """'-' reads source from stdin."""
        result = runner.invoke(main, ["-"], input="(a (b))")
        assert result.exit_code == 0
        assert result.output == "a(b());\n"

    def test_output_file(self, runner, tmp_path):
        """-o writes the output to a file."""
        source = tmp_path / "prog.lisp"
        source.write_text("(add 2 (subtract 4 2))")
        target = tmp_path / "prog.c"
        result = runner.invoke(main, [str(source), "-o", str(target)])
        assert result.exit_code == 0
        assert target.read_text() == "add(2, subtract(4, 2));\n"
        assert "Compiled" in result.output

    def test_file_and_expr_conflict(self, runner, tmp_path):
        """A file and -e together are rejected."""
        source = tmp_path / "prog.lisp"
        source.write_text("(a)")
        result = runner.invoke(main, [str(source), "-e", "(b)"])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "not both" in result.output

    def test_missing_file(self, runner, tmp_path):
        """A missing input file is an argument error."""
        result = runner.invoke(main, [str(tmp_path / "missing.lisp")])
        assert result.exit_code == 2

    def test_drop_top_level_literals(self, runner):
        """The flag turns a top-level literal error into a warning."""
        result = runner.invoke(main, ["--drop-top-level-literals", "-e", "1 (a)"])
        assert result.exit_code == 0
        assert "a();" in result.output


# =============================================================================
# Debug Output Tests
# =============================================================================

class TestCLIDebugOutput:
    """Tests for --tokens and --ast."""

    def test_tokens(self, runner):
        """--tokens prints one token per line."""
        result = runner.invoke(main, ["--tokens", "-e", "(a 1)"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Token(PAREN, '(', @0)",
            "Token(NAME, 'a', @1)",
            "Token(NUMBER, '1', @3)",
            "Token(PAREN, ')', @4)",
        ]

    def test_tokens_skip_parsing(self, runner):
        """--tokens works on input the parser would reject."""
        result = runner.invoke(main, ["--tokens", "-e", "(a"])
        assert result.exit_code == 0

    def test_ast(self, runner):
        """--ast prints the parsed tree."""
        result = runner.invoke(main, ["--ast", "-e", "(a 1)"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["Program", "  Call a", "    Number 1"]

    def test_transformed_ast(self, runner):
        """--ast --transformed prints the transformed tree."""
        result = runner.invoke(main, ["--ast", "--transformed", "-e", "(a 1)"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Program",
            "  Statement",
            "    Call a",
            "      Number 1",
        ]

    def test_verbose(self, runner):
        """-v still compiles successfully."""
        result = runner.invoke(main, ["-v", "-e", "(a)"])
        assert result.exit_code == 0
        assert "a();" in result.output


# =============================================================================
# Error Reporting Tests
# =============================================================================

class TestCLIErrors:
    """Tests for compile error reporting."""

    def test_lex_error(self, runner):
        """Lexer errors exit with COMPILE_ERROR and show the location."""
        result = runner.invoke(main, ["-e", "(add 2 $)"])
        assert result.exit_code == ExitCode.COMPILE_ERROR
        assert "<expr>:1:8: error: unknown character '$'" in result.output

    def test_parse_error(self, runner):
        """Parser errors exit with COMPILE_ERROR."""
        result = runner.invoke(main, ["-e", "(add 2"])
        assert result.exit_code == ExitCode.COMPILE_ERROR
        assert "unexpected end of input" in result.output

    def test_transform_error(self, runner):
        """Top-level literals are reported by default."""
        result = runner.invoke(main, ["-e", "7"])
        assert result.exit_code == ExitCode.COMPILE_ERROR
        assert "literal '7' is not inside a call" in result.output

    def test_error_in_file(self, runner, tmp_path):
        """Errors from files name the file."""
        source = tmp_path / "bad.lisp"
        source.write_text("()")
        result = runner.invoke(main, [str(source)])
        assert result.exit_code == ExitCode.COMPILE_ERROR
        assert f"{source}:1:2: error: expected a call name" in result.output

    def test_nesting_too_deep(self, runner):
        """Over-deep nesting is a compile error, not an internal error."""
        result = runner.invoke(main, ["-e", "(f " * 1000 + "1" + ")" * 1000])
        assert result.exit_code == ExitCode.COMPILE_ERROR
        assert "nested more than" in result.output
