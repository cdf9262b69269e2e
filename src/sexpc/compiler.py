"""
sexpc Compiler Main Module
==========================

This module provides the main compiler interface. It runs the complete
pipeline:

    Source → Lex → Parse → Transform → Generate → C-style text

Usage
-----
Command line:
    $ sexpc program.lisp -o program.c

Programmatic:
    >>> from sexpc import compile_source
    >>> compile_source("(add 2 (subtract 4 2))")
    'add(2, subtract(4, 2));\\n'

Compilation Pipeline
--------------------
1. **Lexical Analysis**: Convert source to tokens
2. **Parsing**: Build the Abstract Syntax Tree (AST)
3. **Transformation**: Rebuild the tree with top-level calls as statements
4. **Code Generation**: Render the new tree as text

Error Handling
--------------
Compilation is fail-fast: the first error raised by any stage aborts the
pipeline and propagates to the caller as a CompileError subclass. No
later stage runs and no partial output is produced.

Thread Safety
-------------
Each call builds its own tokens and trees and nothing is stored at module
level, so separate threads may compile concurrently without locking.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

from sexpc.ast import Program
from sexpc.codegen import CodeGenerator
from sexpc.lexer import Token, Tokenizer
from sexpc.parser import MAX_NESTING_DEPTH, Parser
from sexpc.transformer import Transformer

logger = logging.getLogger(__name__)

# Program compiled when no input is given
DEMO_SOURCE = "(add 2 (subtract 4 2))"


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        filename: Source name used in error locations
        drop_top_level_literals: Silently drop literals that appear outside
                     any call, logging a warning for each, instead of
                     raising TopLevelLiteralError.
        max_nesting_depth: Deepest call nesting accepted by the parser
    """
    filename: str = "<input>"
    drop_top_level_literals: bool = False
    max_nesting_depth: int = MAX_NESTING_DEPTH


@dataclass
class CompilerResult:
    """
    Result of a successful compilation. Failures raise instead.

    Attributes:
        filename: Source filename
        output: Generated C-style text
        tokens: Tokens produced by the lexer
        ast: Tree produced by the parser
        transformed: Tree produced by the transformer
    """
    filename: str = ""
    output: str = ""
    tokens: list[Token] = field(default_factory=list)
    ast: Optional[Program] = None
    transformed: Optional[Program] = None

    @property
    def token_count(self) -> int:
        """Number of tokens lexed."""
        return len(self.tokens)


class Compiler:
    """
    Call-syntax to C-style call compiler.

    Example:
        compiler = Compiler()
        result = compiler.compile_source("(greet \\"hi\\")")
        print(result.output)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: Optional[str] = None) -> CompilerResult:
        """
        Compile source text.

        Args:
            source: Source text in call syntax
            filename: Source filename for error messages (defaults to
                      options.filename)

        Returns:
            CompilerResult holding the output and every intermediate stage

        Raises:
            CompileError: On the first lexer, parser, transformer or code
                          generator failure
        """
        filename = filename or self.options.filename
        result = CompilerResult(filename=filename)

        # Stage 1: Lexical analysis
        result.tokens = self.tokenize(source, filename)
        logger.debug(f"{filename}: {result.token_count} tokens")

        # Stage 2: Parsing
        result.ast = self.parse(result.tokens, source, filename)
        logger.debug(f"{filename}: {len(result.ast.body)} top-level forms")

        # Stage 3: Transformation
        result.transformed = self.transform(result.ast)

        # Stage 4: Code generation
        result.output = self.generate(result.transformed)
        logger.debug(f"{filename}: generated {len(result.output)} characters")

        return result

    def compile_file(self, filepath: str) -> CompilerResult:
        """
        Compile a source file.

        Raises:
            CompileError: If compilation fails
            FileNotFoundError: If the source file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))

    def tokenize(self, source: str, filename: str) -> list[Token]:
        """Tokenize source text."""
        return Tokenizer(source, filename).tokenize()

    def parse(self, tokens: list[Token], source: str, filename: str) -> Program:
        """Parse tokens into an AST."""
        return Parser(tokens, source, filename, self.options.max_nesting_depth).parse()

    def transform(self, ast: Program) -> Program:
        """Rebuild the AST for the output grammar."""
        return Transformer(self.options.drop_top_level_literals).transform(ast)

    def generate(self, ast: Program) -> str:
        """Render the transformed AST."""
        return CodeGenerator().generate(ast)


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_source(
    source: str,
    filename: str = "<input>",
    drop_top_level_literals: bool = False,
) -> str:
    """
    Compile call-syntax source to C-style text.

    This is the primary high-level interface.

    Args:
        source: Source text
        filename: Source filename for error messages
        drop_top_level_literals: Drop bare top-level literals instead of
                                 raising TopLevelLiteralError

    Returns:
        Generated text, one newline-terminated statement per top-level call

    Raises:
        CompileError: If compilation fails

    Example:
        >>> compile_source('(greet "hi")')
        'greet("hi");\\n'
    """
    options = CompilerOptions(
        filename=filename,
        drop_top_level_literals=drop_top_level_literals,
    )
    return Compiler(options).compile_source(source).output


def compile_file(
    filepath: str,
    output_path: Optional[str] = None,
    drop_top_level_literals: bool = False,
) -> str:
    """
    Compile a source file, optionally writing the output to a file.

    Raises:
        CompileError: If compilation fails
        FileNotFoundError: If source file not found

    Example:
        >>> text = compile_file("demo.lisp", "demo.c")
    """
    options = CompilerOptions(drop_top_level_literals=drop_top_level_literals)
    result = Compiler(options).compile_file(filepath)

    if output_path:
        Path(output_path).write_text(result.output, encoding="utf-8")

    return result.output
