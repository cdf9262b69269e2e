"""
sexpc - Call-Syntax to C-Style Call Compiler
============================================

This package translates a minimal Lisp-like call syntax into C-style
call statements:

    (add 2 (subtract 4 2))   →   add(2, subtract(4, 2));

Source programs are sequences of parenthesized calls. A call is a name
followed by arguments, and each argument is a number, a double-quoted
string, or another call. Each top-level call becomes one output line.

Main Components
---------------
- **lexer**: Tokenizer, source text to tokens
- **parser**: Recursive descent Parser, tokens to AST
- **traverser**: Generic pre-/post-order tree walk with enter/exit hooks
- **transformer**: Rebuilds the AST for the output grammar
- **codegen**: Renders the transformed AST as text
- **compiler**: Runs the whole pipeline

Quick Start
-----------
    >>> from sexpc import compile_source
    >>> print(compile_source('(greet "hi") (add 1 2)'), end="")
    greet("hi");
    add(1, 2);

Or use the command-line tool:
    $ sexpc program.lisp -o program.c
    $ sexpc -e "(add 1 2)"

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from sexpc.compiler import (
    Compiler,
    CompilerOptions,
    CompilerResult,
    compile_source,
    compile_file,
)
from sexpc.errors import (
    SexpcError,
    SourceLocation,
    CompileError,
    LexError,
    UnknownCharacterError,
    UnexpectedEndOfInputError,
    ParseError,
    UnexpectedTokenError,
    ExpectedNameError,
    UnexpectedEndError,
    NestingTooDeepError,
    TraversalError,
    TransformError,
    TopLevelLiteralError,
    GenError,
    UnknownNodeError,
)
from sexpc.lexer import Tokenizer, Token, TokenType, tokenize
from sexpc.parser import Parser, parse, parse_source
from sexpc.traverser import Traverser, ASTPrinter, traverse
from sexpc.transformer import Transformer, transform
from sexpc.codegen import CodeGenerator, generate
from sexpc.ast import (
    ASTNode,
    Program,
    ExpressionStatement,
    CallExpression,
    NumberLiteral,
    StringLiteral,
)

__all__ = [
    # Version info
    "__version__",
    # Main API
    "Compiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_source",
    "compile_file",
    # Errors
    "SexpcError",
    "SourceLocation",
    "CompileError",
    "LexError",
    "UnknownCharacterError",
    "UnexpectedEndOfInputError",
    "ParseError",
    "UnexpectedTokenError",
    "ExpectedNameError",
    "UnexpectedEndError",
    "NestingTooDeepError",
    "TraversalError",
    "TransformError",
    "TopLevelLiteralError",
    "GenError",
    "UnknownNodeError",
    # Pipeline stages
    "Tokenizer",
    "Token",
    "TokenType",
    "tokenize",
    "Parser",
    "parse",
    "parse_source",
    "Traverser",
    "ASTPrinter",
    "traverse",
    "Transformer",
    "transform",
    "CodeGenerator",
    "generate",
    # AST nodes
    "ASTNode",
    "Program",
    "ExpressionStatement",
    "CallExpression",
    "NumberLiteral",
    "StringLiteral",
]
