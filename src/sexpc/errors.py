"""
sexpc Error Hierarchy
=====================

This module defines the exception hierarchy for the sexpc compiler.
All exceptions inherit from SexpcError, allowing callers to catch every
compiler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
SexpcError (base)
└── CompileError (any failure inside the compilation pipeline)
    ├── LexError - tokenizer failures
    │   ├── UnknownCharacterError - character outside the grammar
    │   └── UnexpectedEndOfInputError - unterminated string literal
    ├── ParseError - malformed token structure
    │   ├── UnexpectedTokenError - token not allowed at expression position
    │   ├── ExpectedNameError - '(' not followed by a name
    │   ├── UnexpectedEndError - token sequence ended inside a call
    │   └── NestingTooDeepError - calls nested past the parser's limit
    ├── TraversalError - node kind the tree walker cannot descend into
    ├── TransformError - tree rewrite failures
    │   └── TopLevelLiteralError - bare literal outside any call
    └── GenError - code generation failures
        └── UnknownNodeError - node kind the generator cannot render

Error Message Format
--------------------
Errors that know where they happened follow this format:

    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing

Example:
    <input>:1:8: error: unknown character '$' at offset 7
        (add 2 $)
               ^

The compiler only tracks character offsets. Line and column are derived
from the offset when an error is raised, for display only.
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class SexpcError(Exception):
    """
    Base exception for all sexpc errors.

    Catch this to handle any failure raised by the package:

        try:
            output = compile_source("(add 1 2)")
        except SexpcError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in source text, used for error reporting.

    Attributes:
        filename: Name of the source (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        offset: Character offset from the start of the source (0-indexed)
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"

    @classmethod
    def from_offset(
        cls,
        source: str,
        offset: int,
        filename: str = "<input>",
    ) -> "SourceLocation":
        """
        Build a location from a character offset into source.

        Offsets past the end of the source are clamped to the end, which is
        where "unexpected end" errors point.
        """
        offset = max(0, min(offset, len(source)))
        line_start = source.rfind("\n", 0, offset) + 1
        line = source.count("\n", 0, offset) + 1
        column = offset - line_start + 1
        return cls(filename, line, column, offset)


def source_line_at(source: str, offset: int) -> str:
    """Return the full line of source text containing offset."""
    offset = max(0, min(offset, len(source)))
    line_start = source.rfind("\n", 0, offset) + 1
    line_end = source.find("\n", offset)
    if line_end == -1:
        line_end = len(source)
    return source[line_start:line_end]


# =============================================================================
# Compilation Errors
# =============================================================================

class CompileError(SexpcError):
    """
    Base exception for every failure inside the compilation pipeline.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def offset(self) -> Optional[int]:
        """Character offset of the failure, if known."""
        return self.location.offset if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            <input>:1:2: error: expected a call name after '('
                (1 2)
                 ^
            hint: calls are written as (name arg ...)
        """
        parts = []

        # Location prefix
        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            padding = " " * (4 + self.location.column - 1)
            parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexer Errors
# =============================================================================

class LexError(CompileError):
    """
    Error raised while scanning source text into tokens.

    Lexer errors always carry the character offset where scanning failed.
    """
    pass


class UnknownCharacterError(LexError):
    """
    Character that cannot start any token.

    Only parentheses, whitespace, ASCII digits, ASCII letters and double
    quotes are part of the grammar.
    """

    def __init__(
        self,
        char: str,
        location: SourceLocation,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unknown character {char!r} at offset {location.offset}",
            location=location,
            source_line=source_line,
        )


class UnexpectedEndOfInputError(LexError):
    """
    Source text ended in the middle of a token.

    Raised for a string literal whose closing quote never arrives. The
    location points at the opening quote.
    """

    def __init__(
        self,
        location: SourceLocation,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            f"unexpected end of input in string literal starting at offset {location.offset}",
            location=location,
            hint="add closing '\"' to complete the string",
            source_line=source_line,
        )


# =============================================================================
# Parser Errors
# =============================================================================

class ParseError(CompileError):
    """
    Error raised while building the syntax tree from tokens.

    Parser errors only describe malformed token structure. Lexical issues
    never reach the parser.

    Attributes:
        token_index: Index into the token sequence where parsing failed
    """

    def __init__(
        self,
        message: str,
        token_index: int,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.token_index = token_index
        super().__init__(
            message,
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnexpectedTokenError(ParseError):
    """
    Token that cannot start an expression.

    Examples:
        )            // closing paren with nothing open
        (add x)      // bare name used as an argument
    """

    def __init__(
        self,
        found: str,
        token_index: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"unexpected token {found!r}",
            token_index,
            location=location,
            hint="expected a number, a string or '('",
            source_line=source_line,
        )


class ExpectedNameError(ParseError):
    """
    Opening parenthesis not followed by a call name.

    Examples:
        ()           // no name at all
        (1 2)        // number in name position
    """

    def __init__(
        self,
        found: str,
        token_index: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"expected a call name after '(', found {found!r}",
            token_index,
            location=location,
            hint="calls are written as (name arg ...)",
            source_line=source_line,
        )


class UnexpectedEndError(ParseError):
    """
    Token sequence ended while a call was still open.

    Example:
        (add 2       // missing ')'
    """

    def __init__(
        self,
        token_index: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            f"unexpected end of input after token {token_index}",
            token_index,
            location=location,
            hint="add ')' to close the call",
            source_line=source_line,
        )


class NestingTooDeepError(ParseError):
    """
    Call opened while max_depth calls were already open.

    Attributes:
        max_depth: The nesting limit that was exceeded
    """

    def __init__(
        self,
        max_depth: int,
        token_index: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.max_depth = max_depth
        super().__init__(
            f"calls nested more than {max_depth} deep",
            token_index,
            location=location,
            hint="split the expression into smaller top-level calls",
            source_line=source_line,
        )


# =============================================================================
# Traversal Errors
# =============================================================================

class TraversalError(CompileError):
    """
    Node kind outside the known set, found while walking a tree.

    Unreachable with trees built by the parser and transformer.
    """

    def __init__(self, node: object):
        self.node_type = type(node).__name__
        super().__init__(f"cannot traverse node type '{self.node_type}'")


# =============================================================================
# Transformer Errors
# =============================================================================

class TransformError(CompileError):
    """
    Error raised while rewriting the syntax tree.

    Apart from TopLevelLiteralError these indicate a broken internal
    invariant rather than bad input.
    """
    pass


class TopLevelLiteralError(TransformError):
    """
    Literal appearing at the top level of a program, outside any call.

    The output grammar only has call statements, so a bare literal has
    nowhere to go.
    """

    def __init__(self, text: str):
        self.text = text
        super().__init__(
            f"literal {text!r} is not inside a call",
            hint="wrap the literal in a call, or enable drop_top_level_literals",
        )


# =============================================================================
# Code Generation Errors
# =============================================================================

class GenError(CompileError):
    """Error raised while rendering the tree to output text."""
    pass


class UnknownNodeError(GenError):
    """
    Node kind that the code generator cannot render.

    Unreachable with a conforming parser and transformer.
    """

    def __init__(self, node: object):
        self.node_type = type(node).__name__
        super().__init__(f"cannot generate code for node type '{self.node_type}'")
