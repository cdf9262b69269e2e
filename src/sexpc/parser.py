"""
sexpc Recursive Descent Parser
==============================

This module builds an Abstract Syntax Tree (AST) from the token list
produced by the lexer.

Grammar (EBNF)
--------------
program     ::= expression*
expression  ::= NUMBER | STRING | call
call        ::= '(' NAME expression* ')'

The parser keeps a single cursor into the token list. The cursor only
moves forward and each token is examined a bounded number of times, so
parsing is linear in the number of tokens.

Every later stage recurses once per nesting level, so the parser caps
how deeply calls may nest (MAX_NESTING_DEPTH). Deeper input raises
NestingTooDeepError.

Example Usage
-------------
>>> from sexpc.lexer import tokenize
>>> from sexpc.parser import Parser
>>> ast = Parser(tokenize("(add 2 3)")).parse()
>>> ast.body[0].name
'add'
"""

from typing import Optional

from sexpc.ast import CallExpression, NumberLiteral, Program, StringLiteral
from sexpc.errors import (
    ExpectedNameError,
    NestingTooDeepError,
    SourceLocation,
    UnexpectedEndError,
    UnexpectedTokenError,
    source_line_at,
)
from sexpc.lexer import Token, TokenType, tokenize

# Each level costs a few Python frames in every stage; keep well under
# the interpreter's default recursion limit of 1000.
MAX_NESTING_DEPTH = 100


class Parser:
    """
    Recursive descent parser for the call grammar.

    The first malformed construct raises a ParseError; there is no
    error recovery.

    Attributes:
        tokens: List of tokens to parse
        source: Original source text, used only to locate errors
        filename: Source filename for error reporting
        max_depth: Deepest call nesting accepted
    """

    def __init__(
        self,
        tokens: list[Token],
        source: str = "",
        filename: str = "<input>",
        max_depth: int = MAX_NESTING_DEPTH,
    ):
        self.tokens = tokens
        self.source = source
        self.filename = filename
        self.max_depth = max_depth

        # Current position in token list
        self._pos = 0
        # Number of calls currently open
        self._depth = 0

    def parse(self) -> Program:
        """
        Parse the token list into an AST.

        Returns:
            Program whose body holds the top-level expressions in order

        Raises:
            ParseError: If the tokens do not match the grammar
        """
        self._pos = 0
        self._depth = 0
        body = []

        while not self._at_end():
            body.append(self._parse_expression())

        return Program(body=body)

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if the cursor has passed the last token."""
        return self._pos >= len(self.tokens)

    def _peek(self) -> Optional[Token]:
        """Return the token at the cursor, or None past the end."""
        if self._at_end():
            return None
        return self.tokens[self._pos]

    def _advance(self) -> Token:
        """Consume and return the token at the cursor."""
        token = self._peek()
        if token is None:
            raise self._unexpected_end()
        self._pos += 1
        return token

    # =========================================================================
    # Expression Parsing
    # =========================================================================

    def _parse_expression(self):
        """
        Parse one expression at the cursor.

        expression ::= NUMBER | STRING | call
        """
        token = self._peek()
        if token is None:
            raise self._unexpected_end()

        if token.type == TokenType.NUMBER:
            self._advance()
            return NumberLiteral(value=token.value)

        if token.type == TokenType.STRING:
            self._advance()
            return StringLiteral(value=token.value)

        if token.is_open_paren():
            return self._parse_call()

        raise UnexpectedTokenError(
            token.value,
            self._pos,
            self._location(token.offset),
            self._source_line(token.offset),
        )

    def _parse_call(self) -> CallExpression:
        """
        Parse a call.

        call ::= '(' NAME expression* ')'
        """
        if self._depth >= self.max_depth:
            paren = self.tokens[self._pos]
            raise NestingTooDeepError(
                self.max_depth,
                self._pos,
                self._location(paren.offset),
                self._source_line(paren.offset),
            )

        self._advance()  # consume (
        self._depth += 1

        name = self._peek()
        if name is None:
            raise self._unexpected_end()
        if name.type != TokenType.NAME:
            raise ExpectedNameError(
                name.value,
                self._pos,
                self._location(name.offset),
                self._source_line(name.offset),
            )
        self._advance()

        node = CallExpression(name=name.value)

        while True:
            token = self._peek()
            if token is None:
                raise self._unexpected_end()
            if token.is_close_paren():
                break
            node.params.append(self._parse_expression())

        self._advance()  # consume )
        self._depth -= 1
        return node

    # =========================================================================
    # Error Helpers
    # =========================================================================

    def _location(self, offset: int) -> Optional[SourceLocation]:
        if not self.source:
            return None
        return SourceLocation.from_offset(self.source, offset, self.filename)

    def _source_line(self, offset: int) -> Optional[str]:
        if not self.source:
            return None
        return source_line_at(self.source, offset)

    def _unexpected_end(self) -> UnexpectedEndError:
        """Build the error for running out of tokens inside a call."""
        offset = len(self.source)
        return UnexpectedEndError(
            self._pos,
            self._location(offset),
            self._source_line(offset),
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def parse(
    tokens: list[Token],
    source: str = "",
    filename: str = "<input>",
    max_depth: int = MAX_NESTING_DEPTH,
) -> Program:
    """Parse a token list into a Program."""
    return Parser(tokens, source, filename, max_depth).parse()


def parse_source(source: str, filename: str = "<input>") -> Program:
    """
    Tokenize and parse source text in one step.

    Example:
        >>> program = parse_source("(add 1 2)")
        >>> len(program.body)
        1
    """
    return Parser(tokenize(source, filename), source, filename).parse()
