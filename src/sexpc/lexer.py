"""
sexpc Lexer (Tokenizer)
=======================

This module converts source text into a list of tokens for the parser.

Token Categories
----------------
| Type   | Source form                | Token value            |
|--------|----------------------------|------------------------|
| PAREN  | ( or )                     | the parenthesis        |
| NUMBER | run of ASCII digits        | the digits, verbatim   |
| NAME   | run of ASCII letters       | the letters, verbatim  |
| STRING | "anything but a quote"     | text between quotes    |

Whitespace separates tokens and is never tokenized. Numbers carry no sign,
decimal point or radix prefix. Strings have no escape sequences: the first
double quote after the opening one ends the literal.

Example Usage
-------------
>>> from sexpc.lexer import Tokenizer
>>> for token in Tokenizer('(greet "hi" 42)').tokenize():
...     print(token)
Token(PAREN, '(', @0)
Token(NAME, 'greet', @1)
Token(STRING, 'hi', @7)
Token(NUMBER, '42', @12)
Token(PAREN, ')', @14)
"""

from dataclasses import dataclass
from enum import Enum, auto
import string

from sexpc.errors import (
    SourceLocation,
    UnexpectedEndOfInputError,
    UnknownCharacterError,
    source_line_at,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Lexical categories of the call grammar."""

    PAREN = auto()          # ( or )
    NUMBER = auto()         # 123
    STRING = auto()         # "text"
    NAME = auto()           # add


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from source text.

    Attributes:
        type: The TokenType classification
        value: Token text (a parenthesis, digits, letters, or string contents)
        offset: Character offset where the token starts in the source
    """
    type: TokenType
    value: str
    offset: int

    def __repr__(self) -> str:
        """Format token for debugging output."""
        return f"Token({self.type.name}, {self.value!r}, @{self.offset})"

    def is_open_paren(self) -> bool:
        """Return True if this token is '('."""
        return self.type == TokenType.PAREN and self.value == "("

    def is_close_paren(self) -> bool:
        """Return True if this token is ')'."""
        return self.type == TokenType.PAREN and self.value == ")"


# =============================================================================
# Lexer Implementation
# =============================================================================

class Tokenizer:
    """
    Tokenizes call-syntax source text.

    Scans strictly left to right, consuming characters into non-overlapping
    runs. Every read is bounds-checked, so truncated input produces an
    UnexpectedEndOfInputError rather than reading past the end.

    Usage:
        tokens = Tokenizer(source_text, filename).tokenize()

    Attributes:
        source: The source text being tokenized
        filename: Name of the source (for error reporting)
    """

    DIGITS = string.digits
    LETTERS = string.ascii_letters

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename
        self._pos = 0

    def tokenize(self) -> list[Token]:
        """
        Scan the whole source into tokens.

        Returns:
            Tokens in source order

        Raises:
            UnknownCharacterError: On a character outside the grammar
            UnexpectedEndOfInputError: On an unterminated string literal
        """
        self._pos = 0
        tokens = []

        while not self._at_end():
            char = self._peek()

            if char in "()":
                tokens.append(Token(TokenType.PAREN, char, self._pos))
                self._pos += 1
                continue

            if char.isspace():
                self._pos += 1
                continue

            if char in self.DIGITS:
                tokens.append(self._scan_run(TokenType.NUMBER, self.DIGITS))
                continue

            if char in self.LETTERS:
                tokens.append(self._scan_run(TokenType.NAME, self.LETTERS))
                continue

            if char == '"':
                tokens.append(self._scan_string())
                continue

            raise UnknownCharacterError(
                char,
                self._location(self._pos),
                source_line_at(self.source, self._pos),
            )

        return tokens

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self._pos >= len(self.source)

    def _peek(self) -> str:
        """Return the current character, or "" past the end of source."""
        if self._at_end():
            return ""
        return self.source[self._pos]

    def _location(self, offset: int) -> SourceLocation:
        return SourceLocation.from_offset(self.source, offset, self.filename)

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_run(self, token_type: TokenType, alphabet: str) -> Token:
        """
        Scan a maximal run of characters drawn from alphabet.

        A run cut off by the end of the source is complete: the run simply
        ends there.
        """
        start = self._pos
        while not self._at_end() and self._peek() in alphabet:
            self._pos += 1
        return Token(token_type, self.source[start:self._pos], start)

    def _scan_string(self) -> Token:
        """
        Scan a double-quoted string literal.

        The token value is everything between the quotes, verbatim.

        Raises:
            UnexpectedEndOfInputError: If the closing quote is missing
        """
        start = self._pos
        self._pos += 1  # opening "

        end = self.source.find('"', self._pos)
        if end == -1:
            self._pos = len(self.source)
            raise UnexpectedEndOfInputError(
                self._location(start),
                source_line_at(self.source, start),
            )

        value = self.source[self._pos:end]
        self._pos = end + 1  # closing "
        return Token(TokenType.STRING, value, start)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """
    Tokenize source text.

    Example:
        >>> [t.value for t in tokenize("(add 2 3)")]
        ['(', 'add', '2', '3', ')']
    """
    return Tokenizer(source, filename).tokenize()
