"""
sexpc Abstract Syntax Tree (AST) Definitions
============================================

This module defines the closed set of tree node types shared by the
parser, transformer and code generator.

Node Hierarchy
--------------
ASTNode (base)
├── Program - root node, owns the top-level forms
├── ExpressionStatement - a call in statement position (transformer output only)
└── Expressions
    ├── CallExpression - named call with ordered arguments
    ├── NumberLiteral - verbatim digit run
    └── StringLiteral - verbatim string contents

Design Notes
------------
- All nodes are dataclasses for clean representation and equality
- Every child node has exactly one owner: a Program owns its body, a
  CallExpression owns its params, an ExpressionStatement owns its call
- The parser never produces ExpressionStatement; the transformer always
  builds fresh nodes and never reuses nodes from its input tree
"""

from dataclasses import dataclass, field
from typing import Union


# =============================================================================
# AST Node Base Class
# =============================================================================

@dataclass
class ASTNode:
    """Base class for all AST nodes."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class NumberLiteral(ASTNode):
    """
    Number literal, kept as the digits that appeared in source.

    Attributes:
        value: The digit run, e.g. "42"
    """
    value: str = ""


@dataclass
class StringLiteral(ASTNode):
    """
    String literal, kept as the text between the quotes.

    Attributes:
        value: The string contents, without quotes
    """
    value: str = ""


@dataclass
class CallExpression(ASTNode):
    """
    Function call.

    Represents calls like:
        (add 2 3)
        (greet "hi")
        (now)

    Attributes:
        name: Called function name
        params: Argument expressions, in source order
    """
    name: str = ""
    params: list["Expression"] = field(default_factory=list)


Expression = Union[NumberLiteral, StringLiteral, CallExpression]


# =============================================================================
# Statement and Program Nodes
# =============================================================================

@dataclass
class ExpressionStatement(ASTNode):
    """
    Call used as a top-level statement.

    Attributes:
        expression: The wrapped call
    """
    expression: CallExpression


@dataclass
class Program(ASTNode):
    """
    Root node of the AST.

    After parsing, body holds expressions. After transformation it holds
    ExpressionStatement nodes.

    Attributes:
        body: Top-level forms, in source order
    """
    body: list[ASTNode] = field(default_factory=list)


Node = Union[Program, ExpressionStatement, CallExpression, NumberLiteral, StringLiteral]

# Every concrete node type. Consumers that dispatch on node type handle
# all of these.
NODE_TYPES = (Program, ExpressionStatement, CallExpression, NumberLiteral, StringLiteral)

LITERAL_TYPES = (NumberLiteral, StringLiteral)
