"""
sexpc Tree Transformer
======================

Rebuilds a parsed Program into the shape the code generator expects:

    Program                          Program
      CallExpression add      →        ExpressionStatement
        NumberLiteral 2                  CallExpression add
                                           NumberLiteral 2

Every node of the output is newly built; the input tree is only read.

How It Works
------------
The transformer is a Traverser. Each enter hook receives, as its context,
the list the new node must be appended to:

- Program passes down the new Program's body (top level)
- CallExpression builds its new counterpart, appends it (wrapped in an
  ExpressionStatement when at top level), and passes down the new call's
  params

Pre-order visiting guarantees the new parent exists before any of its
children are visited.

Top-Level Literals
------------------
A bare literal outside any call has no place in the output grammar. By
default it raises TopLevelLiteralError. With drop_top_level_literals=True
it is dropped with a warning instead.
"""

from dataclasses import dataclass
import logging

from sexpc.ast import (
    ASTNode,
    CallExpression,
    ExpressionStatement,
    NumberLiteral,
    Program,
    StringLiteral,
)
from sexpc.errors import TopLevelLiteralError, TransformError, TraversalError
from sexpc.traverser import Traverser

logger = logging.getLogger(__name__)


@dataclass
class TransformContext:
    """
    Where new nodes for the current subtree go.

    Attributes:
        target: List the next built node is appended to
        top_level: True when target is the new Program's body
    """
    target: list[ASTNode]
    top_level: bool


class Transformer(Traverser):
    """
    Builds an independent output tree from a parsed Program.

    Usage:
        new_program = Transformer().transform(program)

    Attributes:
        drop_top_level_literals: Drop bare top-level literals instead of
            raising TopLevelLiteralError
    """

    def __init__(self, drop_top_level_literals: bool = False):
        self.drop_top_level_literals = drop_top_level_literals

    def transform(self, program: Program) -> Program:
        """
        Transform a parsed Program.

        Returns:
            A new Program whose body holds one ExpressionStatement per
            top-level call

        Raises:
            TopLevelLiteralError: On a bare literal at top level
            TransformError: If the input is not a Program, or holds a node
                type outside the known set
        """
        if not isinstance(program, Program):
            raise TransformError(
                f"expected a Program to transform, got '{program.__class__.__name__}'"
            )

        new_program = Program()
        try:
            self.traverse(program, None, TransformContext(new_program.body, top_level=True))
        except TraversalError as e:
            raise TransformError(str(e)) from e
        return new_program

    # =========================================================================
    # Node Handlers
    # =========================================================================

    def enter_Program(self, node: Program, parent, context: TransformContext):
        return context

    def enter_CallExpression(self, node: CallExpression, parent, context: TransformContext):
        call = CallExpression(name=node.name)
        if context.top_level:
            context.target.append(ExpressionStatement(expression=call))
        else:
            context.target.append(call)
        return TransformContext(call.params, top_level=False)

    def enter_NumberLiteral(self, node: NumberLiteral, parent, context: TransformContext):
        self._add_literal(NumberLiteral(value=node.value), context)
        return context

    def enter_StringLiteral(self, node: StringLiteral, parent, context: TransformContext):
        self._add_literal(StringLiteral(value=node.value), context)
        return context

    def enter_ExpressionStatement(self, node: ExpressionStatement, parent, context):
        raise TransformError("ExpressionStatement found in a tree that has not been transformed yet")

    def _add_literal(self, literal, context: TransformContext) -> None:
        if context.top_level:
            if self.drop_top_level_literals:
                logger.warning(f"Dropping top-level literal {literal.value!r}")
                return
            raise TopLevelLiteralError(literal.value)
        context.target.append(literal)


def transform(program: Program, drop_top_level_literals: bool = False) -> Program:
    """Transform a parsed Program into a new output-shaped Program."""
    return Transformer(drop_top_level_literals).transform(program)
