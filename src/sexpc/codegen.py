"""
C-Style Call Code Generator
===========================

Renders a transformed AST as C-style call text.

Output Rules
------------
| Node                | Output                                  |
|---------------------|-----------------------------------------|
| NumberLiteral       | the digits                              |
| StringLiteral       | "text" (no re-escaping)                 |
| CallExpression      | name(arg, arg, ...)                     |
| ExpressionStatement | call;                                   |
| Program             | each body element followed by a newline |

Example
-------
    (add 2 (subtract 4 2))   →   add(2, subtract(4, 2));
"""

from sexpc.ast import (
    ASTNode,
    CallExpression,
    ExpressionStatement,
    NumberLiteral,
    Program,
    StringLiteral,
)
from sexpc.errors import UnknownNodeError


class CodeGenerator:
    """
    Recursive text emitter for the output grammar.

    The generator keeps no state between calls; one instance can render
    any number of trees.

    Usage:
        text = CodeGenerator().generate(transformed_program)
    """

    def generate(self, node: ASTNode) -> str:
        """
        Render a node and its children.

        Raises:
            UnknownNodeError: For anything outside the known node types
        """
        if isinstance(node, Program):
            return self._generate_program(node)
        elif isinstance(node, ExpressionStatement):
            return self._generate_statement(node)
        elif isinstance(node, CallExpression):
            return self._generate_call(node)
        elif isinstance(node, NumberLiteral):
            return node.value
        elif isinstance(node, StringLiteral):
            return f'"{node.value}"'

        raise UnknownNodeError(node)

    def _generate_program(self, program: Program) -> str:
        """Every statement, the last included, ends with a newline."""
        return "".join(f"{self.generate(stmt)}\n" for stmt in program.body)

    def _generate_statement(self, stmt: ExpressionStatement) -> str:
        return f"{self.generate(stmt.expression)};"

    def _generate_call(self, call: CallExpression) -> str:
        args = ", ".join(self.generate(param) for param in call.params)
        return f"{call.name}({args})"


def generate(node: ASTNode) -> str:
    """Render a tree to output text."""
    return CodeGenerator().generate(node)
