"""
sexpc Tree Traverser
====================

Generic structural walk over the AST. A Traverser visits every node once,
calling an enter hook before the node's children (pre-order) and an exit
hook after them (post-order). Both hooks receive the node and its parent;
the root's parent is None.

Children
--------
| Node                | Children        |
|---------------------|-----------------|
| Program             | body, in order  |
| CallExpression      | params, in order|
| NumberLiteral       | none            |
| StringLiteral       | none            |
| ExpressionStatement | none            |

Context Threading
-----------------
Each hook also receives a context value. Whatever enter_<Node> returns is
passed as the context to that node's children, so a pass can hand "the
thing I am building for this node" down to the children without keeping
a side table. The exit hook sees the same context the enter hook received.

Usage
-----
Subclass and override the hooks you need:

    class CallCounter(Traverser):
        def __init__(self):
            self.count = 0

        def enter_CallExpression(self, node, parent, context):
            self.count += 1
            return context

    counter = CallCounter()
    counter.traverse(program)

Or pass plain callables:

    traverse(program, on_enter=lambda node, parent: print(node))
"""

from typing import Any, Callable, Optional

from sexpc.ast import (
    ASTNode,
    CallExpression,
    ExpressionStatement,
    NumberLiteral,
    Program,
    StringLiteral,
)
from sexpc.errors import TraversalError


Hook = Callable[[ASTNode, Optional[ASTNode]], None]


class Traverser:
    """
    Base class for tree walks, with one enter/exit method per node type.

    Unhandled hooks fall through to generic_enter / generic_exit, which pass
    the context through unchanged and do nothing, respectively.
    """

    def traverse(
        self,
        node: ASTNode,
        parent: Optional[ASTNode] = None,
        context: Any = None,
    ) -> None:
        """
        Walk node and its descendants.

        Args:
            node: Node to start from
            parent: Parent of node (None for the root)
            context: Value handed to node's hooks

        Raises:
            TraversalError: If the tree contains a node type the traverser
                does not know
        """
        name = node.__class__.__name__
        enter = getattr(self, f"enter_{name}", None)
        leave = getattr(self, f"exit_{name}", None)
        if enter is None or leave is None:
            raise TraversalError(node)

        child_context = enter(node, parent, context)
        for child in self.children(node):
            self.traverse(child, node, child_context)
        leave(node, parent, context)

    @staticmethod
    def children(node: ASTNode) -> list[ASTNode]:
        """Return the nodes visited below node, in order."""
        if isinstance(node, Program):
            return node.body
        if isinstance(node, CallExpression):
            return node.params
        if isinstance(node, (NumberLiteral, StringLiteral, ExpressionStatement)):
            return []
        raise TraversalError(node)

    def generic_enter(self, node: ASTNode, parent: Optional[ASTNode], context: Any) -> Any:
        """Default enter hook: pass the context on to the children."""
        return context

    def generic_exit(self, node: ASTNode, parent: Optional[ASTNode], context: Any) -> None:
        """Default exit hook."""
        pass

    # Specific hooks that subclasses can override
    def enter_Program(self, node: Program, parent, context): return self.generic_enter(node, parent, context)
    def enter_ExpressionStatement(self, node: ExpressionStatement, parent, context): return self.generic_enter(node, parent, context)
    def enter_CallExpression(self, node: CallExpression, parent, context): return self.generic_enter(node, parent, context)
    def enter_NumberLiteral(self, node: NumberLiteral, parent, context): return self.generic_enter(node, parent, context)
    def enter_StringLiteral(self, node: StringLiteral, parent, context): return self.generic_enter(node, parent, context)

    def exit_Program(self, node: Program, parent, context): return self.generic_exit(node, parent, context)
    def exit_ExpressionStatement(self, node: ExpressionStatement, parent, context): return self.generic_exit(node, parent, context)
    def exit_CallExpression(self, node: CallExpression, parent, context): return self.generic_exit(node, parent, context)
    def exit_NumberLiteral(self, node: NumberLiteral, parent, context): return self.generic_exit(node, parent, context)
    def exit_StringLiteral(self, node: StringLiteral, parent, context): return self.generic_exit(node, parent, context)


class CallbackTraverser(Traverser):
    """Traverser that forwards every node to a pair of plain callables."""

    def __init__(self, on_enter: Optional[Hook] = None, on_exit: Optional[Hook] = None):
        self.on_enter = on_enter
        self.on_exit = on_exit

    def generic_enter(self, node, parent, context):
        if self.on_enter:
            self.on_enter(node, parent)
        return context

    def generic_exit(self, node, parent, context):
        if self.on_exit:
            self.on_exit(node, parent)


def traverse(
    node: ASTNode,
    on_enter: Optional[Hook] = None,
    on_exit: Optional[Hook] = None,
    parent: Optional[ASTNode] = None,
) -> None:
    """
    Walk a tree, calling on_enter(node, parent) in pre-order and
    on_exit(node, parent) in post-order.

    Example:
        >>> from sexpc.parser import parse_source
        >>> seen = []
        >>> traverse(parse_source("(add 1 2)"), on_enter=lambda n, p: seen.append(n))
        >>> [type(n).__name__ for n in seen]
        ['Program', 'CallExpression', 'NumberLiteral', 'NumberLiteral']
    """
    CallbackTraverser(on_enter, on_exit).traverse(node, parent)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(Traverser):
    """
    Pretty printer for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(ast))

    Output for (add 2 "x"):
        Program
          Call add
            Number 2
            String "x"
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.traverse(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        """Emit a line with current indentation."""
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def enter_Program(self, node, parent, context):
        self._emit("Program")
        self.indent_level += 1

    def exit_Program(self, node, parent, context):
        self.indent_level -= 1

    def enter_ExpressionStatement(self, node, parent, context):
        self._emit("Statement")
        self.indent_level += 1
        # Statements are leaves for traversal; descend into the call by hand
        self.traverse(node.expression, node)
        self.indent_level -= 1

    def enter_CallExpression(self, node, parent, context):
        self._emit(f"Call {node.name}")
        self.indent_level += 1

    def exit_CallExpression(self, node, parent, context):
        self.indent_level -= 1

    def enter_NumberLiteral(self, node, parent, context):
        self._emit(f"Number {node.value}")

    def enter_StringLiteral(self, node, parent, context):
        self._emit(f'String "{node.value}"')
