"""
Tree Transformer Tests
======================

Tests for rebuilding the parsed tree into the output shape: statement
wrapping, argument order, node independence and top-level literals.
"""

import logging

import pytest
from sexpc.parser import parse_source
from sexpc.transformer import Transformer, transform
from sexpc.traverser import traverse
from sexpc.ast import (
    Program,
    CallExpression,
    NumberLiteral,
    StringLiteral,
    ASTNode,
    ExpressionStatement,
)
from sexpc.errors import TransformError, TopLevelLiteralError, TraversalError


def all_nodes(node) -> list:
    """Every node reachable from node, statements' calls included."""
    nodes = []

    def collect(n, parent):
        nodes.append(n)
        if isinstance(n, ExpressionStatement):
            traverse(n.expression, on_enter=collect, parent=n)

    traverse(node, on_enter=collect)
    return nodes


# =============================================================================
# Shape Tests
# =============================================================================

class TestTransformShape:
    """Tests for the structure of the transformed tree."""

    def test_top_level_call_is_wrapped(self):
        """Each top-level call becomes an ExpressionStatement."""
        result = transform(parse_source("(a 1)"))
        assert result == Program(body=[
            ExpressionStatement(
                expression=CallExpression(name="a", params=[NumberLiteral(value="1")])
            )
        ])

    def test_nested_call_is_not_wrapped(self):
        """Only top-level calls are wrapped."""
        result = transform(parse_source("(add 2 (subtract 4 2))"))
        stmt = result.body[0]
        assert isinstance(stmt, ExpressionStatement)
        inner = stmt.expression.params[1]
        assert isinstance(inner, CallExpression)
        assert inner.name == "subtract"
        assert inner.params == [NumberLiteral(value="4"), NumberLiteral(value="2")]

    def test_argument_order_preserved(self):
        """Arguments keep their order, including mixed kinds."""
        result = transform(parse_source('(f 1 "two" (g) 4)'))
        params = result.body[0].expression.params
        assert params == [
            NumberLiteral(value="1"),
            StringLiteral(value="two"),
            CallExpression(name="g"),
            NumberLiteral(value="4"),
        ]

    def test_multiple_statements(self):
        """Top-level calls become statements in source order."""
        result = transform(parse_source("(a) (b) (c)"))
        assert [stmt.expression.name for stmt in result.body] == ["a", "b", "c"]

    def test_empty_program(self):
        """An empty program transforms to an empty program."""
        assert transform(Program()) == Program()

    def test_deep_nesting(self):
        """Nested calls are rebuilt at every depth."""
        result = transform(parse_source("(a (b (c 1) 2) 3)"))
        a = result.body[0].expression
        b = a.params[0]
        c = b.params[0]
        assert (a.name, b.name, c.name) == ("a", "b", "c")
        assert c.params == [NumberLiteral(value="1")]
        assert b.params[1] == NumberLiteral(value="2")
        assert a.params[1] == NumberLiteral(value="3")

    def test_statement_requires_call(self):
        """An ExpressionStatement cannot be built without its call."""
        with pytest.raises(TypeError):
            ExpressionStatement()
        for stmt in transform(parse_source("(a) (b 1)")).body:
            assert isinstance(stmt.expression, CallExpression)


# =============================================================================
# Independence Tests
# =============================================================================

class TestTransformIndependence:
    """Tests that the output tree shares nothing with the input tree."""

    def test_no_shared_nodes(self):
        """No node object appears in both trees."""
        program = parse_source('(add 2 (subtract 4 "x") (z))')
        result = transform(program)
        before = {id(n) for n in all_nodes(program)}
        after = {id(n) for n in all_nodes(result)}
        assert before.isdisjoint(after)

    def test_no_shared_lists(self):
        """Parameter lists are new lists, not the input's."""
        program = parse_source("(a 1)")
        result = transform(program)
        assert result.body[0].expression.params is not program.body[0].params

    def test_input_unchanged(self):
        """The input tree is not modified."""
        program = parse_source("(add 2 (subtract 4 2))")
        transform(program)
        assert program == parse_source("(add 2 (subtract 4 2))")

    def test_each_node_has_one_owner(self):
        """Every node in the output appears exactly once."""
        result = transform(parse_source("(a 1 (b 2) (c (d)))"))
        ids = [id(n) for n in all_nodes(result)]
        assert len(ids) == len(set(ids))

    def test_transformer_is_reusable(self):
        """The same Transformer can transform several programs."""
        transformer = Transformer()
        first = transformer.transform(parse_source("(a)"))
        second = transformer.transform(parse_source("(b)"))
        assert first.body[0].expression.name == "a"
        assert second.body[0].expression.name == "b"
        assert len(first.body) == 1


# =============================================================================
# Top-Level Literal Tests
# =============================================================================

class TestTopLevelLiterals:
    """Tests for literals outside any call."""

    def test_number_rejected(self):
        """A bare number is rejected by default."""
        with pytest.raises(TopLevelLiteralError) as exc_info:
            transform(parse_source("(a) 42"))
        assert exc_info.value.text == "42"

    def test_string_rejected(self):
        """A bare string is rejected by default."""
        with pytest.raises(TopLevelLiteralError):
            transform(parse_source('"hi"'))

    def test_dropped_when_enabled(self, caplog):
        """Compatibility mode drops bare literals and logs a warning."""
        with caplog.at_level(logging.WARNING, logger="sexpc.transformer"):
            result = transform(parse_source('1 (a 2) "x"'), drop_top_level_literals=True)
        assert len(result.body) == 1
        assert result.body[0].expression.name == "a"
        assert result.body[0].expression.params == [NumberLiteral(value="2")]
        assert "Dropping top-level literal '1'" in caplog.text
        assert "Dropping top-level literal 'x'" in caplog.text


# =============================================================================
# Invariant Error Tests
# =============================================================================

class TestTransformErrors:
    """Tests for inputs a conforming parser never produces."""

    def test_non_program_input(self):
        """Only a Program can be transformed."""
        with pytest.raises(TransformError, match="expected a Program"):
            transform(CallExpression(name="a"))

    def test_statement_in_input(self):
        """An already-transformed tree is rejected."""
        already = transform(parse_source("(a)"))
        with pytest.raises(TransformError, match="ExpressionStatement"):
            transform(already)

    def test_unknown_node_is_transform_error(self):
        """Walker failures surface as TransformError from the transformer."""

        class Mystery(ASTNode):
            pass

        with pytest.raises(TransformError, match="cannot traverse node type 'Mystery'") as exc_info:
            transform(Program(body=[CallExpression(name="a", params=[Mystery()])]))
        assert isinstance(exc_info.value.__cause__, TraversalError)
