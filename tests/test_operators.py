"""Tests for the arithmetic operator registry."""

import unittest

from min_expression.errors import ConfigurationError
from min_expression.operators import (
    ARITHMETIC_OPERATORS,
    OPERATOR_REGISTRY,
    OPERATOR_SYMBOLS,
    OperatorKind,
    parse_operators,
)


class TestOperatorRegistry(unittest.TestCase):
    """Verify the operator registry is well-formed."""

    def test_four_arithmetic_operators(self):
        self.assertEqual(len(OPERATOR_REGISTRY), 4)
        self.assertNotIn(OperatorKind.NONE, OPERATOR_REGISTRY)

    def test_registry_keys_match_kinds(self):
        for kind, op in OPERATOR_REGISTRY.items():
            self.assertIs(op.kind, kind)

    def test_every_operator_has_a_symbol(self):
        for kind in ARITHMETIC_OPERATORS:
            self.assertIsInstance(OPERATOR_SYMBOLS[kind], str)
        self.assertEqual(len(set(OPERATOR_SYMBOLS.values())), 4)

    def test_commutativity(self):
        self.assertTrue(OPERATOR_REGISTRY[OperatorKind.ADD].commutative)
        self.assertTrue(OPERATOR_REGISTRY[OperatorKind.MUL].commutative)
        self.assertFalse(OPERATOR_REGISTRY[OperatorKind.SUB].commutative)
        self.assertFalse(OPERATOR_REGISTRY[OperatorKind.DIV].commutative)

    def test_operators_are_callable(self):
        self.assertEqual(OPERATOR_REGISTRY[OperatorKind.SUB](7, 3), 4)
        self.assertEqual(OPERATOR_REGISTRY[OperatorKind.MUL](7, 3), 21)


class TestParseOperators(unittest.TestCase):
    """Operator selections are normalized to canonical order."""

    def test_all_symbols(self):
        self.assertEqual(parse_operators("/*-+"), ARITHMETIC_OPERATORS)

    def test_subset(self):
        self.assertEqual(parse_operators("*/"),
                         (OperatorKind.MUL, OperatorKind.DIV))

    def test_mixed_iterable_collapses_duplicates(self):
        self.assertEqual(parse_operators([OperatorKind.ADD, "+"]),
                         (OperatorKind.ADD,))

    def test_whitespace_ignored(self):
        self.assertEqual(parse_operators("+ -"),
                         (OperatorKind.ADD, OperatorKind.SUB))

    def test_unknown_symbol_rejected(self):
        with self.assertRaises(ConfigurationError):
            parse_operators("+%")

    def test_empty_rejected(self):
        with self.assertRaises(ConfigurationError):
            parse_operators("")

    def test_leaf_marker_rejected(self):
        with self.assertRaises(ConfigurationError):
            parse_operators([OperatorKind.NONE])


if __name__ == "__main__":
    unittest.main()
