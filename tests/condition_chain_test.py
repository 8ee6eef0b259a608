#!/usr/bin/env python3
"""
Tests for condition chains and conditional constraints.
"""
import pytest

# autopep8: off
from utils import setup
setup()
from json_conditions import RecordingTraceSink
from json_conditions.constraints import (
    ChainEntry,
    ChainOutcome,
    ConditionChain,
    ConditionalConstraint,
    ConstConstraint,
    ValidationContext
)
from json_conditions.utils import MISSING
# autopep8: on


def equals(expected):
    return lambda value: value == expected


class TestConditionChain:
    """Tests for building and evaluating chains."""

    def setup_method(self):
        """Set up the test environment."""
        self.chain = ConditionChain().extend(ChainEntry("A", equals("a"))).extend(ChainEntry("B", equals("b")))

    def test_extend_leaves_original_untouched(self):
        """Test that chains are immutable."""
        base = ConditionChain().extend(ChainEntry("A", equals("a")))
        longer = base.extend(ChainEntry("B", equals("b")))

        assert base.keys == ("A",)
        assert longer.keys == ("A", "B")
        assert len(base) == 1

    def test_invert_leaf(self):
        """Test inverting only the last entry."""
        inverted = self.chain.invert_leaf()

        assert [entry.inverted for entry in inverted] == [False, True]
        assert [entry.inverted for entry in self.chain] == [False, False]
        assert inverted.leaf.key == "B"
        assert repr(inverted) == "ConditionChain([A, !B])"

    def test_invert_empty_chain(self):
        """Test that an empty chain inverts to itself."""
        empty = ConditionChain()
        assert empty.invert_leaf() is empty
        assert empty.leaf is None

    def test_outcomes(self):
        """Test the three evaluation outcomes."""
        assert self.chain.evaluate({"A": "a", "B": "b"}) is ChainOutcome.HOLDS
        assert self.chain.evaluate({"A": "a", "B": "x"}) is ChainOutcome.LEAF_FAILED
        assert self.chain.evaluate({"A": "x", "B": "b"}) is ChainOutcome.ANCESTOR_FAILED
        assert self.chain.evaluate({"A": "x", "B": "x"}) is ChainOutcome.ANCESTOR_FAILED

    def test_inverted_outcomes(self):
        """Test evaluation of a chain with an inverted leaf."""
        inverted = self.chain.invert_leaf()

        assert inverted.evaluate({"A": "a", "B": "x"}) is ChainOutcome.HOLDS
        assert inverted.evaluate({"A": "a", "B": "b"}) is ChainOutcome.LEAF_FAILED
        assert inverted.evaluate({"A": "x"}) is ChainOutcome.ANCESTOR_FAILED

    def test_absent_keys_are_missing(self):
        """Test that absent keys reach the predicate as MISSING."""
        seen = []
        chain = ConditionChain().extend(ChainEntry("A", lambda value: seen.append(value) or True))

        chain.evaluate({})
        assert seen == [MISSING]

    def test_short_circuit_without_trace(self):
        """Test that evaluation stops at the first failing entry."""
        calls = []

        def record(value):
            calls.append(value)
            return True

        chain = ConditionChain().extend(ChainEntry("A", equals("a"))).extend(ChainEntry("B", record))
        chain.evaluate({"A": "x", "B": "b"})
        assert calls == []

        chain.evaluate({"A": "x", "B": "b"}, trace=RecordingTraceSink())
        assert calls == ["b"]

    def test_entries_compare_by_key_and_inversion(self):
        """Test that predicates do not take part in equality."""
        assert ChainEntry("A", equals("a")) == ChainEntry("A", equals("b"))
        assert ChainEntry("A", equals("a")) != ChainEntry("A", equals("a"), inverted=True)


class TestConditionalConstraint:
    """Tests for rules guarded by a chain."""

    def setup_method(self):
        """Set up the test environment."""
        chain = ConditionChain().extend(ChainEntry("A", equals("a")))
        self.constraint = ConditionalConstraint(chain, ConstConstraint(1), ConstConstraint(2))

    def validate(self, value, parent):
        context = ValidationContext()
        with context.with_parent(parent):
            with context.with_path("B"):
                valid = self.constraint.validate(value, context)
        return valid, context.errors

    def test_select(self):
        """Test choosing the rule in force."""
        assert self.constraint.select({"A": "a"}) is self.constraint.then
        assert self.constraint.select({"A": "x"}) is self.constraint.otherwise

    def test_then_and_otherwise(self):
        """Test applying each branch."""
        assert self.validate(1, {"A": "a"})[0]
        assert not self.validate(2, {"A": "a"})[0]
        assert self.validate(2, {"A": "x"})[0]
        assert not self.validate(1, {"A": "x"})[0]

    def test_errors_are_conditional(self):
        """Test that branch errors are reported as conditional violations."""
        from json_conditions import ErrorKind

        valid, errors = self.validate(5, {"A": "a"})
        assert not valid
        assert len(errors) == 1
        assert errors[0].kind == ErrorKind.CONDITIONAL_VIOLATION
        assert errors[0].path == "/B"

    def test_skipped_when_ancestor_fails(self):
        """Test that no rule applies when an ancestor condition fails."""
        chain = ConditionChain().extend(ChainEntry("A", equals("a"))).extend(ChainEntry("C", equals("c")))
        constraint = ConditionalConstraint(chain, ConstConstraint(1), ConstConstraint(2))

        assert constraint.select({"A": "x", "C": "x"}) is None
        assert constraint.is_valid(99)


if __name__ == "__main__":
    pytest.main(["-xvs", __file__])
