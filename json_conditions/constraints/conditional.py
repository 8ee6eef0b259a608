"""
Conditional (if/then/else) constraint implementation.

A conditional rule depends on a chain of conditions read from sibling
properties of the object being validated. Chains are immutable: extending
or inverting one returns a new chain and leaves the original untouched, so
the then and else branches of one condition can both build on it.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from .base import Constraint, ValidationContext
from ..api import ErrorKind
from ..utils import MISSING


@dataclass(frozen=True)
class ChainEntry:
    """
    One condition in a chain.

    Attributes:
        key: Sibling property the condition reads
        test: Predicate over that property's value (MISSING when absent)
        inverted: Whether the entry expects the predicate to fail
    """
    key: str
    test: Callable[[Any], bool] = field(compare=False)
    inverted: bool = False

    def holds(self, value: Any) -> bool:
        return self.test(value) != self.inverted


class ChainOutcome(Enum):
    HOLDS = "holds"
    LEAF_FAILED = "leaf_failed"
    ANCESTOR_FAILED = "ancestor_failed"


class ConditionChain:
    """Append-only sequence of ancestor conditions, ending in the leaf."""

    __slots__ = ("entries",)

    def __init__(self, entries: Tuple[ChainEntry, ...] = ()):
        self.entries = tuple(entries)

    def extend(self, entry: ChainEntry) -> "ConditionChain":
        """New chain with ``entry`` as its leaf."""
        return ConditionChain(self.entries + (entry,))

    def invert_leaf(self) -> "ConditionChain":
        """New chain whose leaf expects its condition to fail."""
        if not self.entries:
            return self
        return ConditionChain(self.entries[:-1] + (replace(self.entries[-1], inverted=True),))

    @property
    def leaf(self) -> Optional[ChainEntry]:
        return self.entries[-1] if self.entries else None

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(entry.key for entry in self.entries)

    def evaluate(self, parent: Dict[str, Any], trace=None) -> ChainOutcome:
        """
        Evaluate the chain against an object.

        Entries are checked in order and evaluation stops at the first one
        that fails. With a trace sink, every entry is evaluated and reported;
        the outcome is the same.

        Args:
            parent: Object holding the condition keys
            trace: Optional trace sink

        Returns:
            HOLDS when every entry holds, LEAF_FAILED when only the leaf
            fails, ANCESTOR_FAILED when any earlier entry fails
        """
        outcome = ChainOutcome.HOLDS
        last = len(self.entries) - 1

        for i, entry in enumerate(self.entries):
            held = entry.holds(parent.get(entry.key, MISSING))
            if trace is not None:
                trace.emit("condition.entry", key=entry.key, inverted=entry.inverted, held=held)
            if held or outcome is not ChainOutcome.HOLDS:
                continue
            outcome = ChainOutcome.LEAF_FAILED if i == last else ChainOutcome.ANCESTOR_FAILED
            if trace is None:
                break

        if trace is not None:
            trace.emit("condition.chain", keys=self.keys, outcome=outcome.value)
        return outcome

    def __iter__(self) -> Iterator[ChainEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        rendered = ", ".join(f"{'!' if e.inverted else ''}{e.key}" for e in self.entries)
        return f"ConditionChain([{rendered}])"


class ConditionalConstraint(Constraint):
    """
    Rule that applies to a field only while its condition chain allows it.

    If an ancestor condition fails the rule is skipped. Otherwise ``then``
    applies when the leaf holds and ``otherwise`` (if any) when it fails.
    """

    def __init__(self, chain: ConditionChain, then: Constraint,
                 otherwise: Optional[Constraint] = None, trace=None):
        """
        Initialize a new conditional constraint.

        Args:
            chain: Conditions, outermost first
            then: Rule applied when the whole chain holds
            otherwise: Rule applied when only the leaf fails
            trace: Optional trace sink for chain evaluation
        """
        self.chain = chain
        self.then = then
        self.otherwise = otherwise
        self.trace = trace

    def select(self, parent: Dict[str, Any]) -> Optional[Constraint]:
        """The rule in force for ``parent``, or None."""
        outcome = self.chain.evaluate(parent, self.trace)
        if outcome is ChainOutcome.HOLDS:
            return self.then
        if outcome is ChainOutcome.LEAF_FAILED:
            return self.otherwise
        return None

    def validate(self, value: Any, context: ValidationContext) -> bool:
        rule = self.select(context.parent or {})
        if rule is None:
            return True

        sub_context = context.fork()
        if rule.validate(value, sub_context):
            return True

        context.extend_errors(sub_context.errors, kind=ErrorKind.CONDITIONAL_VIOLATION)
        return False

    def __str__(self) -> str:
        """String representation of the constraint."""
        return f"ConditionalConstraint(chain={self.chain!r}, otherwise={self.otherwise is not None})"
