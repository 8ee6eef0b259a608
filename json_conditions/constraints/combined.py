"""
Combined constraint implementation.
"""

from typing import Any, Dict, List

from .base import Constraint, ValidationContext


class CombinedConstraint(Constraint):
    """
    Constraint that combines multiple constraints conjunctively.

    This is used for rules that apply to the same value at the same level:
    a field's declared validator merged with conditional rules, or a node's
    primitive rules merged with its composition keywords.
    """

    def __init__(self, constraints: List[Constraint]):
        """
        Initialize a new combined constraint.

        Args:
            constraints: List of constraints to combine
        """
        self.constraints = list(constraints)

    @classmethod
    def merge(cls, existing: Constraint, addition: Constraint) -> "CombinedConstraint":
        """Conjunction of two constraints, flattening nested combinations."""
        constraints = []
        for constraint in (existing, addition):
            if isinstance(constraint, CombinedConstraint):
                constraints.extend(constraint.constraints)
            else:
                constraints.append(constraint)
        return cls(constraints)

    def validate(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate a value against all combined constraints.

        Stops at the first failure unless every error is being collected.

        Args:
            value: Value to validate
            context: Validation context

        Returns:
            True if all constraints pass, False otherwise
        """
        valid = True

        for constraint in self.constraints:
            if not constraint.validate(value, context):
                valid = False
                if not context.collect_all:
                    break

        return valid

    def __str__(self) -> str:
        """String representation of the constraint."""
        return f"CombinedConstraint(constraints={len(self.constraints)})"

    def __repr__(self) -> str:
        """Detailed representation of the combined constraint."""
        return f"CombinedConstraint(constraints={[str(c) for c in self.constraints]})"


def merge_into(rules: Dict[str, Constraint], key: str, constraint: Constraint) -> None:
    """Add a rule for ``key``, combining it with any rule already present."""
    if key in rules:
        rules[key] = CombinedConstraint.merge(rules[key], constraint)
    else:
        rules[key] = constraint
