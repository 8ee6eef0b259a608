"""
Runtime type dispatch and untyped constraints.
"""

from typing import Any, List, Optional, Tuple

from .base import Constraint, FieldInfo, ROOT_FIELD, ValidationContext
from ..api import ErrorCode
from ..utils import MISSING, TypeUtils


class LazyTypeConstraint(Constraint):
    """
    Constraint for fields declaring several possible types.

    The validator for each candidate type is compiled up front; the choice
    between them waits until the value is seen.
    """

    def __init__(self, candidates: List[Tuple[str, Constraint]], field_info: FieldInfo = ROOT_FIELD):
        """
        Initialize a new lazy type constraint.

        Args:
            candidates: (type name, compiled validator) pairs in declared order
            field_info: Field being validated
        """
        self.candidates = list(candidates)
        self.field = field_info
        self.type_names = [name for name, _ in self.candidates]

    def resolve(self, value: Any) -> Tuple[Any, Optional[Constraint]]:
        """
        Pick the validator for a value.

        Empty strings and absent values become null when null is a candidate.

        Args:
            value: Raw input value

        Returns:
            Tuple of (normalized value, validator of the first matching type
            or None when no declared type matches)
        """
        if "null" in self.type_names and (value is MISSING or value == ""):
            value = None

        for type_name, constraint in self.candidates:
            if TypeUtils.is_type_of_value(type_name, value):
                return value, constraint

        return value, None

    def validate(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate a value against the candidate matching its runtime type.

        Args:
            value: Value to validate
            context: Validation context

        Returns:
            True if validation succeeds, False otherwise
        """
        value, constraint = self.resolve(value)
        if constraint is not None:
            return constraint.validate(value, context)

        context.add_error(
            ErrorCode.TYPE_ERROR,
            self.field.message("type", types=", ".join(self.type_names)),
            keyword="type",
            value=value,
            constraint=self,
            label=self.field.label
        )
        return False

    def __str__(self) -> str:
        """String representation of the constraint."""
        return f"LazyTypeConstraint(types={self.type_names})"


class AnyConstraint(Constraint):
    """
    Constraint that accepts any value.

    Used for untyped fragments whose only rules are const/enum or
    composition keywords.
    """

    def validate(self, value: Any, context: ValidationContext) -> bool:
        return True

    def __str__(self) -> str:
        return "AnyConstraint()"
