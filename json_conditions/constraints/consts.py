"""
Const constraint implementation.
"""

from typing import Any

from .base import Constraint, FieldInfo, ROOT_FIELD, ValidationContext
from ..api import ErrorCode
from ..utils import TypeUtils


class ConstConstraint(Constraint):
    """
    Constraint that validates a value against a constant.

    Scalar constants use strict equality; lists and objects are compared
    structurally.
    """

    def __init__(self, value: Any, field_info: FieldInfo = ROOT_FIELD):
        """
        Initialize a new const constraint.

        Args:
            value: Constant value to match
            field_info: Field being validated
        """
        self.value = value
        self.field = field_info
        self.structured = TypeUtils.is_structured(value)

    def validate(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate a value against this const constraint.

        Args:
            value: Value to validate
            context: Validation context

        Returns:
            True if validation succeeds, False otherwise
        """
        if self.structured:
            matches = TypeUtils.deep_equal(self.value, value)
        else:
            matches = TypeUtils.scalar_equal(self.value, value)

        if matches:
            return True

        context.add_error(
            ErrorCode.CONST_MISMATCH,
            self.field.message("const", const=self.value),
            keyword="const",
            value=value,
            constraint=self,
            label=self.field.label
        )
        return False

    def __str__(self) -> str:
        """String representation of the constraint."""
        return f"ConstConstraint(value={self.value!r})"
