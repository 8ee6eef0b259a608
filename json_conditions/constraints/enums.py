"""
Enum constraint implementation.
"""

from typing import Any, List

from .base import Constraint, FieldInfo, ROOT_FIELD, ValidationContext
from ..api import ErrorCode
from ..utils import TypeUtils


class EnumConstraint(Constraint):
    """
    Constraint that validates a value against an enumeration.

    Each member is compared with the method suited to its own kind, so
    mixed lists of scalars and structures are supported.
    """

    def __init__(self, values: List[Any], field_info: FieldInfo = ROOT_FIELD):
        """
        Initialize a new enum constraint.

        Args:
            values: List of allowed values
            field_info: Field being validated
        """
        self.values = list(values)
        self.field = field_info

    def validate(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate a value against this enum constraint.

        Args:
            value: Value to validate
            context: Validation context

        Returns:
            True if validation succeeds, False otherwise
        """
        if any(TypeUtils.literal_equal(member, value) for member in self.values):
            return True

        context.add_error(
            ErrorCode.ENUM_MISMATCH,
            self.field.message("enum", enum=",".join(str(v) for v in self.values)),
            keyword="enum",
            value=value,
            constraint=self,
            label=self.field.label
        )
        return False

    def __str__(self) -> str:
        """String representation of the constraint."""
        return f"EnumConstraint(values={self.values!r})"
