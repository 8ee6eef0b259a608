"""
Boolean constraint implementation.
"""

from typing import Any

from .base import TypeConstraint, ValidationContext


class BooleanConstraint(TypeConstraint):
    """
    Constraint for validating boolean values.
    """

    @property
    def json_type(self) -> str:
        return "boolean"

    def _validate_type_specific(self, value: Any, context: ValidationContext) -> bool:
        # No additional constraints for booleans
        return True

    def __str__(self) -> str:
        return f"BooleanConstraint({self.field.key or ''})"
