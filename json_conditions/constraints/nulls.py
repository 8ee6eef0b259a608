"""
Null constraint implementation.
"""

from typing import Any

from .base import TypeConstraint, ValidationContext


class NullConstraint(TypeConstraint):
    """
    Constraint for validating null values.
    """

    @property
    def json_type(self) -> str:
        return "null"

    def _validate_type_specific(self, value: Any, context: ValidationContext) -> bool:
        # No additional constraints for null
        return True

    def __str__(self) -> str:
        return f"NullConstraint({self.field.key or ''})"
