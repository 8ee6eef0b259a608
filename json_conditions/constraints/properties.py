"""
Presence and nullability handling for named fields.
"""

from typing import Any

from .base import Constraint, FieldInfo, ValidationContext
from ..api import ErrorCode
from ..utils import MISSING


class PropertyConstraint(Constraint):
    """
    Wraps a field's validator with its parent's required/nullable rules.

    A missing optional field passes without consulting the inner validator;
    a missing required field fails. ``None`` passes for nullable fields.
    """

    def __init__(self, constraint: Constraint, field_info: FieldInfo,
                 required: bool = False, nullable: bool = False):
        self.constraint = constraint
        self.field = field_info
        self.required = required
        self.nullable = nullable

    def validate(self, value: Any, context: ValidationContext) -> bool:
        if value is MISSING:
            if not self.required:
                return True
            context.add_error(
                ErrorCode.REQUIRED_PROPERTY_MISSING,
                self.field.message("required"),
                keyword="required",
                constraint=self,
                label=self.field.label
            )
            return False

        if value is None and self.nullable:
            return True

        return self.constraint.validate(value, context)

    def __str__(self) -> str:
        flags = []
        if self.required:
            flags.append("required")
        if self.nullable:
            flags.append("nullable")
        return f"PropertyConstraint({self.field.key}, {self.constraint}{', ' if flags else ''}{', '.join(flags)})"
