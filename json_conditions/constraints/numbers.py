"""
Number constraint implementation.
"""

from typing import Any, Optional

from .base import FieldInfo, ROOT_FIELD, TypeConstraint, ValidationContext
from ..api import ErrorCode


class NumberConstraint(TypeConstraint):
    """
    Constraint for validating numeric values.
    """

    def __init__(self,
                 field_info: FieldInfo = ROOT_FIELD,
                 minimum: Optional[float] = None,
                 maximum: Optional[float] = None,
                 exclusive_minimum: Optional[float] = None,
                 exclusive_maximum: Optional[float] = None,
                 multiple_of: Optional[float] = None,
                 integer_only: bool = False):
        """
        Initialize a new number constraint.

        Args:
            field_info: Field being validated
            minimum: Inclusive lower bound
            maximum: Inclusive upper bound
            exclusive_minimum: Exclusive lower bound
            exclusive_maximum: Exclusive upper bound
            multiple_of: Value must be a multiple of this
            integer_only: Whether only integers are allowed
        """
        super().__init__(field_info)
        self.minimum = minimum
        self.maximum = maximum
        self.exclusive_minimum = exclusive_minimum
        self.exclusive_maximum = exclusive_maximum
        self.multiple_of = multiple_of
        self.integer_only = integer_only

    @property
    def json_type(self) -> str:
        return "integer" if self.integer_only else "number"

    def _checks(self, value):
        if self.minimum is not None and value < self.minimum:
            yield ErrorCode.NUMBER_TOO_SMALL, "minimum", {"minimum": self.minimum}
        if self.exclusive_minimum is not None and value <= self.exclusive_minimum:
            yield ErrorCode.NUMBER_TOO_SMALL, "exclusiveMinimum", {"exclusiveMinimum": self.exclusive_minimum}
        if self.maximum is not None and value > self.maximum:
            yield ErrorCode.NUMBER_TOO_LARGE, "maximum", {"maximum": self.maximum}
        if self.exclusive_maximum is not None and value >= self.exclusive_maximum:
            yield ErrorCode.NUMBER_TOO_LARGE, "exclusiveMaximum", {"exclusiveMaximum": self.exclusive_maximum}
        if self.multiple_of is not None and not self._is_multiple(value):
            yield ErrorCode.NUMBER_NOT_MULTIPLE, "multipleOf", {"multipleOf": self.multiple_of}

    def _is_multiple(self, value) -> bool:
        # Handle floating point precision issues
        if isinstance(value, float) or isinstance(self.multiple_of, float):
            quotient = value / self.multiple_of
            return abs(quotient - round(quotient)) < 1e-9
        return value % self.multiple_of == 0

    def _validate_type_specific(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate number-specific constraints.

        Args:
            value: The number to validate (guaranteed to be a number)
            context: Validation context

        Returns:
            True if validation succeeds, False otherwise
        """
        valid = True

        for code, keyword, params in self._checks(value):
            self.fail(context, code, keyword, value, **params)
            valid = False
            if not context.collect_all:
                break

        return valid

    def __str__(self) -> str:
        """String representation of the constraint."""
        parts = []
        if self.minimum is not None:
            parts.append(f"minimum={self.minimum}")
        if self.exclusive_minimum is not None:
            parts.append(f"exclusiveMinimum={self.exclusive_minimum}")
        if self.maximum is not None:
            parts.append(f"maximum={self.maximum}")
        if self.exclusive_maximum is not None:
            parts.append(f"exclusiveMaximum={self.exclusive_maximum}")
        if self.multiple_of is not None:
            parts.append(f"multipleOf={self.multiple_of}")
        if self.integer_only:
            parts.append("integer_only=True")

        return f"NumberConstraint({', '.join(parts)})"
