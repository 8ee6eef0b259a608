"""
String constraint implementation.
"""

import re
from typing import Any, Optional, Pattern

from .base import FieldInfo, ROOT_FIELD, TypeConstraint, ValidationContext
from ..api import ErrorCode, SchemaInvalidError


class StringConstraint(TypeConstraint):
    """
    Constraint for validating string values.
    """

    def __init__(self,
                 field_info: FieldInfo = ROOT_FIELD,
                 min_length: Optional[int] = None,
                 max_length: Optional[int] = None,
                 pattern: Optional[str] = None):
        """
        Initialize a new string constraint.

        Args:
            field_info: Field being validated
            min_length: Minimum string length
            max_length: Maximum string length
            pattern: Regular expression pattern

        Raises:
            SchemaInvalidError: If the pattern is not a valid regular expression
        """
        super().__init__(field_info)
        self.min_length = min_length
        self.max_length = max_length
        self.pattern = pattern
        self._compiled_pattern: Optional[Pattern] = None

        if pattern is not None:
            try:
                self._compiled_pattern = re.compile(pattern)
            except re.error as e:
                raise SchemaInvalidError(f"Invalid regex pattern '{pattern}': {e}") from e

    @property
    def json_type(self) -> str:
        return "string"

    def _validate_type_specific(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate string-specific constraints.

        Args:
            value: The string to validate (guaranteed to be a string)
            context: Validation context

        Returns:
            True if validation succeeds, False otherwise
        """
        valid = True

        if self.min_length is not None and len(value) < self.min_length:
            self.fail(context, ErrorCode.STRING_TOO_SHORT, "minLength", value, minLength=self.min_length)
            valid = False
            if not context.collect_all:
                return False

        if self.max_length is not None and len(value) > self.max_length:
            self.fail(context, ErrorCode.STRING_TOO_LONG, "maxLength", value, maxLength=self.max_length)
            valid = False
            if not context.collect_all:
                return False

        if self._compiled_pattern is not None and not self._compiled_pattern.search(value):
            self.fail(context, ErrorCode.PATTERN_MISMATCH, "pattern", value, pattern=self.pattern)
            valid = False

        return valid

    def __str__(self) -> str:
        """String representation of the constraint."""
        parts = []
        if self.min_length is not None:
            parts.append(f"minLength={self.min_length}")
        if self.max_length is not None:
            parts.append(f"maxLength={self.max_length}")
        if self.pattern is not None:
            parts.append(f"pattern={self.pattern}")

        return f"StringConstraint({', '.join(parts)})"
