"""
Array constraint implementation.
"""

from typing import Any, List, Optional

from .base import Constraint, FieldInfo, ROOT_FIELD, TypeConstraint, ValidationContext
from ..api import ErrorCode
from ..utils import TypeUtils


class ArrayConstraint(TypeConstraint):
    """
    Constraint for validating array values.
    """

    def __init__(self,
                 field_info: FieldInfo = ROOT_FIELD,
                 items: Optional[Constraint] = None,
                 tuple_items: Optional[List[Constraint]] = None,
                 contains: Optional[Constraint] = None,
                 min_items: Optional[int] = None,
                 max_items: Optional[int] = None,
                 unique_items: bool = False):
        """
        Initialize a new array constraint.

        Args:
            field_info: Field being validated
            items: Constraint every element must satisfy
            tuple_items: Positional constraints, one per leading element
            contains: Constraint at least one element must satisfy
            min_items: Minimum number of items
            max_items: Maximum number of items
            unique_items: Whether items must be unique
        """
        super().__init__(field_info)
        self.items = items
        self.tuple_items = tuple_items or []
        self.contains = contains
        self.min_items = min_items
        self.max_items = max_items
        self.unique_items = unique_items

    @property
    def json_type(self) -> str:
        return "array"

    def with_items(self, items: Constraint) -> "ArrayConstraint":
        """Copy of this constraint that also validates every element."""
        return ArrayConstraint(
            field_info=self.field,
            items=items,
            tuple_items=self.tuple_items,
            contains=self.contains,
            min_items=self.min_items,
            max_items=self.max_items,
            unique_items=self.unique_items
        )

    def _duplicate_index(self, value: List[Any]) -> Optional[int]:
        for i, item in enumerate(value):
            for earlier in value[:i]:
                if TypeUtils.deep_equal(earlier, item):
                    return i
        return None

    def _validate_type_specific(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate array-specific constraints.

        Args:
            value: The array to validate (guaranteed to be an array)
            context: Validation context

        Returns:
            True if validation succeeds, False otherwise
        """
        valid = True

        if self.min_items is not None and len(value) < self.min_items:
            self.fail(context, ErrorCode.ARRAY_TOO_SHORT, "minItems", value, minItems=self.min_items)
            valid = False
            if not context.collect_all:
                return False

        if self.max_items is not None and len(value) > self.max_items:
            self.fail(context, ErrorCode.ARRAY_TOO_LONG, "maxItems", value, maxItems=self.max_items)
            valid = False
            if not context.collect_all:
                return False

        if self.unique_items and len(value) > 1:
            duplicate = self._duplicate_index(value)
            if duplicate is not None:
                self.fail(context, ErrorCode.ARRAY_ITEMS_NOT_UNIQUE, "uniqueItems", value, index=duplicate)
                valid = False
                if not context.collect_all:
                    return False

        if self.contains is not None and not any(self.contains.is_valid(item) for item in value):
            self.fail(context, ErrorCode.ARRAY_CONTAINS_NO_MATCH, "contains", value)
            valid = False
            if not context.collect_all:
                return False

        for i, item in enumerate(value):
            item_constraint = self.tuple_items[i] if i < len(self.tuple_items) else self.items
            if item_constraint is None:
                continue
            with context.with_path(i):
                if not item_constraint.validate(item, context):
                    valid = False
                    if context.fail_fast:
                        return False

        return valid

    def __str__(self) -> str:
        """String representation of the constraint."""
        parts = []
        if self.items is not None:
            parts.append(f"items={self.items}")
        if self.tuple_items:
            parts.append(f"tuple_items={self.tuple_items}")
        if self.contains is not None:
            parts.append(f"contains={self.contains}")
        if self.min_items is not None:
            parts.append(f"min_items={self.min_items}")
        if self.max_items is not None:
            parts.append(f"max_items={self.max_items}")
        if self.unique_items:
            parts.append("unique_items=True")

        return f"ArrayConstraint({', '.join(parts)})"
