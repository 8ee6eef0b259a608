"""
Object constraint implementation.
"""

from typing import Any, Dict, List, Optional

from .base import Constraint, FieldInfo, ROOT_FIELD, TypeConstraint, ValidationContext
from ..api import ErrorCode
from ..utils import MISSING


class ObjectConstraint(TypeConstraint):
    """
    Constraint for validating object values.

    Every entry in ``properties`` is validated against the property's value,
    or against MISSING when the key is absent, with this object set as the
    parent so conditional rules can read sibling values.
    """

    def __init__(self,
                 field_info: FieldInfo = ROOT_FIELD,
                 properties: Optional[Dict[str, Constraint]] = None,
                 required: Optional[List[str]] = None,
                 min_properties: Optional[int] = None,
                 max_properties: Optional[int] = None,
                 rules: Optional[List[Constraint]] = None):
        """
        Initialize a new object constraint.

        Args:
            field_info: Field being validated
            properties: Per-key validators, in schema order
            required: Required keys that have no validator in ``properties``
            min_properties: Minimum number of properties
            max_properties: Maximum number of properties
            rules: Whole-object rules (composition entries of the object schema)
        """
        super().__init__(field_info)
        self.properties = properties or {}
        self.required = required or []
        self.min_properties = min_properties
        self.max_properties = max_properties
        self.rules = rules or []

    @property
    def json_type(self) -> str:
        return "object"

    def _validate_counts(self, value: Dict[str, Any], context: ValidationContext) -> bool:
        if self.min_properties is not None and len(value) < self.min_properties:
            self.fail(context, ErrorCode.OBJECT_TOO_FEW_PROPERTIES, "minProperties", value,
                      minProperties=self.min_properties)
            return False

        if self.max_properties is not None and len(value) > self.max_properties:
            self.fail(context, ErrorCode.OBJECT_TOO_MANY_PROPERTIES, "maxProperties", value,
                      maxProperties=self.max_properties)
            return False

        return True

    def _validate_type_specific(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate object-specific constraints.

        Args:
            value: The object to validate (guaranteed to be an object)
            context: Validation context

        Returns:
            True if validation succeeds, False otherwise
        """
        valid = self._validate_counts(value, context)
        if not valid and context.fail_fast:
            return False

        for prop in self.required:
            if prop not in value:
                with context.with_path(prop):
                    context.add_error(
                        ErrorCode.REQUIRED_PROPERTY_MISSING,
                        self.field.resolver.message("required", prop, prop.capitalize()),
                        keyword="required",
                        constraint=self,
                        label=prop.capitalize()
                    )
                valid = False
                if context.fail_fast:
                    return False

        with context.with_parent(value):
            for prop, constraint in self.properties.items():
                with context.with_path(prop):
                    if not constraint.validate(value.get(prop, MISSING), context):
                        valid = False
                        if context.fail_fast:
                            return False

        for rule in self.rules:
            if not rule.validate(value, context):
                valid = False
                if context.fail_fast:
                    return False

        return valid

    def __str__(self) -> str:
        """String representation of the constraint."""
        parts = []
        if self.properties:
            parts.append(f"properties={list(self.properties.keys())}")
        if self.required:
            parts.append(f"required={self.required}")
        if self.min_properties is not None:
            parts.append(f"min_properties={self.min_properties}")
        if self.max_properties is not None:
            parts.append(f"max_properties={self.max_properties}")
        if self.rules:
            parts.append(f"rules={len(self.rules)}")

        return f"ObjectConstraint({', '.join(parts)})"
