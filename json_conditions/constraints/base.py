"""
Base constraint classes for the conditional JSON schema validator.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..api import ErrorCode, ErrorKind, ValidationError, ValidationResult
from ..messages import MessageResolver
from ..utils import MISSING, JsonPointer, TypeUtils


@dataclass(frozen=True)
class FieldInfo:
    """
    Identity of the field a constraint validates.

    Attributes:
        key: Property name, None for the root value or array items
        label: Label used in messages (title or capitalized key)
        resolver: Message resolver consulted when building error text
    """
    key: Optional[str] = None
    label: str = "Value"
    resolver: MessageResolver = field(default_factory=MessageResolver, compare=False)

    def message(self, keyword: str, **params: Any) -> str:
        """Error text for a failed keyword."""
        return self.resolver.message(keyword, self.key, self.label, **params)


ROOT_FIELD = FieldInfo()


class ValidationContext:
    """
    Context for a single validation call.

    This class maintains state during the validation process: the current
    path, the enclosing objects (for conditional lookups) and the collected
    errors. Contexts are never shared between calls.
    """

    def __init__(self, collect_all: bool = False, fail_fast: bool = False):
        """
        Initialize a new validation context.

        Args:
            collect_all: Keep validating a field after its first failed rule
            fail_fast: Stop at the first failure anywhere (boolean checks)
        """
        self.errors: List[ValidationError] = []
        self.path_parts: List[str] = []
        self.parents: List[Dict[str, Any]] = []
        self.collect_all = collect_all and not fail_fast
        self.fail_fast = fail_fast

    @property
    def path(self) -> str:
        """
        Get the current JSON Pointer path.

        Returns:
            JSON Pointer string for the current path
        """
        return JsonPointer.from_parts(self.path_parts)

    @property
    def parent(self) -> Optional[Dict[str, Any]]:
        """The innermost object whose properties are being validated."""
        return self.parents[-1] if self.parents else None

    def push_path(self, part: Any) -> None:
        """
        Push a path part onto the current path.

        Args:
            part: Path segment to add
        """
        self.path_parts.append(str(part))

    def pop_path(self) -> None:
        """Remove the last path part from the current path."""
        if self.path_parts:
            self.path_parts.pop()

    def add_error(self,
                  code: ErrorCode,
                  message: str,
                  keyword: str = "",
                  value: Any = None,
                  constraint: Any = None,
                  label: Optional[str] = None,
                  kind: Optional[ErrorKind] = None,
                  causes: Optional[List[ValidationError]] = None) -> None:
        """
        Add a validation error to the context.

        Args:
            code: Error code
            message: Error message
            keyword: Schema keyword that failed
            value: Value that failed validation
            constraint: Constraint that was violated
            label: Field label
            kind: Error category, derived from code when omitted
            causes: Child failures for composition errors
        """
        self.errors.append(ValidationError(
            code=code,
            path=self.path,
            message=message,
            keyword=keyword,
            kind=kind,
            label=label,
            value=None if value is MISSING else value,
            constraint=constraint,
            causes=causes or []
        ))

    def extend_errors(self, errors: List[ValidationError], kind: Optional[ErrorKind] = None) -> None:
        """Adopt errors collected in a forked context, optionally re-categorized."""
        for error in errors:
            if kind is not None:
                error.kind = kind
            self.errors.append(error)

    def fork(self) -> "ValidationContext":
        """
        Create an isolated context at the same position.

        Used where sub-results must be inspected before they are reported
        (logical operators, conditionals).
        """
        sub_context = ValidationContext(collect_all=self.collect_all, fail_fast=self.fail_fast)
        sub_context.path_parts = self.path_parts.copy()
        sub_context.parents = self.parents.copy()
        return sub_context

    def with_path(self, part: Any):
        """
        Context manager for adding a path part temporarily.

        Args:
            part: Path segment to add

        Returns:
            Context manager
        """
        return PathContext(self, part)

    def with_parent(self, parent: Dict[str, Any]):
        """Context manager making ``parent`` the object conditionals read from."""
        return ParentContext(self, parent)

    def __str__(self) -> str:
        """String representation of the validation context."""
        return f"ValidationContext(path={self.path}, errors={len(self.errors)})"


class PathContext:
    """Context manager for temporarily adding a path part."""

    def __init__(self, context: ValidationContext, part: Any):
        self.context = context
        self.part = part

    def __enter__(self):
        """Add the path part when entering the context."""
        self.context.push_path(self.part)
        return self.context

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Remove the path part when exiting the context."""
        self.context.pop_path()


class ParentContext:
    """Context manager for temporarily entering an object."""

    def __init__(self, context: ValidationContext, parent: Dict[str, Any]):
        self.context = context
        self.parent = parent

    def __enter__(self):
        self.context.parents.append(self.parent)
        return self.context

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.context.parents.pop()


class Constraint(ABC):
    """
    Base class for all compiled validators.

    This is the foundation of the constraint hierarchy. Constraints are
    immutable once built, so one instance can serve any number of calls.
    """

    @abstractmethod
    def validate(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate a value against this constraint.

        Args:
            value: Value to validate, MISSING when the property is absent
            context: Validation context

        Returns:
            True if validation succeeds, False otherwise
        """
        pass

    def check(self, value: Any, collect_all: bool = False) -> ValidationResult:
        """
        Validate a value in a fresh context.

        Args:
            value: Value to validate
            collect_all: Report every violated rule

        Returns:
            ValidationResult with the collected errors
        """
        context = ValidationContext(collect_all=collect_all)
        valid = self.validate(value, context)
        return ValidationResult(valid=valid, errors=context.errors)

    def is_valid(self, value: Any) -> bool:
        """Pass/fail check that stops at the first failure."""
        return self.validate(value, ValidationContext(fail_fast=True))

    def __str__(self) -> str:
        """String representation of the constraint."""
        return f"{self.__class__.__name__}"

    def __repr__(self) -> str:
        """Detailed representation of the constraint."""
        return self.__str__()


class TypeConstraint(Constraint, ABC):
    """
    Base class for type-specific constraints.

    Type constraints validate values of a specific type.
    """

    def __init__(self, field_info: FieldInfo = ROOT_FIELD):
        self.field = field_info

    @property
    @abstractmethod
    def json_type(self) -> str:
        """
        Get the JSON Schema type for this constraint.

        Returns:
            JSON Schema type name
        """
        pass

    def validate(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate a value against this type constraint.

        Args:
            value: Value to validate
            context: Validation context

        Returns:
            True if validation succeeds, False otherwise
        """
        # First check if the value has the correct type
        if not self._validate_type(value, context):
            return False

        # If the type is correct, perform type-specific validation
        return self._validate_type_specific(value, context)

    def _validate_type(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate that the value has the correct type.

        Args:
            value: Value to validate
            context: Validation context

        Returns:
            True if the value has the correct type, False otherwise
        """
        if TypeUtils.is_type_of_value(self.json_type, value):
            return True

        self.fail(context, ErrorCode.TYPE_ERROR, "type", value, type=self.json_type)
        return False

    @abstractmethod
    def _validate_type_specific(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate type-specific constraints.

        This method is called after the type validation has passed
        and should implement the type-specific validation logic.

        Args:
            value: Value to validate (guaranteed to be of the correct type)
            context: Validation context

        Returns:
            True if validation succeeds, False otherwise
        """
        pass

    def fail(self, context: ValidationContext, code: ErrorCode, keyword: str, value: Any, **params: Any) -> None:
        """Record a failed keyword with the field's message."""
        context.add_error(
            code,
            self.field.message(keyword, **params),
            keyword=keyword,
            value=value,
            constraint=self,
            label=self.field.label
        )
