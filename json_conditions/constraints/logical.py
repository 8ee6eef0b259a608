"""
Logical constraint implementations.
"""

from typing import Any, List

from .base import Constraint, FieldInfo, ROOT_FIELD, ValidationContext
from ..api import ErrorCode, ValidationError


class LogicalConstraint(Constraint):
    """Shared plumbing for operators over a list of sub-constraints."""

    keyword = ""

    def __init__(self, constraints: List[Constraint], field_info: FieldInfo = ROOT_FIELD):
        """
        Initialize a new logical constraint.

        Args:
            constraints: Sub-constraints, in schema order
            field_info: Field being validated
        """
        self.constraints = list(constraints)
        self.field = field_info

    def _run(self, constraint: Constraint, value: Any, context: ValidationContext):
        """Validate one branch in an isolated context; returns (valid, errors)."""
        sub_context = context.fork()
        valid = constraint.validate(value, sub_context)
        return valid, sub_context.errors

    def _fail(self, context: ValidationContext, code: ErrorCode, value: Any,
              causes: List[ValidationError], **params: Any) -> None:
        context.add_error(
            code,
            self.field.message(self.keyword, **params),
            keyword=self.keyword,
            value=value,
            constraint=self,
            label=self.field.label,
            causes=causes
        )

    def __str__(self) -> str:
        """String representation of the constraint."""
        return f"{self.__class__.__name__}(constraints={len(self.constraints)})"

    def __repr__(self) -> str:
        """Detailed representation of the logical constraint."""
        return f"{self.__class__.__name__}(constraints={[str(c) for c in self.constraints]})"


class AllOfConstraint(LogicalConstraint):
    """
    Constraint that requires a value to satisfy all sub-constraints.

    The failing branches' own errors are reported: the first one by
    default, all of them when collecting every error.
    """

    keyword = "allOf"

    def validate(self, value: Any, context: ValidationContext) -> bool:
        valid = True

        for constraint in self.constraints:
            branch_valid, errors = self._run(constraint, value, context)
            if branch_valid:
                continue

            valid = False
            context.extend_errors(errors)
            if not context.collect_all:
                break

        return valid


class AnyOfConstraint(LogicalConstraint):
    """
    Constraint that requires a value to satisfy at least one sub-constraint.
    """

    keyword = "anyOf"

    def validate(self, value: Any, context: ValidationContext) -> bool:
        all_errors: List[ValidationError] = []

        for constraint in self.constraints:
            branch_valid, errors = self._run(constraint, value, context)
            if branch_valid:
                return True
            all_errors.extend(errors)

        self._fail(context, ErrorCode.ANY_OF_NO_MATCH, value, all_errors)
        return False


class OneOfConstraint(LogicalConstraint):
    """
    Constraint that requires a value to satisfy exactly one sub-constraint.
    """

    keyword = "oneOf"

    def validate(self, value: Any, context: ValidationContext) -> bool:
        matching: List[int] = []
        all_errors: List[ValidationError] = []

        for i, constraint in enumerate(self.constraints):
            branch_valid, errors = self._run(constraint, value, context)
            if branch_valid:
                matching.append(i)
                if len(matching) > 1 and context.fail_fast:
                    break
            else:
                all_errors.extend(errors)

        if len(matching) == 1:
            return True

        if not matching:
            self._fail(context, ErrorCode.ONE_OF_NO_MATCH, value, all_errors, matched=0)
        else:
            self._fail(context, ErrorCode.ONE_OF_MULTIPLE_MATCHES, value, [],
                       matched=len(matching), indices=matching)
        return False


class NotConstraint(Constraint):
    """
    Constraint that requires a value to not satisfy a sub-constraint.

    Only the outcome is inverted; a failure carries its own message rather
    than anything from the sub-constraint.
    """

    def __init__(self, constraint: Constraint, field_info: FieldInfo = ROOT_FIELD):
        """
        Initialize a new not constraint.

        Args:
            constraint: Constraint that must not be satisfied
            field_info: Field being validated
        """
        self.constraint = constraint
        self.field = field_info

    def validate(self, value: Any, context: ValidationContext) -> bool:
        sub_context = context.fork()
        sub_context.fail_fast = True
        sub_context.collect_all = False

        if not self.constraint.validate(value, sub_context):
            return True

        context.add_error(
            ErrorCode.NOT_SCHEMA_MATCHED,
            self.field.message("not"),
            keyword="not",
            value=value,
            constraint=self,
            label=self.field.label
        )
        return False

    def __str__(self) -> str:
        """String representation of the constraint."""
        return f"NotConstraint(constraint={self.constraint})"
