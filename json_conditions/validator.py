"""
Compiled validator entry point.
"""

from typing import Any, Optional

from .api import ValidationResult
from .config import ValidatorConfig
from .constraints import Constraint, ValidationContext


class CompiledValidator:
    """
    Validates data against a compiled constraint tree.

    The tree is never modified after compilation and every call gets its own
    ValidationContext, so one instance can be shared freely.
    """

    def __init__(self, constraint: Constraint, config: Optional[ValidatorConfig] = None):
        """
        Initialize a new compiled validator.

        Args:
            constraint: Root of the compiled constraint tree
            config: Configuration the schema was compiled with
        """
        self.constraint = constraint
        self.config = config or ValidatorConfig()

    def check(self, data: Any, collect_all: Optional[bool] = None) -> ValidationResult:
        """
        Validate data and report the errors found.

        Args:
            data: Data to validate
            collect_all: Report every violated rule; defaults to the configured mode

        Returns:
            ValidationResult containing validation status and errors
        """
        if collect_all is None:
            collect_all = self.config.collect_all

        context = ValidationContext(collect_all=collect_all)
        valid = self.constraint.validate(data, context)

        return ValidationResult(
            valid=valid,
            errors=context.errors
        )

    def is_valid(self, data: Any) -> bool:
        """
        Pass/fail check that stops at the first failure.

        Args:
            data: Data to validate

        Returns:
            True if the data is valid
        """
        return self.constraint.is_valid(data)

    def __repr__(self) -> str:
        return f"CompiledValidator({self.constraint})"
