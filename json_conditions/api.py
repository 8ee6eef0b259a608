"""
Public API for the conditional JSON schema validator.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class ErrorKind(Enum):
    """Broad category a validation error belongs to."""
    TYPE_MISMATCH = auto()
    CONSTRAINT_VIOLATION = auto()
    COMPOSITION_FAILURE = auto()
    CONDITIONAL_VIOLATION = auto()


class ErrorCode(Enum):
    """Enumeration of validation error codes."""
    TYPE_ERROR = auto()
    REQUIRED_PROPERTY_MISSING = auto()
    STRING_TOO_SHORT = auto()
    STRING_TOO_LONG = auto()
    PATTERN_MISMATCH = auto()
    NUMBER_TOO_SMALL = auto()
    NUMBER_TOO_LARGE = auto()
    NUMBER_NOT_MULTIPLE = auto()
    ARRAY_TOO_SHORT = auto()
    ARRAY_TOO_LONG = auto()
    ARRAY_ITEMS_NOT_UNIQUE = auto()
    ARRAY_CONTAINS_NO_MATCH = auto()
    OBJECT_TOO_FEW_PROPERTIES = auto()
    OBJECT_TOO_MANY_PROPERTIES = auto()
    ENUM_MISMATCH = auto()
    CONST_MISMATCH = auto()
    NOT_SCHEMA_MATCHED = auto()
    ONE_OF_NO_MATCH = auto()
    ONE_OF_MULTIPLE_MATCHES = auto()
    ANY_OF_NO_MATCH = auto()

    @property
    def kind(self) -> ErrorKind:
        """The error category this code falls under."""
        if self is ErrorCode.TYPE_ERROR:
            return ErrorKind.TYPE_MISMATCH
        if self in _COMPOSITION_CODES:
            return ErrorKind.COMPOSITION_FAILURE
        return ErrorKind.CONSTRAINT_VIOLATION


_COMPOSITION_CODES = {
    ErrorCode.NOT_SCHEMA_MATCHED,
    ErrorCode.ONE_OF_NO_MATCH,
    ErrorCode.ONE_OF_MULTIPLE_MATCHES,
    ErrorCode.ANY_OF_NO_MATCH,
}


@dataclass
class ValidationError:
    """
    Represents a validation error with structured information.

    Attributes:
        code: The error code identifying the type of error
        path: JSON Pointer to the value that failed validation
        message: Human-readable error message
        keyword: Schema keyword that produced the error
        kind: Error category; defaults to the category of ``code``
        label: Field label (title or capitalized key)
        value: The value that failed validation
        constraint: The constraint that was violated
        causes: Child failures for composition errors
    """
    code: ErrorCode
    path: str
    message: str
    keyword: str = ""
    kind: Optional[ErrorKind] = None
    label: Optional[str] = None
    value: Any = None
    constraint: Any = None
    causes: List["ValidationError"] = field(default_factory=list)

    def __post_init__(self):
        if self.kind is None:
            self.kind = self.code.kind

    def __str__(self) -> str:
        return f"Error at '{self.path}': {self.message}"


@dataclass
class ValidationResult:
    """
    Result of schema validation.

    Attributes:
        valid: Whether the validation was successful
        errors: List of validation errors (if any)
    """
    valid: bool = True
    errors: List[ValidationError] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid

    @property
    def paths(self) -> List[str]:
        """Paths of every reported error, in report order."""
        return [error.path for error in self.errors]


class CompileError(ValueError):
    """Raised when a schema fragment cannot be compiled."""

    def __init__(self, message: str, schema_path: str = ""):
        self.reason = message
        self.schema_path = schema_path
        location = schema_path or "/"
        super().__init__(f"{message} (at schema '{location}')")


class MissingTypeError(CompileError):
    """A schema node declares neither ``type`` nor a composition keyword."""


class UnsupportedTypeError(CompileError):
    """A schema node declares a type name the compiler does not know."""


class SchemaInvalidError(CompileError):
    """A keyword holds a value the compiler cannot use (bad regex, bad ref)."""


def compile(schema: Dict[str, Any], config=None):
    """
    Compile a dereferenced schema into a reusable validator.

    Args:
        schema: The JSON schema to compile
        config: Optional ValidatorConfig

    Returns:
        CompiledValidator for the schema

    Raises:
        CompileError: If a fragment of the schema cannot be compiled
    """
    from .schema_compiler import SchemaCompiler

    return SchemaCompiler(config).compile(schema)


class JsonValidator:
    """
    Main entrypoint class for JSON schema validation.

    This class provides a simple API for validating JSON data
    against a JSON Schema.
    """

    def __init__(self, config=None, collect_all: bool = False):
        """
        Initialize a new JSON validator.

        Args:
            config: Optional ValidatorConfig shared by every compile
            collect_all: Shortcut for a config that reports every error
        """
        from .config import ValidatorConfig
        from .schema_compiler import SchemaCompiler

        self.config = config or ValidatorConfig(collect_all=collect_all)
        self.schema_compiler = SchemaCompiler(self.config)

    def validate(self, data: Any, schema: Dict[str, Any]) -> ValidationResult:
        """
        Validate data against a JSON schema.

        Args:
            data: The data to validate
            schema: The JSON schema to validate against

        Returns:
            ValidationResult containing validation status and any errors
        """
        compiled_schema = self.schema_compiler.compile(schema)
        return compiled_schema.check(data)
