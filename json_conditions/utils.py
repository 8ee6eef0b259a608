"""
Utility classes and functions for the conditional JSON schema validator.
"""

from typing import Any, Callable, Dict, List, Optional


class _Missing:
    """Marker for a property that is absent from its parent object."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class JsonPointer:
    """
    Utility class for handling JSON Pointers (RFC 6901).

    JSON Pointers are used to reference specific locations within a JSON document.
    """

    @staticmethod
    def from_parts(parts: List[str]) -> str:
        """
        Create a JSON Pointer from path parts.

        Args:
            parts: List of path segments

        Returns:
            JSON Pointer string
        """
        if not parts:
            return ""

        return "/" + "/".join(JsonPointer.escape_part(part) for part in parts)

    @staticmethod
    def escape_part(part: str) -> str:
        """Escape a JSON Pointer path segment."""
        # Replace ~ with ~0 and / with ~1
        return str(part).replace("~", "~0").replace("/", "~1")

    @staticmethod
    def unescape_part(part: str) -> str:
        """Unescape a JSON Pointer path segment."""
        return part.replace("~1", "/").replace("~0", "~")

    @staticmethod
    def to_parts(pointer: str) -> List[str]:
        """
        Split a JSON Pointer into its component parts.

        Args:
            pointer: JSON Pointer string

        Returns:
            List of path segments

        Raises:
            ValueError: If the pointer does not start with '/'
        """
        if not pointer:
            return []

        if not pointer.startswith("/"):
            raise ValueError(f"Invalid JSON Pointer: {pointer}")

        return [JsonPointer.unescape_part(part) for part in pointer[1:].split("/")]

    @staticmethod
    def resolve(document: Any, pointer: str) -> Any:
        """
        Resolve a JSON Pointer within a document.

        Args:
            document: The JSON document to navigate
            pointer: JSON Pointer string

        Returns:
            The referenced value

        Raises:
            ValueError: If the pointer cannot be resolved
        """
        current = document

        for part in JsonPointer.to_parts(pointer):
            if isinstance(current, dict):
                if part not in current:
                    raise ValueError(f"Failed to resolve JSON Pointer: {pointer}, part '{part}' not found")
                current = current[part]
            elif isinstance(current, list):
                if not part.isdigit() or int(part) >= len(current):
                    raise ValueError(f"Failed to resolve JSON Pointer: {pointer}, invalid array index '{part}'")
                current = current[int(part)]
            else:
                raise ValueError(f"Failed to resolve JSON Pointer: {pointer}, cannot navigate into {type(current).__name__}")

        return current


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


class TypeUtils:
    """Utilities for working with JSON Schema types."""

    # Runtime shape predicates, keyed by JSON Schema type name
    IS_TYPE_OF_VALUE: Dict[str, Callable[[Any], bool]] = {
        "string": lambda value: isinstance(value, str),
        "number": _is_number,
        "integer": _is_integer,
        "boolean": lambda value: isinstance(value, bool),
        "object": lambda value: isinstance(value, dict),
        "null": lambda value: value is None,
        "array": lambda value: isinstance(value, list),
    }

    @staticmethod
    def is_type_of_value(type_name: str, value: Any) -> bool:
        """
        Check whether a value has the runtime shape of a JSON Schema type.

        Args:
            type_name: JSON Schema type name
            value: Python value

        Returns:
            True if the value matches the type, False for unknown types
        """
        predicate = TypeUtils.IS_TYPE_OF_VALUE.get(type_name)
        return predicate is not None and predicate(value)

    @staticmethod
    def is_structured(value: Any) -> bool:
        """True for ordered lists and keyed maps."""
        return isinstance(value, (list, dict))

    @staticmethod
    def scalar_equal(left: Any, right: Any) -> bool:
        """
        Compare two scalars the way strict equality does in JSON.

        Numbers compare by value regardless of int/float, but booleans never
        equal numbers.
        """
        if isinstance(left, bool) or isinstance(right, bool):
            return isinstance(left, bool) and isinstance(right, bool) and left is right
        if _is_number(left) and _is_number(right):
            return left == right
        if TypeUtils.is_structured(left) or TypeUtils.is_structured(right):
            return False
        return type(left) is type(right) and left == right

    @staticmethod
    def deep_equal(left: Any, right: Any) -> bool:
        """
        Structural equality for JSON values.

        Lists compare element by element in order, maps compare key sets and
        values recursively, scalars use scalar_equal.
        """
        if isinstance(left, list) and isinstance(right, list):
            return len(left) == len(right) and all(
                TypeUtils.deep_equal(a, b) for a, b in zip(left, right)
            )
        if isinstance(left, dict) and isinstance(right, dict):
            if left.keys() != right.keys():
                return False
            return all(TypeUtils.deep_equal(left[k], right[k]) for k in left)
        return TypeUtils.scalar_equal(left, right)

    @staticmethod
    def literal_equal(literal: Any, value: Any) -> bool:
        """Compare a value to a schema literal, choosing the method by the literal's kind."""
        if TypeUtils.is_structured(literal):
            return TypeUtils.deep_equal(literal, value)
        return TypeUtils.scalar_equal(literal, value)


class SchemaKeywords:
    """Constants for JSON Schema keywords."""

    # Type keywords
    TYPE = "type"

    # Number keywords
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    EXCLUSIVE_MINIMUM = "exclusiveMinimum"
    EXCLUSIVE_MAXIMUM = "exclusiveMaximum"
    MULTIPLE_OF = "multipleOf"

    # String keywords
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"

    # Array keywords
    ITEMS = "items"
    MIN_ITEMS = "minItems"
    MAX_ITEMS = "maxItems"
    UNIQUE_ITEMS = "uniqueItems"
    CONTAINS = "contains"

    # Object keywords
    PROPERTIES = "properties"
    REQUIRED = "required"
    NULLABLE = "nullable"
    MIN_PROPERTIES = "minProperties"
    MAX_PROPERTIES = "maxProperties"

    # Schema composition
    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    ONE_OF = "oneOf"
    NOT = "not"

    # Miscellaneous
    ENUM = "enum"
    CONST = "const"

    # References
    REF = "$ref"
    DEFINITIONS = "definitions"
    DEFS = "$defs"

    # Schema metadata
    TITLE = "title"
    DESCRIPTION = "description"

    # Conditionals
    IF = "if"
    THEN = "then"
    ELSE = "else"

    COMPOSITION = (ANY_OF, ALL_OF, ONE_OF, NOT)

    @staticmethod
    def get_implied_type(schema: Dict[str, Any]) -> Optional[str]:
        """
        Get the type implied by the keywords of an untyped schema.

        Args:
            schema: Schema fragment without a ``type``

        Returns:
            Implied type, or None if no keyword implies one
        """
        if any(key in schema for key in (
            SchemaKeywords.ITEMS,
            SchemaKeywords.MIN_ITEMS,
            SchemaKeywords.MAX_ITEMS,
            SchemaKeywords.UNIQUE_ITEMS,
            SchemaKeywords.CONTAINS
        )):
            return "array"

        if any(key in schema for key in (
            SchemaKeywords.PROPERTIES,
            SchemaKeywords.REQUIRED,
            SchemaKeywords.MIN_PROPERTIES,
            SchemaKeywords.MAX_PROPERTIES
        )):
            return "object"

        if any(key in schema for key in (
            SchemaKeywords.MIN_LENGTH,
            SchemaKeywords.MAX_LENGTH,
            SchemaKeywords.PATTERN
        )):
            return "string"

        if any(key in schema for key in (
            SchemaKeywords.MINIMUM,
            SchemaKeywords.MAXIMUM,
            SchemaKeywords.EXCLUSIVE_MINIMUM,
            SchemaKeywords.EXCLUSIVE_MAXIMUM,
            SchemaKeywords.MULTIPLE_OF
        )):
            return "number"

        return None


def field_label(key: Optional[str], schema: Dict[str, Any]) -> str:
    """
    Human label for a field: its title, else the capitalized key.

    Args:
        key: Property name, None for the root value
        schema: The field's schema

    Returns:
        Label used in error messages
    """
    title = schema.get(SchemaKeywords.TITLE)
    if isinstance(title, str) and title:
        return title
    if key:
        return str(key).capitalize()
    return "Value"


def is_listed(schema: Dict[str, Any], keyword: str, key: Optional[str]) -> bool:
    """True when ``key`` appears in the list held by ``schema[keyword]``."""
    listed = schema.get(keyword)
    return key is not None and isinstance(listed, list) and key in listed
