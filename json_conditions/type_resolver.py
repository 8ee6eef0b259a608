"""
Classification of schema nodes by the kind of validator they compile to.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple, Union

from .api import MissingTypeError, SchemaInvalidError, UnsupportedTypeError
from .utils import SchemaKeywords


class DataType(Enum):
    """Type names a schema may declare."""
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


class CompositionKind(Enum):
    """Composition keywords, in dispatch precedence order."""
    ANY_OF = SchemaKeywords.ANY_OF
    ALL_OF = SchemaKeywords.ALL_OF
    ONE_OF = SchemaKeywords.ONE_OF
    NOT = SchemaKeywords.NOT


@dataclass(frozen=True)
class SingleType:
    name: str


@dataclass(frozen=True)
class MultiType:
    names: Tuple[str, ...]


@dataclass(frozen=True)
class CompositionType:
    kind: CompositionKind


@dataclass(frozen=True)
class UntypedDecl:
    """Node without any type information; only const/enum may apply."""


TypeDecl = Union[SingleType, MultiType, CompositionType, UntypedDecl]


def _check_type_name(name: Any, schema_path: str) -> str:
    if not isinstance(name, str):
        raise SchemaInvalidError(f"Type names must be strings, got {name!r}", schema_path)
    try:
        return DataType(name).value
    except ValueError:
        raise UnsupportedTypeError(f"Unsupported type '{name}'", schema_path) from None


def resolve_type(node: Dict[str, Any], allow_untyped: bool = False, schema_path: str = "") -> TypeDecl:
    """
    Classify a schema node.

    Composition keywords take precedence over ``type``, checked in
    CompositionKind order. Declared type names are validated even when a
    composition wins, so a bad name never goes unnoticed.

    Args:
        node: Schema node to classify
        allow_untyped: Infer a type for nodes declaring none instead of failing
        schema_path: JSON Pointer of the node, for error reporting

    Returns:
        The node's type declaration

    Raises:
        MissingTypeError: If the node declares nothing and untyped nodes are not allowed
        UnsupportedTypeError: If a declared type name is unknown
    """
    if not isinstance(node, dict):
        raise SchemaInvalidError(f"Schema must be an object, got {type(node).__name__}", schema_path)

    declared = node.get(SchemaKeywords.TYPE)
    if isinstance(declared, list):
        if not declared:
            raise SchemaInvalidError("Type list must not be empty", schema_path)
        names = tuple(_check_type_name(name, schema_path) for name in declared)
        declared = names[0] if len(names) == 1 else MultiType(names)
    elif declared is not None:
        declared = _check_type_name(declared, schema_path)

    for kind in CompositionKind:
        if kind.value in node:
            return CompositionType(kind)

    if isinstance(declared, MultiType):
        return declared
    if declared is not None:
        return SingleType(declared)

    if not allow_untyped:
        raise MissingTypeError("Schema declares no type or composition keyword", schema_path)

    implied = SchemaKeywords.get_implied_type(node)
    if implied is not None:
        return SingleType(implied)
    return UntypedDecl()
