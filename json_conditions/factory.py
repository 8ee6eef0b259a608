"""
Construction of primitive, composition and multi-type validators.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .api import SchemaInvalidError
from .constraints import (
    AllOfConstraint,
    AnyConstraint,
    AnyOfConstraint,
    ArrayConstraint,
    BooleanConstraint,
    CombinedConstraint,
    ConstConstraint,
    Constraint,
    EnumConstraint,
    FieldInfo,
    LazyTypeConstraint,
    NotConstraint,
    NullConstraint,
    NumberConstraint,
    OneOfConstraint,
    PropertyConstraint,
    StringConstraint
)
from .type_resolver import CompositionKind, CompositionType, MultiType, SingleType, resolve_type
from .utils import JsonPointer, SchemaKeywords, field_label, is_listed

logger = logging.getLogger(__name__)

_LOGICAL_CLASSES = {
    CompositionKind.ALL_OF: AllOfConstraint,
    CompositionKind.ANY_OF: AnyOfConstraint,
    CompositionKind.ONE_OF: OneOfConstraint,
}


def child_path(schema_path: str, *parts: Any) -> str:
    """Extend a schema JSON Pointer with escaped segments."""
    return schema_path + "".join("/" + JsonPointer.escape_part(str(part)) for part in parts)


def _bounds(node: Dict[str, Any], bound_keyword: str, exclusive_keyword: str) -> Tuple[Any, Any]:
    """
    Normalize a numeric bound to (inclusive, exclusive).

    Draft-4 schemas flag ``minimum``/``maximum`` as exclusive with a boolean;
    later drafts give the exclusive bound as a number of its own.
    """
    bound = node.get(bound_keyword)
    exclusive = node.get(exclusive_keyword)
    if isinstance(exclusive, bool):
        return (None, bound) if exclusive else (bound, None)
    return bound, exclusive


class ConstraintFactory:
    """
    Creates the validator for one schema node.

    Object nodes are handed back to the builder so nested properties and
    their conditionals are compiled the same way as the root's.
    """

    def __init__(self, builder):
        """
        Initialize a new constraint factory.

        Args:
            builder: ConstraintBuilder that owns this factory
        """
        self.builder = builder
        self.resolver = builder.config.message_resolver

    def field_info(self, key: Optional[str], node: Dict[str, Any]) -> FieldInfo:
        return FieldInfo(key=key, label=field_label(key, node), resolver=self.resolver)

    def create(self, key: str, node: Dict[str, Any], parent: Dict[str, Any],
               allow_untyped: bool = False, schema_path: str = "") -> PropertyConstraint:
        """
        Create the validator for a named property.

        Args:
            key: Property name
            node: The property's schema
            parent: Schema holding the ``required``/``nullable`` lists
            allow_untyped: Accept a property schema that declares no type
            schema_path: JSON Pointer of ``node``

        Returns:
            PropertyConstraint wrapping the property's validator
        """
        inner = self.create_inner(key, node, allow_untyped=allow_untyped, schema_path=schema_path)
        return self.wrap(key, node, inner, parent)

    def wrap(self, key: str, node: Dict[str, Any], constraint: Constraint,
             parent: Dict[str, Any]) -> PropertyConstraint:
        """Apply the parent's presence and nullability rules for ``key``."""
        return PropertyConstraint(
            constraint,
            self.field_info(key, node),
            required=is_listed(parent, SchemaKeywords.REQUIRED, key),
            nullable=is_listed(parent, SchemaKeywords.NULLABLE, key)
        )

    def create_inner(self, key: Optional[str], node: Dict[str, Any],
                     allow_untyped: bool = False, schema_path: str = "") -> Constraint:
        """
        Create the validator for a schema node, ignoring presence rules.

        Args:
            key: Name of the field the node describes, if any
            node: Schema node
            allow_untyped: Accept nodes that declare no type
            schema_path: JSON Pointer of ``node``

        Returns:
            Compiled validator

        Raises:
            MissingTypeError: If the node declares no type and untyped nodes are not allowed
            UnsupportedTypeError: If the node declares an unknown type
            SchemaInvalidError: If a keyword holds an unusable value
        """
        decl = resolve_type(node, allow_untyped=allow_untyped, schema_path=schema_path)
        field_info = self.field_info(key, node)

        if isinstance(decl, CompositionType):
            return self._create_composition(key, node, field_info, schema_path)

        if isinstance(decl, MultiType):
            candidates = [
                (name, self._with_literals(
                    self._create_primitive(name, key, node, field_info, schema_path), node, field_info, schema_path))
                for name in decl.names
            ]
            return LazyTypeConstraint(candidates, field_info)

        if isinstance(decl, SingleType):
            return self._with_literals(
                self._create_primitive(decl.name, key, node, field_info, schema_path), node, field_info, schema_path)

        return self._with_literals(None, node, field_info, schema_path)

    def _with_literals(self, constraint: Optional[Constraint], node: Dict[str, Any],
                       field_info: FieldInfo, schema_path: str = "") -> Constraint:
        """Combine a validator with the node's ``const`` and ``enum`` rules."""
        constraints = [] if constraint is None else [constraint]

        if SchemaKeywords.CONST in node:
            constraints.append(ConstConstraint(node[SchemaKeywords.CONST], field_info))

        if SchemaKeywords.ENUM in node:
            values = node[SchemaKeywords.ENUM]
            if not isinstance(values, list):
                raise SchemaInvalidError("'enum' must be an array", child_path(schema_path, SchemaKeywords.ENUM))
            constraints.append(EnumConstraint(values, field_info))

        if not constraints:
            return AnyConstraint()
        if len(constraints) == 1:
            return constraints[0]
        return CombinedConstraint(constraints)

    def _create_composition(self, key: Optional[str], node: Dict[str, Any],
                            field_info: FieldInfo, schema_path: str) -> Constraint:
        """
        Create the validator for a node carrying composition keywords.

        Primitive rules declared next to the composition keywords, and every
        composition keyword present, apply together. Object nodes go to the
        builder, which keeps their composition entries as object-level rules
        and compiles conditional ``allOf`` entries against their properties.
        """
        if self.builder.is_object_schema(node):
            constraint = self.builder.build_object(node, field_info=field_info, schema_path=schema_path)
            return self._with_literals(constraint, node, field_info, schema_path)

        constraints = []

        base = {k: v for k, v in node.items() if k not in SchemaKeywords.COMPOSITION}
        if any(k in base for k in (SchemaKeywords.TYPE, SchemaKeywords.CONST, SchemaKeywords.ENUM)):
            constraints.append(self.create_inner(key, base, allow_untyped=True, schema_path=schema_path))

        for kind in CompositionKind:
            if kind.value in node:
                constraints.append(self.create_logical(
                    kind, key, node[kind.value], field_info, child_path(schema_path, kind.value)))

        if len(constraints) == 1:
            return constraints[0]
        return CombinedConstraint(constraints)

    def create_logical(self, kind: CompositionKind, key: Optional[str], value: Any,
                        field_info: FieldInfo, schema_path: str) -> Constraint:
        if kind is CompositionKind.NOT:
            if not isinstance(value, dict):
                raise SchemaInvalidError("'not' must be a schema object", schema_path)
            return NotConstraint(
                self.create_inner(key, value, allow_untyped=True, schema_path=schema_path), field_info)

        if not isinstance(value, list) or not value:
            raise SchemaInvalidError(f"'{kind.value}' must be a non-empty array", schema_path)

        children = [
            self.create_inner(key, child, allow_untyped=True, schema_path=child_path(schema_path, i))
            for i, child in enumerate(value)
        ]
        return _LOGICAL_CLASSES[kind](children, field_info)

    def _create_primitive(self, type_name: str, key: Optional[str], node: Dict[str, Any],
                          field_info: FieldInfo, schema_path: str) -> Constraint:
        if type_name == "string":
            return self._create_string(node, field_info, schema_path)
        elif type_name in ("number", "integer"):
            return self._create_number(node, field_info, integer_only=type_name == "integer")
        elif type_name == "boolean":
            return BooleanConstraint(field_info)
        elif type_name == "null":
            return NullConstraint(field_info)
        elif type_name == "array":
            return self.create_array(key, node, field_info, schema_path)
        elif type_name == "object":
            return self.builder.build_object(node, field_info=field_info, schema_path=schema_path)

        raise SchemaInvalidError(f"No validator for type '{type_name}'", schema_path)

    def _create_string(self, node: Dict[str, Any], field_info: FieldInfo, schema_path: str) -> StringConstraint:
        try:
            return StringConstraint(
                field_info,
                min_length=node.get(SchemaKeywords.MIN_LENGTH),
                max_length=node.get(SchemaKeywords.MAX_LENGTH),
                pattern=node.get(SchemaKeywords.PATTERN)
            )
        except SchemaInvalidError as e:
            raise SchemaInvalidError(e.reason, child_path(schema_path, SchemaKeywords.PATTERN)) from e

    def _create_number(self, node: Dict[str, Any], field_info: FieldInfo, integer_only: bool) -> NumberConstraint:
        minimum, exclusive_minimum = _bounds(node, SchemaKeywords.MINIMUM, SchemaKeywords.EXCLUSIVE_MINIMUM)
        maximum, exclusive_maximum = _bounds(node, SchemaKeywords.MAXIMUM, SchemaKeywords.EXCLUSIVE_MAXIMUM)

        return NumberConstraint(
            field_info,
            minimum=minimum,
            maximum=maximum,
            exclusive_minimum=exclusive_minimum,
            exclusive_maximum=exclusive_maximum,
            multiple_of=node.get(SchemaKeywords.MULTIPLE_OF),
            integer_only=integer_only
        )

    def create_array(self, key: Optional[str], node: Dict[str, Any],
                     field_info: FieldInfo, schema_path: str) -> ArrayConstraint:
        """
        Create an array validator in two stages.

        The array-level rules are built first, without ``items``. A single
        ``items`` schema is then attached: compiled as an object schema when
        it declares properties, through ordinary dispatch otherwise.
        """
        items = node.get(SchemaKeywords.ITEMS)
        items_path = child_path(schema_path, SchemaKeywords.ITEMS)

        tuple_items: List[Constraint] = []
        if isinstance(items, list):
            tuple_items = [
                self.create_inner(key, item, allow_untyped=True, schema_path=child_path(items_path, i))
                for i, item in enumerate(items)
            ]
        elif items is not None and not isinstance(items, dict):
            raise SchemaInvalidError("'items' must be a schema object or an array of schemas", items_path)

        contains = None
        if SchemaKeywords.CONTAINS in node:
            contains_path = child_path(schema_path, SchemaKeywords.CONTAINS)
            if not isinstance(node[SchemaKeywords.CONTAINS], dict):
                raise SchemaInvalidError("'contains' must be a schema object", contains_path)
            contains = self.create_inner(key, node[SchemaKeywords.CONTAINS], allow_untyped=True,
                                         schema_path=contains_path)

        array = ArrayConstraint(
            field_info,
            tuple_items=tuple_items,
            contains=contains,
            min_items=node.get(SchemaKeywords.MIN_ITEMS),
            max_items=node.get(SchemaKeywords.MAX_ITEMS),
            unique_items=node.get(SchemaKeywords.UNIQUE_ITEMS, False)
        )

        if not isinstance(items, dict):
            return array

        if SchemaKeywords.PROPERTIES in items:
            logger.debug("Compiling items of '%s' as an object schema", key)
            element = self.builder.build_object(items, field_info=self.field_info(None, items),
                                                schema_path=items_path)
        else:
            element = self.create_inner(key, items, schema_path=items_path)

        return array.with_items(element)
