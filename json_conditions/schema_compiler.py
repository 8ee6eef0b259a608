"""
Schema compiler building validator trees for objects and their conditionals.
"""

import logging
from typing import Any, Dict, List, Optional, Set

from .api import SchemaInvalidError
from .conditions import ConditionalCompiler, condition_keys
from .config import ValidatorConfig
from .constraints import (
    AllOfConstraint,
    Constraint,
    FieldInfo,
    ObjectConstraint,
    merge_into
)
from .factory import ConstraintFactory, child_path
from .type_resolver import CompositionKind
from .utils import SchemaKeywords
from .validator import CompiledValidator

logger = logging.getLogger(__name__)

_CONDITIONAL_KEYWORDS = (SchemaKeywords.IF, SchemaKeywords.THEN, SchemaKeywords.ELSE)


class ConstraintBuilder:
    """
    Builds a constraint tree from a JSON Schema.

    Properties are compiled in declaration order. After each property, any
    ``if`` block of the enclosing object (directly or inside ``allOf``) that
    mentions the property is compiled, and its rules are merged into the
    property map alongside the unconditional ones.
    """

    def __init__(self, config: Optional[ValidatorConfig] = None):
        """
        Initialize a new constraint builder.

        Args:
            config: Validator configuration (messages, trace sink)
        """
        self.config = config or ValidatorConfig()
        self.trace = self.config.trace
        self.factory = ConstraintFactory(self)
        self.conditions = ConditionalCompiler(self)

    @staticmethod
    def is_object_schema(schema: Dict[str, Any]) -> bool:
        """True for nodes compiled as objects with their own properties."""
        declared = schema.get(SchemaKeywords.TYPE)
        if declared is not None:
            return declared == "object"
        return any(key in schema for key in (SchemaKeywords.PROPERTIES, SchemaKeywords.IF))

    def compile(self, schema: Dict[str, Any]) -> Constraint:
        """
        Compile a JSON Schema into a constraint tree.

        Args:
            schema: JSON Schema to compile

        Returns:
            Root constraint of the compiled schema
        """
        if not isinstance(schema, dict):
            raise SchemaInvalidError(f"Schema must be an object, got {type(schema).__name__}")

        if self.is_object_schema(schema) or (
                SchemaKeywords.TYPE not in schema and SchemaKeywords.REQUIRED in schema):
            return self.build_object(schema)

        return self.factory.create_inner(None, schema)

    def build_object(self, schema: Dict[str, Any], field_info: Optional[FieldInfo] = None,
                     schema_path: str = "") -> ObjectConstraint:
        """
        Build the validator for an object schema.

        Args:
            schema: Object schema
            field_info: Field the object belongs to, the root when omitted
            schema_path: JSON Pointer of ``schema``

        Returns:
            ObjectConstraint over the schema's properties and rules
        """
        field_info = field_info or self.factory.field_info(None, schema)

        properties = schema.get(SchemaKeywords.PROPERTIES, {})
        if not isinstance(properties, dict):
            raise SchemaInvalidError("'properties' must be an object",
                                     child_path(schema_path, SchemaKeywords.PROPERTIES))

        required = schema.get(SchemaKeywords.REQUIRED, [])
        if not isinstance(required, list):
            raise SchemaInvalidError("'required' must be an array",
                                     child_path(schema_path, SchemaKeywords.REQUIRED))

        logger.debug("Building object '%s' with %d properties", schema_path or "/", len(properties))

        return ObjectConstraint(
            field_info,
            properties=self.build_properties(properties, schema, schema_path=schema_path),
            required=[key for key in required if key not in properties],
            min_properties=schema.get(SchemaKeywords.MIN_PROPERTIES),
            max_properties=schema.get(SchemaKeywords.MAX_PROPERTIES),
            rules=self._build_rules(schema, field_info, schema_path)
        )

    def build_properties(self, properties: Dict[str, Any], parent: Dict[str, Any],
                         schema_path: str = "", allow_untyped: bool = False) -> Dict[str, Constraint]:
        """
        Compile every property of an object.

        Args:
            properties: Property name to schema mapping
            parent: Schema holding ``properties``, ``required``, ``nullable``
                and any conditional blocks
            schema_path: JSON Pointer of ``parent``
            allow_untyped: Accept property schemas that declare no type

        Returns:
            Property name to validator mapping, in declaration order
        """
        rules: Dict[str, Constraint] = {}
        compiled_conditions: Set[int] = set()
        conditional_nodes = self._conditional_nodes(parent, schema_path)

        for key, node in properties.items():
            if not isinstance(node, dict):
                continue

            node_path = child_path(schema_path, SchemaKeywords.PROPERTIES, key)
            if self.trace is not None:
                self.trace.emit("compile.property", key=key, path=node_path)

            constraint = self.factory.create(key, node, parent, allow_untyped=allow_untyped,
                                             schema_path=node_path)
            merge_into(rules, key, constraint)

            # One allOf entry mentioning the key brings in every allOf condition
            all_of_triggered = any(from_all_of and key in condition_keys(condition)
                                   for condition, _, from_all_of in conditional_nodes)

            for condition, condition_path, from_all_of in conditional_nodes:
                if id(condition) in compiled_conditions:
                    continue
                if not (from_all_of and all_of_triggered) and key not in condition_keys(condition):
                    continue
                compiled_conditions.add(id(condition))
                logger.debug("Property '%s' triggers the condition at '%s'", key, condition_path or "/")
                for prop, rule in self.conditions.compile(condition, schema_path=condition_path).items():
                    merge_into(rules, prop, rule)

        return rules

    def _conditional_nodes(self, parent: Dict[str, Any], schema_path: str):
        """The parent itself and its ``allOf`` entries, where they carry ``if``."""
        nodes = []
        if SchemaKeywords.IF in parent:
            nodes.append((parent, schema_path, False))

        all_of = parent.get(SchemaKeywords.ALL_OF)
        if isinstance(all_of, list):
            for i, entry in enumerate(all_of):
                if isinstance(entry, dict) and SchemaKeywords.IF in entry:
                    nodes.append((entry, child_path(schema_path, SchemaKeywords.ALL_OF, i), True))

        return nodes

    def _build_rules(self, schema: Dict[str, Any], field_info: FieldInfo,
                     schema_path: str) -> List[Constraint]:
        """
        Whole-object rules from the object's composition keywords.

        ``allOf`` entries contribute their conditional blocks to the property
        map instead; whatever else such an entry declares stays a rule.
        """
        rules = []

        for kind in CompositionKind:
            value = schema.get(kind.value)
            if value is None:
                continue
            kind_path = child_path(schema_path, kind.value)

            if kind is CompositionKind.ALL_OF and isinstance(value, list):
                entries = []
                for i, entry in enumerate(value):
                    if isinstance(entry, dict) and SchemaKeywords.IF in entry:
                        entry = {k: v for k, v in entry.items() if k not in _CONDITIONAL_KEYWORDS}
                        if not entry:
                            continue
                    entries.append((entry, child_path(kind_path, i)))
                if entries:
                    rules.append(AllOfConstraint([
                        self.factory.create_inner(None, entry, allow_untyped=True, schema_path=entry_path)
                        for entry, entry_path in entries
                    ], field_info))
                continue

            rules.append(self.factory.create_logical(kind, None, value, field_info, kind_path))

        return rules


class SchemaCompiler:
    """
    Compiles JSON Schemas into reusable validators.

    This class is responsible for parsing a JSON Schema and
    creating a tree of constraint objects that can be used for
    efficient validation.
    """

    def __init__(self, config: Optional[ValidatorConfig] = None):
        """
        Initialize a new schema compiler.

        Args:
            config: Validator configuration shared by every compiled schema
        """
        self.config = config or ValidatorConfig()

    def compile(self, schema: Dict[str, Any]) -> CompiledValidator:
        """
        Compile a JSON Schema into a validator.

        Args:
            schema: JSON Schema to compile, with every ``$ref`` already resolved

        Returns:
            CompiledValidator for the schema
        """
        constraint = ConstraintBuilder(self.config).compile(schema)
        logger.debug("Compiled schema to %s", constraint)
        return CompiledValidator(constraint, self.config)
