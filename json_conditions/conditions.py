"""
Compilation of if/then/else blocks into per-field conditional rules.

Every ``if`` reads one sibling property. The rules it produces are keyed by
the properties named in ``then``/``else`` and carry the chain of conditions
that must hold, outermost first, for the rule to apply. Nested ``if`` blocks
inside ``then`` extend the chain; nested blocks inside ``else`` extend the
chain with its leaf inverted.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from .api import SchemaInvalidError
from .constraints import (
    ChainEntry,
    ConditionChain,
    ConditionalConstraint,
    Constraint,
    merge_into
)
from .factory import child_path
from .utils import SchemaKeywords, is_listed

logger = logging.getLogger(__name__)


def condition_keys(schema: Dict[str, Any]) -> Tuple[str, ...]:
    """Property names mentioned by a node's ``if.properties``."""
    if_schema = schema.get(SchemaKeywords.IF)
    if not isinstance(if_schema, dict):
        return ()
    properties = if_schema.get(SchemaKeywords.PROPERTIES)
    if not isinstance(properties, dict):
        return ()
    return tuple(properties)


class ConditionalCompiler:
    """
    Turns a schema node carrying ``if``/``then``/``else`` into conditional rules.

    Only the first property of ``if.properties`` controls the condition;
    further properties are ignored. A node without a usable condition, or
    without ``then``, compiles to no rules.
    """

    def __init__(self, builder):
        """
        Initialize a new conditional compiler.

        Args:
            builder: ConstraintBuilder used to compile branch fragments
        """
        self.builder = builder
        self.factory = builder.factory
        self.trace = builder.config.trace

    def compile(self, schema: Dict[str, Any], parent_chain: Optional[ConditionChain] = None,
                schema_path: str = "") -> Dict[str, Constraint]:
        """
        Compile the conditional rules of a schema node.

        Args:
            schema: Node holding ``if``/``then``/``else``
            parent_chain: Conditions of the enclosing branches
            schema_path: JSON Pointer of ``schema``

        Returns:
            Mapping of property name to conditional rule, in ``then`` order
            followed by ``else``-only properties and nested blocks
        """
        parent_chain = parent_chain or ConditionChain()

        keys = condition_keys(schema)
        if not keys:
            return {}

        then_schema = schema.get(SchemaKeywords.THEN)
        if not isinstance(then_schema, dict):
            logger.debug("Ignoring 'if' on '%s' without a 'then' schema", keys[0])
            return {}

        else_schema = schema.get(SchemaKeywords.ELSE)
        if not isinstance(else_schema, dict):
            else_schema = None

        key = keys[0]
        if len(keys) > 1:
            logger.debug("Condition on '%s' ignores additional keys %s", key, list(keys[1:]))

        if_path = child_path(schema_path, SchemaKeywords.IF)
        full_chain = parent_chain.extend(ChainEntry(key, self._predicate(key, schema[SchemaKeywords.IF], if_path)))
        inverted_chain = full_chain.invert_leaf()

        if self.trace is not None:
            self.trace.emit("compile.condition", key=key, chain=full_chain.keys, path=schema_path)

        then_path = child_path(schema_path, SchemaKeywords.THEN)
        else_path = child_path(schema_path, SchemaKeywords.ELSE)
        then_properties = self._branch_properties(then_schema, then_path)
        else_properties = self._branch_properties(else_schema, else_path) if else_schema else {}
        pending_else = list(else_properties)

        rules: Dict[str, Constraint] = {}

        for prop, fragment in then_properties.items():
            then_rule = self._branch_rule(prop, fragment, then_schema, then_path)
            otherwise = None
            if prop in else_properties:
                otherwise = self._branch_rule(prop, else_properties[prop], else_schema, else_path)
                pending_else.remove(prop)
            merge_into(rules, prop, ConditionalConstraint(full_chain, then_rule, otherwise, self.trace))

        for prop in pending_else:
            else_rule = self._branch_rule(prop, else_properties[prop], else_schema, else_path)
            merge_into(rules, prop, ConditionalConstraint(inverted_chain, else_rule, trace=self.trace))

        if SchemaKeywords.IF in then_schema:
            for prop, rule in self.compile(then_schema, full_chain, then_path).items():
                merge_into(rules, prop, rule)

        if else_schema is not None and SchemaKeywords.IF in else_schema:
            for prop, rule in self.compile(else_schema, inverted_chain, else_path).items():
                merge_into(rules, prop, rule)

        logger.debug("Condition %r produced rules for %s", full_chain, list(rules))
        return rules

    def _predicate(self, key: str, if_schema: Dict[str, Any], if_path: str):
        """Boolean test for the condition key, honouring ``if.required``."""
        fragment = if_schema[SchemaKeywords.PROPERTIES][key]
        if not isinstance(fragment, dict):
            raise SchemaInvalidError(f"Condition on '{key}' must be a schema object",
                                     child_path(if_path, SchemaKeywords.PROPERTIES, key))

        presence = {SchemaKeywords.REQUIRED: [key]} if is_listed(if_schema, SchemaKeywords.REQUIRED, key) else {}
        validator = self.factory.create(key, fragment, presence, allow_untyped=True,
                                        schema_path=child_path(if_path, SchemaKeywords.PROPERTIES, key))
        return validator.is_valid

    def _branch_properties(self, branch: Dict[str, Any], branch_path: str) -> Dict[str, Dict[str, Any]]:
        """
        Property fragments a branch constrains.

        Keys listed in the branch's ``required`` without a schema of their
        own get an empty fragment, so only their presence is checked.
        """
        properties = branch.get(SchemaKeywords.PROPERTIES, {})
        if not isinstance(properties, dict):
            raise SchemaInvalidError("'properties' must be an object",
                                     child_path(branch_path, SchemaKeywords.PROPERTIES))

        fragments = {key: value for key, value in properties.items() if isinstance(value, dict)}
        for key in branch.get(SchemaKeywords.REQUIRED, []):
            fragments.setdefault(key, {})
        return fragments

    def _branch_rule(self, key: str, fragment: Dict[str, Any], branch: Dict[str, Any],
                     branch_path: str) -> Constraint:
        """Compile one branch property as a standalone field of the branch."""
        presence = {
            SchemaKeywords.REQUIRED: [key] if is_listed(branch, SchemaKeywords.REQUIRED, key) else [],
            SchemaKeywords.NULLABLE: [key] if is_listed(branch, SchemaKeywords.NULLABLE, key) else [],
        }
        rules = self.builder.build_properties({key: fragment}, presence, schema_path=branch_path,
                                              allow_untyped=True)
        return rules[key]
