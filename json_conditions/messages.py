"""
Error message resolution.

Custom messages are looked up per field key and keyword; when nothing is
configured the validator falls back to a generated default.
"""

import logging
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

WILDCARD = "*"

# Phrases completing "<Label> does not match ..."
DEFAULT_PHRASES = {
    "type": "type {type}",
    "const": "constant",
    "enum": "any of the enumerables",
    "minLength": "minimum length of {minLength}",
    "maxLength": "maximum length of {maxLength}",
    "pattern": "pattern {pattern}",
    "minimum": "minimum of {minimum}",
    "maximum": "maximum of {maximum}",
    "exclusiveMinimum": "exclusive minimum of {exclusiveMinimum}",
    "exclusiveMaximum": "exclusive maximum of {exclusiveMaximum}",
    "multipleOf": "multiple of {multipleOf}",
    "minItems": "minimum number of items {minItems}",
    "maxItems": "maximum number of items {maxItems}",
    "uniqueItems": "unique items",
    "contains": "at least one matching item",
    "minProperties": "minimum number of properties {minProperties}",
    "maxProperties": "maximum number of properties {maxProperties}",
    "allOf": "all of the schemas",
    "anyOf": "any of the schemas",
    "oneOf": "exactly one of the schemas",
}


class _SafeParams(dict):
    """Leaves unknown placeholders untouched when formatting templates."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def format_template(template: str, params: Mapping[str, Any]) -> str:
    """Fill a ``str.format`` style template, ignoring unknown placeholders."""
    try:
        return template.format_map(_SafeParams(params))
    except (ValueError, IndexError, AttributeError, TypeError) as e:
        logger.warning("Cannot format message template %r: %s", template, e)
        return template


class MessageResolver:
    """
    Resolves custom error messages.

    Messages are configured as ``{field_key: {keyword: template}}``; the
    ``"*"`` key applies to every field. Templates may reference ``{label}``,
    ``{key}``, ``{title}`` and the keyword's own parameters.
    """

    def __init__(self, messages: Optional[Dict[str, Dict[str, str]]] = None):
        self.messages = messages or {}

    def resolve(self, keyword: str, key: Optional[str], params: Mapping[str, Any]) -> Optional[str]:
        """
        Look up a custom message.

        Args:
            keyword: Schema keyword that failed
            key: Field key, None for the root value
            params: Context parameters (label, title, literal values)

        Returns:
            The formatted custom message, or None when none is configured
        """
        for scope in (key, WILDCARD):
            if scope is None:
                continue
            template = self.messages.get(scope, {}).get(keyword)
            if template:
                return format_template(template, params)
        return None

    def message(self, keyword: str, key: Optional[str], label: str, **params: Any) -> str:
        """
        Resolve a message, falling back to the generated default.

        Args:
            keyword: Schema keyword that failed
            key: Field key
            label: Field label
            **params: Keyword parameters

        Returns:
            Human readable message
        """
        params = dict(params, label=label, key=key)
        custom = self.resolve(keyword, key, params)
        if custom is not None:
            return custom
        return default_message(keyword, label, params)


def default_message(keyword: str, label: str, params: Mapping[str, Any]) -> str:
    """Build ``"<Label> does not match <phrase>"`` or the required/not variants."""
    if keyword == "required":
        return f"{label} is required"
    if keyword == "not":
        return f"{label} should not match the excluded schema"
    if keyword == "oneOf" and params.get("matched", 0) > 1:
        return f"{label} matches {params['matched']} schemas, but should match exactly one"
    if keyword == "type" and "types" in params:
        return f"{label} does not match any of the declared types ({params['types']})"
    phrase = DEFAULT_PHRASES.get(keyword)
    if phrase is None:
        logger.debug("No default phrase for keyword %s", keyword)
        phrase = keyword
    return f"{label} does not match {format_template(phrase, params)}"
