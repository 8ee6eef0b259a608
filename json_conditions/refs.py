"""
Local ``$ref`` dereferencing.

The compiler only accepts schemas whose references are already inlined.
``dereference`` produces such a copy for documents that use local
references (``#/definitions/...``, ``#/$defs/...``).
"""

import logging
from typing import Any, Dict, Tuple

from .api import SchemaInvalidError
from .utils import JsonPointer, SchemaKeywords

logger = logging.getLogger(__name__)


def dereference(schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of ``schema`` with every local reference inlined.

    Keywords next to a ``$ref`` are kept and override the referenced
    schema's keywords of the same name. The definitions containers are
    dropped from the result. The input is not modified.

    Args:
        schema: Root schema document

    Returns:
        Dereferenced schema

    Raises:
        SchemaInvalidError: For external, unresolvable or cyclic references
    """
    result = _inline(schema, schema, (), "")
    if isinstance(result, dict):
        for container in (SchemaKeywords.DEFINITIONS, SchemaKeywords.DEFS):
            result.pop(container, None)
    return result


def _inline(node: Any, root: Dict[str, Any], active: Tuple[str, ...], path: str) -> Any:
    if isinstance(node, list):
        return [_inline(item, root, active, f"{path}/{i}") for i, item in enumerate(node)]

    if not isinstance(node, dict):
        return node

    ref = node.get(SchemaKeywords.REF)
    if isinstance(ref, str):
        target = _resolve(ref, root, active, path)
        logger.debug("Inlining %s at '%s'", ref, path or "/")
        resolved = _inline(target, root, active + (ref,), path)
        if not isinstance(resolved, dict):
            raise SchemaInvalidError(f"Reference {ref} does not point to a schema object", path)
        siblings = {key: value for key, value in node.items() if key != SchemaKeywords.REF}
        merged = dict(resolved)
        merged.update(_inline(siblings, root, active, path))
        return merged

    return {
        key: _inline(value, root, active, f"{path}/{JsonPointer.escape_part(key)}")
        for key, value in node.items()
    }


def _resolve(ref: str, root: Dict[str, Any], active: Tuple[str, ...], path: str) -> Any:
    if not ref.startswith("#"):
        raise SchemaInvalidError(f"External references not supported: {ref}", path)

    if ref in active:
        raise SchemaInvalidError(f"Cyclic reference: {' -> '.join(active + (ref,))}", path)

    try:
        return JsonPointer.resolve(root, ref[1:])
    except ValueError as e:
        raise SchemaInvalidError(f"Failed to resolve reference '{ref}': {e}", path) from e
