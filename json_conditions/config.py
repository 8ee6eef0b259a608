"""
Validator configuration.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .messages import MessageResolver
from .tracing import TraceSink

logger = logging.getLogger(__name__)


@dataclass
class ValidatorConfig:
    """
    Settings shared by compilation and validation.

    Attributes:
        collect_all: Report every violated rule instead of the first per field
        messages: Custom message templates, ``{field_key: {keyword: template}}``
        trace: Optional sink receiving compile and condition trace events
    """
    collect_all: bool = False
    messages: Dict[str, Dict[str, str]] = field(default_factory=dict)
    trace: Optional[TraceSink] = None

    @property
    def message_resolver(self) -> MessageResolver:
        return MessageResolver(self.messages)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], trace: Optional[TraceSink] = None) -> "ValidatorConfig":
        """
        Build a configuration from a parsed JSON document.

        Args:
            data: Mapping with optional ``collectAll`` and ``messages`` keys
            trace: Trace sink to attach

        Returns:
            ValidatorConfig

        Raises:
            ValueError: If a key holds a value of the wrong shape
        """
        collect_all = data.get("collectAll", False)
        if not isinstance(collect_all, bool):
            raise ValueError("'collectAll' must be a boolean")

        messages = data.get("messages", {})
        if not isinstance(messages, dict) or not all(isinstance(v, dict) for v in messages.values()):
            raise ValueError("'messages' must map field keys to {keyword: template} objects")

        unknown = set(data) - {"collectAll", "messages"}
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(sorted(unknown)))

        return cls(collect_all=collect_all, messages=messages, trace=trace)


def load_json(filepath: Union[str, Path]) -> Any:
    """
    Load and parse a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        Parsed JSON data

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file contains invalid JSON
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        # Enhance the error message with file information
        raise json.JSONDecodeError(
            f"Failed to parse JSON in {filepath}: {e.msg}",
            e.doc,
            e.pos
        ) from e


def load_config(filepath: Union[str, Path], trace: Optional[TraceSink] = None) -> ValidatorConfig:
    """Load a ValidatorConfig from a JSON file."""
    data = load_json(filepath)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {filepath} must be a JSON object")
    return ValidatorConfig.from_dict(data, trace=trace)
