"""
Trace sinks for compile and conditional evaluation diagnostics.

A sink is only consulted when a caller passes one in through the
configuration; there is no module level trace state.
"""

import logging
from typing import Any, Dict, List, Protocol, Tuple

logger = logging.getLogger(__name__)


class TraceSink(Protocol):
    """Receives trace events."""

    def emit(self, event: str, **details: Any) -> None:
        ...


class LoggingTraceSink:
    """Writes trace events to a logger at DEBUG level."""

    def __init__(self, log: logging.Logger = logger):
        self.log = log

    def emit(self, event: str, **details: Any) -> None:
        rendered = ", ".join(f"{name}={value!r}" for name, value in details.items())
        self.log.debug("%s: %s", event, rendered)


class RecordingTraceSink:
    """Keeps every event in memory, in emission order."""

    def __init__(self):
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    def emit(self, event: str, **details: Any) -> None:
        self.events.append((event, details))

    def named(self, event: str) -> List[Dict[str, Any]]:
        """Details of every event with the given name."""
        return [details for name, details in self.events if name == event]
