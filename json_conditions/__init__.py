#!/usr/bin/env python3
"""
Conditional JSON Schema Validator

This package compiles JSON schemas, including nested if/then/else blocks,
into reusable validators that report structured errors.
"""

import logging

from .api import (
    CompileError,
    ErrorCode,
    ErrorKind,
    JsonValidator,
    MissingTypeError,
    SchemaInvalidError,
    UnsupportedTypeError,
    ValidationError,
    ValidationResult,
    compile
)
from .config import ValidatorConfig, load_config
from .messages import MessageResolver
from .refs import dereference
from .tracing import LoggingTraceSink, RecordingTraceSink, TraceSink
from .validator import CompiledValidator
from .version import __version__

logger = logging.getLogger("json_conditions")

# Export public classes and functions
__all__ = [
    "CompileError",
    "CompiledValidator",
    "ErrorCode",
    "ErrorKind",
    "JsonValidator",
    "LoggingTraceSink",
    "MessageResolver",
    "MissingTypeError",
    "RecordingTraceSink",
    "SchemaInvalidError",
    "TraceSink",
    "UnsupportedTypeError",
    "ValidationError",
    "ValidationResult",
    "ValidatorConfig",
    "compile",
    "dereference",
    "load_config",
    "__version__"
]
