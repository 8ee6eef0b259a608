#!/usr/bin/env python3
"""
Command-line interface for the conditional JSON validator.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .api import CompileError
from .config import ValidatorConfig, load_config, load_json
from .refs import dereference
from .schema_compiler import SchemaCompiler
from .tracing import LoggingTraceSink
from .version import __version__

logger = logging.getLogger("json_conditions")

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Validate a JSON document against a schema with conditional rules."
    )
    parser.add_argument(
        "data_file",
        type=str,
        help="Path to the JSON data file to validate"
    )
    parser.add_argument(
        "schema_file",
        type=str,
        help="Path to the JSON schema file"
    )
    parser.add_argument(
        "--config",
        type=str,
        metavar="FILE",
        help="JSON file with validator settings (collectAll, messages)"
    )
    parser.add_argument(
        "--collect-all",
        action="store_true",
        help="Report every violated rule instead of the first per field"
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Log compile steps and condition evaluation (implies --verbose)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(args)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    if args.verbose or args.trace:
        logger.setLevel(logging.DEBUG)

    trace = LoggingTraceSink() if args.trace else None

    try:
        config = load_config(args.config, trace=trace) if args.config else ValidatorConfig(trace=trace)
        if args.collect_all:
            config.collect_all = True

        schema = dereference(load_json(args.schema_file))
        data = load_json(args.data_file)
        validator = SchemaCompiler(config).compile(schema)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        # CompileError is a ValueError
        kind = "Schema error" if isinstance(e, CompileError) else "Error"
        logger.error("%s: %s", kind, e)
        return EXIT_ERROR

    result = validator.check(data)

    # Report results
    if not result.valid:
        logger.error("Validation failed:")
        for error in result.errors:
            logger.error(f"  - {error}")
        return EXIT_INVALID

    logger.info("Validation successful!")
    return EXIT_VALID


if __name__ == "__main__":
    sys.exit(main())
