#!/usr/bin/env python3
"""
Conditional JSON Validator

This script validates a JSON document against a JSON schema, including
nested if/then/else rules.

Usage:
    python validate_json.py <data_file> <schema_file> [--config FILE] [--collect-all] [--trace] [--verbose]
"""

import sys

from json_conditions.cli import main

if __name__ == "__main__":
    sys.exit(main())
