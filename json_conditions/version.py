"""
Version information for the json_conditions package.
"""

__version__ = "1.0.0"
