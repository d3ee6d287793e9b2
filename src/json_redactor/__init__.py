"""
JSON Redactor

Preserves privacy by redacting the values of a JSON document while keeping
its structure: same keys, same nesting, placeholder values of the same type.
"""

__version__ = "0.1.0"
__author__ = "JSON Redactor Team"

# Default configuration
DEFAULT_CONFIG = {
    "string": "[redacted]",
    "number": 0,
    "boolean": False,
    "preserve": [],
    "prune": [],
    "shuffle": [],
    "pretty": False,
    "seed": None,
}

from .redaction import (  # noqa: E402
    NumpyRandomSource,
    RandomSource,
    RedactionConfig,
    RedactionStats,
    Redactor,
    StdlibRandomSource,
    redact,
)

__all__ = [
    'DEFAULT_CONFIG',
    'RandomSource',
    'StdlibRandomSource',
    'NumpyRandomSource',
    'RedactionConfig',
    'RedactionStats',
    'Redactor',
    'redact',
]
