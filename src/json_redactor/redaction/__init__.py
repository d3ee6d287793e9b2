"""
Redaction module for JSON documents.
"""

from .random_source import (
    NumpyRandomSource,
    RandomSource,
    StdlibRandomSource,
    make_random_source,
)
from .redactor import (
    RedactionConfig,
    RedactionStats,
    Redactor,
    redact,
)

__all__ = [
    'RandomSource',
    'StdlibRandomSource',
    'NumpyRandomSource',
    'make_random_source',
    'RedactionConfig',
    'RedactionStats',
    'Redactor',
    'redact',
]
