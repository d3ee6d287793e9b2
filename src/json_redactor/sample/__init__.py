"""
Sample documents for demos and tests.
"""

from .generator import EXAMPLE_COMMAND, EXAMPLE_OPTIONS, SampleGenerator, example_document

__all__ = ['EXAMPLE_COMMAND', 'EXAMPLE_OPTIONS', 'SampleGenerator', 'example_document']
