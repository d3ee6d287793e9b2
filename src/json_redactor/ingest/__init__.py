"""
JSON input/output and option parsing.
"""

from .loader import (
    ConfigFileError,
    InvalidNumberError,
    JSONInputError,
    dump_json,
    load_json,
    load_options_file,
    merge_options,
    parse_key_list,
    parse_number,
    read_json,
)

__all__ = [
    'ConfigFileError',
    'InvalidNumberError',
    'JSONInputError',
    'dump_json',
    'load_json',
    'load_options_file',
    'merge_options',
    'parse_key_list',
    'parse_number',
    'read_json',
]
