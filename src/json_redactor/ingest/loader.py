"""
JSON input/output and option parsing for the redactor.

Reads UTF-8 JSON text, writes compact or pretty JSON, and turns the raw
command-line and options-file values (comma-separated key lists, number
strings) into typed options.

Input is strict JSON: the non-standard constants NaN, Infinity and
-Infinity that Python's json module accepts by default are rejected.
"""

import json
import logging
import math
from pathlib import Path
from typing import IO, Any, Dict, FrozenSet, Iterable, Optional, Union

import numpy as np

logger = logging.getLogger(__name__)

# Option names accepted in an options file
OPTION_NAMES = ('preserve', 'prune', 'shuffle', 'string', 'number', 'boolean', 'pretty', 'seed')

# Above this magnitude floats no longer hold every integer exactly
_MAX_SAFE_INTEGER = 2 ** 53 - 1


class JSONInputError(ValueError):
    """Input text is not valid JSON."""


class InvalidNumberError(ValueError):
    """A number option is not a finite number."""


class ConfigFileError(ValueError):
    """An options file is unreadable or has invalid contents."""


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _parse_float(text: str) -> float:
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"number {text} is out of range")
    return number


def load_json(text: str) -> Any:
    """
    Parse JSON text.

    Numbers too large for a float (e.g. 1e400) are rejected rather than
    read as infinity, which could not be written back out as JSON.

    Args:
        text: JSON document

    Returns:
        Parsed value

    Raises:
        JSONInputError: If the text is not valid JSON
    """
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float)
    except ValueError as e:
        raise JSONInputError(str(e)) from e
    except RecursionError as e:
        raise JSONInputError("document is nested too deeply") from e


def read_json(stream: IO) -> Any:
    """Read a whole stream (text or binary, UTF-8) and parse it as JSON."""
    data = stream.read()
    if isinstance(data, bytes):
        try:
            data = data.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise JSONInputError(f"input is not UTF-8: {e}") from e
    elif data.startswith('\ufeff'):
        data = data[1:]
    logger.debug(f"Read {len(data)} characters of JSON input")
    return load_json(data)


def _json_default(obj: Any) -> Any:
    """Convert numpy scalars that may appear as replacement values."""
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dump_json(value: Any, pretty: bool = False) -> str:
    """
    Serialize a value as JSON.

    Args:
        value: JSON value
        pretty: Indent with two spaces instead of the compact form

    Returns:
        JSON text without a trailing newline
    """
    if pretty:
        return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False, default=_json_default)
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False, allow_nan=False,
                      default=_json_default)


def parse_key_list(text: Union[str, Iterable[str], None]) -> FrozenSet[str]:
    """
    Parse a comma-separated list of object keys.

    Surrounding whitespace is stripped and blank entries are dropped, so
    "a, b,,c" gives {"a", "b", "c"}. Lists of keys are accepted as well.
    """
    if text is None:
        return frozenset()
    parts = text.split(',') if isinstance(text, str) else text
    return frozenset(part.strip() for part in parts if part and part.strip())


def parse_number(text: Union[str, int, float]) -> Union[int, float]:
    """
    Parse a replacement number.

    Integral values come back as int so that they serialize as "0" rather
    than "0.0".

    Raises:
        InvalidNumberError: If the value is not a finite number
    """
    if isinstance(text, bool):
        raise InvalidNumberError(f"not a number: {text!r}")
    try:
        number = float(text)
    except (TypeError, ValueError) as e:
        raise InvalidNumberError(f"not a number: {text!r}") from e

    if not math.isfinite(number):
        raise InvalidNumberError(f"not a finite number: {text!r}")

    if number.is_integer() and abs(number) <= _MAX_SAFE_INTEGER:
        return int(number)
    return number


def _parse_flag(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigFileError(f"'{name}' must be true or false, got {value!r}")
    return value


def load_options_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load redaction options from a JSON file.

    The file holds one JSON object using the command-line option names:

        {"preserve": ["id", "type"], "prune": "devices,users", "number": -1}

    Args:
        path: Path to the options file

    Returns:
        Dictionary of typed options (key lists as frozensets)

    Raises:
        ConfigFileError: If the file cannot be read or has invalid contents
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = load_json(f.read())
    except OSError as e:
        raise ConfigFileError(f"cannot read options file {path}: {e}") from e
    except JSONInputError as e:
        raise ConfigFileError(f"options file {path} is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigFileError(f"options file {path} must contain a JSON object")

    unknown = sorted(set(raw) - set(OPTION_NAMES))
    if unknown:
        raise ConfigFileError(f"unknown option(s) in {path}: {', '.join(unknown)}")

    options: Dict[str, Any] = {}
    for name, value in raw.items():
        if value is None:
            continue
        if name in ('preserve', 'prune', 'shuffle'):
            if not isinstance(value, (str, list)) or (
                isinstance(value, list) and not all(isinstance(k, str) for k in value)
            ):
                raise ConfigFileError(f"'{name}' must be a list of keys or a comma-separated string")
            options[name] = parse_key_list(value)
        elif name == 'string':
            if not isinstance(value, str):
                raise ConfigFileError(f"'string' must be a string, got {value!r}")
            options[name] = value
        elif name == 'number':
            try:
                options[name] = parse_number(value)
            except InvalidNumberError as e:
                raise ConfigFileError(f"'number' must be a finite number: {e}") from e
        elif name == 'seed':
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigFileError(f"'seed' must be a non-negative integer, got {value!r}")
            options[name] = value
        else:
            options[name] = _parse_flag(name, value)

    logger.debug(f"Loaded options from {path}: {sorted(options)}")
    return options


def merge_options(*layers: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge option dictionaries; later layers win and None means unset."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        for name, value in layer.items():
            if value is not None:
                merged[name] = value
    return merged
