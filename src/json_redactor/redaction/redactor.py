"""
JSON value redaction.

Recursively replaces every scalar in a JSON document with a placeholder of
the same type while keeping the document's shape:

- strings become "[redacted]"
- numbers become 0
- booleans become false
- null is left alone
- arrays and objects are rebuilt with their children redacted; object keys
  and key order never change

Per-key policies apply to object entries, always in the order
prune -> shuffle -> preserve/recurse:

- prune: an array under the key loses each element with probability p, where
  p is drawn once per array, uniformly in [0.1, 0.8)
- shuffle: an array under the key is randomly reordered
- preserve: the value under the key is kept as-is (after any pruning or
  shuffling)

The input document is never mutated. All randomness comes from the random
source on the configuration, so seeded sources give deterministic output.
"""

import logging
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .random_source import RandomSource, StdlibRandomSource

logger = logging.getLogger(__name__)

JSONScalar = Union[str, int, float, bool, None]
JSONValue = Union[JSONScalar, List[Any], Dict[str, Any]]

DEFAULT_STRING_REPLACEMENT = "[redacted]"
DEFAULT_NUMBER_REPLACEMENT = 0
DEFAULT_BOOLEAN_REPLACEMENT = False

# Bounds of the per-array deletion probability
PRUNE_MIN_PROBABILITY = 0.1
PRUNE_MAX_PROBABILITY = 0.8

_KEY_SET_FIELDS = ('preserve_keys', 'prune_keys', 'shuffle_keys')

# End-of-children marker for the traversal stack
_DONE = object()


def scale(n: float, minimum: float = PRUNE_MIN_PROBABILITY,
          maximum: float = PRUNE_MAX_PROBABILITY) -> float:
    """Map n in [0, 1) linearly onto [minimum, maximum)."""
    return (maximum - minimum) * n + minimum


@dataclass(frozen=True)
class RedactionConfig:
    """
    Immutable configuration for one redaction run.

    Attributes:
        preserve_keys: Keys whose value is not redacted
        prune_keys: Keys whose array value is randomly thinned
        shuffle_keys: Keys whose array value is randomly reordered
        string_replacement: Replacement for every string
        number_replacement: Replacement for every number
        boolean_replacement: Replacement for every boolean
        random_source: Source of every random draw
    """
    preserve_keys: FrozenSet[str] = frozenset()
    prune_keys: FrozenSet[str] = frozenset()
    shuffle_keys: FrozenSet[str] = frozenset()
    string_replacement: str = DEFAULT_STRING_REPLACEMENT
    number_replacement: Union[int, float] = DEFAULT_NUMBER_REPLACEMENT
    boolean_replacement: bool = DEFAULT_BOOLEAN_REPLACEMENT
    random_source: RandomSource = field(default_factory=StdlibRandomSource, compare=False)

    def __post_init__(self):
        # Accept any iterable of keys, but store frozensets
        for name in _KEY_SET_FIELDS:
            keys = getattr(self, name)
            if isinstance(keys, str):
                raise TypeError(f"{name} must be a collection of keys, not a string")
            if not isinstance(keys, frozenset):
                object.__setattr__(self, name, frozenset(keys))

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None,
                     base: Optional['RedactionConfig'] = None) -> 'RedactionConfig':
        """
        Build a configuration from a partial set of options.

        Args:
            options: Any subset of the configuration fields. None values are
                treated as missing.
            base: Configuration supplying every option not given; defaults
                when omitted.

        Returns:
            A new RedactionConfig

        Raises:
            ValueError: If an option name is not a configuration field
        """
        base = base if base is not None else cls()
        if not options:
            return base

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ValueError(f"Unknown redaction option(s): {', '.join(unknown)}")

        overrides = {name: value for name, value in options.items() if value is not None}
        for name in _KEY_SET_FIELDS:
            if name in overrides:
                overrides[name] = _to_key_set(name, overrides[name])
        return replace(base, **overrides)


@dataclass
class RedactionStats:
    """Statistics about redactions performed."""
    strings_redacted: int = 0
    numbers_redacted: int = 0
    booleans_redacted: int = 0
    nulls_kept: int = 0
    values_preserved: int = 0
    arrays_pruned: int = 0
    elements_pruned: int = 0
    arrays_shuffled: int = 0
    total_redactions: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'strings_redacted': self.strings_redacted,
            'numbers_redacted': self.numbers_redacted,
            'booleans_redacted': self.booleans_redacted,
            'nulls_kept': self.nulls_kept,
            'values_preserved': self.values_preserved,
            'arrays_pruned': self.arrays_pruned,
            'elements_pruned': self.elements_pruned,
            'arrays_shuffled': self.arrays_shuffled,
            'total_redactions': self.total_redactions,
        }


def _to_key_set(name: str, keys: Iterable[str]) -> FrozenSet[str]:
    if isinstance(keys, str):
        raise TypeError(f"{name} must be a collection of keys, not a string")
    return frozenset(keys)


def _not_json(value: Any) -> TypeError:
    return TypeError(f"Cannot redact value of type {type(value).__name__}: not a JSON value")


def _redact_scalar(value: Any, config: RedactionConfig, stats: RedactionStats) -> JSONScalar:
    if value is None:
        stats.nulls_kept += 1
        return None
    # bool is a subclass of int, so it must be matched first
    if isinstance(value, bool):
        stats.booleans_redacted += 1
        stats.total_redactions += 1
        return config.boolean_replacement
    if isinstance(value, (int, float)):
        stats.numbers_redacted += 1
        stats.total_redactions += 1
        return config.number_replacement
    if isinstance(value, str):
        stats.strings_redacted += 1
        stats.total_redactions += 1
        return config.string_replacement
    raise _not_json(value)


def _open(value: Any) -> Tuple[Union[List[Any], Dict[str, Any]], Iterator[Any]]:
    """Return an empty output container and an iterator over the input's children."""
    if isinstance(value, list):
        return [], iter(value)
    return {}, iter(value.items())


def _copy_json(value: Any) -> JSONValue:
    """Deep copy of a JSON value, without recursion."""
    if not isinstance(value, (list, dict)):
        if value is None or isinstance(value, (str, int, float)):
            return value
        raise _not_json(value)

    root, children = _open(value)
    stack = [(root, children)]
    while stack:
        out, children = stack[-1]
        item = next(children, _DONE)
        if item is _DONE:
            stack.pop()
            continue
        key, child = item if isinstance(out, dict) else (None, item)
        if isinstance(child, (list, dict)):
            copied, grandchildren = _open(child)
            stack.append((copied, grandchildren))
        else:
            copied = _copy_json(child)
        if isinstance(out, dict):
            out[key] = copied
        else:
            out.append(copied)
    return root


def _prune(key: str, items: List[Any], config: RedactionConfig, stats: RedactionStats) -> List[Any]:
    # One deletion probability for the whole array, then an independent
    # survival draw per element
    chance_to_delete = scale(config.random_source.random())
    kept = [item for item in items if config.random_source.random() > chance_to_delete]

    stats.arrays_pruned += 1
    stats.elements_pruned += len(items) - len(kept)
    logger.debug(
        f"Pruned {key!r}: p={chance_to_delete:.3f}, kept {len(kept)} of {len(items)}"
    )
    return kept


def _apply_policies(key: str, value: Any, config: RedactionConfig,
                    stats: RedactionStats) -> Tuple[Any, bool]:
    """
    Apply prune then shuffle to one object entry.

    Returns the (possibly pruned and shuffled) value and whether it is
    preserved.
    """
    if key in config.prune_keys and isinstance(value, list):
        value = _prune(key, value, config, stats)

    if key in config.shuffle_keys and isinstance(value, list):
        value = config.random_source.shuffle(value)
        stats.arrays_shuffled += 1
        logger.debug(f"Shuffled {key!r} ({len(value)} elements)")

    if key in config.preserve_keys:
        stats.values_preserved += 1
        return value, True
    return value, False


def _redact_value(value: Any, config: RedactionConfig, stats: RedactionStats) -> JSONValue:
    """
    Redact any JSON value.

    Walks the document depth-first with an explicit stack, so nesting depth
    is not bounded by the interpreter's recursion limit. Children are
    visited in document order: every random draw happens in the same order
    as a recursive pre-order walk would make it.
    """
    if not isinstance(value, (list, dict)):
        return _redact_scalar(value, config, stats)

    root, children = _open(value)
    stack = [(root, children)]
    while stack:
        out, children = stack[-1]
        item = next(children, _DONE)
        if item is _DONE:
            stack.pop()
            continue

        if isinstance(out, dict):
            key, child = item
            child, preserved = _apply_policies(key, child, config, stats)
            if preserved:
                out[key] = _copy_json(child)
                continue
        else:
            key, child = None, item

        if isinstance(child, (list, dict)):
            redacted, grandchildren = _open(child)
            stack.append((redacted, grandchildren))
        else:
            redacted = _redact_scalar(child, config, stats)

        if isinstance(out, dict):
            out[key] = redacted
        else:
            out.append(redacted)
    return root


def redact(value: Any, config: Optional[RedactionConfig] = None, **options: Any) -> JSONValue:
    """
    Recursively replace values in a JSON document with placeholders.

    The input is not mutated and the result shares no containers with it.

    Args:
        value: Parsed JSON value (dict, list, str, int, float, bool or None)
        config: Full configuration; defaults when omitted
        **options: Configuration fields overriding `config`, e.g.
            preserve_keys={"id"} or string_replacement="***"

    Returns:
        Redacted copy of `value`

    Raises:
        TypeError: If `value` contains something that is not a JSON value

    Example:
        >>> redact({"a": "abc", "b": "def", "c": True}, preserve_keys={"a"})
        {'a': 'abc', 'b': '[redacted]', 'c': False}
    """
    config = RedactionConfig.from_options(options, base=config)
    return _redact_value(value, config, RedactionStats())


class Redactor:
    """
    JSON document redactor with statistics tracking.

    Holds one immutable configuration and accumulates RedactionStats over
    every document it redacts. Use the module-level redact() when stats are
    not needed.
    """

    def __init__(self, config: Optional[RedactionConfig] = None):
        """
        Initialize the redactor.

        Args:
            config: Redaction configuration; defaults when omitted
        """
        self.config = config if config is not None else RedactionConfig()
        self.stats = RedactionStats()

    @classmethod
    def from_options(cls, **options: Any) -> 'Redactor':
        """Create a redactor from configuration fields given as keywords."""
        return cls(RedactionConfig.from_options(options))

    def redact(self, value: Any) -> JSONValue:
        """Redact one JSON document, updating statistics."""
        return _redact_value(value, self.config, self.stats)

    def redact_all(self, documents: Iterable[Any]) -> List[JSONValue]:
        """Redact each document in turn."""
        return [self.redact(doc) for doc in documents]

    def get_stats(self) -> Dict[str, int]:
        """Get redaction statistics."""
        return self.stats.to_dict()

    def reset_stats(self):
        """Reset redaction statistics."""
        self.stats = RedactionStats()
