"""
Pytest configuration and fixtures for json_redactor tests.
"""

import logging
from typing import Any, Iterable, List, Sequence

import pytest


class ScriptedRandomSource:
    """
    Random source that replays fixed draws.

    shuffle() reverses the sequence, which makes shuffled output easy to
    predict. Every draw is recorded in `calls`.
    """

    def __init__(self, draws: Iterable[float]):
        self._draws = list(draws)
        self.calls: List[str] = []

    def random(self) -> float:
        self.calls.append('random')
        if not self._draws:
            raise AssertionError("ScriptedRandomSource ran out of draws")
        return self._draws.pop(0)

    def shuffle(self, items: Sequence[Any]) -> List[Any]:
        self.calls.append('shuffle')
        return list(reversed(items))

    @property
    def remaining(self) -> int:
        return len(self._draws)


@pytest.fixture
def scripted_source():
    """Factory for ScriptedRandomSource."""
    return ScriptedRandomSource


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attaches so each test starts clean."""
    yield
    package_logger = logging.getLogger('json_redactor')
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_document():
    """Nested document with every JSON value type."""
    return {
        'name': 'Ada Lovelace',
        'age': 36,
        'ratio': 0.75,
        'active': True,
        'nickname': None,
        'address': {
            'street': '12 St James Square',
            'city': 'London',
            'geo': [51.5074, -0.1278],
        },
        'friends': ['Charles', 'Mary'],
        'devices': [
            {'id': 'dev-1', 'type': 'laptop', 'enrolled': True},
            {'id': 'dev-2', 'type': 'phone', 'enrolled': False},
            {'id': 'dev-3', 'type': 'tablet', 'enrolled': True},
        ],
        'matrix': [[1, 2], [3, 'x'], []],
        'empty': {},
    }


@pytest.fixture
def redacted_sample_document():
    """sample_document redacted with the default configuration."""
    return {
        'name': '[redacted]',
        'age': 0,
        'ratio': 0,
        'active': False,
        'nickname': None,
        'address': {
            'street': '[redacted]',
            'city': '[redacted]',
            'geo': [0, 0],
        },
        'friends': ['[redacted]', '[redacted]'],
        'devices': [
            {'id': '[redacted]', 'type': '[redacted]', 'enrolled': False},
            {'id': '[redacted]', 'type': '[redacted]', 'enrolled': False},
            {'id': '[redacted]', 'type': '[redacted]', 'enrolled': False},
        ],
        'matrix': [[0, 0], [0, '[redacted]'], []],
        'empty': {},
    }
