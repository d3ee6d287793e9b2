"""
Tests for random sources.
"""

import random

import numpy as np
import pytest

from json_redactor.redaction import (
    NumpyRandomSource,
    RandomSource,
    StdlibRandomSource,
    make_random_source,
)


class TestStdlibRandomSource:
    """Tests for the standard library backed source."""

    def test_draws_in_unit_interval(self):
        source = StdlibRandomSource.seeded(1)
        draws = [source.random() for _ in range(1000)]
        assert all(0.0 <= d < 1.0 for d in draws)

    def test_seeded_is_deterministic(self):
        a = StdlibRandomSource.seeded(7)
        b = StdlibRandomSource.seeded(7)
        assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]
        assert a.shuffle(list(range(20))) == b.shuffle(list(range(20)))

    def test_global_source_follows_random_seed(self):
        source = StdlibRandomSource()
        random.seed(123)
        first = [source.random() for _ in range(3)]
        random.seed(123)
        assert [source.random() for _ in range(3)] == first

    def test_shuffle_returns_new_list(self):
        items = [1, 2, 3, 4]
        shuffled = StdlibRandomSource.seeded(3).shuffle(items)
        assert shuffled is not items
        assert items == [1, 2, 3, 4]
        assert sorted(shuffled) == items

    def test_shuffle_accepts_tuples(self):
        assert sorted(StdlibRandomSource.seeded(3).shuffle((3, 1, 2))) == [1, 2, 3]


class TestNumpyRandomSource:
    """Tests for the numpy backed source."""

    def test_draws_are_python_floats(self):
        draw = NumpyRandomSource(0).random()
        assert type(draw) is float
        assert 0.0 <= draw < 1.0

    def test_seeded_is_deterministic(self):
        a = NumpyRandomSource(42)
        b = NumpyRandomSource(42)
        assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]
        assert a.shuffle(list("abcdefgh")) == b.shuffle(list("abcdefgh"))

    def test_accepts_generator(self):
        rng = np.random.default_rng(5)
        expected = np.random.default_rng(5).random()
        assert NumpyRandomSource(rng).random() == expected

    def test_shuffle_keeps_elements(self):
        items = [{"id": i} for i in range(50)]
        shuffled = NumpyRandomSource(9).shuffle(items)
        assert shuffled is not items
        assert sorted(d["id"] for d in shuffled) == list(range(50))
        assert all(any(s is item for item in items) for s in shuffled)

    def test_shuffle_empty(self):
        assert NumpyRandomSource(1).shuffle([]) == []

    def test_mean_of_draws(self):
        source = NumpyRandomSource(2)
        draws = np.array([source.random() for _ in range(20_000)])
        assert draws.mean() == pytest.approx(0.5, abs=0.02)


class TestMakeRandomSource:
    """Tests for the factory."""

    def test_numpy_backend(self):
        assert isinstance(make_random_source(1), NumpyRandomSource)

    def test_stdlib_backend(self):
        assert isinstance(make_random_source(1, backend='stdlib'), StdlibRandomSource)
        assert isinstance(make_random_source(backend='stdlib'), StdlibRandomSource)

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown random backend"):
            make_random_source(backend='dice')

    def test_sources_satisfy_protocol(self):
        assert isinstance(NumpyRandomSource(), RandomSource)
        assert isinstance(StdlibRandomSource(), RandomSource)
