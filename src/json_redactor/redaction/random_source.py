"""
Random sources for pruning and shuffling.

The redactor never calls a global random function directly. It asks the
random source carried by its configuration for two things:

- random(): a uniform float in [0, 1)
- shuffle(items): a new list holding a uniform permutation of items

Two implementations are provided. StdlibRandomSource wraps the standard
library generator (the process-wide one by default), NumpyRandomSource wraps
a numpy Generator and is what the command line uses, so that --seed gives
reproducible output.
"""

import random
from typing import Any, List, Optional, Protocol, Sequence, Union, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Capability used by the redactor for every random decision."""

    def random(self) -> float:
        ...

    def shuffle(self, items: Sequence[Any]) -> List[Any]:
        ...


class StdlibRandomSource:
    """
    Random source backed by the standard library.

    With no generator, draws come from the module-level functions of
    `random`, i.e. the process-wide generator.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng

    @classmethod
    def seeded(cls, seed: int) -> 'StdlibRandomSource':
        """Create a source with its own generator seeded with `seed`."""
        return cls(random.Random(seed))

    def random(self) -> float:
        if self._rng is None:
            return random.random()
        return self._rng.random()

    def shuffle(self, items: Sequence[Any]) -> List[Any]:
        # random.shuffle is Fisher-Yates, so every permutation is equally likely
        shuffled = list(items)
        if self._rng is None:
            random.shuffle(shuffled)
        else:
            self._rng.shuffle(shuffled)
        return shuffled

    def __repr__(self) -> str:
        return "StdlibRandomSource(global)" if self._rng is None else "StdlibRandomSource(private)"


class NumpyRandomSource:
    """Random source backed by a numpy Generator."""

    def __init__(self, seed: Union[int, np.random.Generator, None] = None):
        if isinstance(seed, np.random.Generator):
            self._rng = seed
        else:
            self._rng = np.random.default_rng(seed)

    def random(self) -> float:
        return float(self._rng.random())

    def shuffle(self, items: Sequence[Any]) -> List[Any]:
        order = self._rng.permutation(len(items))
        return [items[int(i)] for i in order]

    def __repr__(self) -> str:
        return f"NumpyRandomSource({type(self._rng.bit_generator).__name__})"


BACKENDS = ('numpy', 'stdlib')


def make_random_source(seed: Optional[int] = None, backend: str = 'numpy') -> RandomSource:
    """
    Build a random source.

    Args:
        seed: Seed for reproducible output. None draws fresh entropy for the
            numpy backend and uses the process-wide generator for stdlib.
        backend: "numpy" or "stdlib"

    Returns:
        A RandomSource
    """
    if backend == 'numpy':
        return NumpyRandomSource(seed)
    if backend == 'stdlib':
        return StdlibRandomSource() if seed is None else StdlibRandomSource.seeded(seed)
    raise ValueError(f"Unknown random backend: {backend!r} (expected one of {', '.join(BACKENDS)})")
