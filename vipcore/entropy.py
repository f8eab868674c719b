"""Random byte sources for the CXNN instruction."""

from typing import Callable, Iterable

import jax
import jax.numpy as jnp

RandomSource = Callable[[], int]


class PRNGRandomSource:
    """JAX PRNG backed byte generator, reproducible from a seed."""

    def __init__(self, seed: int = 0):
        self.seed = seed
        self._key = jax.random.PRNGKey(seed)

    def __call__(self) -> int:
        self._key, subkey = jax.random.split(self._key)
        return int(jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32))

    def __repr__(self) -> str:
        return f"PRNGRandomSource(seed={self.seed})"


def constant_source(value: int) -> RandomSource:
    """Source that always yields the same byte."""
    value &= 0xFF
    return lambda: value


def sequence_source(values: Iterable[int]) -> RandomSource:
    """Source that replays ``values`` in order, cycling when exhausted."""
    values = [v & 0xFF for v in values]
    if not values:
        raise ValueError("sequence_source needs at least one value")
    position = 0

    def next_value() -> int:
        nonlocal position
        value = values[position % len(values)]
        position += 1
        return value

    return next_value
