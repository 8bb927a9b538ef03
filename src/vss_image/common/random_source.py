"""Injectable random sources for the encoder."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, List, Protocol, Sequence, Union, runtime_checkable

import numpy as np

from .errors import RandomSourceExhaustedError

logger = logging.getLogger(__name__)


@runtime_checkable
class RandomSource(Protocol):
    """Anything that yields uniformly distributed integers in [0, n)."""

    def integers(self, n: int, size: int) -> np.ndarray:
        ...


class GeneratorRandomSource:
    """Wrap a numpy Generator; a lock serialises draws so one source can be shared by threads."""

    def __init__(self, generator: np.random.Generator | None = None) -> None:
        self.generator = generator if generator is not None else np.random.default_rng()
        self._lock = threading.Lock()

    def integers(self, n: int, size: int) -> np.ndarray:
        with self._lock:
            return self.generator.integers(0, n, size=size, dtype=np.int64)


class SequenceRandomSource:
    """
    Replay a fixed sequence of draws, in order.

    Each value must already lie in [0, n) for the n requested; running past
    the end raises RandomSourceExhaustedError.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values: List[int] = [int(v) for v in values]
        self._pos = 0
        self._lock = threading.Lock()

    @property
    def remaining(self) -> int:
        return len(self._values) - self._pos

    def integers(self, n: int, size: int) -> np.ndarray:
        with self._lock:
            if size > self.remaining:
                raise RandomSourceExhaustedError(
                    f"Requested {size} draws but only {self.remaining} remain in the sequence."
                )
            chunk = self._values[self._pos : self._pos + size]
            self._pos += size
        return np.asarray(chunk, dtype=np.int64)


RandomLike = Union[None, int, np.random.Generator, RandomSource]


def as_random_source(rng: RandomLike) -> RandomSource:
    """Coerce None, an int seed, a Generator or a RandomSource into a RandomSource."""
    if rng is None:
        return GeneratorRandomSource()
    if isinstance(rng, np.random.Generator):
        return GeneratorRandomSource(rng)
    if isinstance(rng, (int, np.integer)) and not isinstance(rng, bool):
        return GeneratorRandomSource(np.random.default_rng(int(rng)))
    if isinstance(rng, RandomSource):
        return rng
    raise TypeError(f"Unsupported random source: {type(rng).__name__}")


def draw_indices(source: RandomSource, n: int, size: int) -> np.ndarray:
    """Take `size` draws in [0, n) and check what came back."""
    try:
        values = np.asarray(source.integers(n, size), dtype=np.int64).reshape(-1)
    except StopIteration as exc:
        raise RandomSourceExhaustedError("Random source stopped producing values.") from exc
    if values.size != size:
        raise RandomSourceExhaustedError(f"Random source returned {values.size} of {size} draws.")
    if size and (values.min() < 0 or values.max() >= n):
        raise RandomSourceExhaustedError(f"Random source produced a value outside [0, {n}).")
    return values


def spawn_generators(seed: int | Sequence[int] | None, count: int) -> List[np.random.Generator]:
    """Independent child generators, one per worker."""
    seq = np.random.SeedSequence(seed)
    logger.debug("spawning %d generators from entropy %s", count, seq.entropy)
    return [np.random.default_rng(child) for child in seq.spawn(count)]


__all__ = [
    "RandomSource",
    "GeneratorRandomSource",
    "SequenceRandomSource",
    "RandomLike",
    "as_random_source",
    "draw_indices",
    "spawn_generators",
]
