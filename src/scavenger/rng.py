from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, List, MutableSequence, Sequence, Tuple

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class RandomSource:
    """
    A thin wrapper around random.Random to:
    - centralize RNG handling
    - support optional deterministic seeding for tests
    - provide the list helpers level generation relies on
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.seed is not None:
            self._rng = random.Random(self.seed)
            logger.debug("Initialized RandomSource with deterministic seed=%s", self.seed)
        else:
            # Non-deterministic seed using system random state
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def random(self) -> float:
        return self._rng.random()

    def choice(self, seq: Sequence[Any]) -> Any:
        if not seq:
            raise ValueError("RandomSource.choice() received an empty sequence")
        return seq[self._rng.randrange(0, len(seq))]

    def shuffle(self, seq: MutableSequence[Any]) -> MutableSequence[Any]:
        """Shuffle in place and return the same sequence for chaining."""
        self._rng.shuffle(seq)
        return seq

    def remove_random(self, seq: MutableSequence[Any]) -> Any:
        """Remove and return a uniformly chosen element of ``seq``."""
        if not seq:
            raise ValueError("RandomSource.remove_random() received an empty sequence")
        return seq.pop(self._rng.randrange(0, len(seq)))

    def unique_indices(self, count: int, size: int) -> List[int]:
        """
        Draw ``count`` distinct indices in [0, size) by rejection sampling:
        a drawn index already present is discarded and drawn again.
        """
        if count > size:
            raise ConfigurationError(
                f"Cannot draw {count} unique indices from a pool of {size}"
            )
        picked: List[int] = []
        while len(picked) < count:
            idx = self._rng.randrange(0, size)
            if idx in picked:
                continue
            picked.append(idx)
        return picked

    def weighted_choice(self, entries: Sequence[Tuple[Any, float]]) -> Any:
        """
        Select a value from (value, weight) pairs where weights are non-negative numbers.
        If all weights are zero, raises ValueError.
        """
        if not entries:
            raise ValueError("weighted_choice requires a non-empty sequence of entries")

        values: List[Any] = []
        cumulative: List[float] = []
        total = 0.0
        for value, weight in entries:
            if weight < 0:
                raise ValueError(f"Weight for {value!r} must be non-negative, got {weight}")
            if weight == 0:
                continue
            total += weight
            values.append(value)
            cumulative.append(total)

        if total == 0:
            raise ValueError("All weights are zero; cannot make a weighted choice")

        r = self._rng.random() * total
        for i, c in enumerate(cumulative):
            if r <= c:
                return values[i]
        return values[-1]


__all__ = ["RandomSource"]
