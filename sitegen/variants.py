"""Hero label variants.

The pool is shuffled once per batch and labels are handed out by cycling
through the shuffled order, so no label repeats until every label has been
used once.
"""

from __future__ import annotations

import random
from collections.abc import Sequence


def shuffled_pool(pool: Sequence[str], seed: int | None = None) -> list[str]:
    """Return a uniformly random permutation of *pool*.

    The same *seed* always yields the same order; ``None`` seeds from the
    operating system.
    """
    shuffled = list(pool)
    random.Random(seed).shuffle(shuffled)
    return shuffled


class VariantSelector:
    """Hands out one label per processed record.

    Attributes:
        order: The shuffled pool, fixed for the lifetime of the selector.
        assigned: How many labels have been handed out so far.
    """

    def __init__(self, pool: Sequence[str], seed: int | None = None) -> None:
        if not pool:
            raise ValueError("Variant pool must not be empty")
        self.order = shuffled_pool(pool, seed)
        self.assigned = 0

    def next(self) -> str:
        """Return the next label and advance the cursor."""
        label = self.order[self.assigned % len(self.order)]
        self.assigned += 1
        return label


def assign_variants(pool: Sequence[str], count: int, seed: int | None = None) -> list[str]:
    """Return the labels for a batch of *count* records."""
    selector = VariantSelector(pool, seed)
    return [selector.next() for _ in range(count)]
