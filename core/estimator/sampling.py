from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from itertools import islice
from typing import Any, TypeVar

T = TypeVar("T")


def sample_without_replacement(
    population: Iterable[T],
    size: int,
    k: int,
    rng: random.Random,
) -> list[T]:
    """Uniformly draw min(k, size) distinct elements of a sized collection.

    When k covers the whole collection every element is returned in its
    original order, so full enumerations sum identically on every call.
    Otherwise indexable populations go through random.sample and anything
    else (dict items, sets) is reservoir-sampled in one pass, holding only
    the chosen elements.
    """
    if k <= 0 or size <= 0:
        return []
    if k >= size:
        return list(population)
    if isinstance(population, Sequence):
        return rng.sample(population, k)

    iterator = iter(population)
    reservoir = list(islice(iterator, k))
    for seen, item in enumerate(iterator, start=k + 1):
        slot = rng.randrange(seen)
        if slot < k:
            reservoir[slot] = item
    return reservoir


def make_rng(seed: Any = None) -> random.Random:
    # A fresh generator per call; seed=None draws from system entropy
    return random.Random(seed)
