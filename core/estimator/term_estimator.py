from __future__ import annotations

import random
from collections.abc import Iterator
from dataclasses import dataclass
from itertools import chain
from typing import Any, Optional

from config.settings import settings
from core.estimator.calibration import DEFAULT_CALIBRATION
from core.estimator.sampling import make_rng, sample_without_replacement
from models.adapters import to_value
from models.errors import CyclicValueError, InvalidSampleSizeError, UnsupportedValueKindError
from models.schemas import Calibration
from models.values import BoundedSet, ByteSequence, Map, Record, Scalar, Sequence, Tuple

_DONE = object()


def validate_sample_size(sample_size: Optional[int]) -> int:
    if sample_size is None:
        return settings.DEFAULT_SAMPLE_SIZE
    if isinstance(sample_size, bool) or not isinstance(sample_size, int) or sample_size <= 0:
        raise InvalidSampleSizeError(sample_size)
    return sample_size


@dataclass
class _Frame:
    """A container whose sampled children are still being measured."""

    key: int
    overhead: float
    size: int
    sampled: int
    children: Iterator[Any]
    sample_sum: float = 0

    def total(self) -> float:
        # Scale the sampled contents up to the whole collection
        return self.overhead + self.sample_sum * self.size / self.sampled


class TermEstimator:
    """Approximate heap words used by a value, sampling large collections.

    Follows the flat-size convention: the word holding a reference to the
    value itself is not counted.

    Collections longer than ``sample_size`` are estimated from a uniform
    sample drawn without replacement and scaled by ``len / sample_count``.
    The result is unbiased but has nonzero variance whenever element costs
    differ; collections no larger than ``sample_size`` are enumerated exactly,
    in their own order.

    Traversal keeps its own stack, so nesting depth is bounded by memory
    rather than the interpreter's recursion limit. A container that contains
    itself raises CyclicValueError.
    """

    def __init__(self, calibration: Calibration | None = None) -> None:
        self._calibration = calibration or DEFAULT_CALIBRATION

    @property
    def calibration(self) -> Calibration:
        return self._calibration

    def estimate(
        self,
        value: Any,
        sample_size: Optional[int] = None,
        seed: Any = None,
    ) -> float:
        sample_size = validate_sample_size(sample_size)
        return self.term(value, sample_size, make_rng(seed))

    def map_overhead(self, size: int) -> float:
        return self._calibration.map_overhead(size)

    def term(self, value: Any, sample_size: int, rng: random.Random) -> float:
        """Words of ``value``; ``rng`` is shared by every level of one estimate call."""
        stack: list[_Frame] = []
        open_keys: set[int] = set()
        node = value

        while True:
            cost = self._open(node, sample_size, rng, stack, open_keys)
            if cost is None:
                node = next(stack[-1].children)
                continue

            # Fold finished values into their parents until one has children left
            while True:
                if not stack:
                    return cost
                frame = stack[-1]
                frame.sample_sum += cost
                node = next(frame.children, _DONE)
                if node is not _DONE:
                    break
                stack.pop()
                open_keys.discard(frame.key)
                cost = frame.total()

    def _open(
        self,
        node: Any,
        sample_size: int,
        rng: random.Random,
        stack: list[_Frame],
        open_keys: set[int],
    ) -> Optional[float]:
        """Return the cost of a leaf, or push a frame and return None."""
        cal = self._calibration
        value = to_value(node, small_integer_bits=cal.small_integer_bits)

        if isinstance(value, Scalar):
            return cal.scalar_cost(value.kind, value.extra_words)
        if isinstance(value, ByteSequence):
            # Never below the words the raw bytes occupy
            return max(cal.binary_words(value.length), value.length / cal.word_bytes + 1)

        if isinstance(value, Sequence):
            items, size = value.items, len(value.items)
            overhead = cal.list_cell_words * size
        elif isinstance(value, Tuple):
            items, size = value.items, value.arity
            overhead = cal.tuple_header_words + size
        elif isinstance(value, Record):
            # Field names are atoms: only the field values cost words
            items = tuple(value.fields.values())
            size = len(items)
            overhead = self.map_overhead(value.entry_count)
        elif isinstance(value, Map):
            items, size = value.entries.items(), len(value.entries)
            overhead = self.map_overhead(size)
        elif isinstance(value, BoundedSet):
            # Members are keys of an inner map whose values are empty lists (0 words)
            items, size = value.members, len(value.members)
            overhead = cal.bounded_set_overhead_words + self.map_overhead(size)
        else:
            raise UnsupportedValueKindError(value)

        if size == 0:
            return overhead

        key = id(node)
        if key in open_keys:
            raise CyclicValueError(node)

        sample = sample_without_replacement(items, size, sample_size, rng)
        children = chain.from_iterable(sample) if isinstance(value, Map) else iter(sample)
        stack.append(_Frame(key, overhead, size, len(sample), children))
        open_keys.add(key)
        return None
