"""Shared fixtures: an exhaustive flat-size oracle used as the reference size."""
from __future__ import annotations

from typing import Any, Callable

import pytest

from core.estimator.calibration import DEFAULT_CALIBRATION
from models.adapters import to_value
from models.schemas import Calibration
from models.values import BoundedSet, ByteSequence, Map, Record, Scalar, Sequence, Tuple


def exact_flat_size(value: Any, cal: Calibration = DEFAULT_CALIBRATION) -> float:
    """Visit every element, no sampling. Binaries report only their runtime words."""
    value = to_value(value, small_integer_bits=cal.small_integer_bits)
    if isinstance(value, Scalar):
        return cal.scalar_cost(value.kind, value.extra_words)
    if isinstance(value, ByteSequence):
        return cal.binary_words(value.length)
    if isinstance(value, Sequence):
        return cal.list_cell_words * len(value.items) + sum(exact_flat_size(v, cal) for v in value.items)
    if isinstance(value, Tuple):
        return cal.tuple_header_words + value.arity + sum(exact_flat_size(v, cal) for v in value.items)
    if isinstance(value, Record):
        return cal.map_overhead(value.entry_count) + sum(
            exact_flat_size(v, cal) for v in value.fields.values()
        )
    if isinstance(value, Map):
        return cal.map_overhead(len(value.entries)) + sum(
            exact_flat_size(k, cal) + exact_flat_size(v, cal) for k, v in value.entries.items()
        )
    if isinstance(value, BoundedSet):
        return (
            cal.bounded_set_overhead_words
            + cal.map_overhead(len(value.members))
            + sum(exact_flat_size(m, cal) for m in value.members)
        )
    raise TypeError(type(value))


@pytest.fixture
def flat_size() -> Callable[[Any], float]:
    return exact_flat_size
