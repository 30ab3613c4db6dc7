from __future__ import annotations

import random
from typing import Any

import structlog

from core.estimator.sampling import make_rng
from core.estimator.term_estimator import TermEstimator
from models.adapters import to_value
from models.enums import SizeUnit
from models.errors import CyclicValueError
from models.schemas import SummaryEntry, SummaryOptions
from models.values import Record

_LEAVE = object()

logger = structlog.get_logger(__name__)

_UNIT_BYTES: dict[SizeUnit, int] = {
    SizeUnit.BYTE: 1,
    SizeUnit.KILOBYTE: 1024,
    SizeUnit.MEGABYTE: 1024 * 1024,
    SizeUnit.GIGABYTE: 1024 * 1024 * 1024,
}


def unit_scale(unit: SizeUnit, word_bytes: int = 8) -> float:
    """Words per ``unit``. Kilo is 1024, matching allocator reporting."""
    if unit == SizeUnit.WORD:
        return 1
    return _UNIT_BYTES[unit] / word_bytes


class FieldSummarizer:
    """
    Pipeline: value → flat list of (size, unit, path)

    Records are broken down field by field, recursively; every other value
    (maps, sets, lists, scalars) is a leaf measured by the TermEstimator.
    A record's own entry is its map overhead plus its fields' totals.

    Post-processing, in order:
    1. scale to the requested unit
    2. round to ``precision`` digits
    3. drop entries below ``min_size``
    4. drop entries deeper than ``max_depth``
    5. sort by path, or by size descending then path
    """

    def __init__(self, estimator: TermEstimator | None = None) -> None:
        self._estimator = estimator or TermEstimator()

    def summarize(
        self,
        value: Any,
        options: SummaryOptions | None = None,
        seed: Any = None,
    ) -> list[SummaryEntry]:
        options = options or SummaryOptions()
        raw = self._descend(value, options.sample_size, make_rng(seed))

        scale = unit_scale(options.unit, self._estimator.calibration.word_bytes)
        entries = [
            SummaryEntry(round(size / scale, options.precision), options.unit, path)
            for size, path in raw
        ]
        entries = [e for e in entries if e.size >= options.min_size]
        if options.max_depth is not None:
            entries = [e for e in entries if len(e.path) <= options.max_depth]

        if options.sort_by_size:
            entries.sort(key=lambda e: (-e.size, e.path))
        else:
            entries.sort(key=lambda e: e.path)

        logger.debug(
            "field_summarizer.completed",
            fields=len(raw),
            kept=len(entries),
            total_words=raw[0][0],
            unit=options.unit.value,
        )
        return entries

    def _descend(
        self,
        value: Any,
        sample_size: int,
        rng: random.Random,
    ) -> list[tuple[float, tuple[str, ...]]]:
        """Pre-order (size, path) list; each record's size includes its fields."""
        sizes: list[float] = []
        paths: list[tuple[str, ...]] = []
        children: dict[int, list[int]] = {}
        open_records: set[int] = set()
        stack: list[tuple[Any, tuple[str, ...], int]] = [(value, (), -1)]
        small_integer_bits = self._estimator.calibration.small_integer_bits

        while stack:
            node, path, parent = stack.pop()
            if node is _LEAVE:
                open_records.discard(parent)
                continue

            index = len(sizes)
            if parent >= 0:
                children[parent].append(index)
            paths.append(path)

            converted = to_value(node, small_integer_bits=small_integer_bits)
            if not isinstance(converted, Record):
                # Bounded sets land here too: their fixed overhead is part of term()
                sizes.append(self._estimator.term(node, sample_size, rng))
                continue

            if id(node) in open_records:
                raise CyclicValueError(node)
            open_records.add(id(node))
            sizes.append(self._estimator.map_overhead(converted.entry_count))
            children[index] = []
            # Fields are pushed in reverse so they pop in declaration order
            stack.append((_LEAVE, path, id(node)))
            for name, field_value in reversed(list(converted.fields.items())):
                stack.append((field_value, path + (name,), index))

        # Children always follow their parent, so finish records back to front
        for index in range(len(sizes) - 1, -1, -1):
            if index in children:
                fields_sum = 0.0
                for child in children[index]:
                    fields_sum += sizes[child]
                sizes[index] += fields_sum

        return list(zip(sizes, paths))
