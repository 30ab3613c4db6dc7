"""Entry points: ``estimate`` for a total, ``summarize`` for a per-field breakdown.

Both accept value-model instances or live Python data (dicts, lists,
dataclasses, pydantic models, ...). Each call samples with its own random
generator, so repeated calls over large collections differ within sampling
variance; pass ``seed`` only when a reproducible draw is wanted.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from core.estimator.calibration import load_calibration
from core.estimator.field_summarizer import FieldSummarizer
from core.estimator.term_estimator import TermEstimator
from models.schemas import SummaryEntry, SummaryOptions


@lru_cache(maxsize=1)
def default_estimator() -> TermEstimator:
    # Built once from the calibration file named in settings
    return TermEstimator(load_calibration())


def estimate(value: Any, sample_size: Optional[int] = None, seed: Any = None) -> float:
    """Estimated heap words of ``value``, excluding the word that refers to it."""
    return default_estimator().estimate(value, sample_size, seed=seed)


def summarize(
    value: Any,
    options: SummaryOptions | None = None,
    seed: Any = None,
    **overrides: Any,
) -> list[SummaryEntry]:
    """Per-field memory breakdown of a record tree.

    Keyword overrides are merged into ``options`` and validated, e.g.
    ``summarize(state, unit="kilobyte", max_depth=1)``.
    """
    if overrides:
        base = options.model_dump() if options else {}
        options = SummaryOptions(**{**base, **overrides})
    return FieldSummarizer(default_estimator()).summarize(value, options, seed=seed)
