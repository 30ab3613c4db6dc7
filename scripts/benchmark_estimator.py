"""Benchmark estimation: sampled estimates vs full enumeration on a synthetic session store."""
from __future__ import annotations

import os
import random
import sys
import time
from dataclasses import dataclass, field

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import structlog

from config.logging_config import configure_logging

logger = structlog.get_logger(__name__)

SAMPLE_SIZES = [10, 100, 1000]
REPEATS = 5


@dataclass
class Session:
    user_id: int
    token: str
    history: list = field(default_factory=list)
    flags: frozenset = frozenset()


@dataclass
class Store:
    sessions: dict
    lookups: dict
    name: str = "bench"


def build_store(n_sessions: int, seed: int = 0) -> Store:
    rng = random.Random(seed)
    sessions = {
        i: Session(
            user_id=i,
            token="t" * rng.randint(8, 200),
            history=[rng.random() for _ in range(rng.randint(0, 50))],
            flags=frozenset(rng.sample(range(20), rng.randint(0, 5))),
        )
        for i in range(n_sessions)
    }
    lookups = {f"user-{i}": i for i in range(n_sessions)}
    return Store(sessions=sessions, lookups=lookups)


def timed(fn, *args, **kwargs) -> tuple[float, int]:
    start = time.perf_counter()
    result = fn(*args, **kwargs)
    return result, int((time.perf_counter() - start) * 1000)


def main() -> None:
    configure_logging()

    from core.estimator.footprint import estimate, summarize

    n_sessions = int(sys.argv[1]) if len(sys.argv) > 1 else 20_000
    store = build_store(n_sessions)

    # A sample larger than every collection enumerates everything
    exact, exact_ms = timed(estimate, store, sample_size=10 * n_sessions)
    logger.info("benchmark.exact", sessions=n_sessions, words=exact, elapsed_ms=exact_ms)

    print("=" * 70)
    print(f"Estimator benchmark: {n_sessions} sessions, exact {exact:,.0f} words ({exact_ms} ms)")
    print("=" * 70)
    print(f"{'sample':>8} {'mean words':>16} {'max |err|':>10} {'mean ms':>9}")

    for sample_size in SAMPLE_SIZES:
        results = [timed(estimate, store, sample_size=sample_size) for _ in range(REPEATS)]
        sizes = [size for size, _ in results]
        mean = sum(sizes) / len(sizes)
        worst = max(abs(size - exact) / exact for size in sizes)
        mean_ms = sum(ms for _, ms in results) / len(results)
        print(f"{sample_size:>8} {mean:>16,.0f} {worst:>9.2%} {mean_ms:>9.1f}")

    print()
    print("Per-field summary (kilobytes, sample_size=100):")
    for entry in summarize(store, unit="kilobyte", sort_by_size=True):
        print(f"  {entry.size:>12,.2f} KB  {'.'.join(entry.path) or '<root>'}")


if __name__ == "__main__":
    main()
