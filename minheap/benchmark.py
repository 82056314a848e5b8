"""
Randomized workload benchmark for the indexed min-heap.

Each run bulk-builds a heap of ``n`` random 32-bit keys, then replays a
random mix of decrease-key, extract-min and insert operations while the
heap reports into a ``PerformanceTracker``. One ``BenchmarkResult`` is
produced per heap size and can be written out as a CSV row.
"""

import csv
from dataclasses import astuple, dataclass, fields
from typing import IO, Iterable

import numpy as np

from minheap.heap import (
    IndexedMinHeap,
    InvalidHandleError,
    InvalidKeyDirectionError,
)
from minheap.logger import init_logger
from minheap.metrics import PerformanceTracker

logger = init_logger(__name__)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Keys used by decrease-key are drawn from [0, DECREASE_KEY_BOUND).
DECREASE_KEY_BOUND = 100
DECREASE_KEY_ATTEMPTS = 3


@dataclass(frozen=True)
class BenchmarkConfig:
    sizes: tuple[int, ...] = (100, 1000, 10000)
    seed: int = 42
    ops: int = 10000
    dec_ratio: float = 0.5

    def __post_init__(self) -> None:
        if not self.sizes:
            raise ValueError("at least one heap size is required")
        if any(n <= 0 for n in self.sizes):
            raise ValueError(f"heap sizes must be positive, got {self.sizes}")
        if self.ops < 0:
            raise ValueError(f"ops must be >= 0, got {self.ops}")
        if not 0.0 <= self.dec_ratio <= 1.0:
            raise ValueError(f"dec_ratio must be in [0, 1], got {self.dec_ratio}")


@dataclass(frozen=True)
class BenchmarkResult:
    seed: int
    n: int
    build_ns: int
    ops: int
    op_ns: int
    comparisons: int
    array_accesses: int
    swaps: int
    mem_bytes: int
    extracts: int
    decreases: int
    inserts: int

    def as_row(self) -> list[int]:
        return list(astuple(self))


CSV_HEADER = [f.name for f in fields(BenchmarkResult)]


def _random_key(rng: np.random.Generator) -> int:
    return int(rng.integers(INT32_MIN, INT32_MAX, endpoint=True))


def run_workload(
    n: int,
    ops: int,
    dec_ratio: float,
    rng: np.random.Generator,
    seed: int = 0,
) -> BenchmarkResult:
    """
    Build a heap of ``n`` random keys and apply ``ops`` random operations.

    With probability ``dec_ratio`` (and a non-empty heap) an operation is a
    decrease-key on a randomly chosen issued handle; up to
    ``DECREASE_KEY_ATTEMPTS`` handles are tried, skipping ones that are no
    longer in the heap or whose key is already below the new key. Otherwise
    a fair coin picks extract-min (when the heap is non-empty) or insert.

    Parameters
    ----------
    n : int
        Initial heap size.
    ops : int
        Number of operations to draw.
    dec_ratio : float
        Probability of choosing decrease-key.
    rng : np.random.Generator
        Source of randomness.
    seed : int
        Seed recorded in the result row.

    Returns
    -------
    BenchmarkResult
        Counters from the build and the operation phase combined.
    """
    initial = rng.integers(INT32_MIN, INT32_MAX, size=n, endpoint=True)

    build_tracker = PerformanceTracker()
    heap = IndexedMinHeap.heapify(initial, build_tracker)
    build_ns = build_tracker.elapsed_ns

    # Every handle ever issued; some go stale after extraction.
    handles = list(range(n))
    extracts = decreases = inserts = 0

    ops_tracker = PerformanceTracker()
    ops_tracker.start()
    for _ in range(ops):
        if rng.random() < dec_ratio and len(heap) > 0:
            for _ in range(DECREASE_KEY_ATTEMPTS):
                handle = handles[int(rng.integers(len(handles)))]
                new_key = int(rng.integers(DECREASE_KEY_BOUND))
                try:
                    heap.decrease_key(handle, new_key)
                except (InvalidHandleError, InvalidKeyDirectionError):
                    continue
                decreases += 1
                break
            continue

        if rng.random() < 0.5 and len(heap) > 0:
            heap.extract_min()
            extracts += 1
        else:
            handles.append(heap.insert(_random_key(rng)))
            inserts += 1
    ops_tracker.stop()
    op_ns = ops_tracker.elapsed_ns

    # The heap reported every count into build_tracker.
    ops_tracker.add(build_tracker)

    return BenchmarkResult(
        seed=seed,
        n=n,
        build_ns=build_ns,
        ops=ops,
        op_ns=op_ns,
        comparisons=ops_tracker.comparisons,
        array_accesses=ops_tracker.array_accesses,
        swaps=ops_tracker.swaps,
        mem_bytes=max(0, ops_tracker.mem_bytes),
        extracts=extracts,
        decreases=decreases,
        inserts=inserts,
    )


def run_benchmark(config: BenchmarkConfig) -> list[BenchmarkResult]:
    """Run one workload per configured size from a single seeded generator."""
    rng = np.random.default_rng(config.seed)
    results = []
    for n in config.sizes:
        result = run_workload(n, config.ops, config.dec_ratio, rng, seed=config.seed)
        logger.info(
            "n=%d build=%.3f ms ops=%.3f ms (%d extracts, %d decreases, %d inserts)",
            n,
            result.build_ns / 1e6,
            result.op_ns / 1e6,
            result.extracts,
            result.decreases,
            result.inserts,
        )
        results.append(result)
    return results


def write_csv(results: Iterable[BenchmarkResult], stream: IO[str]) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for result in results:
        writer.writerow(result.as_row())
