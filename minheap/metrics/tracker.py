import time


class PerformanceTracker:
    """
    Operation counters and a wall-clock timer for heap workloads.

    The heap reports comparisons, array accesses, swaps and memory growth
    into a tracker; benchmark drivers read the totals back. Nothing in the
    heap depends on what the tracker does with them.

    The tracker can also be used as a context manager, which brackets the
    block with ``start()`` / ``stop()``::

        with tracker:
            heap.extract_min()
    """

    __slots__ = (
        "_comparisons",
        "_array_accesses",
        "_swaps",
        "_mem_bytes",
        "_start_ns",
        "_elapsed_ns",
    )

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._comparisons = 0
        self._array_accesses = 0
        self._swaps = 0
        self._mem_bytes = 0
        self._start_ns = 0
        self._elapsed_ns = 0

    def start(self) -> None:
        self._start_ns = time.perf_counter_ns()

    def stop(self) -> None:
        self._elapsed_ns = time.perf_counter_ns() - self._start_ns

    def __enter__(self) -> "PerformanceTracker":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def inc_comparisons(self, n: int = 1) -> None:
        self._comparisons += n

    def inc_accesses(self, n: int = 1) -> None:
        self._array_accesses += n

    def inc_swaps(self, n: int = 1) -> None:
        self._swaps += n

    def inc_mem(self, nbytes: int) -> None:
        self._mem_bytes += nbytes

    @property
    def comparisons(self) -> int:
        return self._comparisons

    @property
    def array_accesses(self) -> int:
        return self._array_accesses

    @property
    def swaps(self) -> int:
        return self._swaps

    @property
    def mem_bytes(self) -> int:
        return self._mem_bytes

    @property
    def elapsed_ns(self) -> int:
        return self._elapsed_ns

    def add(self, other: "PerformanceTracker") -> None:
        """
        Fold ``other`` into this tracker.

        Counters and elapsed time are summed; memory takes the maximum of the
        two, since both trackers usually observed the same structure.
        """
        self._comparisons += other._comparisons
        self._array_accesses += other._array_accesses
        self._swaps += other._swaps
        self._mem_bytes = max(self._mem_bytes, other._mem_bytes)
        self._elapsed_ns += other._elapsed_ns

    def as_dict(self) -> dict[str, int]:
        return {
            "comparisons": self._comparisons,
            "array_accesses": self._array_accesses,
            "swaps": self._swaps,
            "mem_bytes": self._mem_bytes,
            "elapsed_ns": self._elapsed_ns,
        }

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v}" for k, v in self.as_dict().items())
        return f"PerformanceTracker({fields})"
