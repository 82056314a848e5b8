from typing import Any, Iterable, Optional

import numpy as np

from minheap.heap.errors import (
    EmptyHeapError,
    InvalidHandleError,
    InvalidKeyDirectionError,
)
from minheap.heap.storage import KEY_DTYPE, GrowableStore, HandleIndex
from minheap.metrics.tracker import PerformanceTracker

_KEY_MIN = int(np.iinfo(KEY_DTYPE).min)
_KEY_MAX = int(np.iinfo(KEY_DTYPE).max)


def _coerce_key(key: Any) -> int:
    if isinstance(key, (bool, np.bool_)) or not isinstance(key, (int, np.integer)):
        raise TypeError(f"heap keys must be integers, got {type(key).__name__}")
    key = int(key)
    if key < _KEY_MIN or key > _KEY_MAX:
        raise OverflowError(f"heap key {key} does not fit in a signed 64-bit integer")
    return key


def _coerce_handle(handle: Any) -> Optional[int]:
    if isinstance(handle, (bool, np.bool_)) or not isinstance(handle, (int, np.integer)):
        return None
    return int(handle)


class IndexedMinHeap:
    """
    Binary min-heap of integer keys with stable handles.

    Every element receives a handle-id when it enters the heap (``insert`` or
    ``heapify``). Handles never change while the element is alive and are
    never reissued once it is extracted, so callers can lower an element's
    key through ``decrease_key`` without knowing where it currently sits.

    Internals
    ---------
    - ``_store.keys`` / ``_store.ids``: parallel arrays in heap order.
    - ``_index``: handle-id -> current position, ``None`` when not present.
    - ``_next_id``: per-instance id allocator.

    Parameters
    ----------
    capacity : int
        Initial number of slots, clamped to at least 1.
    tracker : PerformanceTracker, optional
        Receives operation counts. The tracker is reset on construction.
        A private tracker is created when omitted.
    """

    __slots__ = ("_store", "_index", "_size", "_next_id", "_t")

    def __init__(
        self,
        capacity: int = 1,
        tracker: Optional[PerformanceTracker] = None,
    ) -> None:
        capacity = max(int(capacity), 1)
        self._store = GrowableStore(capacity)
        self._index = HandleIndex(capacity * 2)
        self._size = 0
        self._next_id = 0
        self._t = tracker if tracker is not None else PerformanceTracker()
        self._t.reset()
        self._t.inc_mem(self._nbytes())

    @classmethod
    def heapify(
        cls,
        values: Iterable[int],
        tracker: Optional[PerformanceTracker] = None,
    ) -> "IndexedMinHeap":
        """
        Build a heap from ``values`` in O(n).

        Handle ``i`` is assigned to ``values[i]``, i.e. handles follow input
        order, not the final heap order. The tracker's elapsed time covers the
        sift-down phase only.

        Parameters
        ----------
        values : Iterable[int]
            Keys to load. The input is copied.
        tracker : PerformanceTracker, optional
            Receives operation counts and the build time.

        Returns
        -------
        IndexedMinHeap
            A heap holding every value, with ``next_id == len(values)``.
        """
        keys = np.array([_coerce_key(v) for v in values], dtype=KEY_DTYPE)
        n = len(keys)

        heap = cls(n, tracker)
        heap._store.load(keys)
        heap._index.set_range(n)
        heap._size = n
        heap._next_id = n
        heap._t.inc_accesses(n)

        heap._t.start()
        for i in range((n >> 1) - 1, -1, -1):
            heap._sift_down(i)
        heap._t.stop()
        return heap

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _nbytes(self) -> int:
        return self._store.nbytes + self._index.nbytes

    def _ensure_capacity(self, minimum: int) -> None:
        before = self._nbytes()
        added = self._store.ensure_capacity(minimum)
        if added:
            self._t.inc_accesses(self._store.capacity)
            self._t.inc_mem(self._nbytes() - before)

    def _ensure_id_capacity(self, handle: int) -> None:
        before = self._nbytes()
        added = self._index.ensure(handle)
        if added:
            self._t.inc_accesses(self._index.capacity)
            self._t.inc_mem(self._nbytes() - before)

    def _position_of(self, handle: Any) -> int:
        handle = _coerce_handle(handle)
        pos = None if handle is None else self._index.resolve(handle)
        if pos is None or pos >= self._size:
            raise InvalidHandleError(handle)
        return pos

    def _swap(self, i: int, j: int) -> None:
        if i == j:
            return
        keys = self._store.keys
        ids = self._store.ids
        keys[i], keys[j] = keys[j], keys[i]
        ids[i], ids[j] = ids[j], ids[i]
        self._t.inc_accesses(4)
        self._t.inc_swaps(1)
        self._index.set(int(ids[i]), i)
        self._index.set(int(ids[j]), j)

    def _sift_up(self, idx: int) -> None:
        keys = self._store.keys
        t = self._t
        while idx > 0:
            parent = (idx - 1) >> 1
            t.inc_comparisons(1)
            t.inc_accesses(2)
            if keys[idx] < keys[parent]:
                self._swap(idx, parent)
                idx = parent
            else:
                break

    def _sift_down(self, idx: int) -> None:
        keys = self._store.keys
        n = self._size
        t = self._t
        while True:
            left = (idx << 1) + 1
            right = left + 1
            smallest = idx
            if left < n:
                t.inc_comparisons(1)
                t.inc_accesses(2)
                if keys[left] < keys[smallest]:
                    smallest = left
            if right < n:
                t.inc_comparisons(1)
                t.inc_accesses(2)
                if keys[right] < keys[smallest]:
                    smallest = right
            if smallest == idx:
                break
            self._swap(idx, smallest)
            idx = smallest

    def _validate(self) -> bool:
        """Check the heap property and handle index consistency."""
        keys = self._store.keys
        ids = self._store.ids
        n = self._size
        for i in range(n):
            left = 2 * i + 1
            right = left + 1
            if left < n and keys[left] < keys[i]:
                return False
            if right < n and keys[right] < keys[i]:
                return False
            if self._index.resolve(int(ids[i])) != i:
                return False
        return len(set(ids[:n].tolist())) == n

    # -----------------------------
    # Public API
    # -----------------------------
    @property
    def tracker(self) -> PerformanceTracker:
        return self._t

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def insert(self, key: int) -> int:
        """Insert ``key`` and return its handle (O(log n) amortized)."""
        key = _coerce_key(key)
        self._ensure_capacity(self._size + 1)
        handle = self._next_id
        self._ensure_id_capacity(handle)
        self._next_id += 1

        pos = self._size
        self._store.keys[pos] = key
        self._store.ids[pos] = handle
        self._index.set(handle, pos)
        self._t.inc_accesses(2)
        self._size += 1
        self._sift_up(pos)
        return handle

    def peek_min(self) -> int:
        """Return the smallest key without removing it (O(1))."""
        if self._size == 0:
            raise EmptyHeapError("peek_min")
        self._t.inc_accesses(1)
        return int(self._store.keys[0])

    def extract_min(self) -> int:
        """Remove and return the smallest key (O(log n)).

        The extracted element's handle stops resolving and is never reused.
        """
        if self._size == 0:
            raise EmptyHeapError("extract_min")
        top = int(self._store.keys[0])
        self._t.inc_accesses(1)
        last = self._size - 1
        self._swap(0, last)
        self._index.clear(int(self._store.ids[last]))
        self._size = last
        if last > 0:
            self._sift_down(0)
        return top

    def decrease_key(self, handle: int, new_key: int) -> None:
        """
        Lower the key of the element identified by ``handle``.

        Parameters
        ----------
        handle : int
            A handle previously returned by ``insert`` or assigned by
            ``heapify`` whose element is still in the heap.
        new_key : int
            Replacement key; must not exceed the current key. An equal key
            is accepted and leaves the heap unchanged.

        Raises
        ------
        InvalidHandleError
            If ``handle`` has no active position.
        InvalidKeyDirectionError
            If ``new_key`` is greater than the current key.
        """
        new_key = _coerce_key(new_key)
        pos = self._position_of(handle)
        current = int(self._store.keys[pos])
        self._t.inc_accesses(1)
        if new_key > current:
            raise InvalidKeyDirectionError(int(handle), current, new_key)
        self._store.keys[pos] = new_key
        self._sift_up(pos)

    def key_of(self, handle: int) -> int:
        """Return the current key of a live handle."""
        pos = self._position_of(handle)
        self._t.inc_accesses(1)
        return int(self._store.keys[pos])

    def __contains__(self, handle: Any) -> bool:
        try:
            self._position_of(handle)
        except InvalidHandleError:
            return False
        return True

    def contains(self, handle: Any) -> bool:
        return handle in self

    def merge(self, other: "IndexedMinHeap") -> None:
        """
        Reinsert every key of ``other`` into this heap.

        This is a meld by repeated insertion, O(m log(n + m)) for
        ``m = len(other)``. ``other`` is left untouched, and the reinserted
        elements get fresh handles from this heap: handles issued by
        ``other`` do not resolve here.
        """
        if not isinstance(other, IndexedMinHeap):
            raise TypeError(f"cannot merge {type(other).__name__} into IndexedMinHeap")
        pending = other._store.keys[:other._size].tolist()
        self._t.inc_accesses(len(pending))
        for key in pending:
            self.insert(key)

    def __repr__(self) -> str:
        if self._size == 0:
            return "IndexedMinHeap(size=0)"
        return f"IndexedMinHeap(size={self._size}, min={int(self._store.keys[0])})"


def heapify(
    values: Iterable[int],
    tracker: Optional[PerformanceTracker] = None,
) -> IndexedMinHeap:
    """Build an ``IndexedMinHeap`` from ``values`` in O(n)."""
    return IndexedMinHeap.heapify(values, tracker)
