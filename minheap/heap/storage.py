from typing import Optional

import numpy as np

from minheap.logger import init_logger

logger = init_logger(__name__)

KEY_DTYPE = np.int64

# Internal marker for "no position"; never returned from HandleIndex.resolve.
_ABSENT = -1


class GrowableStore:
    """
    Parallel key / handle-id arrays indexed by heap position.

    Both arrays always share the same capacity. Capacity grows geometrically
    (x2, or straight to the requested minimum if that is larger), so the cost
    of growth amortizes to O(1) per appended element.

    Parameters
    ----------
    capacity : int
        Initial number of slots, clamped to at least 1.
    """

    __slots__ = ("keys", "ids")

    def __init__(self, capacity: int = 1) -> None:
        capacity = max(int(capacity), 1)
        self.keys = np.zeros(capacity, dtype=KEY_DTYPE)
        self.ids = np.zeros(capacity, dtype=np.int64)

    def load(self, values: np.ndarray) -> None:
        """Copy ``values`` into positions 0..n-1 with ids equal to position."""
        n = len(values)
        self.ensure_capacity(n)
        self.keys[:n] = values
        self.ids[:n] = np.arange(n, dtype=np.int64)

    @property
    def capacity(self) -> int:
        return len(self.keys)

    @property
    def nbytes(self) -> int:
        return self.keys.nbytes + self.ids.nbytes

    def ensure_capacity(self, minimum: int) -> int:
        """
        Grow both arrays so that at least ``minimum`` slots exist.

        Returns
        -------
        int
            Number of slots added, 0 when the current capacity sufficed.
        """
        old = self.capacity
        if minimum <= old:
            return 0
        new_capacity = max(minimum, old * 2)
        keys = np.zeros(new_capacity, dtype=KEY_DTYPE)
        ids = np.zeros(new_capacity, dtype=np.int64)
        keys[:old] = self.keys
        ids[:old] = self.ids
        self.keys = keys
        self.ids = ids
        logger.debug("store grown from %d to %d slots", old, new_capacity)
        return new_capacity - old


class HandleIndex:
    """Maps handle-ids to their current heap position.

    Ids are issued monotonically and never reused, so the mapping is a flat
    array indexed by id. Slots that hold no live element resolve to ``None``.
    """

    __slots__ = ("_pos",)

    def __init__(self, capacity: int = 1) -> None:
        self._pos = np.full(max(int(capacity), 1), _ABSENT, dtype=np.int64)

    @property
    def capacity(self) -> int:
        return len(self._pos)

    @property
    def nbytes(self) -> int:
        return self._pos.nbytes

    def ensure(self, handle: int) -> int:
        """Grow so ``handle`` has a slot; returns the number of slots added."""
        old = self.capacity
        if handle < old:
            return 0
        new_capacity = max(handle + 1, old * 2)
        pos = np.full(new_capacity, _ABSENT, dtype=np.int64)
        pos[:old] = self._pos
        self._pos = pos
        logger.debug("handle index grown from %d to %d slots", old, new_capacity)
        return new_capacity - old

    def resolve(self, handle: int) -> Optional[int]:
        if handle < 0 or handle >= len(self._pos):
            return None
        position = int(self._pos[handle])
        if position == _ABSENT:
            return None
        return position

    def set(self, handle: int, position: int) -> None:
        self._pos[handle] = position

    def set_range(self, count: int) -> None:
        """Map ids 0..count-1 to positions 0..count-1 (bulk build)."""
        self._pos[:count] = np.arange(count, dtype=np.int64)

    def clear(self, handle: int) -> None:
        self._pos[handle] = _ABSENT
