from typing import Any


class HeapError(Exception):
    """Base class for every error raised by the indexed heap."""


class EmptyHeapError(HeapError, IndexError):
    """Raised by ``peek_min`` / ``extract_min`` on a heap with no elements."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} from empty heap")
        self.operation = operation


class InvalidHandleError(HeapError, LookupError):
    """Raised when a handle has no active position in the heap.

    That covers ids that were never issued by this heap, ids whose element
    has already been extracted, and values that are not integer ids at all.
    """

    def __init__(self, handle: Any) -> None:
        super().__init__(f"handle is not in heap: {handle!r}")
        self.handle = handle


class InvalidKeyDirectionError(HeapError, ValueError):
    """Raised by ``decrease_key`` when the requested key is larger."""

    def __init__(self, handle: int, current: int, requested: int) -> None:
        super().__init__(
            f"new key {requested} must be <= current key {current} "
            f"(handle {handle})"
        )
        self.handle = handle
        self.current = current
        self.requested = requested
