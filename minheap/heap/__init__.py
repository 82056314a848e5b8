from minheap.heap.errors import (
    EmptyHeapError,
    HeapError,
    InvalidHandleError,
    InvalidKeyDirectionError,
)
from minheap.heap.min_heap import IndexedMinHeap, heapify

__all__ = [
    "EmptyHeapError",
    "HeapError",
    "IndexedMinHeap",
    "InvalidHandleError",
    "InvalidKeyDirectionError",
    "heapify",
]
