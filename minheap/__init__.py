from minheap.heap import (
    EmptyHeapError,
    HeapError,
    IndexedMinHeap,
    InvalidHandleError,
    InvalidKeyDirectionError,
    heapify,
)
from minheap.metrics import PerformanceTracker
