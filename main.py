from minheap import IndexedMinHeap, PerformanceTracker


keys = [10, 3, 15, 7, 20, 1]

# Bulk build: handle i belongs to keys[i]
print("Creating heap...")
tracker = PerformanceTracker()
heap = IndexedMinHeap.heapify(keys, tracker)

print(f"Heap size: {len(heap)}")
print(f"Is empty: {heap.is_empty()}")
print(f"Minimum: {heap.peek_min()}")

# Lower the key of the element that started as 20
heap.decrease_key(4, 0)
print(f"Minimum after decrease_key: {heap.peek_min()}")
print(f"Counters: {tracker}")
