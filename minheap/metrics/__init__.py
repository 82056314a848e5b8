from minheap.metrics.tracker import PerformanceTracker

__all__ = ["PerformanceTracker"]
