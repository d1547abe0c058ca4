"""Core interfaces for the reward calculation system."""

from .performance_source import PerformanceDataSource, PerformanceBounds

__all__ = [
    "PerformanceDataSource",
    "PerformanceBounds",
]
