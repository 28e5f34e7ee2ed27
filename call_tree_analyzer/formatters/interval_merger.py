"""
Interval merging utility for calculating effective (wall-clock) time
from overlapping call spans.
"""
from typing import List, Tuple


def merge_intervals(intervals: List[Tuple[float, float]]) -> List[Tuple[float, float]]:
    """
    Merge overlapping or touching intervals.

    Example:
        Input: [(0, 100), (50, 150), (200, 300)]
        Output: [(0, 150), (200, 300)]

    Args:
        intervals: List of (start_ms, end_ms) tuples

    Returns:
        Sorted, non-overlapping intervals. Empty or inverted intervals are dropped.
    """
    valid = sorted((s, e) for s, e in intervals if e > s)
    if not valid:
        return []

    merged = [valid[0]]
    for start, end in valid[1:]:
        last_start, last_end = merged[-1]
        if start <= last_end:
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def effective_duration(intervals: List[Tuple[float, float]]) -> float:
    """
    Total time covered by the intervals once overlaps are merged.

    Args:
        intervals: List of (start_ms, end_ms) tuples

    Returns:
        Covered time in milliseconds
    """
    return sum(end - start for start, end in merge_intervals(intervals))


def calculate_parallelism_factor(cumulative_ms: float, effective_ms: float) -> float:
    """
    Calculate how much parallelism a set of calls achieved.

    Args:
        cumulative_ms: Sum of all individual call durations
        effective_ms: Actual wall-clock time (merged intervals)

    Returns:
        Parallelism factor (>1 means parallel execution occurred)
    """
    if effective_ms <= 0:
        return 1.0
    return cumulative_ms / effective_ms
