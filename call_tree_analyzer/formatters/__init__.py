"""Formatting and serialization helpers."""

from .time_formatter import format_time, convert_duration
from .structural_hash import structural_hash, structural_digest
from .interval_merger import merge_intervals, effective_duration, calculate_parallelism_factor

__all__ = [
    "format_time",
    "convert_duration",
    "structural_hash",
    "structural_digest",
    "merge_intervals",
    "effective_duration",
    "calculate_parallelism_factor",
]
