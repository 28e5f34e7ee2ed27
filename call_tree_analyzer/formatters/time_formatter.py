"""
Formatting and unit conversion for call durations, which are stored in milliseconds.
"""


def format_time(ms: float) -> str:
    """
    Format a call duration in milliseconds as a human-readable string.

    Args:
        ms: Duration in milliseconds, as stored on a node

    Returns:
        Formatted time string (e.g., "123.45 ms", "2.34 s", "1m 30.50s")
    """
    if ms < 1000:
        return f"{ms:.2f} ms"
    elif ms < 60000:
        return f"{ms/1000:.2f} s"
    else:
        minutes = int(ms / 60000)
        seconds = (ms % 60000) / 1000
        return f"{minutes}m {seconds:.2f}s"


def convert_duration(duration_ms: float, unit: str) -> float:
    """
    Convert a millisecond duration to the requested unit.

    Args:
        duration_ms: Duration in milliseconds
        unit: 's', 'us' or 'ms'; anything else is treated as 'ms'

    Returns:
        Duration expressed in `unit`
    """
    if unit == 's':
        return duration_ms / 1000
    if unit == 'us':
        return duration_ms * 1000
    return duration_ms
