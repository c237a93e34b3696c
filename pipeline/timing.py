"""
Timing helpers — Whole-millisecond arithmetic for caption timestamps.

Segment times arrive as binary floats, so 11.2 - 10.0 is 1.1999999999999993.
Thresholds and rendered timestamps are compared in integer milliseconds,
rounded half-up from the shortest decimal form of each value.
"""

from decimal import Decimal, ROUND_HALF_UP

_MILLI = Decimal("0.001")


def to_millis(seconds: float) -> int:
    """Round seconds to whole milliseconds, half-up (0.0005 -> 1)."""
    return int(Decimal(repr(float(seconds))).quantize(_MILLI, rounding=ROUND_HALF_UP) * 1000)


def span_millis(start_sec: float, end_sec: float) -> int:
    """Distance between two times in whole milliseconds."""
    return to_millis(end_sec) - to_millis(start_sec)
