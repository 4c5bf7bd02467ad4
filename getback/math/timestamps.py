"""
Monotonic timestamp helpers.

Freshness is judged against a monotonic clock, since wall-clock time
can jump when the system time is adjusted.
"""

import time
from typing import Optional
from ..exceptions import InvalidArgumentError


def timestamp_nano() -> int:
    """Current monotonic timestamp in nanoseconds."""
    return time.monotonic_ns()


def is_timestamp_recent(current_timestamp: int, previous_timestamp: int,
                        validity: int) -> bool:
    """
    Check if a timestamp is recent.

    Args:
        current_timestamp: Current timestamp
        previous_timestamp: Timestamp to check
        validity: Maximum difference between both timestamps

    Returns:
        True if previous_timestamp is not later than current_timestamp
        and lies within validity of it

    Raises:
        InvalidArgumentError: On negative timestamps or non-positive validity
    """
    if current_timestamp < 0:
        raise InvalidArgumentError("current_timestamp can't be a negative value")

    if previous_timestamp < 0:
        raise InvalidArgumentError("previous_timestamp can't be a negative value")

    if validity <= 0:
        raise InvalidArgumentError("validity should be a non-zero positive value")

    return (current_timestamp >= previous_timestamp and
            current_timestamp - previous_timestamp <= validity)


def is_received_recently(received_at: Optional[int], now: int, validity: int) -> bool:
    """Like is_timestamp_recent, treating a missing timestamp as stale."""
    if received_at is None:
        return False
    return is_timestamp_recent(now, received_at, validity)
