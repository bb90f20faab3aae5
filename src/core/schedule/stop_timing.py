from datetime import datetime, timedelta
from typing import List, Mapping, Optional

from src.core.schemas.timing import StopTiming


def stop_start_offset_minutes(stop_number: int, allocation: Mapping[int, int]) -> int:
    """Minutes allotted to every stop before ``stop_number`` (the stop itself excluded)."""
    return sum(allocation.get(number, 0) for number in range(1, stop_number))


def get_stop_timing(
    stop_number: int,
    crawl_start: datetime,
    allocation: Mapping[int, int],
    current_stop_index: int,
    now: Optional[datetime] = None,
) -> StopTiming:
    """
    Resolve the [start, end] window of a single stop.

    Parameters:
        stop_number (int): 1-based stop number.
        crawl_start (datetime): Parsed crawl start.
        allocation (Mapping[int, int]): stop_number -> allotted minutes.
        current_stop_index (int): 0-based index from the status calculation.
        now (datetime, optional): Current instant. Defaults to datetime.now().

    Returns:
        StopTiming: The window plus active/completed flags. A stop is active
        only when it is the current stop and now falls inside its window
        (inclusive); it is completed when it comes before the current stop.
    """
    now = now if now is not None else datetime.now()

    start = crawl_start + timedelta(
        minutes=stop_start_offset_minutes(stop_number, allocation)
    )
    duration = allocation.get(stop_number, 0)
    end = start + timedelta(minutes=duration)

    is_current = stop_number == current_stop_index + 1
    return StopTiming(
        stop_number=stop_number,
        start_time=start,
        end_time=end,
        duration_minutes=duration,
        is_active=is_current and start <= now <= end,
        is_completed=stop_number < current_stop_index + 1,
    )


def get_all_stop_timings(
    crawl_start: datetime,
    allocation: Mapping[int, int],
    current_stop_index: int,
    now: Optional[datetime] = None,
) -> List[StopTiming]:
    now = now if now is not None else datetime.now()
    return [
        get_stop_timing(stop_number, crawl_start, allocation, current_stop_index, now)
        for stop_number in sorted(allocation)
    ]
