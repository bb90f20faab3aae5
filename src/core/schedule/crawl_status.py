from datetime import datetime, timedelta
from typing import Mapping, Optional, Sequence

from src.core.schedule.duration_allocator import (
    allocate_stop_durations,
    parse_duration_hours,
)
from src.core.schedule.formatting import format_time_remaining, format_time_since_start
from src.core.schedule.time_parser import try_parse_time_string
from src.core.schemas.crawl import StopDefinition
from src.core.schemas.timing import CrawlStatus
from src.core.utils.logger import logger


def find_current_stop_index(
    elapsed_minutes: float,
    stops: Sequence[StopDefinition],
    allocation: Mapping[int, int],
) -> int:
    """
    Walk the stops in order and return the 0-based index of the one that
    contains ``elapsed_minutes``.

    A stop is current while the remaining elapsed time still fits in its
    allotment (inclusive). Zero-minute stops are passed through unless the
    remaining time is exactly zero. Past the end the last stop is current.
    """
    if not stops:
        return 0

    remaining = elapsed_minutes
    current_index = 0
    for index, stop in enumerate(stops):
        allotted = allocation.get(stop.stop_number, 0)
        if remaining <= allotted:
            current_index = index
            break
        remaining -= allotted
        current_index = index + 1

    return max(0, min(current_index, len(stops) - 1))


def calculate_crawl_status(
    start_time: Optional[str],
    duration: str,
    stops: Sequence[StopDefinition] = (),
    now: Optional[datetime] = None,
) -> CrawlStatus:
    """
    Classify a scheduled crawl from wall-clock time.

    Args:
        start_time: Start time string, or None when the crawl is unscheduled.
        duration: Advertised duration label, e.g. "2 hours".
        stops: Stops in crawl order.
        now: Current instant. Defaults to datetime.now().

    Returns:
        CrawlStatus: "unknown" without a usable start time or when the
        estimated end falls outside the representable range; otherwise
        "upcoming" before the start, "ongoing" from the start through the
        estimated end (both inclusive) and "completed" afterwards.
    """
    now = now if now is not None else datetime.now()

    start = try_parse_time_string(start_time, now)
    if start is None:
        return CrawlStatus(status="unknown")

    try:
        end = start + timedelta(hours=parse_duration_hours(duration))
        allocation = allocate_stop_durations(duration, stops)
    except OverflowError:
        logger.warning(
            "Crawl end out of range for start %r and duration %r", start_time, duration
        )
        return CrawlStatus(status="unknown")

    if now < start:
        seconds_until = int((start - now).total_seconds())
        return CrawlStatus(
            status="upcoming",
            time_until_start=f"{format_time_remaining(seconds_until)} until start",
            estimated_end_time=end,
            stop_durations=allocation,
        )

    if now <= end:
        elapsed = now - start
        elapsed_minutes = elapsed.total_seconds() / 60
        return CrawlStatus(
            status="ongoing",
            time_since_start=format_time_since_start(elapsed.total_seconds()),
            estimated_end_time=end,
            current_stop_index=find_current_stop_index(
                elapsed_minutes, stops, allocation
            ),
            stop_durations=allocation,
        )

    return CrawlStatus(
        status="completed",
        estimated_end_time=end,
        stop_durations=allocation,
    )
