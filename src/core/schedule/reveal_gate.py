"""
Reveal gating for public/scheduled crawls.

A crawl is reveal-gated as soon as any of its stops carries
``reveal_after_minutes``. Stop ``i`` opens at the crawl start plus the
reveal minutes of stops ``0..i`` *including* stop ``i`` itself. This is a
different accumulation than the stop windows in ``stop_timing``, which only
add up the stops *before* the target.
"""

import math
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from src.core.schedule.formatting import format_time_remaining
from src.core.schedule.time_parser import try_parse_time_string
from src.core.schemas.crawl import CrawlScheduleInput, StopDefinition
from src.core.schemas.timing import RevealState
from src.core.utils.logger import logger


def is_public_crawl(stops: Sequence[StopDefinition]) -> bool:
    return any(stop.reveal_after_minutes is not None for stop in stops)


def cumulative_reveal_minutes(stops: Sequence[StopDefinition], stop_index: int) -> float:
    """Reveal minutes of stops 0..stop_index, inclusive of the target stop."""
    if stop_index < 0:
        return 0.0
    return sum(stop.reveal_after_minutes or 0 for stop in stops[: stop_index + 1])


def stop_reveal_time(
    crawl_start: datetime, stop_index: int, stops: Sequence[StopDefinition]
) -> datetime:
    """Reveal instant of a stop, capped at datetime.max when out of range."""
    minutes = cumulative_reveal_minutes(stops, stop_index)
    try:
        return crawl_start + timedelta(minutes=minutes)
    except OverflowError:
        logger.warning(
            "Reveal time out of range for stop index %s (%s minutes)", stop_index, minutes
        )
        return datetime.max


def is_stop_available(reveal_time: datetime, now: Optional[datetime] = None) -> bool:
    now = now if now is not None else datetime.now()
    return now >= reveal_time


def seconds_until_reveal(
    reveal_time: datetime, now: Optional[datetime] = None
) -> Optional[int]:
    """Whole seconds left before the reveal, rounded up; None once revealed."""
    now = now if now is not None else datetime.now()
    if now >= reveal_time:
        return None
    return math.ceil((reveal_time - now).total_seconds())


def evaluate_stop_reveal(
    crawl_start: Optional[datetime],
    stop_index: int,
    stops: Sequence[StopDefinition],
    now: Optional[datetime] = None,
) -> RevealState:
    """
    Availability of one stop at ``now``.

    Crawls without reveal minutes, or without a start, are never gated.
    """
    if crawl_start is None or not is_public_crawl(stops):
        return RevealState(is_available=True)

    now = now if now is not None else datetime.now()
    reveal_time = stop_reveal_time(crawl_start, stop_index, stops)
    remaining = seconds_until_reveal(reveal_time, now)
    if remaining is None:
        return RevealState(reveal_time=reveal_time, is_available=True)

    return RevealState(
        reveal_time=reveal_time,
        is_available=False,
        seconds_until_reveal=remaining,
        countdown=format_time_remaining(remaining),
    )


def public_crawl_end_time(
    crawl_start: datetime, stops: Sequence[StopDefinition]
) -> datetime:
    return stop_reveal_time(crawl_start, len(stops) - 1, stops)


def is_public_crawl_completed(
    crawl_start: datetime,
    stops: Sequence[StopDefinition],
    now: Optional[datetime] = None,
) -> bool:
    now = now if now is not None else datetime.now()
    return now > public_crawl_end_time(crawl_start, stops)


def filter_upcoming_public_crawls(
    crawls: Iterable[CrawlScheduleInput], now: Optional[datetime] = None
) -> List[CrawlScheduleInput]:
    """
    Keep the public crawls that have not finished yet, in their original order.

    Crawls without a usable start time are dropped.
    """
    now = now if now is not None else datetime.now()

    upcoming = []
    for crawl in crawls:
        start = try_parse_time_string(crawl.start_time, now)
        if start is None:
            logger.info("Skipping crawl %s without a usable start time", crawl.crawl_id)
            continue
        if public_crawl_end_time(start, crawl.stops) > now:
            upcoming.append(crawl)
    return upcoming
