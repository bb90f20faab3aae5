import math
import re
from typing import Dict, Sequence

from src.core.schemas.crawl import StopDefinition
from src.core.utils.logger import logger

DEFAULT_DURATION_HOURS = 2.0

# "2 hours", "1.5 hour", "2-3 hours" (-> 3)
DURATION_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*hours?")


def parse_duration_hours(duration_label: str) -> float:
    """
    Extract the number of hours from an advertised duration label.

    Labels without a "<number> hour(s)" part fall back to
    DEFAULT_DURATION_HOURS instead of failing.
    """
    match = DURATION_PATTERN.search(duration_label or "")
    if not match:
        logger.debug(
            "No hours in duration label %r, using %s hours",
            duration_label,
            DEFAULT_DURATION_HOURS,
        )
        return DEFAULT_DURATION_HOURS
    return float(match.group(1))


def total_minutes_for(duration_label: str) -> int:
    return math.floor(parse_duration_hours(duration_label) * 60)


def allocate_stop_durations(
    duration_label: str, stops: Sequence[StopDefinition]
) -> Dict[int, int]:
    """
    Split a crawl's advertised duration across its stops.

    Every stop gets floor(total / n) minutes; the remainder is handed out one
    minute at a time to the earliest stops by list position, so the values
    always sum to floor(hours * 60).

    Parameters:
        duration_label (str): Label such as "2 hours".
        stops (Sequence[StopDefinition]): Stops in crawl order.

    Returns:
        Dict[int, int]: stop_number -> allotted minutes. Empty if there are
        no stops.
    """
    if not stops:
        return {}

    total_minutes = total_minutes_for(duration_label)
    per_stop, remainder = divmod(total_minutes, len(stops))

    return {
        stop.stop_number: per_stop + (1 if index < remainder else 0)
        for index, stop in enumerate(stops)
    }
