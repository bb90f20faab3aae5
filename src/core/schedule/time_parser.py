import re
from datetime import datetime, time
from typing import Optional

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from src.core.errors import InvalidTimeStringError
from src.core.utils.logger import logger

# "HH:MM" or "HH:MM:SS"
_TIME_OF_DAY = re.compile(r"^\s*(\d{1,2}):(\d{1,2})(?::(\d{1,2}))?\s*$")


def _parse_absolute(text: str) -> datetime:
    try:
        parsed = isoparse(text.strip())
    except (ValueError, OverflowError) as error:
        raise InvalidTimeStringError(text) from error

    # Wall-clock math only: offsets are folded into local naive time
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _parse_time_of_day(text: str, now: datetime) -> datetime:
    match = _TIME_OF_DAY.match(text)
    if not match:
        raise InvalidTimeStringError(text)

    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3)) if match.group(3) else 0
    try:
        target = datetime.combine(now.date(), time(hour, minute, second))
    except ValueError as error:
        raise InvalidTimeStringError(text) from error

    # Next occurrence: a time already reached today means tomorrow
    if target <= now:
        target += relativedelta(days=1)
    return target


def parse_time_string(text: str, now: Optional[datetime] = None) -> datetime:
    """
    Parse a crawl start time into a local point in time.

    Supported formats:
        "YYYY-MM-DD HH:MM[:SS]"  absolute timestamp, taken as is.
        "HH:MM[:SS]"             time of day; the next occurrence strictly after
                                 now, rolling forward one day when it is not
                                 strictly in the future.

    Args:
        text: The time string. Anything containing "-" is treated as absolute.
        now: Current instant. Defaults to datetime.now().

    Returns:
        datetime: Naive local datetime.

    Raises:
        InvalidTimeStringError: If the text cannot be parsed.
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidTimeStringError(str(text))

    if "-" in text:
        return _parse_absolute(text)

    return _parse_time_of_day(text, now if now is not None else datetime.now())


def try_parse_time_string(
    text: Optional[str], now: Optional[datetime] = None
) -> Optional[datetime]:
    """Like parse_time_string, but returns None for missing or invalid input."""
    if not text:
        return None
    try:
        return parse_time_string(text, now)
    except InvalidTimeStringError:
        logger.warning("Unparseable crawl start time: %r", text)
        return None
