from datetime import datetime

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60


def format_time_remaining(seconds: int) -> str:
    """
    Format a number of seconds into a tiered countdown label.

    Parameters:
        seconds (int): Non-negative number of seconds. Negative values are
            treated as 0 and fractions are floored.

    Returns:
        str: One of
            "2d 5h 30m"   at least one day,
            "8h 30m"      6 hours or more,
            "2h 30m 45s"  at least one hour,
            "30:45"       at least one minute,
            "45s"         otherwise.
    """
    total = max(0, int(seconds))
    days = total // SECONDS_PER_DAY
    hours = (total % SECONDS_PER_DAY) // SECONDS_PER_HOUR
    minutes = (total % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
    remaining_seconds = total % SECONDS_PER_MINUTE

    if days > 0:
        return f"{days}d {hours}h {minutes}m"
    if hours >= 6:
        return f"{hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h {minutes}m {remaining_seconds}s"
    if minutes > 0:
        return f"{minutes}:{remaining_seconds:02d}"
    return f"{remaining_seconds}s"


def format_time_since_start(elapsed_seconds: float) -> str:
    """Elapsed label for an ongoing crawl: "1h 5m in" or "5m in"."""
    total = max(0, int(elapsed_seconds))
    hours = total // SECONDS_PER_HOUR
    minutes = (total % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
    if hours > 0:
        return f"{hours}h {minutes}m in"
    return f"{minutes}m in"


def format_time_for_display(moment: datetime) -> str:
    """Short display form, e.g. "Sat, Oct 18, 06:30 PM"."""
    return f"{moment:%a, %b} {moment.day}, {moment:%I:%M %p}"
