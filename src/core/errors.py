"""
Centralized exception types for the crawl engine.
Timing helpers degrade to fallback values; these are raised only at the
seams where a caller has to decide what to do.
"""


class CrawlEngineError(Exception):
    """Base class for every error raised by the engine."""


class InvalidTimeStringError(CrawlEngineError, ValueError):
    """A start time string could not be turned into a point in time."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid time string: {value!r}")


class UnknownStopError(CrawlEngineError, LookupError):
    """The requested stop number does not exist in the crawl."""

    def __init__(self, stop_number: int):
        self.stop_number = stop_number
        super().__init__(f"Unknown stop number: {stop_number}")


class StopNotAvailableError(CrawlEngineError):
    """The stop is still behind its reveal gate."""

    def __init__(self, stop_number: int, seconds_remaining: int):
        self.stop_number = stop_number
        self.seconds_remaining = seconds_remaining
        super().__init__(
            f"Stop {stop_number} is not available for another {seconds_remaining}s"
        )
