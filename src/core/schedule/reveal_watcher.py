import asyncio
from datetime import datetime
from typing import Callable, Optional

from src.core.schedule.reveal_gate import seconds_until_reveal
from src.core.utils.configs import engine_config
from src.core.utils.logger import logger


def signal_handler(signum: int, stop_event) -> None:
    """Signal handler that stops every reveal watcher sharing ``stop_event``."""
    logger.info("Signal %s received. Stopping reveal watchers.", signum)

    if stop_event is not None:
        try:
            stop_event.set()
        except Exception:
            logger.debug("Failed to signal stop_event to the loop")


async def watch_stop_reveal(
    reveal_time: datetime,
    stop_event: asyncio.Event,
    on_tick: Optional[Callable[[int], None]] = None,
    tick_interval: Optional[float] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> bool:
    """
    Re-evaluate a reveal gate on a fixed tick until the stop opens.

    Every tick reads ``clock()`` afresh, so the gate flips on the first tick
    at or after ``reveal_time`` no matter how often it is polled.

    Args:
        reveal_time: When the stop becomes available.
        stop_event: Set it to stop watching.
        on_tick: Called with the seconds remaining on every gated tick.
        tick_interval: Seconds between ticks. Defaults to REVEAL_TICK_SECONDS.
        clock: Source of the current instant.

    Returns:
        True once the stop is available, False if stopped before that.
    """
    if tick_interval is None:
        tick_interval = engine_config().reveal_tick_seconds

    logger.debug(
        "Watching reveal at %s (ticking every %ss)", reveal_time.isoformat(), tick_interval
    )

    while not stop_event.is_set():
        remaining = seconds_until_reveal(reveal_time, clock())
        if remaining is None:
            logger.info("Stop revealed at %s", reveal_time.isoformat())
            return True

        if on_tick is not None:
            on_tick(remaining)

        try:
            # Wait for the tick or until the watcher is stopped.
            await asyncio.wait_for(stop_event.wait(), timeout=tick_interval)
        except asyncio.TimeoutError:
            continue
        except asyncio.CancelledError:
            logger.info("Reveal watcher task cancelled.")
            raise

    logger.info("Reveal watcher stopped before reveal.")
    return False
