from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from src.core.answers.input_validation import (
    sanitize_input,
    validate_crawl_id,
    validate_user_answer,
    validate_user_id,
)
from src.core.answers.synonyms import DEFAULT_SYNONYMS, SynonymTable
from src.core.answers.validator import validate_answer
from src.core.database.protocols import ProgressStore
from src.core.errors import StopNotAvailableError, UnknownStopError
from src.core.schedule.crawl_status import calculate_crawl_status
from src.core.schedule.reveal_gate import evaluate_stop_reveal
from src.core.schedule.stop_timing import get_all_stop_timings
from src.core.schedule.time_parser import try_parse_time_string
from src.core.schemas.crawl import CrawlProgress, CrawlScheduleInput, StopCompletion
from src.core.schemas.timing import CrawlStatus, RevealState, StopTiming
from src.core.utils.logger import logger


class CrawlSession:
    """One user working through one crawl.

    Holds no timing state of its own: every call recomputes from the crawl
    record, the progress store and the instant it is given.
    """

    def __init__(
        self,
        crawl: CrawlScheduleInput,
        user_id: str,
        progress_store: ProgressStore,
        synonyms: SynonymTable = DEFAULT_SYNONYMS,
    ):
        if not validate_crawl_id(crawl.crawl_id):
            raise ValueError(f"Invalid crawl id: {crawl.crawl_id!r}")
        if not validate_user_id(user_id):
            raise ValueError(f"Invalid user id: {user_id!r}")

        self.crawl = crawl
        self.crawl_id = crawl.crawl_id.strip()
        self.user_id = user_id.strip()
        self.progress_store = progress_store
        self.synonyms = synonyms

    def status(self, now: Optional[datetime] = None) -> CrawlStatus:
        return calculate_crawl_status(
            self.crawl.start_time, self.crawl.duration, self.crawl.stops, now
        )

    def stop_timings(self, now: Optional[datetime] = None) -> List[StopTiming]:
        """Stop windows while the crawl is ongoing, otherwise an empty list."""
        now = now if now is not None else datetime.now()
        status = self.status(now)
        start = try_parse_time_string(self.crawl.start_time, now)
        if status.status != "ongoing" or start is None:
            return []
        return get_all_stop_timings(
            start, status.stop_durations, status.current_stop_index or 0, now
        )

    def stop_reveal(self, stop_number: int, now: Optional[datetime] = None) -> RevealState:
        if self.crawl.get_stop(stop_number) is None:
            raise UnknownStopError(stop_number)
        now = now if now is not None else datetime.now()
        start = try_parse_time_string(self.crawl.start_time, now)
        return evaluate_stop_reveal(start, stop_number - 1, self.crawl.stops, now)

    def progress(self) -> CrawlProgress:
        stored = self.progress_store.get_progress(self.user_id, self.crawl_id)
        if stored is not None:
            return stored
        return CrawlProgress(
            crawl_id=self.crawl_id,
            current_stop=1,
            completed_stops=[],
            total_stops=len(self.crawl.stops),
        )

    def submit_answer(
        self, stop_number: int, answer: str, now: Optional[datetime] = None
    ) -> bool:
        """
        Check an answer for a stop and record the completion when accepted.

        Stops without a canonical answer (photo, button, location...) accept
        any non-empty safe input.

        Returns:
            bool: True if accepted and recorded, False if the answer is wrong.

        Raises:
            UnknownStopError: If the crawl has no such stop.
            StopNotAvailableError: If the stop is still behind its reveal gate.
        """
        now = now if now is not None else datetime.now()

        stop = self.crawl.get_stop(stop_number)
        if stop is None:
            raise UnknownStopError(stop_number)

        reveal = self.stop_reveal(stop_number, now)
        if not reveal.is_available:
            raise StopNotAvailableError(stop_number, reveal.seconds_until_reveal or 0)

        if stop.answer:
            accepted = validate_answer(answer, stop.answer, self.synonyms)
        else:
            accepted = validate_user_answer(answer)

        if not accepted:
            logger.info(
                "Answer rejected for crawl %s stop %s", self.crawl_id, stop_number
            )
            return False

        completion = StopCompletion(
            crawl_id=self.crawl_id,
            user_id=self.user_id,
            stop_number=stop_number,
            user_answer=sanitize_input(answer),
            completed_at=now,
        )
        try:
            self.progress_store.record_completion(completion)
        except Exception:
            logger.exception(
                "Failed to record completion for crawl %s stop %s",
                self.crawl_id,
                stop_number,
            )
            raise

        logger.info("Stop %s completed on crawl %s", stop_number, self.crawl_id)
        return True
