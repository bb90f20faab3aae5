from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from src.core.errors import StopNotAvailableError, UnknownStopError
from src.core.schemas.crawl import CrawlProgress, CrawlScheduleInput, StopDefinition
from src.core.session.crawl_session import CrawlSession

START_AT = datetime(2025, 6, 1, 18, 0)


@pytest.fixture
def library_crawl():
    """A self-paced crawl with riddles and no reveal gates."""
    return CrawlScheduleInput(
        crawl_id="historic-downtown",
        start_time="2025-06-01 18:00",
        duration="2 hours",
        stops=[
            StopDefinition(stop_number=1, stop_type="riddle", answer="federal hall"),
            StopDefinition(stop_number=2, stop_type="photo"),
            StopDefinition(stop_number=3, stop_type="riddle", answer="wall street"),
            StopDefinition(stop_number=4, stop_type="button"),
        ],
    )


@pytest.fixture
def public_crawl():
    """A scheduled crawl whose stops open over time."""
    return CrawlScheduleInput(
        crawl_id="taste-quest",
        start_time="2025-06-01 18:00",
        duration="1 hours",
        is_public=True,
        stops=[
            StopDefinition(stop_number=1, answer="macaron", reveal_after_minutes=0),
            StopDefinition(stop_number=2, answer="croissant", reveal_after_minutes=20),
        ],
    )


class TestCrawlSessionSetup:
    def test_invalid_crawl_id(self, progress_store):
        crawl = CrawlScheduleInput(crawl_id="bad id", duration="1 hours")
        with pytest.raises(ValueError):
            CrawlSession(crawl, "user_1", progress_store)

    def test_missing_crawl_id(self, progress_store):
        with pytest.raises(ValueError):
            CrawlSession(CrawlScheduleInput(duration="1 hours"), "user_1", progress_store)

    def test_invalid_user_id(self, library_crawl, progress_store):
        with pytest.raises(ValueError):
            CrawlSession(library_crawl, "not a user", progress_store)


class TestCrawlSessionTiming:
    def test_status(self, library_crawl, progress_store):
        session = CrawlSession(library_crawl, "user_1", progress_store)
        status = session.status(START_AT + timedelta(minutes=45))

        assert status.status == "ongoing"
        assert status.current_stop_index == 1

    def test_stop_timings_while_ongoing(self, library_crawl, progress_store):
        session = CrawlSession(library_crawl, "user_1", progress_store)
        timings = session.stop_timings(START_AT + timedelta(minutes=45))

        assert [t.is_active for t in timings] == [False, True, False, False]
        assert [t.is_completed for t in timings] == [True, False, False, False]

    def test_stop_timings_before_start(self, library_crawl, progress_store):
        session = CrawlSession(library_crawl, "user_1", progress_store)
        assert session.stop_timings(START_AT - timedelta(minutes=1)) == []

    def test_reveal_of_unknown_stop(self, library_crawl, progress_store):
        session = CrawlSession(library_crawl, "user_1", progress_store)
        with pytest.raises(UnknownStopError):
            session.stop_reveal(9, START_AT)

    def test_library_stops_are_never_gated(self, library_crawl, progress_store):
        session = CrawlSession(library_crawl, "user_1", progress_store)
        assert session.stop_reveal(4, START_AT).is_available is True


class TestCrawlSessionProgress:
    def test_fresh_progress(self, library_crawl, progress_store):
        progress = CrawlSession(library_crawl, "user_1", progress_store).progress()

        assert progress.current_stop == 1
        assert progress.completed_stops == []
        assert progress.total_stops == 4
        assert progress.progress_percent == 0

    def test_stored_progress(self, library_crawl, progress_store):
        stored = CrawlProgress(
            crawl_id="historic-downtown", current_stop=3, completed_stops=[1, 2], total_stops=4
        )
        progress_store.seed("user_1", stored)

        progress = CrawlSession(library_crawl, "user_1", progress_store).progress()

        assert progress.progress_percent == 50


class TestSubmitAnswer:
    """Answer submission through the session."""

    def test_correct_answer_is_recorded(self, library_crawl, progress_store):
        session = CrawlSession(library_crawl, "user_1", progress_store)
        now = START_AT + timedelta(minutes=5)

        assert session.submit_answer(1, "Federal", now) is True

        completion = progress_store.completions[0]
        assert completion.crawl_id == "historic-downtown"
        assert completion.user_id == "user_1"
        assert completion.stop_number == 1
        assert completion.user_answer == "Federal"
        assert completion.completed_at == now

    def test_wrong_answer_is_not_recorded(self, library_crawl, progress_store):
        session = CrawlSession(library_crawl, "user_1", progress_store)

        assert session.submit_answer(3, "times square", START_AT) is False
        assert progress_store.completions == []

    def test_stop_without_answer_accepts_safe_input(self, library_crawl, progress_store):
        session = CrawlSession(library_crawl, "user_1", progress_store)

        assert session.submit_answer(4, "Button pressed", START_AT) is True
        assert session.submit_answer(2, "<script>alert(1)</script>", START_AT) is False
        assert len(progress_store.completions) == 1

    def test_unknown_stop(self, library_crawl, progress_store):
        session = CrawlSession(library_crawl, "user_1", progress_store)
        with pytest.raises(UnknownStopError):
            session.submit_answer(5, "anything", START_AT)

    def test_gated_stop_raises(self, public_crawl, progress_store):
        session = CrawlSession(public_crawl, "user_1", progress_store)
        now = START_AT + timedelta(minutes=19)

        with pytest.raises(StopNotAvailableError) as excinfo:
            session.submit_answer(2, "croissant", now)

        assert excinfo.value.seconds_remaining == 60
        assert progress_store.completions == []

    def test_gated_stop_opens_at_reveal_time(self, public_crawl, progress_store):
        session = CrawlSession(public_crawl, "user_1", progress_store)

        assert session.submit_answer(2, "croissants", START_AT + timedelta(minutes=20)) is True

    def test_store_failure_propagates(self, library_crawl):
        store = MagicMock()
        store.record_completion.side_effect = RuntimeError("database down")
        session = CrawlSession(library_crawl, "user_1", store)

        with pytest.raises(RuntimeError):
            session.submit_answer(1, "federal hall", START_AT)
