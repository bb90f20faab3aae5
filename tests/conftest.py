from datetime import datetime
from typing import Dict, List, Optional, Tuple

import pytest

from src.core.schemas.crawl import CrawlProgress, StopCompletion, StopDefinition


class InMemoryProgressStore:
    """Progress store double that keeps completions in a dict."""

    def __init__(self):
        self.completions: List[StopCompletion] = []
        self._progress: Dict[Tuple[str, str], CrawlProgress] = {}

    def seed(self, user_id: str, progress: CrawlProgress) -> None:
        self._progress[(user_id, progress.crawl_id)] = progress

    def get_progress(self, user_id: str, crawl_id: str) -> Optional[CrawlProgress]:
        return self._progress.get((user_id, crawl_id))

    def record_completion(self, completion: StopCompletion) -> None:
        self.completions.append(completion)


def make_stops(count: int, reveal_minutes: Optional[List[Optional[float]]] = None):
    """Build ``count`` stops numbered 1..count, optionally with reveal minutes."""
    stops = []
    for index in range(count):
        reveal = reveal_minutes[index] if reveal_minutes is not None else None
        stops.append(StopDefinition(stop_number=index + 1, reveal_after_minutes=reveal))
    return stops


@pytest.fixture
def now():
    """A fixed instant every timing test is evaluated against."""
    return datetime(2025, 6, 1, 18, 0, 0)


@pytest.fixture
def stops_factory():
    return make_stops


@pytest.fixture
def progress_store():
    return InMemoryProgressStore()
