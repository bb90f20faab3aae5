"""
Interfaces of the data stores the engine talks to.

Persistence lives outside the engine; anything matching these protocols
(a hosted database client, a local cache, a test double) can be plugged in.
"""

from typing import Optional, Protocol

from src.core.schemas.crawl import CrawlProgress, CrawlScheduleInput, StopCompletion


class CrawlSource(Protocol):
    def get_crawl(self, crawl_id: str) -> Optional[CrawlScheduleInput]:
        """Return the crawl definition with its ordered stops, or None."""
        ...


class ProgressStore(Protocol):
    def get_progress(self, user_id: str, crawl_id: str) -> Optional[CrawlProgress]:
        """Return the stored progress of a user on a crawl, or None."""
        ...

    def record_completion(self, completion: StopCompletion) -> None:
        """Persist a completed stop."""
        ...
