from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

# Stop kinds a crawl can be built from
StopType = Literal["riddle", "location", "photo", "button", "time"]


class StopDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    stop_number: int = Field(..., ge=1, description="1-based position of the stop.")
    reveal_after_minutes: Optional[float] = Field(
        None,
        ge=0,
        allow_inf_nan=False,
        description="Minutes after the previous reveal before this stop opens. "
        "Present on any stop => the whole crawl is reveal-gated.",
    )
    stop_type: Optional[StopType] = Field(None, description="Kind of task.")
    answer: Optional[str] = Field(
        None, description="Canonical answer for riddle stops."
    )


class CrawlScheduleInput(BaseModel):
    """Crawl record as supplied by the data store."""

    model_config = ConfigDict(frozen=True)

    start_time: Optional[str] = Field(
        None, description='"YYYY-MM-DD HH:MM[:SS]" or "HH:MM[:SS]" for the next occurrence.'
    )
    duration: str = Field("", description='Advertised duration label, e.g. "2 hours".')
    stops: List[StopDefinition] = Field(default_factory=list)
    crawl_id: Optional[str] = None
    name: Optional[str] = None
    is_public: bool = False

    @model_validator(mode="after")
    def _check_stop_numbers(self) -> "CrawlScheduleInput":
        for position, stop in enumerate(self.stops):
            if stop.stop_number != position + 1:
                raise ValueError(
                    f"Stop at position {position} has stop_number "
                    f"{stop.stop_number}, expected {position + 1}"
                )
        return self

    def get_stop(self, stop_number: int) -> Optional[StopDefinition]:
        if 1 <= stop_number <= len(self.stops):
            return self.stops[stop_number - 1]
        return None


class StopCompletion(BaseModel):
    """Completion event accepted by a progress store."""

    model_config = ConfigDict(frozen=True)

    crawl_id: str
    user_id: str
    stop_number: int = Field(..., ge=1)
    user_answer: str
    completed_at: datetime


class CrawlProgress(BaseModel):
    crawl_id: str
    current_stop: int = Field(1, ge=1)
    completed_stops: List[int] = Field(default_factory=list)
    total_stops: int = Field(0, ge=0)
    started_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    @computed_field  # type: ignore[misc]
    @property
    def progress_percent(self) -> int:
        if self.total_stops <= 0:
            return 0
        return round(len(set(self.completed_stops)) / self.total_stops * 100)

    @computed_field  # type: ignore[misc]
    @property
    def is_finished(self) -> bool:
        return self.total_stops > 0 and len(set(self.completed_stops)) >= self.total_stops
