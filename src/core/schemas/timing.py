from datetime import datetime
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# Lifecycle states of a scheduled crawl
CrawlState = Literal["upcoming", "ongoing", "completed", "unknown"]


class CrawlStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: CrawlState
    time_until_start: Optional[str] = Field(
        None, description='Countdown label, e.g. "1:30 until start". Upcoming only.'
    )
    time_since_start: Optional[str] = Field(
        None, description='Elapsed label, e.g. "1h 5m in". Ongoing only.'
    )
    estimated_end_time: Optional[datetime] = None
    current_stop_index: Optional[int] = Field(
        None, ge=0, description="0-based index of the active stop. Ongoing only."
    )
    stop_durations: Dict[int, int] = Field(
        default_factory=dict, description="stop_number -> allotted minutes."
    )


class StopTiming(BaseModel):
    model_config = ConfigDict(frozen=True)

    stop_number: int
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    is_active: bool
    is_completed: bool


class RevealState(BaseModel):
    model_config = ConfigDict(frozen=True)

    reveal_time: Optional[datetime] = None
    is_available: bool
    seconds_until_reveal: Optional[int] = None
    countdown: Optional[str] = None
