from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import JSON
from sqlmodel import Column, Field, Relationship, SQLModel

from tournament_engine.models.constraints import DayHours, FormatConfig, TournamentConstraints
from tournament_engine.utils.clock import utcnow

if TYPE_CHECKING:
    from tournament_engine.models.match import Match
    from tournament_engine.models.participant import Participant


class Tournament(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    timezone: str
    start_date: date
    end_date: date
    format_type: str
    format_config: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    max_matches_per_day: int
    operational_hours: Dict[str, Dict[str, str]] = Field(default_factory=dict, sa_column=Column(JSON))
    avg_match_duration: int
    buffer_time: int = Field(default=0)
    venue_count: int = Field(default=1)
    capacity_limit: int = Field(default=0)
    status: str = Field(default="registration_open")  # registration_open | registration_closed | in_progress
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow})

    # Relationships
    participants: List["Participant"] = Relationship(back_populates="tournament")
    matches: List["Match"] = Relationship(back_populates="tournament")

    def to_constraints(self) -> TournamentConstraints:
        """Rebuild the immutable constraints this tournament was created with."""
        return TournamentConstraints(
            start_date=self.start_date,
            end_date=self.end_date,
            timezone=self.timezone,
            max_matches_per_day=self.max_matches_per_day,
            operational_hours={
                day: DayHours(**hours) for day, hours in (self.operational_hours or {}).items()
            },
            avg_match_duration=self.avg_match_duration,
            buffer_time=self.buffer_time,
            venue_count=self.venue_count,
            format_type=self.format_type,
            format_config=FormatConfig(**self.format_config) if self.format_config else None,
        )
