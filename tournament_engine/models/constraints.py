"""
Tournament constraints: the immutable input to capacity calculation and fixture generation.

Built once when a tournament is created (from the create request or from a stored
Tournament row via Tournament.to_constraints()) and never mutated afterwards.
Clock times stay in "HH:MM" wire format; the capacity calculator parses them.
"""

from datetime import date
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class DayHours(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_time: str  # "09:00"
    end_time: str  # "18:00"


class FormatConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    number_of_groups: Optional[int] = None
    group_size: Optional[int] = None
    group_assignment: Literal["snake", "block"] = "snake"
    number_of_rounds: Optional[int] = None  # Swiss
    third_place_match: bool = False  # Single elimination

    @field_validator("number_of_groups", "group_size", "number_of_rounds")
    @classmethod
    def validate_positive(cls, v):
        if v is not None and v < 1:
            raise ValueError("format config counts must be > 0")
        return v


class TournamentConstraints(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date
    timezone: str = "UTC"
    max_matches_per_day: int
    operational_hours: Dict[str, DayHours] = {}
    avg_match_duration: int
    buffer_time: int = 0
    venue_count: int
    format_type: str
    format_config: Optional[FormatConfig] = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v):
        if not v or not v.strip():
            raise ValueError("timezone is required")
        return v.strip()

    @field_validator("max_matches_per_day", "avg_match_duration", "venue_count")
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("must be > 0")
        return v

    @field_validator("buffer_time")
    @classmethod
    def validate_buffer(cls, v):
        if v < 0:
            raise ValueError("buffer_time must be >= 0")
        return v

    @field_validator("operational_hours")
    @classmethod
    def normalize_weekdays(cls, v):
        """Weekday keys are case-insensitive ("Monday" == "monday")."""
        normalized = {key.strip().lower(): hours for key, hours in v.items()}
        unknown = sorted(set(normalized) - set(WEEKDAYS))
        if unknown:
            raise ValueError(f"operational_hours keys must be weekday names, got {unknown}")
        return normalized

    @field_validator("format_type")
    @classmethod
    def normalize_format(cls, v):
        return (v or "").strip().lower()

    @model_validator(mode="after")
    def validate_date_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be >= start_date")
        return self

    @property
    def days(self) -> int:
        """Tournament length in days, both endpoints inclusive."""
        return (self.end_date - self.start_date).days + 1
