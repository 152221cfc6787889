from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import uuid4

from sqlmodel import Field, Relationship, SQLModel

from tournament_engine.utils.clock import utcnow

if TYPE_CHECKING:
    from tournament_engine.models.tournament import Tournament


class Match(SQLModel, table=True):
    # Ids are assigned at construction so progression links can be wired before persistence
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    tournament_id: Optional[int] = Field(default=None, foreign_key="tournament.id", index=True)
    round_number: int
    match_number: int
    stage: str  # "main" | "third_place" | "winners" | "losers" | "grand_final" | "group" | "knockout" | "swiss"
    group_name: Optional[str] = Field(default=None)

    # Nullable: a slot may be waiting on an upstream result
    participant1_id: Optional[str] = Field(default=None, foreign_key="participant.id")
    participant2_id: Optional[str] = Field(default=None, foreign_key="participant.id")

    # Display text for a slot whose occupant is not known yet ("Winner M3", "Group A #1")
    placeholder_1: Optional[str] = Field(default=None)
    placeholder_2: Optional[str] = Field(default=None)

    status: str = Field(default="pending")

    # Progression: where the winner (and, for double elimination / third place, the loser) goes next
    next_match_id: Optional[str] = Field(default=None, index=True)
    loser_next_match_id: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utcnow)

    tournament: Optional["Tournament"] = Relationship(back_populates="matches")
