from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import uuid4

from sqlmodel import Field, Relationship, SQLModel

from tournament_engine.utils.clock import utcnow

if TYPE_CHECKING:
    from tournament_engine.models.tournament import Tournament


class Participant(SQLModel, table=True):
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    tournament_id: Optional[int] = Field(default=None, foreign_key="tournament.id", index=True)
    name: str
    seed: Optional[int] = Field(default=None)  # 1-based seed (1=highest), assigned at fixture generation
    created_at: datetime = Field(default_factory=utcnow)

    tournament: Optional["Tournament"] = Relationship(back_populates="participants")
