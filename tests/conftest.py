from datetime import date
from typing import List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import tournament_engine.models  # noqa: F401  registers tables on SQLModel.metadata
from tournament_engine.database import get_session
from tournament_engine.main import app
from tournament_engine.models.constraints import DayHours, FormatConfig, TournamentConstraints
from tournament_engine.models.participant import Participant

# One in-memory database shared by every connection
test_engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@pytest.fixture(name="session")
def session_fixture():
    SQLModel.metadata.drop_all(test_engine)
    SQLModel.metadata.create_all(test_engine)
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Requests share the test session; app startup (init_db on the real engine) is not run."""
    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_constraints(
    format_type: str = "single_elimination",
    start: date = date(2026, 5, 1),
    end: date = date(2026, 5, 1),
    max_matches_per_day: int = 100,
    hours: dict = None,
    avg_match_duration: int = 30,
    buffer_time: int = 10,
    venue_count: int = 4,
    format_config: FormatConfig = None,
) -> TournamentConstraints:
    """Build constraints quickly; defaults are roomy enough for any test field."""
    if hours is None:
        hours = {"friday": ("09:00", "17:00")}
    return TournamentConstraints(
        start_date=start,
        end_date=end,
        timezone="Europe/London",
        max_matches_per_day=max_matches_per_day,
        operational_hours={day: DayHours(start_time=s, end_time=e) for day, (s, e) in hours.items()},
        avg_match_duration=avg_match_duration,
        buffer_time=buffer_time,
        venue_count=venue_count,
        format_type=format_type,
        format_config=format_config,
    )


def make_participants(n: int, seeded: bool = True) -> List[Participant]:
    """n participants P01..Pn with ids p1..pn; seeds 1..n unless seeded=False."""
    return [
        Participant(id=f"p{i}", name=f"P{i:02d}", seed=i if seeded else None)
        for i in range(1, n + 1)
    ]
