"""
Tests for the table models: timestamps and constraint round trip through the database.
"""

from sqlmodel import Session

from tests.conftest import make_constraints
from tournament_engine.models.constraints import FormatConfig
from tournament_engine.models.match import Match
from tournament_engine.models.participant import Participant
from tournament_engine.services import tournament_service


def test_timestamps_are_timezone_aware():
    assert Participant(name="Ana").created_at.tzinfo is not None
    assert Match(round_number=1, match_number=1, stage="main").created_at.tzinfo is not None


def test_tournament_stores_and_rebuilds_constraints(session: Session):
    constraints = make_constraints(
        "group_to_knockout",
        max_matches_per_day=20,
        format_config=FormatConfig(number_of_groups=2, group_size=4),
    )
    tournament = tournament_service.create_tournament(session, "Cup", constraints)

    assert tournament.id is not None
    assert tournament.capacity_limit == 8
    assert tournament.to_constraints() == constraints
