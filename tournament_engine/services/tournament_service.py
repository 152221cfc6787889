"""
Tournament service: persistence host for the fixture engine.

Two atomic operations wrap the engine:
- create_tournament: calculate capacity, store it with the tournament (one commit)
- generate_and_store_fixtures: registration_closed check, generate, persist matches and
  seeds, move to in_progress (one commit)

The tournament row is read FOR UPDATE during fixture generation and its status flips in
the same commit, so a second concurrent call fails the state check instead of
generating fixtures twice.
"""

import logging
import random
from typing import List, Mapping, Optional

from sqlmodel import Session, select

from tournament_engine.models.constraints import TournamentConstraints
from tournament_engine.models.match import Match
from tournament_engine.models.participant import Participant
from tournament_engine.models.tournament import Tournament
from tournament_engine.services.capacity_calculator import calculate_capacity
from tournament_engine.services.engine_errors import (
    CapacityExceeded,
    FixtureEngineError,
    TournamentNotFound,
    TournamentStateError,
)
from tournament_engine.services.fixture_engine import generate_fixtures
from tournament_engine.services.format_rules import (
    STATUS_IN_PROGRESS,
    STATUS_REGISTRATION_CLOSED,
    STATUS_REGISTRATION_OPEN,
)

logger = logging.getLogger(__name__)


def get_tournament(session: Session, tournament_id: int, for_update: bool = False) -> Tournament:
    statement = select(Tournament).where(Tournament.id == tournament_id)
    if for_update:
        statement = statement.with_for_update()
    tournament = session.exec(statement).first()
    if not tournament:
        raise TournamentNotFound(f"Tournament {tournament_id} not found")
    return tournament


def create_tournament(session: Session, name: str, constraints: TournamentConstraints) -> Tournament:
    """
    Calculate capacity and store the tournament. Nothing is written if capacity is invalid.

    Raises:
        InvalidConstraints: capacity < 2 or malformed operational hours
    """
    capacity = calculate_capacity(constraints)

    tournament = Tournament(
        name=name,
        timezone=constraints.timezone,
        start_date=constraints.start_date,
        end_date=constraints.end_date,
        format_type=constraints.format_type,
        format_config=constraints.format_config.model_dump() if constraints.format_config else None,
        max_matches_per_day=constraints.max_matches_per_day,
        operational_hours={day: hours.model_dump() for day, hours in constraints.operational_hours.items()},
        avg_match_duration=constraints.avg_match_duration,
        buffer_time=constraints.buffer_time,
        venue_count=constraints.venue_count,
        capacity_limit=capacity,
        status=STATUS_REGISTRATION_OPEN,
    )
    session.add(tournament)
    session.commit()
    session.refresh(tournament)

    logger.info("Created tournament %s (%s) with capacity %d", tournament.id, tournament.format_type, capacity)
    return tournament


def list_participants(session: Session, tournament_id: int) -> List[Participant]:
    return list(
        session.exec(
            select(Participant)
            .where(Participant.tournament_id == tournament_id)
            .order_by(Participant.created_at, Participant.name)
        ).all()
    )


def register_participant(session: Session, tournament_id: int, name: str) -> Participant:
    """
    Raises:
        TournamentNotFound
        TournamentStateError: registration is not open
        CapacityExceeded: capacity_limit already reached
    """
    tournament = get_tournament(session, tournament_id, for_update=True)
    if tournament.status != STATUS_REGISTRATION_OPEN:
        raise TournamentStateError(
            f"Registration is not open (status '{tournament.status}')"
        )

    registered = len(list_participants(session, tournament_id))
    if registered >= tournament.capacity_limit:
        raise CapacityExceeded(
            f"Tournament is full: {registered} of {tournament.capacity_limit} places taken"
        )

    participant = Participant(tournament_id=tournament_id, name=name)
    session.add(participant)
    session.commit()
    session.refresh(participant)
    return participant


def close_registration(session: Session, tournament_id: int) -> Tournament:
    tournament = get_tournament(session, tournament_id, for_update=True)
    if tournament.status != STATUS_REGISTRATION_OPEN:
        raise TournamentStateError(
            f"Only open registration can be closed (status '{tournament.status}')"
        )
    tournament.status = STATUS_REGISTRATION_CLOSED
    session.add(tournament)
    session.commit()
    session.refresh(tournament)
    return tournament


def generate_and_store_fixtures(
    session: Session,
    tournament_id: int,
    seeding_method: Optional[str],
    manual_seeds: Optional[Mapping[str, int]] = None,
    rng: Optional[random.Random] = None,
) -> List[Match]:
    """
    Generate fixtures exactly once per tournament and persist them atomically.

    Raises:
        TournamentNotFound
        TournamentStateError: status is not registration_closed
        FixtureEngineError subclasses from generate_fixtures (nothing is written)
    """
    tournament = get_tournament(session, tournament_id, for_update=True)
    if tournament.status != STATUS_REGISTRATION_CLOSED:
        raise TournamentStateError(
            f"Fixtures can only be generated after registration is closed (status '{tournament.status}')"
        )

    participants = list_participants(session, tournament_id)
    try:
        fixtures = generate_fixtures(
            tournament.to_constraints(),
            participants,
            seeding_method,
            manual_seeds=manual_seeds,
            tournament_id=tournament.id,
            rng=rng,
        )
    except FixtureEngineError:
        # Seeding already touched the loaded participants; drop those changes
        session.rollback()
        raise

    for participant in participants:
        session.add(participant)
    for match in fixtures:
        session.add(match)
    tournament.status = STATUS_IN_PROGRESS
    session.add(tournament)
    session.commit()

    logger.info("Stored %d fixtures for tournament %s", len(fixtures), tournament_id)
    return fixtures


def list_matches(session: Session, tournament_id: int) -> List[Match]:
    get_tournament(session, tournament_id)
    return list(
        session.exec(
            select(Match).where(Match.tournament_id == tournament_id).order_by(Match.match_number)
        ).all()
    )
