"""
Fixture Engine: entry point for fixture generation.

seeding -> format generator -> validator. Pure: no sessions, no I/O. The caller is
responsible for the registration_closed check and for persisting the result.
"""

import logging
import random
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from tournament_engine.models.constraints import TournamentConstraints
from tournament_engine.models.match import Match
from tournament_engine.models.participant import Participant
from tournament_engine.services.elimination_fixtures import (
    generate_double_elimination,
    generate_single_elimination,
)
from tournament_engine.services.engine_errors import InsufficientParticipants, UnsupportedFormat
from tournament_engine.services.fixture_validator import validate_fixtures
from tournament_engine.services.format_rules import (
    FORMAT_DOUBLE_ELIMINATION,
    FORMAT_GROUP_TO_KNOCKOUT,
    FORMAT_ROUND_ROBIN,
    FORMAT_SINGLE_ELIMINATION,
    FORMAT_SWISS,
    MIN_PARTICIPANTS,
)
from tournament_engine.services.group_knockout_fixtures import generate_group_to_knockout
from tournament_engine.services.round_robin_fixtures import generate_round_robin
from tournament_engine.services.seeding import apply_seeding
from tournament_engine.services.swiss_fixtures import generate_swiss_first_round

logger = logging.getLogger(__name__)

Generator = Callable[[TournamentConstraints, Sequence[Participant], Optional[int]], List[Match]]

GENERATORS: Dict[str, Generator] = {
    FORMAT_SINGLE_ELIMINATION: generate_single_elimination,
    FORMAT_DOUBLE_ELIMINATION: generate_double_elimination,
    FORMAT_ROUND_ROBIN: generate_round_robin,
    FORMAT_GROUP_TO_KNOCKOUT: generate_group_to_knockout,
    FORMAT_SWISS: generate_swiss_first_round,
}


def generate_fixtures(
    constraints: TournamentConstraints,
    participants: List[Participant],
    seeding_method: Optional[str],
    manual_seeds: Optional[Mapping[str, int]] = None,
    tournament_id: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[Match]:
    """
    Seed participants and generate the validated fixture list for the tournament's format.

    Args:
        constraints: Tournament constraints (format_type selects the generator)
        participants: Registered participants; reordered and re-seeded in place
        seeding_method: "manual" | "random" | "skill"
        manual_seeds: participant_id -> seed for "manual"
        tournament_id: Stamped on every generated match
        rng: Random source for "random" seeding

    Raises:
        InsufficientParticipants: fewer than 2 participants
        UnsupportedFormat: format_type has no generator
        CapacityExceeded: fixture count above max_matches_per_day * days
    """
    if len(participants) < MIN_PARTICIPANTS:
        raise InsufficientParticipants(
            f"At least {MIN_PARTICIPANTS} participants are required, got {len(participants)}"
        )

    generator = GENERATORS.get(constraints.format_type)
    if generator is None:
        raise UnsupportedFormat(f"Unsupported tournament format: {constraints.format_type!r}")

    seeded = apply_seeding(participants, seeding_method, manual_seeds, rng)
    fixtures = generator(constraints, seeded, tournament_id)
    validate_fixtures(fixtures, constraints)

    logger.info(
        "Generated %d fixtures for tournament %s (%s, %d participants)",
        len(fixtures),
        tournament_id,
        constraints.format_type,
        len(seeded),
    )
    return fixtures
