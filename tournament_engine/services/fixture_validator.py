"""
Fixture validator: structural sanity check on a generated fixture list.

Independent of the creation-time capacity estimate (which predicted a participant
count, not a fixture count): catches generator bugs and configuration drift between
tournament creation and fixture generation.
"""

from typing import Sequence

from tournament_engine.models.constraints import TournamentConstraints
from tournament_engine.models.match import Match
from tournament_engine.services.engine_errors import CapacityExceeded


def max_possible_matches(constraints: TournamentConstraints) -> int:
    return constraints.max_matches_per_day * constraints.days


def validate_fixtures(fixtures: Sequence[Match], constraints: TournamentConstraints) -> None:
    """
    Raises:
        CapacityExceeded: more fixtures than max_matches_per_day * days
    """
    limit = max_possible_matches(constraints)
    if len(fixtures) > limit:
        raise CapacityExceeded(
            f"{len(fixtures)} fixtures generated but capacity only allows {limit} matches"
        )
