"""
Round robin fixtures: every participant meets every other participant once.

Pairs are generated over seed order: (0,1), (0,2), ..., (0,n-1), (1,2), ...
All matches sit in round 1; spreading them over rounds/days to avoid back-to-back
games is a scheduling concern and is not done here.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from tournament_engine.models.constraints import TournamentConstraints
from tournament_engine.models.match import Match
from tournament_engine.models.participant import Participant
from tournament_engine.services.format_rules import MATCH_PENDING, STAGE_MAIN
from tournament_engine.services.seeding import rank_by_seed

logger = logging.getLogger(__name__)


def round_robin_pairs(n: int) -> List[Tuple[int, int]]:
    """All unordered index pairs (i, j), i < j, in generation order."""
    return [(i, j) for i in range(n) for j in range(i + 1, n)]


def build_round_robin(
    participants: Sequence[Participant],
    stage: str = STAGE_MAIN,
    tournament_id: Optional[int] = None,
    round_number: int = 1,
    group_name: Optional[str] = None,
    first_match_number: int = 1,
) -> List[Match]:
    """One match per pair of *participants*, which must already be in seed order."""
    matches: List[Match] = []
    for offset, (i, j) in enumerate(round_robin_pairs(len(participants))):
        matches.append(
            Match(
                tournament_id=tournament_id,
                round_number=round_number,
                match_number=first_match_number + offset,
                stage=stage,
                group_name=group_name,
                participant1_id=participants[i].id,
                participant2_id=participants[j].id,
                status=MATCH_PENDING,
            )
        )
    return matches


def generate_round_robin(
    constraints: TournamentConstraints,
    participants: Sequence[Participant],
    tournament_id: Optional[int] = None,
) -> List[Match]:
    matches = build_round_robin(rank_by_seed(list(participants)), tournament_id=tournament_id)
    logger.info("Round robin: %d participants -> %d matches", len(participants), len(matches))
    return matches
