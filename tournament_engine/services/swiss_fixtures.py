"""
Swiss fixtures: first round only.

Adjacent seeds meet: 1v2, 3v4, 5v6, ... With an odd field the lowest seed sits out
round 1 (bye, no match). Later rounds pair by results and are generated round by
round once results exist.
"""

import logging
from typing import List, Optional, Sequence

from tournament_engine.models.constraints import TournamentConstraints
from tournament_engine.models.match import Match
from tournament_engine.models.participant import Participant
from tournament_engine.services.format_rules import MATCH_PENDING, STAGE_SWISS
from tournament_engine.services.seeding import rank_by_seed

logger = logging.getLogger(__name__)


def generate_swiss_first_round(
    constraints: TournamentConstraints,
    participants: Sequence[Participant],
    tournament_id: Optional[int] = None,
) -> List[Match]:
    ranked = rank_by_seed(list(participants))

    matches: List[Match] = []
    for i in range(0, len(ranked) - 1, 2):
        matches.append(
            Match(
                tournament_id=tournament_id,
                round_number=1,
                match_number=len(matches) + 1,
                stage=STAGE_SWISS,
                participant1_id=ranked[i].id,
                participant2_id=ranked[i + 1].id,
                status=MATCH_PENDING,
            )
        )

    if len(ranked) % 2 == 1:
        logger.info("Swiss round 1: %s (seed %s) receives a bye", ranked[-1].name, ranked[-1].seed)

    logger.info("Swiss round 1: %d participants -> %d matches", len(ranked), len(matches))
    return matches
