"""
Seeding: order participants for placement and stamp seeds 1..n.

Methods:
- manual: explicit seeds first (ascending), unseeded after them by name
- random: unbiased Fisher-Yates shuffle from a cryptographically adequate source
- skill: no rating source exists yet, so this falls back to name order
- anything else: no reordering, seeds left as provided

Only the seed field is mutated. The list is reordered in place and returned.
"""

import logging
import random
from typing import List, Mapping, Optional

from tournament_engine.models.participant import Participant
from tournament_engine.services.format_rules import SEEDING_MANUAL, SEEDING_RANDOM, SEEDING_SKILL

logger = logging.getLogger(__name__)


def _assign_sequential_seeds(participants: List[Participant]) -> None:
    for index, participant in enumerate(participants):
        participant.seed = index + 1


def shuffle_participants(participants: List[Participant], rng: random.Random) -> None:
    """In-place Fisher-Yates shuffle."""
    for i in range(len(participants) - 1, 0, -1):
        j = rng.randrange(i + 1)
        participants[i], participants[j] = participants[j], participants[i]


def manual_sort_key(participant: Participant, manual_seeds: Mapping[str, int]) -> tuple:
    """Sort key for manual seeding. Lower = better."""
    seed = manual_seeds.get(participant.id)
    if seed is not None:
        return (0, seed, "")
    return (1, 0, participant.name)


def apply_seeding(
    participants: List[Participant],
    method: Optional[str],
    manual_seeds: Optional[Mapping[str, int]] = None,
    rng: Optional[random.Random] = None,
) -> List[Participant]:
    """
    Reorder participants according to the seeding method and number them 1..n.

    Args:
        participants: Participants to seed (mutated: order and seed field)
        method: "manual" | "random" | "skill"; anything else leaves them untouched
        manual_seeds: participant_id -> seed, used by "manual"
        rng: Random source for "random" (default: random.SystemRandom)

    Returns:
        The same list, reordered
    """
    if method == SEEDING_MANUAL:
        seeds = manual_seeds or {}
        participants.sort(key=lambda p: manual_sort_key(p, seeds))
        _assign_sequential_seeds(participants)

    elif method == SEEDING_RANDOM:
        shuffle_participants(participants, rng or random.SystemRandom())
        _assign_sequential_seeds(participants)

    elif method == SEEDING_SKILL:
        # No rating source exists; name order is the documented fallback
        logger.info("Skill seeding has no rating source; ordering %d participants by name", len(participants))
        participants.sort(key=lambda p: p.name)
        _assign_sequential_seeds(participants)

    else:
        logger.warning("Unknown seeding method %r; keeping participant order and seeds as provided", method)

    return participants


def rank_by_seed(participants: List[Participant]) -> List[Participant]:
    """
    Placement order: seeded participants ascending by seed, unseeded after them in input order.

    Generators place rank r at bracket position r, so this tolerates seeds that were
    left unset or sparse by an unknown seeding method.
    """
    indexed = list(enumerate(participants))
    indexed.sort(key=lambda item: (item[1].seed is None, item[1].seed or 0, item[0]))
    return [participant for _, participant in indexed]
