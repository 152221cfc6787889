"""
Group stage to knockout fixtures.

1. Group count: number_of_groups, else n // group_size (group_size defaults to 4),
   never more than n // 2 so every group can send two players to the knockout
2. Seeded participants go to groups by serpentine order (default) or contiguous blocks
3. Each group plays a round robin (round 1, stage "group")
4. The top 2 of each group meet in a knockout (stage "knockout", rounds 2..): group
   winners take the top seeds (A1, B1, ...), runners-up take the remaining seeds,
   each in the half of the draw away from its own group winner

Knockout occupants are unknown until the groups finish, so their slots carry
placeholders ("Group A #1"). Total = sum of group round robins + 2 * groups - 1.
"""

import logging
from typing import Dict, List, Optional, Sequence

from tournament_engine.models.constraints import TournamentConstraints
from tournament_engine.models.match import Match
from tournament_engine.models.participant import Participant
from tournament_engine.services.elimination_fixtures import build_knockout
from tournament_engine.services.engine_errors import InsufficientParticipants
from tournament_engine.services.format_rules import (
    ADVANCERS_PER_GROUP,
    DEFAULT_GROUP_SIZE,
    STAGE_GROUP,
    STAGE_KNOCKOUT,
    group_label,
)
from tournament_engine.services.round_robin_fixtures import build_round_robin
from tournament_engine.services.seeding import rank_by_seed
from tournament_engine.utils.bracket_graph import Entrant
from tournament_engine.utils.bracket_positions import bracket_positions, next_power_of_two

logger = logging.getLogger(__name__)


def resolve_group_count(n: int, format_config=None) -> int:
    """
    Number of groups for *n* participants.

    Capped at n // ADVANCERS_PER_GROUP; a configured number_of_groups above the cap
    is reduced with a warning.
    """
    most_groups = max(1, n // ADVANCERS_PER_GROUP)

    if format_config and format_config.number_of_groups:
        if format_config.number_of_groups > most_groups:
            logger.warning(
                "%d groups configured but %d participants fill at most %d; using %d groups",
                format_config.number_of_groups,
                n,
                most_groups,
                most_groups,
            )
            return most_groups
        return format_config.number_of_groups

    group_size = DEFAULT_GROUP_SIZE
    if format_config and format_config.group_size:
        group_size = format_config.group_size
    return max(1, min(most_groups, n // group_size))


def group_assignment_snake(seeds_sorted: Sequence, num_groups: int) -> List[List]:
    """
    Assign in serpentine order.

    Seeds 1..G go to groups A..G, seeds G+1..2G go back G..A, and so on.
    """
    groups: List[List] = [[] for _ in range(num_groups)]
    for index, item in enumerate(seeds_sorted):
        lap, offset = divmod(index, num_groups)
        group_index = offset if lap % 2 == 0 else num_groups - 1 - offset
        groups[group_index].append(item)
    return groups


def group_assignment_block(seeds_sorted: Sequence, num_groups: int) -> List[List]:
    """
    Assign contiguous seed blocks.

    Group A: the first ceil(n/G) seeds, Group B: the next block, etc. Earlier groups
    take the extra participant when n is not divisible by G.
    """
    base, extra = divmod(len(seeds_sorted), num_groups)
    groups: List[List] = []
    start = 0
    for group_index in range(num_groups):
        end = start + base + (1 if group_index < extra else 0)
        groups.append(list(seeds_sorted[start:end]))
        start = end
    return groups


def knockout_entrants(num_groups: int) -> List[Entrant]:
    """
    Knockout entrants in seed-rank order.

    Ranks 0..G-1 are the group winners A1, B1, ... Ranks G..2G-1 are runners-up,
    each placed in the opposite half of the draw from its group winner where a
    slot there is free. Two players from one group then meet no earlier than the final.
    """
    size = next_power_of_two(num_groups * ADVANCERS_PER_GROUP)
    top_half = set(bracket_positions(size)[: size // 2])
    runner_up_ranks = range(num_groups, num_groups * ADVANCERS_PER_GROUP)

    top_winners = [g for g in range(num_groups) if g in top_half]
    bottom_winners = [g for g in range(num_groups) if g not in top_half]
    top_slots = [r for r in runner_up_ranks if r in top_half]
    bottom_slots = [r for r in runner_up_ranks if r not in top_half]

    group_at_rank: Dict[int, int] = {}
    for groups, slots in ((top_winners, bottom_slots), (bottom_winners, top_slots)):
        for group_index, rank in zip(groups, slots):
            group_at_rank[rank] = group_index

    # Whatever could not be split across halves takes the free ranks in group order
    unplaced = [g for g in range(num_groups) if g not in group_at_rank.values()]
    free_ranks = [r for r in runner_up_ranks if r not in group_at_rank]
    group_at_rank.update(zip(free_ranks, unplaced))

    winners = [Entrant(placeholder=f"Group {group_label(g)} #1") for g in range(num_groups)]
    runners_up = [Entrant(placeholder=f"Group {group_label(group_at_rank[r])} #2") for r in runner_up_ranks]
    return winners + runners_up


def generate_group_to_knockout(
    constraints: TournamentConstraints,
    participants: Sequence[Participant],
    tournament_id: Optional[int] = None,
) -> List[Match]:
    config = constraints.format_config
    ranked = rank_by_seed(list(participants))
    n = len(ranked)
    num_groups = resolve_group_count(n, config)

    if n < num_groups * ADVANCERS_PER_GROUP:
        raise InsufficientParticipants(
            f"{num_groups} groups need at least {num_groups * ADVANCERS_PER_GROUP} participants, got {n}"
        )

    if config and config.group_size and n > num_groups * config.group_size:
        logger.warning(
            "%d participants exceed %d groups of %d; groups will be larger than configured",
            n,
            num_groups,
            config.group_size,
        )

    if config and config.group_assignment == "block":
        groups = group_assignment_block(ranked, num_groups)
    else:
        groups = group_assignment_snake(ranked, num_groups)

    matches: List[Match] = []
    for group_index, members in enumerate(groups):
        matches.extend(
            build_round_robin(
                members,
                stage=STAGE_GROUP,
                tournament_id=tournament_id,
                round_number=1,
                group_name=group_label(group_index),
                first_match_number=len(matches) + 1,
            )
        )
    group_stage_count = len(matches)

    matches.extend(
        build_knockout(
            knockout_entrants(num_groups),
            STAGE_KNOCKOUT,
            tournament_id=tournament_id,
            first_round=2,
            first_match_number=len(matches) + 1,
        )
    )

    logger.info(
        "Group to knockout: %d participants in %d groups -> %d group matches, %d knockout matches",
        n,
        num_groups,
        group_stage_count,
        len(matches) - group_stage_count,
    )
    return matches
