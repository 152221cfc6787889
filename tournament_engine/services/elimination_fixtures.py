"""
Elimination fixtures: single and double elimination.

Single elimination:
- rounds = ceil(log2(n)), draw size = 2^rounds, byes = size - n
- rank r (by seed) sits at bracket position r; positions >= n are byes
- a bye never produces a match: its opponent is placed straight into round 2
- n - 1 matches total (+1 third-place match when configured and n >= 4)

Double elimination:
- winners bracket = the single-elimination draw
- losers bracket over the same draw size (2 * (rounds - 1) rounds):
    LB round 1        WB round-1 losers paired
    LB round 2k       LB survivors vs WB round k+1 losers (drop-in order flipped on odd k)
    LB round 2k+1     LB survivors paired
- grand final: WB champion vs LB champion
- 2n - 2 matches total
"""

import logging
from typing import List, Optional, Sequence

from tournament_engine.models.constraints import TournamentConstraints
from tournament_engine.models.match import Match
from tournament_engine.models.participant import Participant
from tournament_engine.services.format_rules import (
    STAGE_GRAND_FINAL,
    STAGE_LOSERS,
    STAGE_MAIN,
    STAGE_THIRD_PLACE,
    STAGE_WINNERS,
)
from tournament_engine.services.seeding import rank_by_seed
from tournament_engine.utils.bracket_graph import (
    BracketGraph,
    BracketNode,
    Entrant,
    add_elimination_rounds,
    loser_of,
    winner_of,
)
from tournament_engine.utils.bracket_positions import bracket_positions, next_power_of_two

logger = logging.getLogger(__name__)


def elimination_round_count(n: int) -> int:
    """ceil(log2(n)) for n >= 2."""
    return (n - 1).bit_length()


def participant_entrants(participants: Sequence[Participant]) -> List[Entrant]:
    """Entrants in seed-rank order (bracket position r = rank r)."""
    return [Entrant(participant_id=p.id) for p in rank_by_seed(list(participants))]


def build_knockout(
    entrants: Sequence[Entrant],
    stage: str,
    tournament_id: Optional[int] = None,
    first_round: int = 1,
    first_match_number: int = 1,
    third_place_match: bool = False,
) -> List[Match]:
    """
    Single-elimination draw over *entrants* (known participants or placeholders).

    Returns:
        Real matches in round order, progression links wired
    """
    size = next_power_of_two(len(entrants))
    graph = BracketGraph(entrants)
    rounds = add_elimination_rounds(graph, size, bracket_positions(size), stage, first_round)

    if third_place_match and len(rounds) >= 2:
        semis = rounds[-2]
        final = rounds[-1][0]
        # Insert before the final so it is numbered (and played) ahead of it
        third = BracketNode(
            stage=STAGE_THIRD_PLACE,
            round_number=final.round_number,
            index=1,
            sources=[loser_of(semis[0]), loser_of(semis[1])],
        )
        graph.nodes.insert(graph.nodes.index(final), third)

    return graph.resolve(tournament_id=tournament_id, first_match_number=first_match_number)


def generate_single_elimination(
    constraints: TournamentConstraints,
    participants: Sequence[Participant],
    tournament_id: Optional[int] = None,
) -> List[Match]:
    n = len(participants)
    rounds = elimination_round_count(n)
    byes = (1 << rounds) - n
    third_place = bool(constraints.format_config and constraints.format_config.third_place_match)

    matches = build_knockout(
        participant_entrants(participants),
        STAGE_MAIN,
        tournament_id=tournament_id,
        third_place_match=third_place,
    )

    logger.info(
        "Single elimination: %d participants, %d rounds, %d byes -> %d matches",
        n,
        rounds,
        byes,
        len(matches),
    )
    return matches


def add_losers_bracket(graph: BracketGraph, winners_rounds: List[List[BracketNode]]) -> List[List[BracketNode]]:
    """
    Losers bracket nodes fed by the winners bracket.

    Returns:
        LB nodes grouped by round (index 0 = LB round 1); empty for a 2-slot draw
    """
    wb_round_count = len(winners_rounds)
    if wb_round_count < 2:
        return []

    first_wb = winners_rounds[0]
    lb_rounds: List[List[BracketNode]] = [
        [
            graph.add_node(STAGE_LOSERS, 1, i, loser_of(first_wb[2 * i]), loser_of(first_wb[2 * i + 1]))
            for i in range(len(first_wb) // 2)
        ]
    ]

    for k in range(1, wb_round_count):
        survivors = lb_rounds[-1]
        droppers = winners_rounds[k]
        if k % 2 == 1:
            droppers = list(reversed(droppers))
        lb_rounds.append(
            [
                graph.add_node(STAGE_LOSERS, 2 * k, i, winner_of(survivors[i]), loser_of(droppers[i]))
                for i in range(len(survivors))
            ]
        )

        if k < wb_round_count - 1:
            survivors = lb_rounds[-1]
            lb_rounds.append(
                [
                    graph.add_node(
                        STAGE_LOSERS, 2 * k + 1, i, winner_of(survivors[2 * i]), winner_of(survivors[2 * i + 1])
                    )
                    for i in range(len(survivors) // 2)
                ]
            )

    return lb_rounds


def generate_double_elimination(
    constraints: TournamentConstraints,
    participants: Sequence[Participant],
    tournament_id: Optional[int] = None,
) -> List[Match]:
    n = len(participants)
    size = next_power_of_two(n)

    graph = BracketGraph(participant_entrants(participants))
    winners_rounds = add_elimination_rounds(graph, size, bracket_positions(size), STAGE_WINNERS)
    losers_rounds = add_losers_bracket(graph, winners_rounds)

    wb_final = winners_rounds[-1][0]
    if losers_rounds:
        lb_final = losers_rounds[-1][0]
        grand_final_round = max(len(winners_rounds), len(losers_rounds)) + 1
        graph.add_node(STAGE_GRAND_FINAL, grand_final_round, 0, winner_of(wb_final), winner_of(lb_final))
    else:
        # Two entrants: the WB final loser goes straight to the grand final
        graph.add_node(STAGE_GRAND_FINAL, len(winners_rounds) + 1, 0, winner_of(wb_final), loser_of(wb_final))

    matches = graph.resolve(tournament_id=tournament_id)

    logger.info(
        "Double elimination: %d participants, %d WB rounds, %d LB rounds -> %d matches",
        n,
        len(winners_rounds),
        len(losers_rounds),
        len(matches),
    )
    return matches
