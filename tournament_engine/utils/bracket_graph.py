"""
Bracket wiring graph: structural nodes resolved into matches and progression links.

An elimination draw is described as nodes, each with two sources:
- a bracket position (seed rank index; positions beyond the field are byes), or
- the WINNER / LOSER of an earlier node.

resolve() walks nodes in creation order (feeders are always created first):
- 2 live entrants -> a real Match; upstream matches get next_match_id / loser_next_match_id
- 1 live entrant  -> no match; the entrant is auto-advanced to wherever this node feeds
- 0 live entrants -> dead node

Because single-entrant nodes collapse, a draw over n entrants always yields n - 1
matches per elimination bracket regardless of how many byes the power-of-two size adds.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from tournament_engine.models.match import Match
from tournament_engine.services.format_rules import MATCH_PENDING

WINNER = "WINNER"
LOSER = "LOSER"


@dataclass
class Entrant:
    """Who occupies a match slot: a known participant, or a placeholder for a pending result."""

    participant_id: Optional[str] = None
    placeholder: Optional[str] = None
    source_match: Optional[Match] = None
    source_role: str = WINNER


@dataclass
class SlotSource:
    position: Optional[int] = None
    node: Optional["BracketNode"] = None
    role: str = WINNER


@dataclass
class BracketNode:
    stage: str
    round_number: int
    index: int  # position within its round (0-based)
    sources: List[SlotSource] = field(default_factory=list)
    match: Optional[Match] = None
    winner: Optional[Entrant] = None
    loser: Optional[Entrant] = None


def from_position(position: int) -> SlotSource:
    return SlotSource(position=position)


def winner_of(node: BracketNode) -> SlotSource:
    return SlotSource(node=node, role=WINNER)


def loser_of(node: BracketNode) -> SlotSource:
    return SlotSource(node=node, role=LOSER)


class BracketGraph:
    def __init__(self, entrants: Sequence[Entrant]):
        """
        Args:
            entrants: Entrant for each bracket position, in seed-rank order.
                      Positions at or beyond len(entrants) are byes.
        """
        self.entrants = list(entrants)
        self.nodes: List[BracketNode] = []

    def add_node(
        self,
        stage: str,
        round_number: int,
        index: int,
        source_a: SlotSource,
        source_b: SlotSource,
    ) -> BracketNode:
        node = BracketNode(stage=stage, round_number=round_number, index=index, sources=[source_a, source_b])
        self.nodes.append(node)
        return node

    def _entrant_for(self, source: SlotSource) -> Optional[Entrant]:
        if source.position is not None:
            if source.position < len(self.entrants):
                return self.entrants[source.position]
            return None
        if source.role == LOSER:
            return source.node.loser
        return source.node.winner

    def resolve(
        self,
        tournament_id: Optional[int] = None,
        first_match_number: int = 1,
        group_name: Optional[str] = None,
    ) -> List[Match]:
        """Create the real matches and wire progression. Returns matches in creation order."""
        matches: List[Match] = []
        match_number = first_match_number

        for node in self.nodes:
            live = [e for e in (self._entrant_for(s) for s in node.sources) if e is not None]

            if len(live) == 1:
                node.winner = live[0]
                continue
            if not live:
                continue

            match = Match(
                tournament_id=tournament_id,
                round_number=node.round_number,
                match_number=match_number,
                stage=node.stage,
                group_name=group_name,
                status=MATCH_PENDING,
            )
            _fill_side(match, 1, live[0])
            _fill_side(match, 2, live[1])

            node.match = match
            node.winner = Entrant(placeholder=f"Winner M{match_number}", source_match=match, source_role=WINNER)
            node.loser = Entrant(placeholder=f"Loser M{match_number}", source_match=match, source_role=LOSER)

            matches.append(match)
            match_number += 1

        return matches


def _fill_side(match: Match, side: int, entrant: Entrant) -> None:
    if entrant.participant_id is not None:
        setattr(match, f"participant{side}_id", entrant.participant_id)
    else:
        setattr(match, f"placeholder_{side}", entrant.placeholder)

    upstream = entrant.source_match
    if upstream is None:
        return
    if entrant.source_role == LOSER:
        upstream.loser_next_match_id = match.id
    else:
        upstream.next_match_id = match.id


def add_elimination_rounds(
    graph: BracketGraph,
    size: int,
    positions: Sequence[int],
    stage: str,
    first_round: int = 1,
) -> List[List[BracketNode]]:
    """
    Add a full single-elimination tree over *size* bracket slots.

    Round 1 node i meets positions[2i] and positions[2i+1]; round r node k takes the
    winners of round r-1 nodes 2k and 2k+1.

    Returns:
        Nodes grouped by round (index 0 = first round)
    """
    rounds: List[List[BracketNode]] = []

    first = [
        graph.add_node(stage, first_round, i, from_position(positions[2 * i]), from_position(positions[2 * i + 1]))
        for i in range(size // 2)
    ]
    rounds.append(first)

    round_number = first_round
    while len(rounds[-1]) > 1:
        round_number += 1
        previous = rounds[-1]
        rounds.append(
            [
                graph.add_node(stage, round_number, k, winner_of(previous[2 * k]), winner_of(previous[2 * k + 1]))
                for k in range(len(previous) // 2)
            ]
        )

    return rounds
