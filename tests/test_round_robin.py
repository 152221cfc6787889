"""
Tests for round robin fixtures.
"""

from itertools import combinations

import pytest

from tests.conftest import make_constraints, make_participants
from tournament_engine.services.round_robin_fixtures import generate_round_robin, round_robin_pairs


def test_round_robin_pairs_order():
    assert round_robin_pairs(4) == [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]


@pytest.mark.parametrize("n", [2, 3, 4, 5, 8, 13])
def test_every_pair_exactly_once(n):
    participants = make_participants(n)
    matches = generate_round_robin(make_constraints("round_robin"), participants)

    assert len(matches) == n * (n - 1) // 2
    pairs = [frozenset((m.participant1_id, m.participant2_id)) for m in matches]
    assert len(set(pairs)) == len(pairs)
    assert set(pairs) == {frozenset(c) for c in combinations([p.id for p in participants], 2)}


def test_all_round_one_and_numbered_in_order():
    matches = generate_round_robin(make_constraints("round_robin"), make_participants(5), tournament_id=3)
    assert all(m.round_number == 1 for m in matches)
    assert [m.match_number for m in matches] == list(range(1, 11))
    assert all(m.tournament_id == 3 and m.stage == "main" and m.next_match_id is None for m in matches)


def test_pairs_follow_seed_order():
    participants = make_participants(3)
    participants.reverse()  # list order should not matter, seeds do
    matches = generate_round_robin(make_constraints("round_robin"), participants)
    assert [(m.participant1_id, m.participant2_id) for m in matches] == [("p1", "p2"), ("p1", "p3"), ("p2", "p3")]
