"""
Tests for group stage to knockout fixtures.
"""

import pytest

from tests.conftest import make_constraints, make_participants
from tournament_engine.models.constraints import FormatConfig
from tournament_engine.services.capacity_calculator import capacity_for_slots
from tournament_engine.services.engine_errors import InsufficientParticipants
from tournament_engine.services.fixture_engine import generate_fixtures
from tournament_engine.services.group_knockout_fixtures import (
    generate_group_to_knockout,
    group_assignment_block,
    group_assignment_snake,
    knockout_entrants,
    resolve_group_count,
)


def _generate(n, **config):
    constraints = make_constraints("group_to_knockout", format_config=FormatConfig(**config) if config else None)
    return generate_group_to_knockout(constraints, make_participants(n), tournament_id=9)


class TestAssignment:
    def test_snake(self):
        assert group_assignment_snake(list(range(1, 9)), 2) == [[1, 4, 5, 8], [2, 3, 6, 7]]

    def test_snake_uneven(self):
        assert group_assignment_snake(list(range(1, 8)), 3) == [[1, 6, 7], [2, 5], [3, 4]]

    def test_block(self):
        assert group_assignment_block(list(range(1, 9)), 2) == [[1, 2, 3, 4], [5, 6, 7, 8]]

    def test_block_uneven(self):
        assert group_assignment_block(list(range(1, 8)), 3) == [[1, 2, 3], [4, 5], [6, 7]]

    def test_group_count(self):
        assert resolve_group_count(8, FormatConfig(number_of_groups=2, group_size=4)) == 2
        assert resolve_group_count(10, FormatConfig(group_size=3)) == 3
        assert resolve_group_count(9) == 2

    def test_knockout_seed_order(self):
        labels = [e.placeholder for e in knockout_entrants(3)]
        assert labels == ["Group A #1", "Group B #1", "Group C #1", "Group B #2", "Group A #2", "Group C #2"]


class TestGeneration:
    def test_two_groups_of_four(self):
        matches = _generate(8, number_of_groups=2, group_size=4)

        group_matches = [m for m in matches if m.stage == "group"]
        knockout = [m for m in matches if m.stage == "knockout"]
        assert len(group_matches) == 12
        assert len(knockout) == 3
        assert len(matches) == 2 * 6 + 2 * 2 - 1

        assert {m.group_name for m in group_matches} == {"A", "B"}
        assert all(m.round_number == 1 for m in group_matches)
        assert [m.match_number for m in matches] == list(range(1, 16))

    def test_knockout_crosses_groups(self):
        matches = _generate(8, number_of_groups=2, group_size=4)
        semis = [m for m in matches if m.stage == "knockout" and m.round_number == 2]
        assert [(m.placeholder_1, m.placeholder_2) for m in semis] == [
            ("Group A #1", "Group B #2"),
            ("Group B #1", "Group A #2"),
        ]
        final = [m for m in matches if m.stage == "knockout"][-1]
        assert final.round_number == 3
        assert all(s.next_match_id == final.id for s in semis)
        assert all(m.participant1_id is None and m.participant2_id is None for m in semis + [final])

    def test_snake_groups_hold_seeded_members(self):
        matches = _generate(8, number_of_groups=2)
        group_a = {pid for m in matches if m.group_name == "A" for pid in (m.participant1_id, m.participant2_id)}
        assert group_a == {"p1", "p4", "p5", "p8"}

    def test_block_groups_hold_contiguous_seeds(self):
        matches = _generate(8, number_of_groups=2, group_assignment="block")
        group_a = {pid for m in matches if m.group_name == "A" for pid in (m.participant1_id, m.participant2_id)}
        assert group_a == {"p1", "p2", "p3", "p4"}

    @pytest.mark.parametrize("n,groups", [(6, 3), (9, 3), (12, 4), (4, 1), (7, 2)])
    def test_total_matches(self, n, groups):
        matches = _generate(n, number_of_groups=groups)
        sizes = [len(g) for g in group_assignment_snake(list(range(n)), groups)]
        expected = sum(s * (s - 1) // 2 for s in sizes) + 2 * groups - 1
        assert len(matches) == expected

    def test_knockout_links_point_forward(self):
        matches = _generate(12, number_of_groups=3)
        by_id = {m.id: m for m in matches}
        for match in matches:
            if match.next_match_id:
                assert by_id[match.next_match_id].round_number == match.round_number + 1
                assert match.stage == "knockout"

    def test_default_groups_of_four(self):
        matches = _generate(8)
        assert {m.group_name for m in matches if m.stage == "group"} == {"A", "B"}

    def test_single_participant(self):
        with pytest.raises(InsufficientParticipants):
            _generate(1)

    def test_same_group_players_start_in_opposite_halves(self):
        matches = _generate(9, number_of_groups=3)
        knockout = [m for m in matches if m.stage == "knockout"]

        assert [(m.round_number, m.placeholder_1, m.placeholder_2) for m in knockout[:2]] == [
            (2, "Group B #2", "Group C #2"),
            (2, "Group C #1", "Group A #2"),
        ]
        assert [(m.participant1_id, m.placeholder_1) for m in knockout[2:4]] == [
            (None, "Group A #1"),
            (None, "Group B #1"),
        ]
        assert [m.placeholder_2 for m in knockout[2:4]] == ["Winner M10", "Winner M11"]


class TestGroupCountFitsField:
    def test_never_more_groups_than_half_the_field(self):
        assert resolve_group_count(5, FormatConfig(group_size=2)) == 2
        assert resolve_group_count(5, FormatConfig(group_size=1)) == 2
        assert resolve_group_count(5, FormatConfig(number_of_groups=4, group_size=4)) == 2
        assert resolve_group_count(2) == 1

    def test_four_groups_keep_standard_knockout_order(self):
        labels = [e.placeholder for e in knockout_entrants(4)]
        assert labels == [f"Group {g} #{p}" for p in (1, 2) for g in "ABCD"]

    def test_group_size_two_with_odd_field(self):
        constraints = make_constraints("group_to_knockout", format_config=FormatConfig(group_size=2))
        fixtures = generate_fixtures(constraints, make_participants(5), "manual")

        group_matches = [m for m in fixtures if m.stage == "group"]
        assert {m.group_name for m in group_matches} == {"A", "B"}
        assert len(group_matches) == 3 + 1
        assert len([m for m in fixtures if m.stage == "knockout"]) == 3

    def test_field_registered_up_to_scaled_capacity_can_play(self):
        config = FormatConfig(number_of_groups=4, group_size=4)
        capacity = capacity_for_slots("group_to_knockout", 10, config)
        assert capacity == 5

        constraints = make_constraints("group_to_knockout", max_matches_per_day=10, format_config=config)
        fixtures = generate_fixtures(constraints, make_participants(capacity), "manual")
        assert {m.group_name for m in fixtures if m.stage == "group"} == {"A", "B"}
        assert len(fixtures) == 3 + 1 + 3
