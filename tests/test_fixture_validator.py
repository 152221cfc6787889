"""
Tests for the fixture count sanity check.
"""

from datetime import date

import pytest

from tests.conftest import make_constraints
from tournament_engine.models.match import Match
from tournament_engine.services.engine_errors import CapacityExceeded
from tournament_engine.services.fixture_validator import max_possible_matches, validate_fixtures


def _fixtures(count):
    return [Match(round_number=1, match_number=i + 1, stage="main") for i in range(count)]


def test_max_possible_matches():
    constraints = make_constraints(start=date(2026, 5, 1), end=date(2026, 5, 2), max_matches_per_day=5)
    assert max_possible_matches(constraints) == 10


def test_accepts_at_bound():
    constraints = make_constraints(start=date(2026, 5, 1), end=date(2026, 5, 2), max_matches_per_day=5)
    validate_fixtures(_fixtures(10), constraints)
    validate_fixtures(_fixtures(3), constraints)


def test_rejects_above_bound():
    constraints = make_constraints(start=date(2026, 5, 1), end=date(2026, 5, 2), max_matches_per_day=5)
    with pytest.raises(CapacityExceeded, match="11 fixtures"):
        validate_fixtures(_fixtures(11), constraints)
